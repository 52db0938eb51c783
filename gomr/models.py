"""Data models — tracked replace records."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ReplaceRecord:
    """A single replace directive tracked in the record store."""

    name: str
    path: str  # Absolute local path the dependency is redirected to
    synthetic: bool = False  # True when gomr created a placeholder go.mod at path

    @property
    def replace_arg(self) -> str:
        return f"-replace={self.name}={self.path}"

    @property
    def dropreplace_arg(self) -> str:
        return f"-dropreplace={self.name}"

    @property
    def mapping(self) -> str:
        return f"{self.name} => {self.path}"

    def matches(self, name: str) -> bool:
        """Case-insensitive name comparison."""
        return self.name.lower() == name.lower()
