"""Error types raised by gomr operations."""

from __future__ import annotations

from pathlib import Path


class GomrError(Exception):
    """Base class for every error gomr reports to the user."""


class PathNotFoundError(GomrError):
    """The local path a dependency should be redirected to does not exist."""

    def __init__(self, path: str | Path, reason: str = "does not exist"):
        self.path = Path(path)
        super().__init__(f"path {self.path} {reason}")


class NoHostModuleError(GomrError):
    """No go.mod was found in the working directory or its parents."""

    def __init__(self, start: str | Path):
        self.start = Path(start)
        super().__init__(
            f"could not find a go.mod in {self.start} or its parents"
        )


class StoreError(GomrError):
    """Base class for record store failures."""


class StoreIOError(StoreError):
    """The record store could not be read or written."""


class StoreParseError(StoreError):
    """A record store line (or a record about to be written) is malformed."""

    def __init__(self, message: str, path: str | Path | None = None, line_no: int = 0):
        self.path = Path(path) if path else None
        self.line_no = line_no
        location = ""
        if self.path:
            location = f"{self.path}:{line_no}: " if line_no else f"{self.path}: "
        super().__init__(f"{location}{message}")


class ExternalToolError(GomrError):
    """The go tool exited non-zero or could not be started."""

    def __init__(self, command: list[str], returncode: int | None, output: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        if returncode is None:
            detail = "could not be started"
        else:
            detail = f"exited with status {returncode}"
        super().__init__(f"`{' '.join(self.command)}` {detail}")


class FilesystemError(GomrError):
    """Unexpected filesystem failure (absent files are never reported)."""
