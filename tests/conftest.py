"""Shared fixtures: an in-memory stand-in for the go tool and a host module."""

from pathlib import Path

import pytest

from gomr.errors import ExternalToolError


class FakeGoMod:
    """Records go mod calls instead of running go.

    ``init`` writes a minimal go.mod like the real tool. Operations named in
    ``fail_on`` raise :class:`ExternalToolError`.
    """

    def __init__(self, fail_on: tuple[str, ...] = ()):
        self.calls: list[tuple] = []
        self.fail_on = set(fail_on)

    def edit(self, module_dir, arguments):
        self.calls.append(("edit", Path(module_dir), list(arguments)))
        if "edit" in self.fail_on:
            raise ExternalToolError(["go", "mod", "edit", *arguments], 1, "go: bad edit\n")
        return ""

    def init(self, module_dir, module_name):
        self.calls.append(("init", Path(module_dir), module_name))
        if "init" in self.fail_on:
            raise ExternalToolError(["go", "mod", "init", module_name], 1, "go: init failed\n")
        (Path(module_dir) / "go.mod").write_text(f"module {module_name}\n")
        return ""

    def ops(self) -> list[str]:
        return [c[0] for c in self.calls]

    def edits(self) -> list[list[str]]:
        return [c[2] for c in self.calls if c[0] == "edit"]


@pytest.fixture
def fake_gomod() -> FakeGoMod:
    return FakeGoMod()


@pytest.fixture
def host_module(tmp_path: Path) -> Path:
    """A host module directory containing a go.mod."""
    root = tmp_path / "host"
    root.mkdir()
    (root / "go.mod").write_text("module example.com/host\n\ngo 1.21\n")
    return root


@pytest.fixture
def local_dep(tmp_path: Path) -> Path:
    """A local checkout without a go.mod."""
    dep = tmp_path / "deps" / "lib"
    dep.mkdir(parents=True)
    return dep
