"""Configuration loading from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

STORE_FILENAME = ".gomr"
MANIFEST_FILENAME = "go.mod"
SUM_FILENAME = "go.sum"


def _default_workspace_root() -> Path:
    # Same fallback the go toolchain uses when GOPATH is unset
    return Path.home() / "go"


@dataclass
class GomrConfig:
    """Runtime settings for gomr."""

    workspace_root: Path = field(default_factory=_default_workspace_root)
    go_binary: str = "go"
    log_level: str = "WARNING"

    def default_path(self, name: str) -> Path:
        """Conventional local checkout location for a dependency."""
        return self.workspace_root / "src" / name


def load_config() -> GomrConfig:
    """Build the configuration from the environment.

    ``GOPATH`` sets the workspace root, ``GOMR_GO`` the go executable and
    ``GOMR_LOG_LEVEL`` the logging level.
    """
    config = GomrConfig()

    gopath = os.environ.get("GOPATH", "")
    if gopath:
        # GOPATH may hold a list; the first entry is the primary workspace
        first = gopath.split(os.pathsep)[0]
        if first:
            config.workspace_root = Path(first).expanduser()

    if go_binary := os.environ.get("GOMR_GO"):
        config.go_binary = go_binary
    if log_level := os.environ.get("GOMR_LOG_LEVEL"):
        config.log_level = log_level.upper()

    return config
