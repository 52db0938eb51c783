"""Manifest gateway — runs ``go mod`` subcommands on behalf of gomr."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from gomr.errors import ExternalToolError

logger = logging.getLogger(__name__)


class GoMod:
    """Thin wrapper around ``go mod edit`` and ``go mod init``.

    Failures are reported as :class:`ExternalToolError` carrying the combined
    stdout/stderr of the go tool; nothing is retried.
    """

    def __init__(self, go_binary: str = "go"):
        self.go_binary = go_binary

    def edit(self, module_dir: str | Path | None, arguments: list[str]) -> str:
        """Run ``go mod edit <arguments>`` in ``module_dir``."""
        return self._run(module_dir, ["edit", *arguments])

    def init(self, module_dir: str | Path | None, module_name: str) -> str:
        """Create a new go.mod in ``module_dir`` declaring ``module_name``."""
        return self._run(module_dir, ["init", module_name])

    def _run(self, module_dir: str | Path | None, args: list[str]) -> str:
        command = [self.go_binary, "mod", *args]
        cwd = str(module_dir) if module_dir else None
        logger.debug("Running %s (cwd=%s)", " ".join(command), cwd or ".")

        try:
            proc = subprocess.run(
                command,
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except OSError as e:
            raise ExternalToolError(command, None, str(e)) from e

        if proc.returncode != 0:
            logger.debug("%s failed with status %d", command[0], proc.returncode)
            raise ExternalToolError(command, proc.returncode, proc.stdout or "")
        return proc.stdout or ""
