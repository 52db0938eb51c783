"""Replace coordinator — the add / remove / up / down operations.

Each operation keeps the record store and the host module's go.mod in
agreement. Steps run in order and the first failure aborts the rest;
nothing already done is rolled back.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from gomr.config import MANIFEST_FILENAME, SUM_FILENAME, GomrConfig
from gomr.errors import FilesystemError, NoHostModuleError, PathNotFoundError
from gomr.gomod import GoMod
from gomr.models import ReplaceRecord
from gomr.store import RecordStore, encode_record

logger = logging.getLogger(__name__)


def find_module_root(start: str | Path) -> Path:
    """Return the nearest directory at or above ``start`` holding a go.mod."""
    current = Path(start).absolute()
    while True:
        candidate = current / MANIFEST_FILENAME
        try:
            mode = candidate.stat().st_mode
        except FileNotFoundError:
            mode = None
        except OSError as e:
            raise FilesystemError(f"failed to stat {candidate}: {e}") from e

        if mode is not None and stat.S_ISREG(mode):
            logger.debug("Found host module at %s", current)
            return current

        parent = current.parent
        if parent == current:
            raise NoHostModuleError(start)
        current = parent


def remove_placeholder(path: str | Path) -> list[Path]:
    """Delete a synthesized go.mod and its go.sum. Absent files are skipped."""
    removed = []
    for filename in (MANIFEST_FILENAME, SUM_FILENAME):
        target = Path(path) / filename
        try:
            target.unlink()
        except FileNotFoundError:
            continue
        except OSError as e:
            raise FilesystemError(f"failed to delete {target}: {e}") from e
        logger.debug("Deleted placeholder %s", target)
        removed.append(target)
    return removed


class ReplaceCoordinator:
    """Runs gomr operations against the host module found from ``cwd``."""

    def __init__(
        self,
        gomod: GoMod,
        config: GomrConfig | None = None,
        cwd: str | Path | None = None,
    ):
        self.gomod = gomod
        self.config = config or GomrConfig()
        self.cwd = Path(cwd) if cwd else Path(os.getcwd())

    def module_root(self) -> Path:
        return find_module_root(self.cwd)

    def add(self, name: str, path: str | Path | None = None) -> ReplaceRecord:
        """Redirect ``name`` to a local directory and record it.

        Without ``path`` the dependency's conventional location under the
        workspace root is used. A directory without a go.mod gets a
        placeholder one so go accepts it as a replace target.
        """
        if path:
            local = Path(path).expanduser()
            if not local.is_absolute():
                local = self.cwd / local
        else:
            local = self.config.default_path(name)

        if not local.exists():
            raise PathNotFoundError(local)
        if not local.is_dir():
            raise PathNotFoundError(local, "is not a directory")

        synthetic = not (local / MANIFEST_FILENAME).exists()
        record = ReplaceRecord(name=name, path=str(local), synthetic=synthetic)
        # Reject what the store cannot hold before go.mod is touched
        encode_record(record)

        root = self.module_root()

        # The placeholder must exist before the host module points at it
        if synthetic:
            self.gomod.init(local, name)

        self.gomod.edit(root, [record.replace_arg])
        RecordStore(root).append(record)

        logger.debug("Added replace %s", record.mapping)
        return record

    def remove(self, name: str) -> list[ReplaceRecord]:
        """Drop every stored replace matching ``name`` (case-insensitive).

        Returns the removed records; an empty list means nothing matched and
        neither go.mod nor the store was touched.
        """
        root = self.module_root()
        store = RecordStore(root)
        records = store.load()

        removed = [r for r in records if r.matches(name)]
        if not removed:
            logger.debug("No stored replace for %s", name)
            return []
        kept = [r for r in records if not r.matches(name)]

        for record in removed:
            self.gomod.edit(root, [record.dropreplace_arg])
            if record.synthetic:
                remove_placeholder(record.path)

        store.save(kept)

        logger.debug("Removed %d replace(s) for %s", len(removed), name)
        return removed

    def up(self) -> list[ReplaceRecord]:
        """Reinstall every stored replace with a single go.mod edit."""
        root = self.module_root()
        records = RecordStore(root).load()

        arguments = []
        for record in records:
            if record.synthetic and not (Path(record.path) / MANIFEST_FILENAME).exists():
                self.gomod.init(record.path, record.name)
            arguments.append(record.replace_arg)

        if arguments:
            self.gomod.edit(root, arguments)
        return records

    def down(self) -> list[ReplaceRecord]:
        """Take every stored replace out of go.mod, keeping the store intact."""
        root = self.module_root()
        records = RecordStore(root).load()

        arguments = []
        for record in records:
            if record.synthetic:
                remove_placeholder(record.path)
            arguments.append(record.dropreplace_arg)

        if arguments:
            self.gomod.edit(root, arguments)
        return records

    def records(self) -> list[ReplaceRecord]:
        """Return the stored records of the host module."""
        return RecordStore(self.module_root()).load()
