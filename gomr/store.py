"""Record store — the .gomr file listing replaces gomr has added.

The file is plain text, one record per line: the dependency name and its
local path separated by whitespace. A path prefixed with ``!`` marks a
record whose go.mod was synthesized by gomr.
"""

from __future__ import annotations

import logging
from pathlib import Path

from gomr.config import STORE_FILENAME
from gomr.errors import StoreIOError, StoreParseError
from gomr.models import ReplaceRecord

logger = logging.getLogger(__name__)

SYNTHETIC_MARKER = "!"


class RecordStore:
    """Reads and writes the replace records of one host module."""

    def __init__(self, module_root: str | Path):
        self.module_root = Path(module_root)
        self.store_file = self.module_root / STORE_FILENAME

    def load(self) -> list[ReplaceRecord]:
        """Load all records. A store that was never written is empty."""
        try:
            text = self.store_file.read_text()
        except FileNotFoundError:
            logger.debug("No record store at %s", self.store_file)
            return []
        except OSError as e:
            raise StoreIOError(f"failed to read {self.store_file}: {e}") from e

        records = []
        for line_no, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            records.append(self._decode(line, line_no))

        logger.debug("Loaded %d record(s) from %s", len(records), self.store_file)
        return records

    def save(self, records: list[ReplaceRecord]) -> None:
        """Replace the store contents with ``records``."""
        content = "".join(encode_record(r) + "\n" for r in records)
        try:
            self.store_file.write_text(content)
        except OSError as e:
            raise StoreIOError(f"failed to write {self.store_file}: {e}") from e
        logger.debug("Wrote %d record(s) to %s", len(records), self.store_file)

    def append(self, record: ReplaceRecord) -> None:
        """Add a single record to the end of the store."""
        line = (encode_record(record) + "\n").encode()
        try:
            with open(self.store_file, "ab+") as f:
                end = f.seek(0, 2)
                if end > 0:
                    f.seek(end - 1)
                    if f.read(1) != b"\n":
                        line = b"\n" + line
                f.write(line)
        except OSError as e:
            raise StoreIOError(f"failed to append to {self.store_file}: {e}") from e
        logger.debug("Appended %s to %s", record.mapping, self.store_file)

    def _decode(self, line: str, line_no: int) -> ReplaceRecord:
        fields = line.split()
        if len(fields) != 2:
            raise StoreParseError(
                f"expected 2 fields (name and path), found {len(fields)}",
                self.store_file,
                line_no,
            )

        name, path = fields
        synthetic = path.startswith(SYNTHETIC_MARKER)
        if synthetic:
            path = path[len(SYNTHETIC_MARKER):]
        if not path:
            raise StoreParseError("empty path", self.store_file, line_no)

        return ReplaceRecord(name=name, path=path, synthetic=synthetic)


def encode_record(record: ReplaceRecord) -> str:
    """Render a record as one store line (without the newline)."""
    for label, value in (("name", record.name), ("path", record.path)):
        if not value:
            raise StoreParseError(f"record {label} must not be empty")
        if any(c.isspace() for c in value):
            raise StoreParseError(f"record {label} contains whitespace: {value!r}")

    path = SYNTHETIC_MARKER + record.path if record.synthetic else record.path
    return f"{record.name} {path}"
