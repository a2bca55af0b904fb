from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Import error log.

Every problem recorded during a scan is also kept in a JSON Lines file so
that it can be reviewed after the session:

- one file per buffer, ``<dir>/import-errors-YYYYMMDD-HHMMSS.log`` (UTC),
  created on the first flush that has records
- fixed key set per line (see ``error_log_schema.json``)
- records are buffered and written in one go on ``flush()``
"""

__all__ = [
    "ErrorLogBuffer",
    "SCHEMA_PATH",
]

SCHEMA_PATH = Path(__file__).parent / "error_log_schema.json"
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer of (file, ErrorRecord) pairs. Flush appends JSON Lines.

    Not thread safe; the session serializes imports.
    """

    def __init__(self, logs_dir: Path = Path("logs")) -> None:
        self.logs_dir = logs_dir
        self._records: list[tuple[str, ErrorRecord]] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self.logs_dir / f"import-errors-{stamp}.log"
        return self._file_path

    def append(self, file: str, record: ErrorRecord) -> None:
        self._records.append((file, record))

    def extend(self, file: str, records: list[ErrorRecord] | tuple[ErrorRecord, ...]) -> None:
        for record in records:
            self.append(file, record)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the log path, or None when empty."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for file, record in self._records:
                f.write(record.to_json_line(file) + "\n")
        self._records.clear()
        return fp
