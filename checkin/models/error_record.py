from __future__ import annotations

import json
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Any

"""ErrorRecord model for roster import problems.

One ErrorRecord describes one problem found while scanning a worksheet:
a malformed or missing identifier on a data row, or a header row that is
incomplete or does not match the expected layout. Records are immutable;
the whole list is discarded when an import is cancelled or replaced.

Row numbers are 1-based. ``row=-1`` is a sentinel meaning "position not yet
assigned"; header validation returns errors with the sentinel and the scanner
places them with :meth:`ErrorRecord.placed`.
"""

__all__ = [
    "ErrorType",
    "HeaderDetails",
    "ErrorRecord",
    "UNASSIGNED_ROW",
]

UNASSIGNED_ROW = -1


class ErrorType(Enum):
    """Classification of an import problem.

    - INVALID_IDENTIFIER: identifier cell does not match ``^X\\d{8}$`` (or repeats)
    - MISSING_IDENTIFIER: identifier cell empty on a row that has other content
    - INVALID_HEADER: header cells present but at least one slot does not match
    - INCOMPLETE_HEADER: at least one required header cell is empty
    """
    INVALID_IDENTIFIER = "invalid_identifier"
    MISSING_IDENTIFIER = "missing_identifier"
    INVALID_HEADER = "invalid_header"
    INCOMPLETE_HEADER = "incomplete_header"

    @property
    def is_structural(self) -> bool:
        """Header problems force the import to pause for operator review."""
        return self in (ErrorType.INVALID_HEADER, ErrorType.INCOMPLETE_HEADER)


@dataclass(frozen=True)
class HeaderDetails:
    """Column breakdown attached to header errors."""
    expected_columns: tuple[str, ...]
    found_columns: tuple[str, ...]
    missing_columns: tuple[str, ...]  # empty slots, or slots that failed matching

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "expected_columns": list(self.expected_columns),
            "found_columns": list(self.found_columns),
            "missing_columns": list(self.missing_columns),
        }


@dataclass(frozen=True)
class ErrorRecord:
    """Structured record of one import problem.

    Attributes:
        row: Row number (1-based). -1 until the scanner places the error
        value: Offending raw value; the whole row joined by ", " for header errors
        error_type: Problem classification
        section: Section label of the block the row belongs to
        details: Expected / found / missing columns (header errors only)
    """
    row: int
    value: str
    error_type: ErrorType
    section: str | None = None
    details: HeaderDetails | None = None

    def __post_init__(self) -> None:
        if self.details is not None and not self.error_type.is_structural:
            raise ValueError(f"details are only allowed on header errors, got {self.error_type.value}")

    def placed(self, row: int, section: str | None) -> ErrorRecord:
        """Return a copy positioned at ``row`` within ``section``."""
        return replace(self, row=row, section=section)

    def to_dict(self) -> dict[str, Any]:
        return {
            "row": self.row,
            "value": self.value,
            "error_type": self.error_type.value,
            "section": self.section,
            "details": self.details.to_dict() if self.details is not None else None,
        }

    def to_json_line(self, file: str) -> str:
        """Serialize to the error log JSON Lines format.

        Parameters:
            file: Name of the workbook the error was found in

        Returns:
            JSON string with the fixed key set (timestamp, file, row, value,
            error_type, section, details)
        """
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return json.dumps({"timestamp": ts, "file": file, **self.to_dict()}, ensure_ascii=False)
