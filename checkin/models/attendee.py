from __future__ import annotations

from dataclasses import dataclass, replace

from ..excel.layout import UNKNOWN_SECTION

"""Attendee domain model.

Earlier roster files tracked check-in as a boolean; the current record keeps
the formatted check-in timestamp instead (``None`` until checked in), so one
field serves both as the state flag and as the audit value written back to
the sheet.
"""

__all__ = [
    "Attendee",
    "ATTENDEE_SCHEMA_VERSION",
]

# 1: boolean check-in flag, no sections. 2: timestamp check-in, section aware.
ATTENDEE_SCHEMA_VERSION = 2


@dataclass(frozen=True)
class Attendee:
    """One roster entry extracted from a data row.

    ``row_number`` is the 1-based worksheet row the entry came from; it is the
    only key used to write the check-in back and never changes.
    """
    identifier: str  # ^X\d{8}$
    last_name: str
    first_name: str
    row_number: int
    section: str = UNKNOWN_SECTION
    checked_in: str | None = None  # formatted timestamp
    schema_version: int = ATTENDEE_SCHEMA_VERSION

    @property
    def is_checked_in(self) -> bool:
        return self.checked_in is not None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def checked_in_at(self, timestamp: str) -> Attendee:
        """Return a checked-in copy; the original record is left untouched."""
        return replace(self, checked_in=timestamp)
