from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..errors import AttendeeNotFoundError
from .attendee import Attendee

"""Roster model: the committed attendees of the active import."""

__all__ = [
    "Roster",
    "identifier_key",
]


def identifier_key(identifier: str) -> str:
    """Lookup key for an identifier (trimmed, case-insensitive)."""
    return identifier.strip().upper()


class Roster:
    """Committed attendees addressed by their source row number.

    Rows are never reordered, so the source row number is kept as the key
    instead of a list position (skipped rows leave gaps). A second index maps
    identifiers to row numbers for check-in lookup.

    Rosters are not mutated after construction; :meth:`with_check_in` returns
    a new roster so that a caller can publish it only after persisting it.
    """

    def __init__(self, attendees: Iterable[Attendee] = ()) -> None:
        self._by_row: dict[int, Attendee] = {}
        self._row_by_identifier: dict[str, int] = {}
        for attendee in attendees:
            self._by_row[attendee.row_number] = attendee
            # first occurrence wins
            self._row_by_identifier.setdefault(identifier_key(attendee.identifier), attendee.row_number)

    def __len__(self) -> int:
        return len(self._by_row)

    def __iter__(self) -> Iterator[Attendee]:
        return iter(self._by_row.values())

    def __repr__(self) -> str:
        return f"<Roster(attendees={len(self)}, checked_in={len(self.checked_in())})>"

    @property
    def attendees(self) -> list[Attendee]:
        return list(self._by_row.values())

    def at_row(self, row_number: int) -> Attendee | None:
        return self._by_row.get(row_number)

    def find(self, identifier: str) -> Attendee | None:
        row = self._row_by_identifier.get(identifier_key(identifier))
        return self._by_row[row] if row is not None else None

    def checked_in(self) -> list[Attendee]:
        return [a for a in self._by_row.values() if a.is_checked_in]

    def with_check_in(self, identifier: str, timestamp: str) -> tuple[Roster, Attendee]:
        """Return a new roster with ``identifier`` checked in, and the updated record.

        An attendee that is already checked in keeps its first timestamp.

        Raises:
            AttendeeNotFoundError: If no attendee matches ``identifier``
        """
        current = self.find(identifier)
        if current is None:
            raise AttendeeNotFoundError(identifier)
        if current.is_checked_in:
            return self, current
        updated = current.checked_in_at(timestamp)
        attendees = [updated if a.row_number == updated.row_number else a for a in self._by_row.values()]
        return Roster(attendees), updated
