from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..models.attendee import Attendee
from ..models.error_record import ErrorRecord, ErrorType
from ..models.processing_result import ProcessingResult
from .header import RowKind, iter_classified_rows
from .layout import COLUMN_FIRST_NAME, COLUMN_IDENTIFIER, COLUMN_LAST_NAME, IDENTIFIER_PATTERN
from .reader import Worksheet

if TYPE_CHECKING:
    from ..services.progress import RowProgressTracker

"""Attendee extraction and error accumulation.

Partial failures never abort a scan: a bad identifier on one row must not
discard the good rows around it. Every problem becomes an ErrorRecord and the
row is counted as skipped. Only header problems set ``requires_user_action``.
"""

__all__ = [
    "ErrorAccumulator",
    "extract_record",
    "process_worksheet",
]

logger = logging.getLogger(__name__)


def _cell(row: Sequence[str], index: int) -> str:
    return row[index].strip() if index < len(row) else ""


def extract_record(row: Sequence[str], row_index: int, section: str) -> Attendee | ErrorRecord | None:
    """Extract one data row.

    Returns:
        Attendee for a valid identifier, ErrorRecord for a missing or invalid
        identifier, None for a completely blank row
    """
    identifier = _cell(row, COLUMN_IDENTIFIER)
    row_number = row_index + 1

    if not identifier:
        if any(cell for cell in row):
            return ErrorRecord(row=row_number, value="", error_type=ErrorType.MISSING_IDENTIFIER, section=section)
        return None

    if not IDENTIFIER_PATTERN.match(identifier):
        return ErrorRecord(row=row_number, value=identifier, error_type=ErrorType.INVALID_IDENTIFIER, section=section)

    return Attendee(
        identifier=identifier,
        last_name=_cell(row, COLUMN_LAST_NAME),
        first_name=_cell(row, COLUMN_FIRST_NAME),
        row_number=row_number,
        section=section,
    )


class ErrorAccumulator:
    """Running counters and collected records for one scan."""

    def __init__(self) -> None:
        self.attendees: list[Attendee] = []
        self.errors: list[ErrorRecord] = []
        self.processed = 0
        self.skipped = 0
        self.requires_user_action = False
        self._seen: dict[str, int] = {}  # identifier -> first row

    def add_error(self, error: ErrorRecord) -> None:
        self.errors.append(error)
        if error.error_type.is_structural:
            self.requires_user_action = True

    def add_attendee(self, attendee: Attendee) -> None:
        self.attendees.append(attendee)
        self._seen.setdefault(attendee.identifier, attendee.row_number)
        self.processed += 1

    def skip(self, error: ErrorRecord | None = None) -> None:
        if error is not None:
            self.add_error(error)
        self.skipped += 1

    def accept(self, outcome: Attendee | ErrorRecord | None) -> None:
        if isinstance(outcome, Attendee):
            first_row = self._seen.get(outcome.identifier)
            if first_row is not None:
                # identifiers must be unique within one import
                logger.warning(
                    "row=%d duplicate identifier %s, first seen at row %d",
                    outcome.row_number,
                    outcome.identifier,
                    first_row,
                )
                self.skip(
                    ErrorRecord(
                        row=outcome.row_number,
                        value=f"{outcome.identifier} (duplicate of row {first_row})",
                        error_type=ErrorType.INVALID_IDENTIFIER,
                        section=outcome.section,
                    )
                )
                return
            self.add_attendee(outcome)
        else:
            self.skip(outcome)

    def result(self, total_rows: int) -> ProcessingResult:
        return ProcessingResult(
            attendees=tuple(self.attendees),
            errors=tuple(self.errors),
            total_rows=total_rows,
            processed_rows=self.processed,
            skipped_rows=self.skipped,
            requires_user_action=self.requires_user_action,
        )


def process_worksheet(worksheet: Worksheet, progress: RowProgressTracker | None = None) -> ProcessingResult:
    """Scan ``worksheet`` once and return attendees, errors and counters.

    Args:
        worksheet: Sheet returned by ``read_workbook``
        progress: Optional row progress display (advanced once per row)

    Returns:
        ProcessingResult with ``total_rows = max_row + 1``
    """
    acc = ErrorAccumulator()
    for classified in iter_classified_rows(worksheet):
        if classified.kind is RowKind.HEADER:
            if classified.header_error is not None:
                logger.warning(
                    "row=%d section=%s %s missing=%s",
                    classified.row_number,
                    classified.section,
                    classified.header_error.error_type.value,
                    list(classified.header_error.details.missing_columns) if classified.header_error.details else [],
                )
                acc.add_error(classified.header_error)
        elif classified.kind is RowKind.DATA:
            acc.accept(extract_record(classified.cells, classified.index, classified.section))

        if progress is not None and classified.index <= worksheet.max_row:
            progress.advance()

    logger.debug(
        "sheet=%s rows=%d processed=%d skipped=%d errors=%d requires_user_action=%s",
        worksheet.name,
        worksheet.row_count,
        acc.processed,
        acc.skipped,
        len(acc.errors),
        acc.requires_user_action,
    )
    return acc.result(total_rows=worksheet.max_row + 1)
