from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum

from ..models.error_record import UNASSIGNED_ROW, ErrorRecord, ErrorType, HeaderDetails
from .layout import (
    COLUMN_IDENTIFIER,
    HEADER_VARIANTS,
    IDENTIFIER_PATTERN,
    REQUIRED_COLUMNS,
    SECTION_LABEL_COLUMNS,
    SECTION_METADATA_PATTERN,
    UNKNOWN_SECTION,
)
from .reader import Worksheet

"""Row classification and header validation.

A roster worksheet mixes three kinds of rows:

- section metadata: first cell is a date-like ``digits.digits.digits`` value;
  the row right after it is always that section's header row
- header: validated slot by slot against loose spellings of the four
  required columns
- data: everything else, extracted under the most recent section

Header texts in hand-maintained sheets vary ("ID", "Student ID", "X#"), so a
slot matches when its normalized text equals, contains, or is contained in
one of the accepted spellings. All four slots must match.
"""

__all__ = [
    "RowKind",
    "ClassifiedRow",
    "normalize_header_text",
    "matches_variants",
    "is_section_metadata",
    "section_label",
    "validate_header_row",
    "looks_like_header",
    "iter_classified_rows",
    "classify_rows",
]

_NON_ALNUM = re.compile(r"[^a-z0-9]")


class RowKind(Enum):
    SECTION_METADATA = "section_metadata"
    HEADER = "header"
    DATA = "data"


@dataclass(frozen=True)
class ClassifiedRow:
    index: int  # 0-based sheet row
    kind: RowKind
    section: str
    cells: Sequence[str]
    header_error: ErrorRecord | None = None  # HEADER rows only

    @property
    def row_number(self) -> int:
        return self.index + 1


def normalize_header_text(text: str) -> str:
    """Lower-case and drop every non-alphanumeric character."""
    return _NON_ALNUM.sub("", text.lower())


def matches_variants(text: str, variants: Sequence[str]) -> bool:
    normalized = normalize_header_text(text)
    if not normalized:
        return False
    for variant in variants:
        pattern = normalize_header_text(variant)
        if normalized in pattern or pattern in normalized:
            return True
    return False


def _slot(row: Sequence[str], index: int) -> str:
    return row[index].strip() if index < len(row) else ""


def is_section_metadata(row: Sequence[str]) -> bool:
    return bool(SECTION_METADATA_PATTERN.match(_slot(row, 0)))


def section_label(row: Sequence[str]) -> str:
    for column in SECTION_LABEL_COLUMNS:
        label = _slot(row, column)
        if label:
            return label
    return UNKNOWN_SECTION


def validate_header_row(row: Sequence[str]) -> ErrorRecord | None:
    """Validate a header row.

    Returns None for a valid header. Otherwise an ErrorRecord positioned at
    the ``-1`` sentinel; the caller places it at the header's row:

    - INCOMPLETE_HEADER when any required cell is empty; ``missing_columns``
      lists exactly the empty slots
    - INVALID_HEADER when every cell is present but some slot does not match
      its accepted spellings; ``missing_columns`` lists the failed slots
    """
    found = tuple(cell.strip() for cell in row)
    value = ", ".join(row)

    missing = tuple(name for i, name in enumerate(REQUIRED_COLUMNS) if not _slot(row, i))
    if missing:
        return ErrorRecord(
            row=UNASSIGNED_ROW,
            value=value,
            error_type=ErrorType.INCOMPLETE_HEADER,
            details=HeaderDetails(REQUIRED_COLUMNS, found, missing),
        )

    invalid = tuple(
        name
        for i, (name, variants) in enumerate(zip(REQUIRED_COLUMNS, HEADER_VARIANTS, strict=True))
        if not matches_variants(_slot(row, i), variants)
    )
    if invalid:
        return ErrorRecord(
            row=UNASSIGNED_ROW,
            value=value,
            error_type=ErrorType.INVALID_HEADER,
            details=HeaderDetails(REQUIRED_COLUMNS, found, invalid),
        )
    return None


def looks_like_header(row: Sequence[str]) -> bool:
    """True when ``row`` reads like a header rather than an attendee row.

    The identifier slot decides: a well-formed identifier is always data,
    and any other text there must read like the ID column name. A header
    with an empty identifier slot needs two other slots that match.
    """
    first = _slot(row, COLUMN_IDENTIFIER)
    if IDENTIFIER_PATTERN.match(first):
        return False
    if first:
        return matches_variants(first, HEADER_VARIANTS[COLUMN_IDENTIFIER])
    others = sum(
        matches_variants(_slot(row, i), variants)
        for i, variants in enumerate(HEADER_VARIANTS)
        if i != COLUMN_IDENTIFIER
    )
    return others >= 2


def _header_row(row: Sequence[str], index: int, section: str) -> ClassifiedRow:
    error = validate_header_row(row)
    if error is not None:
        error = error.placed(index + 1, section)
    return ClassifiedRow(index=index, kind=RowKind.HEADER, section=section, cells=row, header_error=error)


def iter_classified_rows(worksheet: Worksheet) -> Iterator[ClassifiedRow]:
    """Classify every row of ``worksheet`` in sheet order.

    A metadata row opens a new section and makes the next row its header,
    even when that row lies past the used range (it then reads as empty and
    is reported as an incomplete header). Rows before the first metadata row
    belong to "Unknown Section"; if the first non-blank row of the sheet reads
    like a header it is validated as that leading section's header.
    """
    section = UNKNOWN_SECTION
    leading = True
    index = 0
    while index <= worksheet.max_row:
        cells = worksheet.row(index)

        if is_section_metadata(cells):
            leading = False
            section = section_label(cells)
            yield ClassifiedRow(index=index, kind=RowKind.SECTION_METADATA, section=section, cells=cells)
            yield _header_row(worksheet.row(index + 1), index + 1, section)
            index += 2
            continue

        if leading and any(cells):
            leading = False
            if looks_like_header(cells):
                yield _header_row(cells, index, section)
                index += 1
                continue

        yield ClassifiedRow(index=index, kind=RowKind.DATA, section=section, cells=cells)
        index += 1


def classify_rows(worksheet: Worksheet) -> list[ClassifiedRow]:
    return list(iter_classified_rows(worksheet))
