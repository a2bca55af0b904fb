from __future__ import annotations

import logging
from collections.abc import Iterable
from io import BytesIO

import openpyxl

from ..errors import WorkbookWriteError
from ..models.attendee import Attendee
from .layout import COLUMN_CHECK_IN

"""Write check-ins back into the original workbook.

The original bytes are reopened with openpyxl so that everything outside the
check-in cells (other sheets' content, styles, column widths) is carried
over. Only the check-in cell of each checked-in attendee's source row is
overwritten, as a string.
"""

__all__ = [
    "export_workbook",
]

logger = logging.getLogger(__name__)


def export_workbook(original: bytes, attendees: Iterable[Attendee]) -> bytes:
    """Return xlsx bytes of ``original`` with check-in timestamps filled in.

    Raises:
        WorkbookWriteError: original cannot be reopened, a target cell cannot
            be written, or serialization fails
    """
    try:
        wb = openpyxl.load_workbook(BytesIO(original))
    except Exception as e:
        raise WorkbookWriteError(f"cannot reopen original workbook for export: {e}") from e

    ws = wb.worksheets[0]
    written = 0
    for attendee in attendees:
        if not attendee.checked_in:
            continue
        cell = ws.cell(row=attendee.row_number, column=COLUMN_CHECK_IN + 1)
        try:
            cell.value = attendee.checked_in
        except AttributeError as e:  # merged cells are read-only
            raise WorkbookWriteError(
                f"cannot write check-in for {attendee.identifier} at {cell.coordinate}: {e}"
            ) from e
        cell.data_type = "s"
        written += 1

    buf = BytesIO()
    try:
        wb.save(buf)
    except Exception as e:
        raise WorkbookWriteError(f"cannot serialize workbook: {e}") from e
    logger.debug("export sheet=%s check_in_cells=%d", ws.title, written)
    return buf.getvalue()
