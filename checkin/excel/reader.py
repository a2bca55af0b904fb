from __future__ import annotations

import math
from dataclasses import dataclass
from io import BytesIO
from typing import Any

import pandas as pd

from ..errors import EmptyWorksheetError, WorkbookReadError

"""Worksheet reader.

Only the first sheet of a workbook is read. Every cell is turned into a
trimmed string so that the scanner works on plain text, the way an operator
sees the sheet: empty cells become "", integral numbers lose their ".0".

Row and column indices stay aligned with the sheet (row 0 is sheet row 1),
including blank rows; write-back relies on that.
"""

__all__ = [
    "Worksheet",
    "read_workbook",
    "cell_text",
]


@dataclass
class Worksheet:
    name: str
    rows: list[list[str]]  # trimmed cell text, every row padded to the sheet width
    max_column: int  # highest 0-based column index

    @property
    def max_row(self) -> int:
        """Highest 0-based row index of the used range."""
        return len(self.rows) - 1

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def row(self, index: int) -> list[str]:
        """Cells of row ``index``; rows outside the used range read as empty."""
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return [""] * (self.max_column + 1)

    def cell(self, row: int, column: int) -> str:
        values = self.row(row)
        return values[column] if 0 <= column < len(values) else ""


def cell_text(value: Any) -> str:
    """Render a raw cell value as trimmed text."""
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def read_workbook(data: bytes, name: str = "<workbook>") -> Worksheet:
    """Parse workbook bytes and return the first sheet as text.

    Parameters
    ----------
    data: raw workbook bytes (.xlsx)
    name: file name, used in error messages only

    Raises
    ------
    WorkbookReadError: bytes are not a readable workbook
    EmptyWorksheetError: no sheet, or the first sheet has no used cells
    """
    try:
        xls = pd.ExcelFile(BytesIO(data))
    except Exception as e:  # zipfile / openpyxl / engine detection errors vary
        raise WorkbookReadError(f"cannot read workbook '{name}': {e}") from e

    with xls:
        if not xls.sheet_names:
            raise EmptyWorksheetError(f"workbook '{name}' has no sheets")
        sheet_name = str(xls.sheet_names[0])
        try:
            # header=None: the sheet mixes metadata, header and data rows.
            # na_filter=False keeps "NA"/"N/A" etc. as text and blanks as "".
            df = xls.parse(sheet_name, header=None, dtype=object, na_filter=False)
        except Exception as e:
            raise WorkbookReadError(f"cannot parse sheet '{sheet_name}' of '{name}': {e}") from e

    if df.shape[0] == 0 or df.shape[1] == 0:
        raise EmptyWorksheetError(f"the worksheet '{sheet_name}' of '{name}' appears to be empty")

    rows = [[cell_text(v) for v in raw] for raw in df.itertuples(index=False, name=None)]
    return Worksheet(name=sheet_name, rows=rows, max_column=df.shape[1] - 1)
