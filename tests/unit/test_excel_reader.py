from __future__ import annotations

from io import BytesIO

import openpyxl
import pandas as pd
import pytest

from checkin.errors import EmptyWorksheetError, WorkbookReadError
from checkin.excel.reader import Worksheet, cell_text, read_workbook

HEADER = ["ID", "LAST_NAME", "SPRIDEN_PFN", "SIGN-IN"]


def _xlsx_bytes(sheets: dict[str, list[list[object]]]) -> bytes:
    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return buf.getvalue()


def test_read_first_sheet_as_text(roster_file):
    path = roster_file([HEADER, ["X00000001", "Doe", "Jane", None]])
    ws = read_workbook(path.read_bytes(), path.name)
    assert ws.name == "Roster"
    assert ws.max_row == 1
    assert ws.max_column == 3
    assert ws.row(0) == HEADER
    assert ws.row(1) == ["X00000001", "Doe", "Jane", ""]


def test_only_first_sheet_is_read():
    data = _xlsx_bytes({
        "First": [HEADER, ["X00000001", "Doe", "Jane", None]],
        "Second": [["ignored"]],
    })
    ws = read_workbook(data)
    assert ws.name == "First"
    assert ws.cell(1, 0) == "X00000001"


def test_blank_rows_keep_positions():
    data = _xlsx_bytes({"Roster": [
        HEADER,
        ["X00000001", "Doe", "Jane", None],
        [None, None, None, None],
        ["X00000002", "Smith", "John", None],
    ]})
    ws = read_workbook(data)
    assert ws.max_row == 3
    assert ws.row(2) == ["", "", "", ""]
    assert ws.cell(3, 0) == "X00000002"


def test_na_strings_and_numbers_as_text():
    data = _xlsx_bytes({"Roster": [["NA", 12345, "  Doe  ", "N/A"]]})
    ws = read_workbook(data)
    assert ws.row(0) == ["NA", "12345", "Doe", "N/A"]


def test_out_of_range_rows_read_empty():
    ws = Worksheet(name="S", rows=[["a", "b"]], max_column=1)
    assert ws.row(5) == ["", ""]
    assert ws.row(-1) == ["", ""]
    assert ws.cell(0, 9) == ""
    assert ws.row_count == 1


def test_cell_text():
    assert cell_text(None) == ""
    assert cell_text(float("nan")) == ""
    assert cell_text(3.0) == "3"
    assert cell_text(2.5) == "2.5"
    assert cell_text("  x ") == "x"


def test_corrupt_bytes_raise():
    with pytest.raises(WorkbookReadError) as exc:
        read_workbook(b"this is not a workbook", "bad.xlsx")
    assert "bad.xlsx" in str(exc.value)


def test_empty_sheet_raises():
    buf = BytesIO()
    openpyxl.Workbook().save(buf)
    with pytest.raises(EmptyWorksheetError):
        read_workbook(buf.getvalue(), "empty.xlsx")
