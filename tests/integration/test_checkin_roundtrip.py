from __future__ import annotations

import json
from datetime import datetime
from io import BytesIO
from pathlib import Path

import openpyxl

from checkin.config.store import SettingsStore
from checkin.excel.layout import UNKNOWN_SECTION
from checkin.models.error_record import ErrorType
from checkin.models.import_state import ImportStatus
from checkin.services.session import CheckinSession

"""End-to-end: import a roster file, check attendees in, save, read back."""

HEADER = ["ID", "LAST_NAME", "SPRIDEN_PFN", "SIGN-IN"]


def _sheet(path: Path):
    return openpyxl.load_workbook(BytesIO(path.read_bytes())).worksheets[0]


def test_import_check_in_save_roundtrip(roster_file, two_section_rows, write_settings: Path):
    settings = SettingsStore(write_settings).load()
    session = CheckinSession(settings)
    source = roster_file(two_section_rows)

    state = session.start_import(source)
    assert state.status is ImportStatus.COMPLETED
    assert {a.section for a in session.roster} == {"Biology 101", "Room 202"}

    session.check_in("x00000002", now=datetime(2024, 1, 15, 8, 5, 0))
    session.check_in("X00000003", now=datetime(2024, 1, 15, 8, 6, 0))
    target = session.save()

    ws = _sheet(target)
    assert ws["D4"].value == "2024-01-15 08:05:00"
    assert ws["D7"].value == "2024-01-15 08:06:00"
    assert ws["D3"].value in (None, "")
    # metadata and header rows are untouched
    assert ws["A1"].value == "1.15.2024"
    assert ws["D1"].value == "Biology 101"
    assert ws["A6"].value == "Student ID"

    # the saved copy imports again with the check-ins kept in place
    reimport = CheckinSession(settings)
    assert reimport.start_import(target).status is ImportStatus.COMPLETED
    assert len(reimport.roster) == 3


def test_paused_import_continue_and_error_log(roster_file, temp_workdir: Path):
    source = roster_file([
        HEADER,
        ["X00000001", "Doe", "Jane", None],
        ["bad-id", "Roe", "Rick", None],
        ["5.1.2024", None, None, "Chemistry"],
        ["ID", "LAST_NAME", None, "SIGN-IN"],
        ["X00000002", "Smith", "John", None],
        [None, "Nobody", None, None],
    ])
    session = CheckinSession()
    state = session.start_import(source)

    assert state.status is ImportStatus.PAUSED
    result = state.processing_result
    assert result.total_rows == 7
    assert result.processed_rows == 2
    assert result.skipped_rows == 2
    grouped = result.errors_by_section()
    assert [e.error_type for e in grouped[UNKNOWN_SECTION]] == [ErrorType.INVALID_IDENTIFIER]
    assert [e.error_type for e in grouped["Chemistry"]] == [
        ErrorType.INCOMPLETE_HEADER,
        ErrorType.MISSING_IDENTIFIER,
    ]

    [log_file] = (temp_workdir / "logs").glob("import-errors-*.log")
    entries = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert [e["row"] for e in entries] == [3, 5, 7]
    assert all(e["file"] == "roster.xlsx" for e in entries)

    roster = session.continue_with_valid_rows()
    assert [a.row_number for a in roster] == [2, 6]
    session.check_in("X00000002", now=datetime(2024, 5, 1, 10, 0, 0))
    out = session.save(temp_workdir / "checked.xlsx")
    assert _sheet(out)["D6"].value
    assert _sheet(out)["D2"].value in (None, "")


def test_direct_edit_updates_source_in_place(roster_file, two_section_rows, temp_workdir: Path):
    store = SettingsStore(temp_workdir / "config" / "settings.yml")
    settings = store.set_direct_edit(True)
    session = CheckinSession(settings)
    source = roster_file(two_section_rows)
    session.start_import(source)

    session.check_in("X00000001")
    assert _sheet(source)["D3"].value == session.find_attendee("X00000001").checked_in
    assert not (temp_workdir / "data" / "updated_roster.xlsx").exists()
