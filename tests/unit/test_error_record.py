from __future__ import annotations

import json

import pytest

from checkin.models.error_record import UNASSIGNED_ROW, ErrorRecord, ErrorType, HeaderDetails

"""Unit tests for ErrorRecord serialization and invariants."""


def _header_error() -> ErrorRecord:
    return ErrorRecord(
        row=UNASSIGNED_ROW,
        value="ID, LAST_NAME, , SIGN-IN",
        error_type=ErrorType.INCOMPLETE_HEADER,
        details=HeaderDetails(
            expected_columns=("ID", "LAST_NAME", "SPRIDEN_PFN", "SIGN-IN"),
            found_columns=("ID", "LAST_NAME", "", "SIGN-IN"),
            missing_columns=("SPRIDEN_PFN",),
        ),
    )


def test_structural_kinds():
    assert ErrorType.INVALID_HEADER.is_structural
    assert ErrorType.INCOMPLETE_HEADER.is_structural
    assert not ErrorType.INVALID_IDENTIFIER.is_structural
    assert not ErrorType.MISSING_IDENTIFIER.is_structural


def test_details_rejected_on_identifier_errors():
    with pytest.raises(ValueError):
        ErrorRecord(
            row=3,
            value="X1",
            error_type=ErrorType.INVALID_IDENTIFIER,
            details=HeaderDetails((), (), ()),
        )


def test_placed_returns_positioned_copy():
    original = _header_error()
    placed = original.placed(7, "Biology")
    assert (placed.row, placed.section) == (7, "Biology")
    assert original.row == UNASSIGNED_ROW
    assert placed.details == original.details


def test_to_dict_identifier_error():
    record = ErrorRecord(row=4, value="X1", error_type=ErrorType.INVALID_IDENTIFIER, section="Bio")
    assert record.to_dict() == {
        "row": 4,
        "value": "X1",
        "error_type": "invalid_identifier",
        "section": "Bio",
        "details": None,
    }


def test_to_json_line_header_error():
    line = _header_error().placed(2, "Bio").to_json_line("roster.xlsx")
    obj = json.loads(line)
    assert list(obj) == ["timestamp", "file", "row", "value", "error_type", "section", "details"]
    assert obj["timestamp"].endswith("Z")
    assert obj["file"] == "roster.xlsx"
    assert obj["error_type"] == "incomplete_header"
    assert obj["details"]["missing_columns"] == ["SPRIDEN_PFN"]
    assert obj["details"]["found_columns"] == ["ID", "LAST_NAME", "", "SIGN-IN"]


def test_to_json_line_keeps_non_ascii():
    record = ErrorRecord(row=5, value="Ｘ12", error_type=ErrorType.INVALID_IDENTIFIER)
    assert "Ｘ12" in record.to_json_line("名簿.xlsx")
