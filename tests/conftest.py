# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

HEADER = ["ID", "LAST_NAME", "SPRIDEN_PFN", "SIGN-IN"]


def make_excel(path: Path, rows: list[list[object]], sheet: str = "Roster") -> Path:
    """Write ``rows`` (no header row added) to ``path`` as the first sheet."""
    with pd.ExcelWriter(path) as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("CHECKIN_SETTINGS", raising=False)
        yield p


@pytest.fixture()
def roster_file(temp_workdir: Path) -> Callable[..., Path]:
    """Factory: roster_file(rows, name="roster.xlsx") -> path under data/."""
    def _make(rows: list[list[object]], name: str = "roster.xlsx") -> Path:
        return make_excel(temp_workdir / "data" / name, rows)
    return _make


@pytest.fixture()
def two_section_rows() -> list[list[object]]:
    return [
        ["1.15.2024", "Room 101", None, "Biology 101"],
        HEADER,
        ["X00000001", "Doe", "Jane", None],
        ["X00000002", "Smith", "John", None],
        ["2.15.2024", "Room 202", None, None],
        ["Student ID", "Last Name", "First Name", "Check-in"],
        ["X00000003", "Garcia", "Maria", None],
    ]


@pytest.fixture()
def sample_settings_yaml() -> str:
    return """auto_save: false
direct_edit: false
auto_save_path: null
timestamp_format: "%Y-%m-%d %H:%M:%S"
error_log_dir: logs
"""


@pytest.fixture()
def write_settings(temp_workdir: Path, sample_settings_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "settings.yml"
    cfg.write_text(sample_settings_yaml, encoding="utf-8")
    return cfg
