from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from checkin.config.store import SettingsStore
from checkin.errors import ConfigError
from checkin.models.config_models import Settings


def test_missing_file_reads_defaults(temp_workdir: Path):
    store = SettingsStore(temp_workdir / "config" / "settings.yml")
    assert store.load() == Settings()
    assert not store.path.exists()


def test_enable_auto_save_persists(temp_workdir: Path):
    store = SettingsStore(temp_workdir / "config" / "settings.yml")
    settings = store.set_auto_save(True, "data/out.xlsx")
    assert settings.auto_save and settings.auto_save_path == "data/out.xlsx"
    data = yaml.safe_load(store.path.read_text(encoding="utf-8"))
    assert data["auto_save"] is True
    assert data["auto_save_path"] == "data/out.xlsx"
    assert store.load() == settings


def test_enable_auto_save_requires_path(temp_workdir: Path):
    store = SettingsStore(temp_workdir / "config" / "settings.yml")
    with pytest.raises(ConfigError, match="destination path"):
        store.set_auto_save(True)


def test_reenable_reuses_stored_path(write_settings: Path):
    store = SettingsStore(write_settings)
    store.save(Settings(auto_save=False, auto_save_path="keep.xlsx"))
    assert store.set_auto_save(True).auto_save_path == "keep.xlsx"


def test_disable_auto_save_clears_path(write_settings: Path):
    store = SettingsStore(write_settings)
    store.set_auto_save(True, "out.xlsx")
    settings = store.set_auto_save(False)
    assert settings.auto_save is False
    assert settings.auto_save_path is None
    # other keys survive the rewrite
    assert store.load().timestamp_format == "%Y-%m-%d %H:%M:%S"


def test_auto_save_locked_during_direct_edit(write_settings: Path):
    store = SettingsStore(write_settings)
    store.set_direct_edit(True)
    with patch("checkin.config.store.logger") as log:
        settings = store.set_auto_save(True, "out.xlsx")
    assert settings.direct_edit is True
    assert settings.auto_save is False
    log.warning.assert_called_once()
    assert store.set_direct_edit(False).direct_edit is False
