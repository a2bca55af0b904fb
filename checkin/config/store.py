from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import yaml

from ..errors import ConfigError
from ..models.config_models import Settings
from .loader import load_settings, settings_to_dict, validate_settings_data

"""Persistent settings provider.

The session only reads Settings; changes come from explicit setter calls made
by the operator-facing layer, and each change is written back to the YAML
file right away.

Rules:
- enabling auto-save needs a destination path
- disabling auto-save clears the destination path
- auto-save cannot be toggled while direct-edit mode is on
"""

__all__ = [
    "SettingsStore",
]

logger = logging.getLogger(__name__)


class SettingsStore:
    """YAML-backed settings provider.

    A missing file reads as default Settings; the file is created on the
    first setter call.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Settings:
        if not self.path.exists():
            return Settings()
        return load_settings(self.path)

    def save(self, settings: Settings) -> Settings:
        data = settings_to_dict(settings)
        validate_settings_data(data)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"failed to write settings {self.path}: {e}") from e
        return settings

    def set_auto_save(self, enabled: bool, path: str | None = None) -> Settings:
        """Turn auto-save on (with a destination) or off.

        Returns the resulting settings. While direct-edit mode is on the
        request is ignored and the current settings are returned.

        Raises:
            ConfigError: If auto-save is enabled without a destination path
        """
        current = self.load()
        if current.direct_edit:
            logger.warning("auto-save cannot be changed while direct edit mode is on")
            return current
        if enabled:
            destination = path or current.auto_save_path
            if not destination:
                raise ConfigError("auto-save requires a destination path")
            return self.save(replace(current, auto_save=True, auto_save_path=destination))
        return self.save(replace(current, auto_save=False, auto_save_path=None))

    def set_direct_edit(self, enabled: bool) -> Settings:
        current = self.load()
        return self.save(replace(current, direct_edit=enabled))
