from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..errors import ConfigError
from ..models.config_models import DEFAULT_TIMESTAMP_FORMAT, Settings

"""Settings loader.

Responsibilities:
- Load the YAML settings file (default config/settings.yml)
- Validate keys and types against the bundled JSON schema
- Apply defaults for absent keys
"""

__all__ = [
    "ConfigError",
    "DEFAULT_SETTINGS_PATH",
    "SCHEMA_PATH",
    "load_settings",
    "settings_from_dict",
    "settings_to_dict",
    "validate_settings_data",
]

SCHEMA_PATH = Path(__file__).parent / "settings_schema.json"
DEFAULT_SETTINGS_PATH = Path("config/settings.yml")


def validate_settings_data(data: Any) -> None:
    """Validate raw settings data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the data
            fails validation (unknown keys, wrong types)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"settings schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"settings validation failed: {e.message}") from e


def settings_from_dict(data: dict[str, Any]) -> Settings:
    validate_settings_data(data)
    return Settings(
        auto_save=data.get("auto_save", False),
        direct_edit=data.get("direct_edit", False),
        auto_save_path=data.get("auto_save_path"),
        timestamp_format=data.get("timestamp_format", DEFAULT_TIMESTAMP_FORMAT),
        error_log_dir=data.get("error_log_dir", "logs"),
    )


def settings_to_dict(settings: Settings) -> dict[str, Any]:
    return {
        "auto_save": settings.auto_save,
        "direct_edit": settings.direct_edit,
        "auto_save_path": settings.auto_save_path,
        "timestamp_format": settings.timestamp_format,
        "error_log_dir": settings.error_log_dir,
    }


def load_settings(path: Path) -> Settings:
    if not path.exists():
        raise ConfigError(f"settings file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    return settings_from_dict(data)
