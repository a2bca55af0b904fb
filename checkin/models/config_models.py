from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

"""Settings dataclass for the roster check-in session.

This module defines the domain model for operator settings. Loading,
validation and persistence live in ``checkin.config``; the session only
receives a Settings instance and never changes it.
"""

__all__ = [
    "Settings",
    "DEFAULT_TIMESTAMP_FORMAT",
]

# Locale date and time representation
DEFAULT_TIMESTAMP_FORMAT = "%x %X"


@dataclass(frozen=True)
class Settings:
    """Operator settings consulted by the check-in session.

    - direct_edit: check-ins are written straight back to the source workbook
    - auto_save: check-ins are written to ``auto_save_path`` (ignored while
      direct_edit is on)
    Otherwise changes stay in memory until exported.
    """
    auto_save: bool = False
    direct_edit: bool = False
    auto_save_path: str | None = None
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    error_log_dir: str = "logs"

    def save_target(self, source: Path | None) -> Path | None:
        """Where a check-in is persisted, or None for in-memory only."""
        if self.direct_edit:
            return source
        if self.auto_save and self.auto_save_path:
            return Path(self.auto_save_path)
        return None
