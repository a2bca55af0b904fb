from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .processing_result import ProcessingResult

"""ImportState model and ImportStatus enum for the check-in session.

The ImportState tracks one import attempt through its lifecycle, from the
scan to the point where extracted attendees become the live roster (or are
discarded).
"""

__all__ = [
    "ImportStatus",
    "ImportState",
]


class ImportStatus(Enum):
    """Status enum for the import lifecycle.

    State transitions:
        idle → processing                on import start
        processing → completed           no header errors, roster committed
        processing → paused              header errors, waiting for the operator
        processing → error               unreadable file / empty worksheet
        paused → completed               operator continues with valid rows
        paused → idle                    operator cancels

    - IDLE: No import in progress
    - PROCESSING: Worksheet scan running
    - PAUSED: Scan finished with header errors, nothing committed yet
    - COMPLETED: Attendees committed to the active roster
    - ERROR: Import failed before a result could be produced
    """
    IDLE = "idle"
    PROCESSING = "processing"
    PAUSED = "paused"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class ImportState:
    """Session-level snapshot of the current import attempt.

    ``pending_file`` and ``processing_result`` are held while paused so that
    continuing commits the already-extracted rows without rescanning.
    """
    status: ImportStatus = ImportStatus.IDLE
    pending_file: Path | None = None
    processing_result: ProcessingResult | None = None
    error: str | None = None  # failure reason (status=ERROR)
