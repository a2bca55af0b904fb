"""Domain models for the roster check-in importer.

This package contains the domain model classes shared by the worksheet
scanner, the import session and the CLI.
"""

from .attendee import Attendee
from .config_models import Settings
from .error_record import ErrorRecord, ErrorType, HeaderDetails
from .import_state import ImportState, ImportStatus
from .processing_result import ProcessingResult
from .roster import Roster

__all__ = [
    # Configuration models
    "Settings",
    # Processing models
    "Attendee",
    "ErrorRecord",
    "ErrorType",
    "HeaderDetails",
    "ProcessingResult",
    # Session models
    "ImportState",
    "ImportStatus",
    "Roster",
]
