from __future__ import annotations

from dataclasses import dataclass

from ..excel.layout import UNKNOWN_SECTION
from .attendee import Attendee
from .error_record import ErrorRecord, ErrorType

"""Processing result model for one worksheet scan.

The ProcessingResult is the single hand-off between the scanner and the
import workflow: extracted attendees, every problem found, and the counters
shown to the operator when an import pauses.
"""

__all__ = [
    "ProcessingResult",
]


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated outcome of one worksheet scan.

    ``requires_user_action`` is true iff at least one header error
    (incomplete or invalid) occurred. Identifier errors alone never set it;
    those rows are only counted as skipped.
    """
    attendees: tuple[Attendee, ...]
    errors: tuple[ErrorRecord, ...]
    total_rows: int  # highest row index + 1
    processed_rows: int  # rows that produced an Attendee
    skipped_rows: int  # blank rows + rows with a missing/invalid identifier
    requires_user_action: bool = False

    def __post_init__(self) -> None:
        if self.processed_rows + self.skipped_rows > self.total_rows:
            raise ValueError(
                f"processed ({self.processed_rows}) + skipped ({self.skipped_rows}) "
                f"exceeds total rows ({self.total_rows})"
            )

    @property
    def structural_errors(self) -> list[ErrorRecord]:
        return [e for e in self.errors if e.error_type.is_structural]

    @property
    def reported_error_count(self) -> int:
        """Error count as shown in the import issues summary.

        Missing identifiers are already reflected in the skipped count and
        incomplete headers are listed per section, so neither is counted here.
        """
        excluded = (ErrorType.MISSING_IDENTIFIER, ErrorType.INCOMPLETE_HEADER)
        return sum(1 for e in self.errors if e.error_type not in excluded)

    def errors_by_section(self) -> dict[str, list[ErrorRecord]]:
        """Group errors by section label, in order of first appearance."""
        grouped: dict[str, list[ErrorRecord]] = {}
        for error in self.errors:
            grouped.setdefault(error.section or UNKNOWN_SECTION, []).append(error)
        return grouped
