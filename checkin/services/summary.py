from __future__ import annotations

from ..models.error_record import ErrorRecord
from ..models.processing_result import ProcessingResult

"""Summary line and issue breakdown rendering.

The SUMMARY line is a single machine-friendly line; the breakdown lists
every problem grouped by section, as shown to the operator when an import
pauses.
"""

__all__ = [
    "render_summary_line",
    "render_error",
    "render_error_breakdown",
]


def render_summary_line(result: ProcessingResult) -> str:
    """Render a SUMMARY line from a ProcessingResult.

    Format:
    SUMMARY rows={total} processed={processed} skipped={skipped}
    errors={reported} requires_action={yes|no}

    Examples:
        >>> result = ProcessingResult(
        ...     attendees=(), errors=(), total_rows=3,
        ...     processed_rows=2, skipped_rows=0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY rows=3 processed=2 skipped=0 errors=0 requires_action=no'
    """
    return (
        f"SUMMARY rows={result.total_rows} "
        f"processed={result.processed_rows} "
        f"skipped={result.skipped_rows} "
        f"errors={result.reported_error_count} "
        f"requires_action={'yes' if result.requires_user_action else 'no'}"
    )


def render_error(error: ErrorRecord) -> list[str]:
    lines = [f"row {error.row}: {error.error_type.value} '{error.value}'"]
    if error.details is not None:
        lines.append(f"  expected: {', '.join(error.details.expected_columns)}")
        lines.append(f"  found: {', '.join(error.details.found_columns)}")
        lines.append(f"  missing: {', '.join(error.details.missing_columns)}")
    return lines


def render_error_breakdown(result: ProcessingResult) -> list[str]:
    """Lines describing every error, grouped by section."""
    lines: list[str] = []
    for section, errors in result.errors_by_section().items():
        lines.append(f"{section} ({len(errors)} issue{'s' if len(errors) != 1 else ''})")
        for error in errors:
            lines.extend(f"  {line}" for line in render_error(error))
    if result.skipped_rows > 0:
        lines.append(f"Note: If you continue, {result.skipped_rows} row(s) will be skipped.")
    return lines
