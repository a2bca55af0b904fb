from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Row progress display for worksheet scans (tqdm, TTY only).

Large rosters take a moment to scan, so the CLI shows one tick per sheet row
followed by the processed / skipped counts. When stdout is not a
terminal (CI, piped output) no bar is created and the tracker only counts.
"""

__all__ = [
    "RowProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class RowProgressTracker:
    """Progress bar over the rows of one worksheet scan.

    Used as a context manager around ``process_worksheet``; the bar is
    removed when the scan ends (``leave=False``) so that the summary lines
    that follow start on a clean line.
    """

    def __init__(self, total_rows: int, *, description: str = "Scanning rows") -> None:
        self.total_rows = total_rows
        self.description = description
        self.current_row = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None = None
        if self.enabled:
            self.pbar = tqdm(
                total=total_rows,
                desc=description,
                unit="row",
                disable=False,
                leave=False,
                position=0,
                ncols=80,
                ascii=True,
            )

    def advance(self, rows: int = 1) -> None:
        self.current_row += rows
        if self.pbar is not None:
            self.pbar.update(rows)

    def report_counts(self, processed: int, skipped: int) -> None:
        """Show attendee / skipped counts beside the bar."""
        if self.pbar is not None:
            self.pbar.set_postfix(processed=processed, skipped=skipped)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> RowProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
