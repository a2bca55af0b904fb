from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from ..errors import ImportStateError, NoRosterError
from ..excel.extractor import process_worksheet
from ..excel.reader import Worksheet, read_workbook
from ..excel.writer import export_workbook
from ..logging.error_log import ErrorLogBuffer
from ..models.attendee import Attendee
from ..models.config_models import Settings
from ..models.import_state import ImportState, ImportStatus
from ..models.processing_result import ProcessingResult
from ..models.roster import Roster
from ..storage.files import read_file, save_file
from .progress import RowProgressTracker

"""Check-in session: import workflow, check-in and export.

The session owns the import state machine and the active roster:

    idle → processing → completed | paused | error
    paused → completed (continue with valid rows) | idle (cancel)

A scan with header errors pauses before anything is committed; the operator
either continues with the rows that were extracted or cancels. Identifier
errors alone never pause an import.

Check-ins replace the roster instead of mutating it. When a save target is
configured (direct edit or auto-save), the new roster is written first and
only published after the write succeeded. Check-in saves and explicit saves
share one lock so writes to the same file never interleave.
"""

__all__ = [
    "CheckinSession",
    "default_export_path",
]

logger = logging.getLogger(__name__)

FileReader = Callable[[Path], bytes]
FileWriter = Callable[[Path, bytes], Path]


def default_export_path(source: Path) -> Path:
    return source.with_name(f"updated_{source.name}")


class CheckinSession:
    """One operator session over one roster workbook at a time."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        reader: FileReader = read_file,
        writer: FileWriter = save_file,
        error_log: ErrorLogBuffer | None = None,
        show_progress: bool = False,
    ) -> None:
        self.settings = settings if settings is not None else Settings()
        self._read = reader
        self._write = writer
        self.error_log = error_log if error_log is not None else ErrorLogBuffer(Path(self.settings.error_log_dir))
        self.show_progress = show_progress

        self._state = ImportState()
        self._roster: Roster | None = None
        self._source: Path | None = None
        self._source_bytes: bytes | None = None
        self._pending_bytes: bytes | None = None
        # bumped on every start/cancel; a scan whose generation is stale is dropped
        self._generation = 0
        self._state_lock = threading.Lock()
        self._io_lock = threading.Lock()

    # ------------------------------------------------------------------
    # read-only views
    # ------------------------------------------------------------------
    @property
    def state(self) -> ImportState:
        return self._state

    @property
    def status(self) -> ImportStatus:
        return self._state.status

    @property
    def roster(self) -> Roster | None:
        return self._roster

    @property
    def source(self) -> Path | None:
        return self._source

    # ------------------------------------------------------------------
    # import workflow
    # ------------------------------------------------------------------
    def start_import(self, path: Path) -> ImportState:
        """Read and scan ``path``, then complete or pause the import.

        Any previous import (pending or committed) is discarded first.

        Raises:
            ImportStateError: If another scan is still processing
            WorkbookReadError: If the file cannot be read, or the worksheet
                is empty (state moves to ERROR)
        """
        with self._state_lock:
            if self._state.status is ImportStatus.PROCESSING:
                raise ImportStateError("an import is already processing")
            self._discard()
            self._generation += 1
            generation = self._generation
            self._state = ImportState(status=ImportStatus.PROCESSING, pending_file=path)

        logger.info("importing %s", path)
        try:
            data = self._read(path)
            worksheet = read_workbook(data, path.name)
            result = self._scan(worksheet)
        except Exception as e:
            with self._state_lock:
                if generation == self._generation:
                    self._state = ImportState(status=ImportStatus.ERROR, error=str(e))
            logger.error("import failed file=%s: %s", path.name, e)
            raise

        self._record_errors(path.name, result)

        with self._state_lock:
            if generation != self._generation:
                logger.info("import of %s was cancelled, result dropped", path.name)
                return self._state
            if result.requires_user_action:
                self._pending_bytes = data
                self._state = ImportState(status=ImportStatus.PAUSED, pending_file=path, processing_result=result)
                logger.warning(
                    "import paused file=%s header_errors=%d: review required",
                    path.name,
                    len(result.structural_errors),
                )
            else:
                self._commit(path, data, result)
            return self._state

    def continue_with_valid_rows(self) -> Roster:
        """Commit the attendees extracted by the paused scan (no rescan).

        Raises:
            ImportStateError: If the import is not paused
        """
        with self._state_lock:
            state = self._state
            if state.status is not ImportStatus.PAUSED:
                raise ImportStateError(f"cannot continue: import is {state.status.value}")
            pending_file, result, data = state.pending_file, state.processing_result, self._pending_bytes
            if pending_file is None or result is None or data is None:
                raise ImportStateError("cannot continue: paused import has no pending scan")
            return self._commit(pending_file, data, result)

    def cancel_import(self) -> ImportState:
        """Drop the pending file, the scan result and any committed roster."""
        with self._state_lock:
            self._generation += 1
            self._discard()
            self._state = ImportState()
        logger.info("import cancelled")
        return self._state

    def _scan(self, worksheet: Worksheet) -> ProcessingResult:
        if not self.show_progress:
            return process_worksheet(worksheet)
        with RowProgressTracker(worksheet.row_count, description=f"Scanning {worksheet.name}") as progress:
            result = process_worksheet(worksheet, progress=progress)
            progress.report_counts(result.processed_rows, result.skipped_rows)
        return result

    def _commit(self, path: Path, data: bytes, result: ProcessingResult) -> Roster:
        roster = Roster(result.attendees)
        self._roster = roster
        self._source = path
        self._source_bytes = data
        self._pending_bytes = None
        self._state = ImportState(status=ImportStatus.COMPLETED, processing_result=result)
        logger.info(
            "import completed file=%s attendees=%d skipped=%d",
            path.name,
            result.processed_rows,
            result.skipped_rows,
        )
        return roster

    def _discard(self) -> None:
        self._roster = None
        self._source = None
        self._source_bytes = None
        self._pending_bytes = None

    def _record_errors(self, file: str, result: ProcessingResult) -> None:
        if not result.errors:
            return
        self.error_log.extend(file, result.errors)
        try:
            log_path = self.error_log.flush()
        except OSError as e:
            logger.warning("failed to write import error log: %s", e)
            return
        logger.info("%d import issue(s) written to %s", len(result.errors), log_path)

    # ------------------------------------------------------------------
    # check-in
    # ------------------------------------------------------------------
    def _snapshot(self) -> tuple[int, Roster, Path, bytes]:
        """Generation, roster, source path and source bytes, read together."""
        with self._state_lock:
            if self._roster is None or self._source is None or self._source_bytes is None:
                raise NoRosterError("no roster loaded")
            return self._generation, self._roster, self._source, self._source_bytes

    def find_attendee(self, identifier: str) -> Attendee | None:
        """Case-insensitive lookup in the committed roster."""
        roster = self._roster
        if roster is None:
            return None
        return roster.find(identifier)

    def check_in(self, identifier: str, now: datetime | None = None) -> Attendee:
        """Mark ``identifier`` as checked in and return the updated record.

        The updated roster is published only if the same import is still
        committed once the save finished; a roster replaced or cancelled in
        the meantime is left as it is.

        Raises:
            NoRosterError: If no roster is committed
            AttendeeNotFoundError: If the identifier is not in the roster
            WorkbookWriteError: If the configured save fails; the roster is
                left unchanged
        """
        with self._io_lock:
            generation, roster, source, source_bytes = self._snapshot()
            timestamp = (now or datetime.now()).strftime(self.settings.timestamp_format)
            updated, attendee = roster.with_check_in(identifier, timestamp)
            if updated is roster:
                logger.info("%s already checked in at %s", attendee.identifier, attendee.checked_in)
                return attendee

            target = self.settings.save_target(source)
            if target is not None:
                self._write(target, export_workbook(source_bytes, updated))
                logger.debug("check-in saved to %s", target)

            with self._state_lock:
                if generation != self._generation or self._roster is not roster:
                    logger.warning(
                        "roster for %s was replaced during check-in of %s, update dropped",
                        source.name,
                        attendee.identifier,
                    )
                    return attendee
                self._roster = updated
        logger.info("checked in %s (%s) at %s", attendee.identifier, attendee.display_name, timestamp)
        return attendee

    # ------------------------------------------------------------------
    # export
    # ------------------------------------------------------------------
    def export_bytes(self) -> bytes:
        """Original workbook with the committed roster's check-ins written back."""
        _, roster, _, source_bytes = self._snapshot()
        return export_workbook(source_bytes, roster)

    def save(self, destination: Path | None = None) -> Path:
        """Write the updated workbook; defaults to ``updated_<name>`` beside the source.

        Raises:
            NoRosterError: If no roster is committed
            WorkbookWriteError: If export or the write fails
        """
        with self._io_lock:
            _, roster, source, source_bytes = self._snapshot()
            target = destination or default_export_path(source)
            self._write(target, export_workbook(source_bytes, roster))
        logger.info("saved %d check-in(s) to %s", len(roster.checked_in()), target)
        return target
