"""Error hierarchy for the roster check-in importer.

Row-level and header problems found while scanning a worksheet are never
raised; they are collected as ``ErrorRecord`` data in the ``ProcessingResult``.
The exceptions below cover failures that abort the current operation:
unreadable or empty workbooks, failed writes, invalid workflow transitions and
configuration problems.
"""


class CheckinError(Exception):
    """Base exception for all check-in errors."""

    pass


class WorkbookReadError(CheckinError):
    """The source file could not be read or parsed as a spreadsheet."""

    pass


class EmptyWorksheetError(WorkbookReadError):
    """The workbook has no sheet, or its first sheet has no used cells."""

    pass


class WorkbookWriteError(CheckinError):
    """Exporting or saving the updated workbook failed.

    The in-memory roster is left as it was before the failed write.
    """

    pass


class ImportStateError(CheckinError):
    """Operation is not valid in the current import state.

    Examples: continuing an import that is not paused, starting a scan while
    another one is still processing.
    """

    pass


class NoRosterError(CheckinError):
    """No roster has been committed yet (nothing to check in or export)."""

    pass


class AttendeeNotFoundError(CheckinError):
    """No attendee with the given identifier exists in the committed roster."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"attendee not found: {identifier}")
        self.identifier = identifier


class ConfigError(CheckinError):
    """Settings file is missing, unparsable or fails schema validation."""

    pass
