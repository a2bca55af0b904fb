from __future__ import annotations

import logging
from io import StringIO

import pytest

import checkin.logging.init as log_init
from checkin.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    set_debug,
    setup_logging,
)


@pytest.fixture()
def captured():
    """Route the application logger to a StringIO for the duration of a test."""
    stream = StringIO()
    log_init.reset_logging()
    setup_logging(stream=stream)
    yield stream
    log_init.reset_logging()


def test_setup_logging_configures_package_logger():
    log_init.reset_logging()
    logger = setup_logging()
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_idempotent():
    logger1 = setup_logging()
    logger2 = setup_logging()
    assert logger1 is logger2
    assert len(logger1.handlers) == 1
    assert get_logger() is logger1


def test_labeled_prefixes(captured: StringIO):
    logger = get_logger()
    logger.info("info message")
    logger.warning("warning message")
    logger.error("error message")
    log_summary("rows=3 processed=2")
    assert captured.getvalue().splitlines() == [
        "INFO info message",
        "WARN warning message",
        "ERROR error message",
        "SUMMARY rows=3 processed=2",
    ]
    assert logging.getLevelName(SUMMARY_LEVEL) == "SUMMARY"


def test_module_loggers_share_handler(captured: StringIO):
    logging.getLogger("checkin.excel.extractor").warning("row=3 section=Bio incomplete_header")
    assert captured.getvalue() == "WARN row=3 section=Bio incomplete_header\n"


def test_set_debug(captured: StringIO):
    logger = get_logger()
    logger.debug("hidden")
    set_debug()
    logger.debug("shown")
    assert captured.getvalue() == "DEBUG shown\n"


def test_exception_traceback_appended(captured: StringIO):
    try:
        raise ValueError("boom")
    except ValueError:
        get_logger().exception("import failed")
    lines = captured.getvalue().splitlines()
    assert lines[0] == "ERROR import failed"
    assert lines[-1] == "ValueError: boom"


def test_setup_logging_level_argument():
    log_init.reset_logging()
    logger = setup_logging(stream=StringIO(), level=logging.WARNING)
    assert logger.level == logging.WARNING
    assert logger.handlers[0].level == logging.WARNING
    log_init.reset_logging()
