from __future__ import annotations

import logging
from io import StringIO

from bday_alert.logging.init import (
    APP_LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    setup_logging,
)


def test_setup_logging_creates_app_logger():
    """Test setup_logging configures the app logger."""
    logger = setup_logging()
    assert logger.name == APP_LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    """Test repeated setup keeps a single handler."""
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert len(second.handlers) == 1


def test_setup_logging_debug_lowers_level():
    """Test debug mode lowers the level."""
    logger = setup_logging(debug=True)
    assert logger.level == logging.DEBUG
    assert logger.handlers[0].level == logging.DEBUG


def test_get_logger_configures_on_demand():
    assert get_logger().name == APP_LOGGER_NAME


def test_labeled_prefixes():
    """Test labelled prefixes per level."""
    captured = StringIO()
    logger = logging.getLogger("test_bday_alert_labels")
    logger.setLevel(logging.INFO)
    for h in logger.handlers[:]:
        logger.removeHandler(h)
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    handler = logging.StreamHandler(captured)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("info message")
    logger.warning("warning message")
    logger.error("error message")
    logger.log(SUMMARY_LEVEL, "summary message")

    assert captured.getvalue().strip().split("\n") == [
        "INFO info message",
        "WARN warning message",
        "ERROR error message",
        "SUMMARY summary message",
    ]


def test_module_loggers_route_through_app_logger(capsys):
    """Test module loggers reach the app handler."""
    setup_logging()
    logging.getLogger("bday_alert.services.orchestrator").warning("child message")
    log_summary("birthdays=1")
    out = capsys.readouterr().out
    assert "WARN child message" in out
    assert "SUMMARY birthdays=1" in out
