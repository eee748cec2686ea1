import io
import logging
from unittest.mock import patch

import pytest
from exchange_gate.core.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    NOISY_LIBRARIES,
    log_handler_execution,
    setup_logging,
)


# Ensure clean logging state between tests
@pytest.fixture(autouse=True)
def reset_logging():
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    root.handlers.clear()

    yield

    root.handlers.clear()
    root.handlers.extend(original_handlers)
    root.setLevel(original_level)


@patch("exchange_gate.core.logging.Settings")
def test_setup_logging_default_level(MockSettings):
    """Test setup_logging configures logging with default level."""
    MockSettings.return_value.get_log_level.return_value = DEFAULT_LOG_LEVEL

    setup_logging()

    root_logger = logging.getLogger()
    assert root_logger.level == logging.INFO
    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0], logging.StreamHandler)
    assert root_logger.handlers[0].formatter._fmt == LOG_FORMAT

    for lib_name in NOISY_LIBRARIES:
        assert logging.getLogger(lib_name).level == logging.WARNING


@patch("exchange_gate.core.logging.Settings")
def test_setup_logging_specific_level(MockSettings):
    """Test setup_logging uses the level provided by settings."""
    MockSettings.return_value.get_log_level.return_value = "DEBUG"

    setup_logging()

    assert logging.getLogger().level == logging.DEBUG


@patch("exchange_gate.core.logging.Settings")
def test_setup_logging_invalid_level(MockSettings, capsys):
    """Test setup_logging defaults to INFO and warns on invalid level."""
    MockSettings.return_value.get_log_level.return_value = "INVALID_LEVEL"

    setup_logging()

    assert logging.getLogger().level == logging.INFO
    captured = capsys.readouterr()
    assert "Invalid LOG_LEVEL 'INVALID_LEVEL'" in captured.err


@patch("exchange_gate.core.logging.Settings")
def test_setup_logging_replaces_existing_handlers(MockSettings):
    MockSettings.return_value.get_log_level.return_value = "INFO"
    logging.getLogger().addHandler(logging.NullHandler())

    setup_logging()

    assert not any(isinstance(h, logging.NullHandler) for h in logging.getLogger().handlers)


def test_log_handler_execution_success(caplog):
    with caplog.at_level(logging.INFO, logger="exchange_gate.pipeline.handler"):
        log_handler_execution("tx-1", "MyHandler", "completed", duration=0.5, details={"extra_key": "v"})

    record = caplog.records[-1]
    assert record.levelno == logging.INFO
    assert record.getMessage() == "[tx-1] Handler MyHandler completed"
    assert record.duration_seconds == "0.5"
    assert record.extra_key == "v"


def test_log_handler_execution_error(caplog):
    with caplog.at_level(logging.INFO, logger="exchange_gate.pipeline.handler"):
        log_handler_execution("tx-2", "MyHandler", "error", error="boom")

    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert record.getMessage() == "[tx-2] Handler MyHandler failed"
    assert record.error == "boom"


@patch("exchange_gate.core.logging.Settings")
def test_setup_logging_explicit_level_overrides_settings(MockSettings):
    MockSettings.return_value.get_log_level.return_value = "ERROR"

    applied = setup_logging(level="warning")

    assert applied == "WARNING"
    assert logging.getLogger().level == logging.WARNING
    MockSettings.return_value.get_log_level.assert_not_called()


def test_setup_logging_writes_to_given_stream():
    stream = io.StringIO()

    setup_logging(level="INFO", stream=stream)
    logging.getLogger("exchange_gate.test").info("hello there")

    assert "exchange_gate.test - INFO - hello there" in stream.getvalue()
