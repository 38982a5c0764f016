"""Logging helper tests."""

import logging

import pytest

from portfolio.utils.logging import (
    LOGGER_NAME,
    LevelColorFormatter,
    log_error,
    log_operation,
    setup_logging,
)


@pytest.fixture
def reset_portfolio_logger():
    yield
    setup_logging(console_output=False, file_output=False)
    logging.getLogger(LOGGER_NAME).propagate = True


def make_record(name: str, level: int = logging.INFO, msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, msg, None, None)


def test_color_formatter_wraps_warnings_only():
    formatter = LevelColorFormatter("%(levelname)s %(message)s")

    warning = formatter.format(make_record("portfolio.app", logging.WARNING))
    info = formatter.format(make_record("portfolio.app", logging.INFO))

    assert warning.startswith("\033[33m") and warning.endswith(LevelColorFormatter.RESET)
    assert info == "INFO hello"


def test_setup_logging_replaces_handlers(reset_portfolio_logger):
    setup_logging(level="WARNING", file_output=False)
    logger = setup_logging(level="DEBUG", file_output=False)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_setup_logging_writes_file(tmp_path, reset_portfolio_logger):
    setup_logging(level="DEBUG", log_dir=tmp_path, console_output=False, file_output=True)
    logging.getLogger("portfolio.domain.store").debug("written to file")
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()

    content = (tmp_path / "portfolio.log").read_text(encoding="utf-8")
    assert "portfolio.domain.store: written to file" in content


def test_setup_logging_without_dir_skips_file(reset_portfolio_logger):
    logger = setup_logging(console_output=False, file_output=True)

    assert logger.handlers == []


def test_log_helpers(caplog):
    logger = logging.getLogger("portfolio.test.helpers")
    logging.getLogger(LOGGER_NAME).propagate = True

    with caplog.at_level(logging.INFO, logger="portfolio.test.helpers"):
        log_operation(logger, "Created project", id="1", title="Site")
        log_operation(logger, "Cleared store")
        log_error(logger, "load projects", RuntimeError("boom"), owner_id="alice")

    messages = [record.getMessage() for record in caplog.records]
    assert "Created project (id=1, title=Site)" in messages
    assert "Cleared store" in messages
    assert "Could not load projects: RuntimeError: boom (owner_id=alice)" in messages
    assert caplog.records[-1].levelno == logging.ERROR
    assert caplog.records[-1].exc_info is not None
