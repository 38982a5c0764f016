"""
Logging setup for the portfolio manager.

Every module logs through ``logging.getLogger(__name__)``; ``setup_logging``
attaches the handlers to the ``portfolio`` logger once, at CLI start-up.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Literal

LOGGER_NAME = "portfolio"
LOG_FILENAME = "portfolio.log"

CONSOLE_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class LevelColorFormatter(logging.Formatter):
    """Colours whole console lines by level."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[2m",      # Dim
        logging.WARNING: "\033[33m",   # Yellow
        logging.ERROR: "\033[31m",     # Red
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        return f"{color}{line}{self.RESET}" if color else line


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO",
    log_dir: str | Path | None = None,
    console_output: bool = True,
    file_output: bool = True,
) -> logging.Logger:
    """Replace the handlers of the ``portfolio`` logger.

    Console lines go to stderr so they never mix with rendered output.
    A ``portfolio.log`` file is written below ``log_dir`` when
    ``file_output`` is set and a directory is given.
    """
    portfolio_logger = logging.getLogger(LOGGER_NAME)
    portfolio_logger.setLevel(level)
    for handler in list(portfolio_logger.handlers):
        portfolio_logger.removeHandler(handler)
        handler.close()

    if console_output:
        console = logging.StreamHandler(sys.stderr)
        formatter_cls = LevelColorFormatter if sys.stderr.isatty() else logging.Formatter
        console.setFormatter(formatter_cls(CONSOLE_FORMAT))
        portfolio_logger.addHandler(console)

    if file_output and log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path / LOG_FILENAME, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        portfolio_logger.addHandler(file_handler)

    portfolio_logger.propagate = False
    return portfolio_logger


def _describe(fields: dict[str, Any]) -> str:
    return ", ".join(f"{key}={value}" for key, value in fields.items())


def log_operation(logger: logging.Logger, action: str, **fields: Any) -> None:
    """Log a completed change, e.g. ``Created project (id=1, title=Site)``."""
    if fields:
        logger.info(f"{action} ({_describe(fields)})")
    else:
        logger.info(action)


def log_error(logger: logging.Logger, action: str, error: BaseException, **fields: Any) -> None:
    """Log a failed action with its traceback and the fields it concerned."""
    message = f"Could not {action}: {type(error).__name__}: {error}"
    if fields:
        message = f"{message} ({_describe(fields)})"
    logger.error(message, exc_info=error)
