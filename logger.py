"""Logging configuration for fintrack.

Sets up logging to both file (with date-based naming) and console. Every
record carries the id of the user whose request is being handled, so log
lines from concurrent agent requests can be told apart.
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import date
from typing import Iterator, Optional

from config import Config

_current_user: ContextVar[Optional[str]] = ContextVar(
    "fintrack_current_user", default=None
)


class UserContextFilter(logging.Filter):
    """Add the current request's user id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.user_id = _current_user.get() or "system"
        return True


@contextmanager
def user_context(user_id: Optional[str]) -> Iterator[None]:
    """Tag every log record emitted inside the block with ``user_id``."""
    token = _current_user.set(user_id)
    try:
        yield
    finally:
        _current_user.reset(token)


def setup_logging(config: Config) -> logging.Logger:
    """Set up application logging with file and console handlers.

    Args:
        config: Application configuration containing log settings.

    Returns:
        Configured logger instance.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("fintrack")
    logger.setLevel(config.log_level)

    # Clear any existing handlers (in case this is called multiple times)
    logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - [user:%(user_id)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_formatter = logging.Formatter("%(levelname)s - %(message)s")
    user_filter = UserContextFilter()

    # File handler - logs to fintrack-{date}.log
    log_file_path = config.log_dir / f"fintrack-{date.today().isoformat()}.log"
    file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
    file_handler.setLevel(config.log_level)
    file_handler.setFormatter(detailed_formatter)
    file_handler.addFilter(user_filter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(console_formatter)
    console_handler.addFilter(user_filter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger.

    Returns:
        The fintrack logger instance.
    """
    return logging.getLogger("fintrack")
