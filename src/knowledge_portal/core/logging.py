"""
Logging configuration for Knowledge Portal.

Every module logs through a child of the ``knowledge_portal`` logger.
Interactive terminals get Rich console output; piped or redirected output
(uvicorn under a process manager, CI) gets a plain timestamped format.

Configuration:
    LOG_LEVEL environment variable controls the logging level.
    Valid values: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)

Usage:
    from knowledge_portal.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Appended query %d for %s", query.id, query.employee_id)

Passwords are never logged. Session tokens are only ever logged through
``redact_token()``.
"""

import logging
import os
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# Package-level logger name
LOGGER_NAME = "knowledge_portal"

# Format for non-Rich handlers
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Number of leading token characters kept by redact_token()
TOKEN_PREVIEW_LENGTH = 8

_logging_configured = False


def _get_log_level() -> int:
    """Read the log level from LOG_LEVEL, falling back to INFO."""
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    level: Optional[int] = None,
    use_rich: bool = True,
) -> None:
    """
    Configure the package-level logger.

    Safe to call more than once; only the first call has an effect.
    The CLI calls it again with ``level=DEBUG`` for ``--verbose`` before any
    module logger has been requested.

    Args:
        level: Logging level. If None, reads from LOG_LEVEL env var.
        use_rich: Whether to use RichHandler for console output.
                  Ignored when stdout is not a TTY.
    """
    global _logging_configured

    if _logging_configured:
        return

    log_level = level if level is not None else _get_log_level()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.handlers.clear()

    if sys.stdout.isatty() and use_rich:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)
        )

    handler.setLevel(log_level)
    logger.addHandler(handler)
    logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for the specified module.

    Configures logging with defaults on first use. Names outside the
    package namespace are prefixed with ``knowledge_portal.``.

    Args:
        name: Module name, typically __name__ from the calling module.

    Returns:
        Configured logger instance.
    """
    if not _logging_configured:
        configure_logging()

    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"

    return logging.getLogger(name)


def redact_token(token: Optional[str]) -> str:
    """Return a log-safe preview of a session token."""
    if not token:
        return "<none>"
    return f"{token[:TOKEN_PREVIEW_LENGTH]}…"


def suppress_third_party_loggers() -> None:
    """
    Quiet chatty third-party loggers.

    uvicorn's access log duplicates our own request logging, and httpx
    logs every TestClient request at INFO.
    """
    noisy_loggers = [
        "uvicorn.access",
        "httpx",
        "httpcore",
        "watchfiles",
        "multipart",
    ]

    for logger_name in noisy_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
