"""Logging configuration for the reconciliation application."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from ..config import LoggingConfig

APP_LOGGER_NAME = "bank_recon"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """
    Attach console and optional rotating file handlers to the ``bank_recon`` logger.

    Handlers from a previous call are closed and replaced, so running several
    reconciliations in one process never duplicates output.

    Args:
        level: Console logging level
        log_file: Optional path to a rotating log file, which always records DEBUG
        log_format: Console format string

    Returns:
        The configured application logger
    """
    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(level if log_file is None else min(level, logging.DEBUG))

    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(log_format or DEFAULT_FORMAT))
    app_logger.addHandler(console_handler)

    if log_file:
        app_logger.addHandler(_file_handler(log_file))

    return app_logger


def configure_logging(settings: "LoggingConfig", verbose: bool = False) -> logging.Logger:
    """
    Apply the ``logging`` section of the configuration.

    ``verbose`` forces DEBUG on the console regardless of the configured level.
    """
    level = logging.DEBUG if verbose else resolve_level(settings.level)
    log_file = Path(settings.file) if settings.file else None
    return setup_logging(level, log_file=log_file, log_format=settings.format)


def resolve_level(level: Union[str, int]) -> int:
    """Map a level name such as ``"warning"`` to its numeric value, INFO if unknown."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def _file_handler(log_file: Path) -> RotatingFileHandler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler
