import logging
from logging.handlers import RotatingFileHandler

import pytest

from bank_recon.config import LoggingConfig
from bank_recon.utils.logging_config import (
    APP_LOGGER_NAME,
    configure_logging,
    resolve_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_app_logger():
    yield
    logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("INFO", logging.INFO),
        ("warning", logging.WARNING),
        (" debug ", logging.DEBUG),
        ("loud", logging.INFO),
        (logging.ERROR, logging.ERROR),
    ],
)
def test_resolve_level(raw, expected):
    assert resolve_level(raw) == expected


def test_setup_logging_does_not_stack_handlers():
    setup_logging(logging.INFO)
    logger = setup_logging(logging.WARNING)

    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_log_file_records_debug(tmp_path):
    log_file = tmp_path / "logs" / "recon.log"

    logger = setup_logging(logging.WARNING, log_file=log_file)
    logging.getLogger(f"{APP_LOGGER_NAME}.matching.engine").debug("indexed 3 bank lines")
    for handler in logger.handlers:
        handler.flush()

    assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
    assert "indexed 3 bank lines" in log_file.read_text(encoding="utf-8")


def test_configure_logging_verbose_overrides_level():
    logger = configure_logging(LoggingConfig(level="ERROR"), verbose=True)
    assert logger.level == logging.DEBUG

    logger = configure_logging(LoggingConfig(level="ERROR"))
    assert logger.level == logging.ERROR
