"""Utility modules."""

from .exceptions import (
    ReconciliationError,
    InvalidDateRangeError,
    TransactionParseError,
    BankStatementParseError,
    ConfigurationError,
    ReportGenerationError,
)
from .logging_config import configure_logging, setup_logging

__all__ = [
    "ReconciliationError",
    "InvalidDateRangeError",
    "TransactionParseError",
    "BankStatementParseError",
    "ConfigurationError",
    "ReportGenerationError",
    "configure_logging",
    "setup_logging",
]
