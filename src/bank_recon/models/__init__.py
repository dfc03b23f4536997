"""Data models for reconciliation."""

from .transaction import (
    TransactionType,
    SystemTransaction,
    BankStatementLine,
    ReconciliationResult,
)

__all__ = [
    "TransactionType",
    "SystemTransaction",
    "BankStatementLine",
    "ReconciliationResult",
]
