"""Data models for reconciliation transactions and results."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(Enum):
    """Transaction direction."""

    DEBIT = "DEBIT"  # Money out
    CREDIT = "CREDIT"  # Money in


@dataclass(frozen=True)
class SystemTransaction:
    """
    Internal ledger entry to be reconciled.

    The amount is always a non-negative magnitude; ``type`` carries the
    direction.
    """

    id: str
    amount: Decimal
    type: TransactionType
    transaction_time: datetime


@dataclass(frozen=True)
class BankStatementLine:
    """
    A single line from a bank statement file.

    The amount is signed (negative for debits). The direction is always
    derived from the sign and never stored separately.
    """

    id: str
    amount: Decimal
    date: datetime
    source_name: str

    @property
    def type(self) -> TransactionType:
        """DEBIT for negative amounts, CREDIT otherwise."""
        if self.amount < 0:
            return TransactionType.DEBIT
        return TransactionType.CREDIT

    @property
    def absolute_amount(self) -> Decimal:
        return abs(self.amount)


@dataclass
class ReconciliationResult:
    """
    Outcome of one reconciliation run.

    Populated by the engine while it pairs records, then handed to the
    reporting layer as a read-only value.
    """

    # Post-filter input sizes
    total_system_transactions: int = 0
    total_bank_statement_lines: int = 0

    # Aggregate counts
    total_transactions_processed: int = 0
    total_matched_transactions: int = 0
    total_unmatched_transactions: int = 0

    # Unmatched records, input order preserved
    unmatched_system_transactions: list[SystemTransaction] = field(default_factory=list)
    unmatched_bank_statement_lines: dict[str, list[BankStatementLine]] = field(
        default_factory=dict
    )

    # Sum of |system amount - bank absolute amount| over matched pairs
    total_discrepancies: Decimal = Decimal("0")

    # Run metadata
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    strategy_name: str = ""

    @property
    def unmatched_system_count(self) -> int:
        return len(self.unmatched_system_transactions)

    @property
    def unmatched_bank_count(self) -> int:
        """Unmatched bank lines across all sources."""
        return sum(len(lines) for lines in self.unmatched_bank_statement_lines.values())

    @property
    def is_fully_reconciled(self) -> bool:
        """True when nothing is left unmatched and matched pairs agree on amount."""
        return self.total_unmatched_transactions == 0 and self.total_discrepancies == 0

    @property
    def match_rate_system(self) -> float:
        """Percentage of system transactions matched."""
        if self.total_system_transactions == 0:
            return 0.0
        return (self.total_matched_transactions / self.total_system_transactions) * 100

    @property
    def match_rate_bank(self) -> float:
        """Percentage of bank statement lines matched."""
        if self.total_bank_statement_lines == 0:
            return 0.0
        return (self.total_matched_transactions / self.total_bank_statement_lines) * 100
