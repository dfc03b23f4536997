"""
Matching strategies for transaction reconciliation.
A strategy decides which bank lines are candidates for a system transaction
(via the lookup key) and whether a candidate is finally admitted.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal

from ..models.transaction import (
    BankStatementLine,
    SystemTransaction,
    TransactionType,
)
from ..utils.exceptions import ConfigurationError


def canonical_amount(amount: Decimal) -> str:
    """
    Render a decimal without exponent or trailing zeros.

    ``Decimal("1000.00")`` and ``Decimal("1000")`` both become ``"1000"``.
    No rounding is applied, so every significant digit survives.
    """
    if amount == 0:
        return "0"
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class MatchStrategy(ABC):
    """Abstract base class for matching strategies."""

    name: str = ""

    @abstractmethod
    def build_key(
        self,
        txn_type: TransactionType,
        amount: Decimal,
        date: datetime,
        record_id: str,
    ) -> str:
        """
        Build the index key for a record.

        Args:
            txn_type: Transaction direction
            amount: Non-negative amount magnitude
            date: Timestamp of the record
            record_id: Identifier of the record

        Returns:
            Key under which candidates for pairing are bucketed
        """
        pass

    @abstractmethod
    def is_match(
        self,
        system_txn: SystemTransaction,
        bank_line: BankStatementLine,
    ) -> bool:
        """
        Admission check for a candidate sharing the system transaction's key.

        Args:
            system_txn: System transaction being matched
            bank_line: Candidate bank statement line

        Returns:
            True if the pair may be matched
        """
        pass


class ExactMatchStrategy(MatchStrategy):
    """
    Exact match strategy - matches on type, amount, and calendar date.
    Time of day and record identifiers are ignored.
    """

    name = "exact"

    def build_key(
        self,
        txn_type: TransactionType,
        amount: Decimal,
        date: datetime,
        record_id: str,
    ) -> str:
        return f"{txn_type.value}_{canonical_amount(amount)}_{date.date().isoformat()}"

    def is_match(
        self,
        system_txn: SystemTransaction,
        bank_line: BankStatementLine,
    ) -> bool:
        # Type, amount and date are already equal through the key
        return True


STRATEGIES: dict[str, type[MatchStrategy]] = {
    ExactMatchStrategy.name: ExactMatchStrategy,
}


def get_strategy(name: str) -> MatchStrategy:
    """
    Create a strategy instance by its configured name.

    Raises:
        ConfigurationError: If no strategy is registered under ``name``
    """
    try:
        strategy_cls = STRATEGIES[name.lower()]
    except KeyError:
        available = ", ".join(sorted(STRATEGIES))
        raise ConfigurationError(
            f"Unknown matching strategy '{name}' (available: {available})"
        ) from None
    return strategy_cls()
