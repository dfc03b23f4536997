"""
Reconciliation engine.
Pairs system transactions with bank statement lines using a key index
built by the active matching strategy.
"""

from datetime import datetime, time
from typing import Optional, Sequence
import logging

from ..models.transaction import (
    BankStatementLine,
    ReconciliationResult,
    SystemTransaction,
)
from ..utils.exceptions import InvalidDateRangeError
from .strategies import ExactMatchStrategy, MatchStrategy

logger = logging.getLogger(__name__)

END_OF_DAY = time(23, 59, 59)


def resolve_date_range(
    start_date: datetime, end_date: Optional[datetime] = None
) -> tuple[datetime, datetime]:
    """
    Normalize a reconciliation date range.

    Args:
        start_date: Inclusive lower bound
        end_date: Inclusive upper bound; when omitted, the end of the start
            date's calendar day (23:59:59) in the same timezone

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        InvalidDateRangeError: If start_date is after end_date
    """
    if end_date is None:
        end_date = datetime.combine(start_date.date(), END_OF_DAY, tzinfo=start_date.tzinfo)

    if start_date > end_date:
        raise InvalidDateRangeError(start_date, end_date)

    return start_date, end_date


class ReconciliationEngine:
    """
    Main reconciliation engine.

    Each call to :meth:`reconcile` is an independent batch run; the engine
    keeps no state between runs apart from the strategy it was built with.
    """

    def __init__(self, strategy: Optional[MatchStrategy] = None):
        """
        Initialize the reconciliation engine.

        Args:
            strategy: Matching strategy, exact matching when omitted
        """
        self.strategy = strategy or ExactMatchStrategy()

    def reconcile(
        self,
        system_transactions: Sequence[SystemTransaction],
        bank_lines: Sequence[BankStatementLine],
        start_date: datetime,
        end_date: Optional[datetime] = None,
    ) -> ReconciliationResult:
        """
        Reconcile system transactions against bank statement lines.

        Args:
            system_transactions: Parsed system transactions, in input order
            bank_lines: Parsed bank statement lines from all sources, in input order
            start_date: Inclusive start of the reconciliation window
            end_date: Inclusive end of the window (see :func:`resolve_date_range`)

        Returns:
            Complete reconciliation result

        Raises:
            InvalidDateRangeError: If the range is inverted; nothing is processed
        """
        start_date, end_date = resolve_date_range(start_date, end_date)
        started_at = datetime.now()

        system_txns = self._filter_system_transactions(system_transactions, start_date, end_date)
        bank_stmts = self._filter_bank_lines(bank_lines, start_date, end_date)

        logger.info(
            f"Starting reconciliation ({self.strategy.name or type(self.strategy).__name__}): "
            f"{len(system_txns)} system txns, {len(bank_stmts)} bank lines "
            f"between {start_date.isoformat()} and {end_date.isoformat()}"
        )
        logger.debug(
            f"Filtered out {len(system_transactions) - len(system_txns)} system txns and "
            f"{len(bank_lines) - len(bank_stmts)} bank lines outside the date range"
        )

        result = ReconciliationResult(
            total_system_transactions=len(system_txns),
            total_bank_statement_lines=len(bank_stmts),
            start_date=start_date,
            end_date=end_date,
            strategy_name=self.strategy.name,
        )

        bank_index = self._build_index(bank_stmts)
        matched_bank = [False] * len(bank_stmts)

        for system_txn in system_txns:
            bank_idx = self._find_match(system_txn, bank_stmts, bank_index, matched_bank)

            if bank_idx is None:
                result.unmatched_system_transactions.append(system_txn)
                continue

            matched_bank[bank_idx] = True
            result.total_matched_transactions += 1

            discrepancy = abs(system_txn.amount - bank_stmts[bank_idx].absolute_amount)
            if discrepancy:
                result.total_discrepancies += discrepancy

        for bank_idx, bank_line in enumerate(bank_stmts):
            if not matched_bank[bank_idx]:
                result.unmatched_bank_statement_lines.setdefault(
                    bank_line.source_name, []
                ).append(bank_line)

        result.total_transactions_processed = len(system_txns) + len(bank_stmts)
        result.total_unmatched_transactions = (
            result.unmatched_system_count + result.unmatched_bank_count
        )

        elapsed = (datetime.now() - started_at).total_seconds()
        logger.info(
            f"Reconciliation complete in {elapsed:.2f}s: "
            f"{result.total_matched_transactions} matches, "
            f"{result.unmatched_system_count} system-only, "
            f"{result.unmatched_bank_count} bank-only"
        )

        return result

    def _build_index(self, bank_stmts: Sequence[BankStatementLine]) -> dict[str, list[int]]:
        """
        Bucket bank line positions by match key.

        Positions within a bucket keep input order, which is the tie-break
        between identical candidates.
        """
        index: dict[str, list[int]] = {}
        for bank_idx, bank_line in enumerate(bank_stmts):
            key = self.strategy.build_key(
                bank_line.type, bank_line.absolute_amount, bank_line.date, bank_line.id
            )
            index.setdefault(key, []).append(bank_idx)

        logger.debug(f"Indexed {len(bank_stmts)} bank lines into {len(index)} buckets")
        return index

    def _find_match(
        self,
        system_txn: SystemTransaction,
        bank_stmts: Sequence[BankStatementLine],
        bank_index: dict[str, list[int]],
        matched_bank: list[bool],
    ) -> Optional[int]:
        """Return the position of the first admissible unmatched candidate, if any."""
        key = self.strategy.build_key(
            system_txn.type, system_txn.amount, system_txn.transaction_time, system_txn.id
        )

        for bank_idx in bank_index.get(key, []):
            if matched_bank[bank_idx]:
                continue
            if self.strategy.is_match(system_txn, bank_stmts[bank_idx]):
                return bank_idx

        return None

    @staticmethod
    def _filter_system_transactions(
        transactions: Sequence[SystemTransaction],
        start_date: datetime,
        end_date: datetime,
    ) -> list[SystemTransaction]:
        return [t for t in transactions if start_date <= t.transaction_time <= end_date]

    @staticmethod
    def _filter_bank_lines(
        bank_lines: Sequence[BankStatementLine],
        start_date: datetime,
        end_date: datetime,
    ) -> list[BankStatementLine]:
        return [b for b in bank_lines if start_date <= b.date <= end_date]


def reconcile(
    system_transactions: Sequence[SystemTransaction],
    bank_lines: Sequence[BankStatementLine],
    strategy: MatchStrategy,
    start_date: datetime,
    end_date: Optional[datetime] = None,
) -> ReconciliationResult:
    """Run a single reconciliation with the given strategy."""
    return ReconciliationEngine(strategy).reconcile(
        system_transactions, bank_lines, start_date, end_date
    )
