from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from bank_recon.models import ReconciliationResult, TransactionType

from conftest import bank_line, system_txn


def test_bank_line_direction_follows_amount_sign():
    assert bank_line("B1", "-250", "2024-01-16").type is TransactionType.DEBIT
    assert bank_line("B2", "1000.50", "2024-01-15").type is TransactionType.CREDIT
    assert bank_line("B3", "0", "2024-01-15").type is TransactionType.CREDIT


def test_bank_line_absolute_amount():
    assert bank_line("B1", "-500.50", "2024-01-15").absolute_amount == Decimal("500.50")


def test_records_are_immutable():
    txn = system_txn("TRX001", "1000.00", "CREDIT", "2024-01-15 10:30:00")
    with pytest.raises(FrozenInstanceError):
        txn.amount = Decimal("1")

    line = bank_line("B1", "1000.00", "2024-01-15")
    with pytest.raises(FrozenInstanceError):
        line.source_name = "other"


def test_result_derived_counts():
    result = ReconciliationResult(
        total_system_transactions=4,
        total_bank_statement_lines=5,
        total_matched_transactions=2,
        unmatched_system_transactions=[
            system_txn("TRX009", "10", "DEBIT", "2024-01-15 09:00:00"),
        ],
        unmatched_bank_statement_lines={
            "bank_bca": [bank_line("B1", "1", "2024-01-15", "bank_bca")],
            "bank_mandiri": [
                bank_line("M1", "2", "2024-01-15", "bank_mandiri"),
                bank_line("M2", "3", "2024-01-15", "bank_mandiri"),
            ],
        },
    )

    assert result.unmatched_system_count == 1
    assert result.unmatched_bank_count == 3
    assert result.match_rate_system == 50.0
    assert result.match_rate_bank == 40.0


def test_result_rates_with_no_records():
    result = ReconciliationResult()
    assert result.match_rate_system == 0.0
    assert result.match_rate_bank == 0.0
    assert result.is_fully_reconciled
