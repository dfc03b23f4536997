from decimal import Decimal

import pytest

from bank_recon.matching.strategies import (
    ExactMatchStrategy,
    canonical_amount,
    get_strategy,
)
from bank_recon.models import TransactionType
from bank_recon.utils.exceptions import ConfigurationError

from conftest import at, bank_line, system_txn


@pytest.fixture
def strategy():
    return ExactMatchStrategy()


def test_exact_key_format(strategy):
    key = strategy.build_key(
        TransactionType.CREDIT, Decimal("1000.50"), at("2024-01-15 10:30:00"), "TRX001"
    )
    assert key == "CREDIT_1000.5_2024-01-15"


def test_exact_key_ignores_time_of_day_and_id(strategy):
    morning = strategy.build_key(
        TransactionType.DEBIT, Decimal("500.50"), at("2024-01-15 00:00:00"), "A"
    )
    evening = strategy.build_key(
        TransactionType.DEBIT, Decimal("500.50"), at("2024-01-15 23:59:59"), "B"
    )
    assert morning == evening


def test_exact_key_distinguishes_type_amount_and_date(strategy):
    base = strategy.build_key(TransactionType.CREDIT, Decimal("100"), at("2024-01-15"), "X")
    assert base != strategy.build_key(TransactionType.DEBIT, Decimal("100"), at("2024-01-15"), "X")
    assert base != strategy.build_key(TransactionType.CREDIT, Decimal("101"), at("2024-01-15"), "X")
    assert base != strategy.build_key(TransactionType.CREDIT, Decimal("100"), at("2024-01-16"), "X")


def test_exact_key_same_for_system_and_bank_views(strategy):
    txn = system_txn("TRX002", "500.50", "DEBIT", "2024-01-15 14:22:00")
    line = bank_line("BANK-002", "-500.50", "2024-01-15")

    assert strategy.build_key(
        txn.type, txn.amount, txn.transaction_time, txn.id
    ) == strategy.build_key(line.type, line.absolute_amount, line.date, line.id)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1000.00", "1000"),
        ("1000", "1000"),
        ("500.50", "500.5"),
        ("0.00", "0"),
        ("1E+3", "1000"),
        ("0.010", "0.01"),
    ],
)
def test_canonical_amount(raw, expected):
    assert canonical_amount(Decimal(raw)) == expected


def test_canonical_amount_keeps_full_precision():
    first = Decimal("12345678901234567890123456789.01")
    second = Decimal("12345678901234567890123456789.02")

    assert canonical_amount(first) == "12345678901234567890123456789.01"
    assert canonical_amount(first) != canonical_amount(second)


def test_exact_is_match_always_admits(strategy):
    txn = system_txn("TRX001", "1000.00", "CREDIT", "2024-01-15 10:30:00")
    line = bank_line("BANK-001", "1000.00", "2024-01-15")
    assert strategy.is_match(txn, line) is True


def test_get_strategy_by_name():
    assert isinstance(get_strategy("exact"), ExactMatchStrategy)
    assert isinstance(get_strategy("EXACT"), ExactMatchStrategy)


def test_get_strategy_unknown_name():
    with pytest.raises(ConfigurationError, match="Unknown matching strategy"):
        get_strategy("fuzzy")
