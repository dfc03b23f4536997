"""Shared fixtures for the reconciliation tests."""

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from bank_recon.config import ReconConfig
from bank_recon.models import BankStatementLine, SystemTransaction, TransactionType

JAKARTA = ZoneInfo("Asia/Jakarta")


def at(value: str) -> datetime:
    """Jakarta-local datetime from 'YYYY-MM-DD' or 'YYYY-MM-DD HH:MM:SS'."""
    fmt = "%Y-%m-%d %H:%M:%S" if " " in value else "%Y-%m-%d"
    return datetime.strptime(value, fmt).replace(tzinfo=JAKARTA)


def system_txn(txn_id: str, amount: str, txn_type: str, when: str) -> SystemTransaction:
    return SystemTransaction(
        id=txn_id,
        amount=Decimal(amount),
        type=TransactionType(txn_type),
        transaction_time=at(when),
    )


def bank_line(line_id: str, amount: str, when: str, source: str = "bank") -> BankStatementLine:
    return BankStatementLine(
        id=line_id,
        amount=Decimal(amount),
        date=at(when),
        source_name=source,
    )


@pytest.fixture
def config() -> ReconConfig:
    return ReconConfig()


@pytest.fixture
def write_csv(tmp_path):
    """Write a CSV file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write
