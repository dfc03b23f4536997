"""
System transaction CSV parser.
Converts ledger exports into SystemTransaction records.
"""

from pathlib import Path
import logging

import pandas as pd

from ..models.transaction import SystemTransaction, TransactionType
from ..config import ReconConfig
from ..utils.exceptions import TransactionParseError
from .helpers import cell_value, parse_amount, parse_date, read_csv_file, require_columns

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "amount", "type", "transaction_time")


class TransactionParser:
    """
    Parser for system transaction CSV files.

    Expected columns (names configurable): trxID, amount, type, transactionTime.
    Extra columns are ignored.
    """

    def __init__(self, config: ReconConfig):
        """
        Initialize the parser with configuration.

        Args:
            config: Application configuration object
        """
        self.config = config
        self.file_config = config.input.system
        self.columns = {
            name: self.file_config.column_mappings.get(name, name) for name in REQUIRED_FIELDS
        }
        self.date_formats = config.input.date_formats
        self.timezone = config.input.tzinfo

    def parse_file(self, file_path: Path) -> list[SystemTransaction]:
        """
        Parse a system transaction CSV file.

        Args:
            file_path: Path to the CSV file

        Returns:
            Transactions in file order

        Raises:
            TransactionParseError: If the file or any row is invalid
        """
        logger.info(f"Parsing system transaction file: {file_path}")

        try:
            df = read_csv_file(
                file_path,
                encoding=self.file_config.encoding,
                delimiter=self.file_config.delimiter,
            )
            require_columns(df, self.columns.values())
        except ValueError as e:
            logger.error(f"Failed to read system transaction file {file_path}: {e}")
            raise TransactionParseError(f"{file_path}: {e}") from e

        transactions = [
            self._normalize_row(row, row_number)
            # Row 1 is the header
            for row_number, (_, row) in enumerate(df.iterrows(), start=2)
        ]

        logger.info(f"Extracted {len(transactions)} system transactions from {file_path.name}")
        return transactions

    def _normalize_row(self, row: pd.Series, row_number: int) -> SystemTransaction:
        """Convert one CSV row into a SystemTransaction."""
        values = {}
        for field_name, column in self.columns.items():
            value = cell_value(row, column)
            if value is None:
                raise TransactionParseError(f"Missing {column} at row {row_number}")
            values[field_name] = value

        try:
            amount = parse_amount(values["amount"])
        except ValueError as e:
            raise TransactionParseError(f"Invalid amount at row {row_number}: {e}") from e
        if amount < 0:
            raise TransactionParseError(
                f"Invalid amount at row {row_number}: system amounts must not be negative "
                f"(got {values['amount']})"
            )

        try:
            txn_type = TransactionType(values["type"])
        except ValueError:
            raise TransactionParseError(
                f"Invalid transaction type at row {row_number}: {values['type']}"
            ) from None

        try:
            transaction_time = parse_date(
                values["transaction_time"], self.date_formats, self.timezone
            )
        except ValueError as e:
            raise TransactionParseError(
                f"Invalid transaction time at row {row_number}: {e}"
            ) from e

        return SystemTransaction(
            id=values["id"],
            amount=amount,
            type=txn_type,
            transaction_time=transaction_time,
        )
