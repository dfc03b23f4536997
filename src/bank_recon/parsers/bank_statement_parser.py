"""
Bank statement CSV parser.
Each file is one bank source; its lines are tagged with the file name.
"""

from pathlib import Path
from typing import Iterable
import logging

import pandas as pd

from ..models.transaction import BankStatementLine
from ..config import ReconConfig
from ..utils.exceptions import BankStatementParseError
from .helpers import (
    cell_value,
    extract_source_name,
    parse_amount,
    parse_date,
    read_csv_file,
    require_columns,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "amount", "date")


class BankStatementParser:
    """
    Parser for bank statement CSV files.

    Expected columns (names configurable): unique_identifier, amount, date.
    Bank files follow a fixed layout, so extra columns are rejected.
    """

    def __init__(self, config: ReconConfig):
        self.config = config
        self.file_config = config.input.bank
        self.columns = {
            name: self.file_config.column_mappings.get(name, name) for name in REQUIRED_FIELDS
        }
        self.date_formats = config.input.date_formats
        self.timezone = config.input.tzinfo

    def parse_file(self, file_path: Path) -> list[BankStatementLine]:
        """
        Parse a single bank statement file.

        Args:
            file_path: Path to the CSV file

        Returns:
            Statement lines in file order

        Raises:
            BankStatementParseError: If the file or any row is invalid
        """
        logger.info(f"Parsing bank statement file: {file_path}")

        try:
            df = read_csv_file(
                file_path,
                encoding=self.file_config.encoding,
                delimiter=self.file_config.delimiter,
            )
            if len(df.columns) != len(self.columns):
                raise ValueError(
                    f"expected {len(self.columns)} columns, got {len(df.columns)}"
                )
            require_columns(df, self.columns.values())
        except ValueError as e:
            logger.error(f"Failed to read bank statement file {file_path}: {e}")
            raise BankStatementParseError(str(e)) from e

        source_name = extract_source_name(file_path)
        lines = [
            self._normalize_row(row, row_number, source_name)
            for row_number, (_, row) in enumerate(df.iterrows(), start=2)
        ]

        logger.info(f"Extracted {len(lines)} bank statement lines from {file_path.name}")
        return lines

    def parse_files(self, file_paths: Iterable[Path]) -> list[BankStatementLine]:
        """
        Parse several bank statement files into one list, in the given order.

        Raises:
            BankStatementParseError: Naming the first file that failed
        """
        all_lines: list[BankStatementLine] = []

        for file_path in file_paths:
            try:
                all_lines.extend(self.parse_file(file_path))
            except BankStatementParseError as e:
                raise BankStatementParseError(f"Failed to parse {file_path}: {e}") from e

        return all_lines

    def _normalize_row(
        self, row: pd.Series, row_number: int, source_name: str
    ) -> BankStatementLine:
        values = {}
        for field_name, column in self.columns.items():
            value = cell_value(row, column)
            if value is None:
                raise BankStatementParseError(f"Missing {column} at row {row_number}")
            values[field_name] = value

        try:
            amount = parse_amount(values["amount"])
        except ValueError as e:
            raise BankStatementParseError(f"Invalid amount at row {row_number}: {e}") from e

        try:
            statement_date = parse_date(values["date"], self.date_formats, self.timezone)
        except ValueError as e:
            raise BankStatementParseError(f"Invalid date at row {row_number}: {e}") from e

        return BankStatementLine(
            id=values["id"],
            amount=amount,
            date=statement_date,
            source_name=source_name,
        )
