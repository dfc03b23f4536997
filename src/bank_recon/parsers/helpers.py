"""Shared CSV and date helpers for the input parsers."""

from datetime import datetime, tzinfo
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, Optional
import warnings

import pandas as pd


def validate_csv_extension(file_path: Path) -> None:
    """Raise ValueError unless the file has a ``.csv`` extension."""
    if file_path.suffix.lower() != ".csv":
        raise ValueError(f"File must be a CSV file (got '{file_path.suffix}'): {file_path}")


def read_csv_file(file_path: Path, encoding: str = "utf-8", delimiter: str = ",") -> pd.DataFrame:
    """
    Read a CSV file into a DataFrame of raw strings.

    Args:
        file_path: Path to the CSV file
        encoding: File encoding
        delimiter: Field delimiter

    Returns:
        DataFrame with one row per data line (header excluded)

    Raises:
        ValueError: If the file is not a CSV, cannot be read, or has no data rows
    """
    validate_csv_extension(file_path)

    if not file_path.is_file():
        raise ValueError(f"File does not exist: {file_path}")

    try:
        # With index_col=False pandas only warns and truncates rows longer than the header
        with warnings.catch_warnings():
            warnings.filterwarnings(
                "error", message="Length of header", category=pd.errors.ParserWarning
            )
            df = pd.read_csv(
                file_path,
                encoding=encoding,
                delimiter=delimiter,
                dtype=str,
                keep_default_na=False,
                index_col=False,
                skipinitialspace=True,
            )
    except pd.errors.ParserWarning as e:
        raise ValueError("Failed to read CSV: a data row has more fields than the header") from e
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, OSError) as e:
        raise ValueError(f"Failed to read CSV: {e}") from e

    if df.empty:
        raise ValueError("CSV file is empty or has no data rows")

    df.columns = [str(c).strip() for c in df.columns]
    return df


def require_columns(df: pd.DataFrame, columns: Iterable[str]) -> None:
    """Raise ValueError if any of the given column names is missing."""
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(
            f"Missing required column(s): {', '.join(missing)} "
            f"(found: {', '.join(df.columns)})"
        )


def cell_value(row: pd.Series, column: str) -> Optional[str]:
    """Return a stripped cell value, or None when the cell is empty or missing."""
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    value = str(value).strip()
    return value or None


def parse_amount(value: str) -> Decimal:
    """Parse a decimal amount; raises ValueError on anything that is not a finite number."""
    try:
        amount = Decimal(value)
    except InvalidOperation as e:
        raise ValueError(f"invalid amount: {value}") from e
    if not amount.is_finite():
        raise ValueError(f"invalid amount: {value}")
    return amount


def parse_date(value: str, date_formats: Iterable[str], tz: tzinfo) -> datetime:
    """
    Parse a date or date-time string trying each format in turn.

    The result is localized to ``tz``; date-only values fall on midnight.

    Raises:
        ValueError: If no format matches
    """
    for date_format in date_formats:
        try:
            parsed = datetime.strptime(value, date_format)
        except ValueError:
            continue
        return parsed.replace(tzinfo=tz)

    raise ValueError(f"unable to parse date: {value}")


def extract_source_name(file_path: Path) -> str:
    """File name without extension, used to group bank lines by source."""
    return file_path.stem
