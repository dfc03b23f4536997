"""
Plain-text reconciliation report.
Used for both the ``--output`` file and piping results to other tools.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from io import StringIO
from pathlib import Path
from typing import Optional, TextIO
import logging

from ..models.transaction import ReconciliationResult
from ..utils.exceptions import ReportGenerationError

logger = logging.getLogger(__name__)

RULE_WIDTH = 80
DEFAULT_CURRENCY_PREFIX = "Rp."


@dataclass
class ReportParameters:
    """Inputs of the run, echoed at the top of the report."""

    system_file: str = ""
    bank_files: list[str] = field(default_factory=list)
    start_date: str = ""
    end_date: str = ""


def format_amount(amount: Decimal, currency_prefix: str = DEFAULT_CURRENCY_PREFIX) -> str:
    """Two-decimal amount with currency prefix, e.g. ``Rp. 1000.50``."""
    return f"{currency_prefix} {amount:.2f}"


def write_report(
    out: TextIO,
    result: ReconciliationResult,
    params: Optional[ReportParameters] = None,
    currency_prefix: str = DEFAULT_CURRENCY_PREFIX,
) -> None:
    """Write the report for ``result`` to an open text stream."""
    heavy_rule = "=" * RULE_WIDTH
    light_rule = "-" * RULE_WIDTH

    out.write(f"\n{heavy_rule}\n")
    out.write("TRANSACTION RECONCILIATION SUMMARY\n")
    out.write(f"{heavy_rule}\n")

    if params is not None:
        out.write("\nReconciliation Parameters:\n")
        out.write(f"  System Transaction File: {params.system_file}\n")
        out.write(f"  Bank Statement Files: {', '.join(params.bank_files)}\n")
        out.write(f"  Date Range: {params.start_date} to {params.end_date}\n")

    out.write("\nReconciliation Results:\n")
    out.write(f"  Total Transactions Processed: {result.total_transactions_processed}\n")
    out.write(f"  Total Matched Transactions: {result.total_matched_transactions}\n")
    out.write(f"  Total Unmatched Transactions: {result.total_unmatched_transactions}\n")
    out.write(
        f"  Total Discrepancies (Amount): "
        f"{format_amount(result.total_discrepancies, currency_prefix)}\n"
    )

    if result.unmatched_system_transactions:
        out.write(f"\n{light_rule}\n")
        out.write(f"UNMATCHED SYSTEM TRANSACTIONS: {result.unmatched_system_count}\n")
        out.write(f"{light_rule}\n")
        out.write(f"{'TrxID':<20} {'Type':<10} {'Transaction Time':<25} {'Amount':>20}\n")
        for txn in result.unmatched_system_transactions:
            out.write(
                f"{txn.id:<20} {txn.type.value:<10} "
                f"{txn.transaction_time.strftime('%Y-%m-%d %H:%M:%S'):<25} "
                f"{format_amount(txn.amount, currency_prefix):>20}\n"
            )

    if result.unmatched_bank_statement_lines:
        out.write(f"\n{light_rule}\n")
        out.write(f"UNMATCHED BANK STATEMENTS: {result.unmatched_bank_count}\n")
        out.write(f"{light_rule}\n")
        for source_name, lines in result.unmatched_bank_statement_lines.items():
            out.write(f"\nBank: {source_name} ({len(lines)} transactions)\n")
            out.write(f"{'Unique Identifier':<20} {'Date':<10} {'Amount':>20}\n")
            for line in lines:
                out.write(
                    f"{line.id:<20} {line.date.strftime('%Y-%m-%d'):<10} "
                    f"{format_amount(line.amount, currency_prefix):>20}\n"
                )

    out.write(f"\n{heavy_rule}\n")


def render_text_report(
    result: ReconciliationResult,
    params: Optional[ReportParameters] = None,
    currency_prefix: str = DEFAULT_CURRENCY_PREFIX,
) -> str:
    """Return the report as a string."""
    buffer = StringIO()
    write_report(buffer, result, params, currency_prefix)
    return buffer.getvalue()


def write_text_report(
    result: ReconciliationResult,
    output_path: Path,
    params: Optional[ReportParameters] = None,
    currency_prefix: str = DEFAULT_CURRENCY_PREFIX,
) -> Path:
    """
    Write the report to a text file.

    Raises:
        ReportGenerationError: If the file cannot be written
    """
    logger.info(f"Writing text report: {output_path}")
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            write_report(f, result, params, currency_prefix)
    except OSError as e:
        raise ReportGenerationError(f"Failed to write report {output_path}: {e}") from e

    return output_path
