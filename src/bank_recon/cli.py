"""
Command-line interface for the bank statement reconciliation tool.
"""

from datetime import datetime, tzinfo
from pathlib import Path
from typing import Optional
import sys

import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .config import load_config, generate_default_config
from .matching.engine import END_OF_DAY, ReconciliationEngine, resolve_date_range
from .matching.strategies import get_strategy
from .models.transaction import ReconciliationResult
from .parsers.bank_statement_parser import BankStatementParser
from .parsers.transaction_parser import TransactionParser
from .reports.excel_generator import ExcelReportGenerator
from .reports.text_report import ReportParameters, format_amount, write_text_report
from .utils.exceptions import ReconciliationError
from .utils.logging_config import configure_logging

console = Console()

CLI_DATE_FORMAT = "%Y-%m-%d"
PREVIEW_ROWS = 20


@click.group()
@click.version_option(version=__version__)
def main():
    """Bank Statement Reconciliation Tool."""
    pass


@main.command()
@click.option(
    "-s",
    "--system",
    "system_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to system transactions CSV file",
)
@click.option(
    "-b",
    "--banks",
    "bank_files",
    required=True,
    multiple=True,
    help="Bank statement CSV file(s); repeat the option or separate paths with commas",
)
@click.option("--start", "start", required=True, help="Start date (YYYY-MM-DD)")
@click.option("--end", "end", default=None, help="End date (YYYY-MM-DD), defaults to start date")
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (YAML)",
)
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Write text report to file")
@click.option("--excel", type=click.Path(path_type=Path), help="Write Excel report to file")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def reconcile(
    system_file: Path,
    bank_files: tuple[str, ...],
    start: str,
    end: Optional[str],
    config: Optional[Path],
    output: Optional[Path],
    excel: Optional[Path],
    verbose: bool,
):
    """
    Reconcile system transactions against one or more bank statements.
    """
    try:
        recon_config = load_config(config)
        configure_logging(recon_config.logging, verbose)

        tz = recon_config.input.tzinfo
        start_date = _parse_cli_date(start, tz, "--start")
        end_date = None
        if end:
            end_date = datetime.combine(
                _parse_cli_date(end, tz, "--end").date(), END_OF_DAY, tzinfo=tz
            )
        # Reject an inverted range before touching any file
        start_date, end_date = resolve_date_range(start_date, end_date)

        bank_paths = _split_bank_files(bank_files)
        for bank_path in bank_paths:
            if not bank_path.is_file():
                raise click.BadParameter(f"File does not exist: {bank_path}", param_hint="--banks")

        strategy = get_strategy(recon_config.matching.strategy)

        console.print("Starting reconciliation process...")
        console.print(f"System Transactions: {system_file}")
        console.print(f"Bank Statements: {', '.join(str(p) for p in bank_paths)}")
        console.print(
            f"Date Range: {start_date.strftime(CLI_DATE_FORMAT)} to "
            f"{end_date.strftime(CLI_DATE_FORMAT)}"
        )

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Parsing system transactions...", total=None)
            system_transactions = TransactionParser(recon_config).parse_file(system_file)
            progress.update(task, completed=True)

            task = progress.add_task("Parsing bank statements...", total=None)
            bank_lines = BankStatementParser(recon_config).parse_files(bank_paths)
            progress.update(task, completed=True)

            task = progress.add_task("Running reconciliation...", total=None)
            engine = ReconciliationEngine(strategy)
            result = engine.reconcile(system_transactions, bank_lines, start_date, end_date)
            progress.update(task, completed=True)

        currency_prefix = recon_config.output.currency_prefix
        _display_summary(result, currency_prefix)
        _display_unmatched(result, currency_prefix)

        if output:
            params = ReportParameters(
                system_file=str(system_file),
                bank_files=[str(p) for p in bank_paths],
                start_date=start_date.strftime(CLI_DATE_FORMAT),
                end_date=end_date.strftime(CLI_DATE_FORMAT),
            )
            write_text_report(result, output, params, currency_prefix)
            console.print(f"\n[green]Results saved to: {output}[/green]")

        if excel:
            ExcelReportGenerator(recon_config).generate_report(result, excel)
            console.print(f"[green]Excel report generated: {excel}[/green]")

        if result.is_fully_reconciled:
            console.print(
                "\n[green]Reconciliation completed successfully - "
                "All transactions MATCHED![/green]"
            )
        else:
            console.print(
                "\n[yellow]Reconciliation completed successfully - "
                "There are UNMATCHED transactions or discrepancies.[/yellow]"
            )

    except ReconciliationError as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)


@main.command("parse-system")
@click.argument("system_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
def parse_system(system_file: Path, config: Optional[Path]):
    """
    Parse a system transaction CSV file and display a preview.

    SYSTEM_FILE: Path to the system transactions CSV file
    """
    try:
        recon_config = load_config(config)
        transactions = TransactionParser(recon_config).parse_file(system_file)
    except ReconciliationError as e:
        console.print(f"[red]Error parsing file: {e}[/red]")
        sys.exit(1)

    currency_prefix = recon_config.output.currency_prefix
    table = Table(title=f"System Transactions: {system_file.name}")
    table.add_column("TrxID")
    table.add_column("Type")
    table.add_column("Transaction Time")
    table.add_column("Amount", justify="right")

    for txn in transactions[:PREVIEW_ROWS]:
        table.add_row(
            txn.id,
            txn.type.value,
            txn.transaction_time.strftime("%Y-%m-%d %H:%M:%S"),
            format_amount(txn.amount, currency_prefix),
        )

    console.print(table)
    if len(transactions) > PREVIEW_ROWS:
        console.print(f"\n... and {len(transactions) - PREVIEW_ROWS} more transactions")
    console.print(f"\nTotal transactions: {len(transactions)}")


@main.command("parse-bank")
@click.argument(
    "bank_files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
def parse_bank(bank_files: tuple[Path, ...], config: Optional[Path]):
    """
    Parse bank statement CSV files and display a preview.

    BANK_FILES: One or more bank statement CSV files
    """
    try:
        recon_config = load_config(config)
        lines = BankStatementParser(recon_config).parse_files(bank_files)
    except ReconciliationError as e:
        console.print(f"[red]Error parsing file: {e}[/red]")
        sys.exit(1)

    currency_prefix = recon_config.output.currency_prefix
    table = Table(title="Bank Statement Lines")
    table.add_column("Bank")
    table.add_column("Unique Identifier")
    table.add_column("Date")
    table.add_column("Type")
    table.add_column("Amount", justify="right")

    for line in lines[:PREVIEW_ROWS]:
        table.add_row(
            line.source_name,
            line.id,
            line.date.strftime("%Y-%m-%d"),
            line.type.value,
            format_amount(line.amount, currency_prefix),
        )

    console.print(table)
    if len(lines) > PREVIEW_ROWS:
        console.print(f"\n... and {len(lines) - PREVIEW_ROWS} more lines")
    console.print(f"\nTotal lines: {len(lines)}")


@main.command("init-config")
@click.option(
    "-o", "--output", type=click.Path(path_type=Path), default=Path("config.yaml")
)
def init_config(output: Path):
    """Generate a sample configuration file."""
    generate_default_config(output)
    console.print(f"[green]Configuration file generated: {output}[/green]")


def _parse_cli_date(value: str, tz: tzinfo, option: str) -> datetime:
    try:
        return datetime.strptime(value, CLI_DATE_FORMAT).replace(tzinfo=tz)
    except ValueError:
        raise click.BadParameter(
            f"Invalid date '{value}'. Expected format: YYYY-MM-DD", param_hint=option
        ) from None


def _split_bank_files(bank_files: tuple[str, ...]) -> list[Path]:
    """Flatten repeated and comma-separated --banks values."""
    paths: list[Path] = []
    for value in bank_files:
        paths.extend(Path(part.strip()) for part in value.split(",") if part.strip())
    return paths


def _display_summary(result: ReconciliationResult, currency_prefix: str) -> None:
    """Display reconciliation summary in console."""
    table = Table(title="Transaction Reconciliation Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Total Transactions Processed", str(result.total_transactions_processed))
    table.add_row("Total Matched Transactions", str(result.total_matched_transactions))
    table.add_row("Total Unmatched Transactions", str(result.total_unmatched_transactions))
    table.add_row(
        "Total Discrepancies (Amount)", format_amount(result.total_discrepancies, currency_prefix)
    )
    table.add_row("System Match Rate", f"{result.match_rate_system:.1f}%")
    table.add_row("Bank Match Rate", f"{result.match_rate_bank:.1f}%")

    console.print(table)


def _display_unmatched(result: ReconciliationResult, currency_prefix: str) -> None:
    """Display unmatched system transactions and unmatched bank lines per source."""
    if result.unmatched_system_transactions:
        table = Table(title=f"Unmatched System Transactions: {result.unmatched_system_count}")
        table.add_column("TrxID")
        table.add_column("Type")
        table.add_column("Transaction Time")
        table.add_column("Amount", justify="right")
        for txn in result.unmatched_system_transactions:
            table.add_row(
                txn.id,
                txn.type.value,
                txn.transaction_time.strftime("%Y-%m-%d %H:%M:%S"),
                format_amount(txn.amount, currency_prefix),
            )
        console.print(table)

    for source_name, lines in result.unmatched_bank_statement_lines.items():
        table = Table(title=f"Bank: {source_name} ({len(lines)} transactions)")
        table.add_column("Unique Identifier")
        table.add_column("Date")
        table.add_column("Amount", justify="right")
        for line in lines:
            table.add_row(
                line.id,
                line.date.strftime("%Y-%m-%d"),
                format_amount(line.amount, currency_prefix),
            )
        console.print(table)


if __name__ == "__main__":
    main()
