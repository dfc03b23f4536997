"""
Excel report generator for reconciliation results.
Creates multi-sheet workbooks with formatted output.
"""

from datetime import datetime
from pathlib import Path
import logging

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Border, Side
from openpyxl.worksheet.worksheet import Worksheet

from ..models.transaction import ReconciliationResult
from ..config import ReconConfig
from ..utils.exceptions import ReportGenerationError

logger = logging.getLogger(__name__)

# Style definitions
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True)
MATCH_FILL = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
UNMATCHED_FILL = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)
AMOUNT_FORMAT = "#,##0.00"


class ExcelReportGenerator:
    """Generates Excel reconciliation reports with multiple sheets."""

    def __init__(self, config: ReconConfig):
        """
        Initialize the report generator.

        Args:
            config: Application configuration
        """
        self.config = config
        self.sheet_config = config.output.sheets
        self.currency_prefix = config.output.currency_prefix

    def generate_report(self, result: ReconciliationResult, output_path: Path) -> Path:
        """
        Generate the complete reconciliation report.

        Args:
            result: Reconciliation result
            output_path: Path for output file

        Returns:
            Path to generated report

        Raises:
            ReportGenerationError: If the workbook cannot be saved
        """
        logger.info(f"Generating Excel report: {output_path}")

        wb = Workbook()

        # Remove default sheet
        if wb.active:
            wb.remove(wb.active)

        if self.sheet_config.summary.enabled:
            self._create_summary_sheet(wb, result)

        if self.sheet_config.unmatched_system.enabled:
            self._create_unmatched_system_sheet(wb, result)

        if self.sheet_config.unmatched_bank.enabled:
            self._create_unmatched_bank_sheet(wb, result)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            wb.save(output_path)
        except OSError as e:
            raise ReportGenerationError(f"Failed to save Excel report {output_path}: {e}") from e

        logger.info(f"Report saved: {output_path}")
        return output_path

    def _create_summary_sheet(self, wb: Workbook, result: ReconciliationResult) -> None:
        """Create the summary sheet with key metrics."""
        ws = wb.create_sheet(self.sheet_config.summary.name)

        ws["A1"] = "Transaction Reconciliation Summary"
        ws["A1"].font = Font(size=16, bold=True)
        ws.merge_cells("A1:D1")

        ws["A3"] = "Run Information"
        ws["A3"].font = Font(bold=True)

        run_info = [
            ("Generated At:", datetime.now().strftime("%Y-%m-%d %H:%M:%S")),
            ("Start Date:", _format_timestamp(result.start_date)),
            ("End Date:", _format_timestamp(result.end_date)),
            ("Matching Strategy:", result.strategy_name or "-"),
        ]
        for i, (label, value) in enumerate(run_info, start=4):
            ws[f"A{i}"] = label
            ws[f"B{i}"] = value

        ws["A9"] = "Transaction Counts"
        ws["A9"].font = Font(bold=True)

        count_data = [
            ("System Transactions:", result.total_system_transactions),
            ("Bank Statement Lines:", result.total_bank_statement_lines),
            ("Total Transactions Processed:", result.total_transactions_processed),
            ("Total Matched Transactions:", result.total_matched_transactions),
            ("Total Unmatched Transactions:", result.total_unmatched_transactions),
            ("Unmatched System:", result.unmatched_system_count),
            ("Unmatched Bank:", result.unmatched_bank_count),
        ]
        for i, (label, value) in enumerate(count_data, start=10):
            ws[f"A{i}"] = label
            ws[f"B{i}"] = value

        ws["A18"] = "Match Rates"
        ws["A18"].font = Font(bold=True)
        ws["A19"] = "System Match Rate:"
        ws["B19"] = f"{result.match_rate_system:.1f}%"
        ws["A20"] = "Bank Match Rate:"
        ws["B20"] = f"{result.match_rate_bank:.1f}%"

        ws["A22"] = f"Total Discrepancies ({self.currency_prefix}):"
        ws["A22"].font = Font(bold=True)
        ws["B22"] = float(result.total_discrepancies)
        ws["B22"].number_format = AMOUNT_FORMAT
        ws["B22"].fill = MATCH_FILL if result.total_discrepancies == 0 else UNMATCHED_FILL

        row = 24
        if result.unmatched_bank_statement_lines:
            ws[f"A{row}"] = "Unmatched Bank Lines by Source"
            ws[f"A{row}"].font = Font(bold=True)
            row += 1
            for source_name, lines in result.unmatched_bank_statement_lines.items():
                ws[f"A{row}"] = source_name
                ws[f"B{row}"] = len(lines)
                row += 1

        ws.column_dimensions["A"].width = 32
        ws.column_dimensions["B"].width = 32

    def _create_unmatched_system_sheet(
        self, wb: Workbook, result: ReconciliationResult
    ) -> None:
        """Create the unmatched system transactions sheet."""
        ws = wb.create_sheet(self.sheet_config.unmatched_system.name)
        self._write_headers(ws, ["TrxID", "Type", "Transaction Time", "Amount"])

        for row_num, txn in enumerate(result.unmatched_system_transactions, start=2):
            row_data = [
                txn.id,
                txn.type.value,
                txn.transaction_time.strftime("%Y-%m-%d %H:%M:%S"),
                float(txn.amount),
            ]
            self._write_row(ws, row_num, row_data, amount_column=4)

        self._auto_fit_columns(ws)

    def _create_unmatched_bank_sheet(self, wb: Workbook, result: ReconciliationResult) -> None:
        """Create the unmatched bank statement lines sheet, grouped by source."""
        ws = wb.create_sheet(self.sheet_config.unmatched_bank.name)
        self._write_headers(ws, ["Bank", "Unique Identifier", "Date", "Type", "Amount"])

        row_num = 2
        for source_name, lines in result.unmatched_bank_statement_lines.items():
            for line in lines:
                row_data = [
                    source_name,
                    line.id,
                    line.date.strftime("%Y-%m-%d"),
                    line.type.value,
                    float(line.amount),
                ]
                self._write_row(ws, row_num, row_data, amount_column=5)
                row_num += 1

        self._auto_fit_columns(ws)

    def _write_headers(self, ws: Worksheet, headers: list[str]) -> None:
        for col, header in enumerate(headers, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.border = THIN_BORDER

    def _write_row(self, ws: Worksheet, row_num: int, row_data: list, amount_column: int) -> None:
        for col, value in enumerate(row_data, start=1):
            cell = ws.cell(row=row_num, column=col, value=value)
            cell.border = THIN_BORDER
            cell.fill = UNMATCHED_FILL
            if col == amount_column:
                cell.number_format = AMOUNT_FORMAT

    def _auto_fit_columns(self, ws: Worksheet) -> None:
        """Auto-fit column widths based on content."""
        for column_cells in ws.columns:
            column = column_cells[0].column_letter
            max_length = max(
                (len(str(cell.value)) for cell in column_cells if cell.value is not None),
                default=0,
            )
            ws.column_dimensions[column].width = min(max_length + 2, 50)


def _format_timestamp(value) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M:%S %Z").strip()
