from decimal import Decimal

import pytest
from openpyxl import load_workbook

from bank_recon.config import ReconConfig
from bank_recon.matching import ReconciliationEngine
from bank_recon.reports import (
    ExcelReportGenerator,
    ReportParameters,
    render_text_report,
    write_text_report,
)
from bank_recon.reports.text_report import format_amount

from conftest import at, bank_line, system_txn


@pytest.fixture
def result():
    return ReconciliationEngine().reconcile(
        [
            system_txn("TRX001", "1000.00", "CREDIT", "2024-01-15 10:30:00"),
            system_txn("TRX003", "750", "CREDIT", "2024-01-17 09:15:00"),
        ],
        [
            bank_line("BCA-001", "1000.00", "2024-01-15", "bank_bca"),
            bank_line("BCA-002", "2000.00", "2024-01-18", "bank_bca"),
            bank_line("MDR-001", "-500.5", "2024-01-16", "bank_mandiri"),
        ],
        at("2024-01-01 00:00:00"),
        at("2024-12-31 23:59:59"),
    )


def test_format_amount():
    assert format_amount(Decimal("1000")) == "Rp. 1000.00"
    assert format_amount(Decimal("-500.5"), "IDR") == "IDR -500.50"


def test_text_report_totals_and_sections(result):
    params = ReportParameters(
        system_file="transactions.csv",
        bank_files=["bank_bca.csv", "bank_mandiri.csv"],
        start_date="2024-01-01",
        end_date="2024-12-31",
    )

    report = render_text_report(result, params)

    assert "TRANSACTION RECONCILIATION SUMMARY" in report
    assert "  Bank Statement Files: bank_bca.csv, bank_mandiri.csv" in report
    assert "  Date Range: 2024-01-01 to 2024-12-31" in report
    assert "  Total Transactions Processed: 5" in report
    assert "  Total Matched Transactions: 1" in report
    assert "  Total Unmatched Transactions: 3" in report
    assert "  Total Discrepancies (Amount): Rp. 0.00" in report
    assert "UNMATCHED SYSTEM TRANSACTIONS: 1" in report
    assert "2024-01-17 09:15:00" in report
    assert "Rp. 750.00" in report
    assert "UNMATCHED BANK STATEMENTS: 2" in report
    assert "Bank: bank_bca (1 transactions)" in report
    assert "Bank: bank_mandiri (1 transactions)" in report
    assert "Rp. -500.50" in report
    assert "=" * 80 in report


def test_text_report_omits_empty_sections():
    report = render_text_report(
        ReconciliationEngine().reconcile([], [], at("2024-01-01"), at("2024-01-31"))
    )

    assert "UNMATCHED SYSTEM TRANSACTIONS" not in report
    assert "UNMATCHED BANK STATEMENTS" not in report
    assert "Reconciliation Parameters" not in report


def test_write_text_report(result, tmp_path):
    path = write_text_report(result, tmp_path / "out" / "report.txt")

    assert path.read_text(encoding="utf-8") == render_text_report(result)


def test_excel_report_sheets(result, tmp_path):
    path = ExcelReportGenerator(ReconConfig()).generate_report(result, tmp_path / "report.xlsx")

    wb = load_workbook(path)
    assert wb.sheetnames == ["Summary", "Unmatched System", "Unmatched Bank"]

    system_rows = list(wb["Unmatched System"].iter_rows(values_only=True))
    assert system_rows[0] == ("TrxID", "Type", "Transaction Time", "Amount")
    assert system_rows[1][:3] == ("TRX003", "CREDIT", "2024-01-17 09:15:00")
    assert system_rows[1][3] == 750.0

    bank_rows = list(wb["Unmatched Bank"].iter_rows(values_only=True))
    assert [row[:2] for row in bank_rows[1:]] == [
        ("bank_bca", "BCA-002"),
        ("bank_mandiri", "MDR-001"),
    ]
    assert bank_rows[2][3] == "DEBIT"

    summary = wb["Summary"]
    assert summary["B12"].value == 5
    assert summary["B13"].value == 1


def test_excel_report_respects_disabled_sheets(result, tmp_path):
    config = ReconConfig(
        output={"sheets": {"unmatched_system": {"enabled": False, "name": "Unmatched System"}}}
    )

    path = ExcelReportGenerator(config).generate_report(result, tmp_path / "report.xlsx")

    assert load_workbook(path).sheetnames == ["Summary", "Unmatched Bank"]
