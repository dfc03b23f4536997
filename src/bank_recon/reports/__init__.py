"""Report renderers for reconciliation results."""

from .text_report import ReportParameters, render_text_report, write_text_report
from .excel_generator import ExcelReportGenerator

__all__ = [
    "ReportParameters",
    "render_text_report",
    "write_text_report",
    "ExcelReportGenerator",
]
