"""Custom exceptions for the reconciliation application."""


class ReconciliationError(Exception):
    """Base exception for reconciliation errors."""

    pass


class InvalidDateRangeError(ReconciliationError):
    """Start date is later than end date."""

    def __init__(self, start_date, end_date):
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(
            f"Start date must not be after end date "
            f"(start={start_date.isoformat()}, end={end_date.isoformat()})"
        )


class TransactionParseError(ReconciliationError):
    """Error parsing a system transaction CSV file."""

    pass


class BankStatementParseError(ReconciliationError):
    """Error parsing a bank statement CSV file."""

    pass


class ConfigurationError(ReconciliationError):
    """Error in configuration."""

    pass


class ReportGenerationError(ReconciliationError):
    """Error writing a reconciliation report."""

    pass
