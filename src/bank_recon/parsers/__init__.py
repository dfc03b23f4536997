"""Parsers for system transaction and bank statement CSV files."""

from .transaction_parser import TransactionParser
from .bank_statement_parser import BankStatementParser

__all__ = ["TransactionParser", "BankStatementParser"]
