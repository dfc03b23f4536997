"""Reconcile internal ledger transactions against bank statement files."""

__version__ = "0.1.0"
