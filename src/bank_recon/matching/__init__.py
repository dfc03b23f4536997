"""Matching engine and strategies."""

from .engine import ReconciliationEngine, reconcile, resolve_date_range
from .strategies import (
    MatchStrategy,
    ExactMatchStrategy,
    get_strategy,
)

__all__ = [
    "ReconciliationEngine",
    "reconcile",
    "resolve_date_range",
    "MatchStrategy",
    "ExactMatchStrategy",
    "get_strategy",
]
