"""Selection ledger, display currency and running totals."""

from .display import DisplayCurrencyStore
from .ledger import SelectionLedger
from .totals import TotalAggregator, Totals, compute_total

__all__ = [
    "DisplayCurrencyStore",
    "SelectionLedger",
    "TotalAggregator",
    "Totals",
    "compute_total",
]
