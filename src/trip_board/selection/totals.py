"""Running total over the selection ledger."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional

from trip_board.money.currency import EUR, USD, CurrencyConverter, format_money
from trip_board.records.models import MonetaryValue

from .display import DisplayCurrencyStore
from .ledger import SelectionLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Totals:
    usd: float
    eur: float

    def for_currency(self, code: str) -> float:
        return self.eur if code == EUR else self.usd

    def format(self, code: str) -> str:
        return format_money(self.for_currency(code), code)

    def to_dict(self) -> dict[str, float]:
        return {"usd": self.usd, "eur": self.eur}


def compute_total(entries: Iterable[MonetaryValue] | Mapping[str, MonetaryValue], converter: CurrencyConverter) -> Totals:
    """Sum every entry in USD, then derive EUR from that sum in one conversion.

    Deriving EUR from the USD sum keeps both figures exactly rate-consistent
    whatever mix of source currencies was selected.
    """
    values = entries.values() if isinstance(entries, Mapping) else entries
    total_usd = 0.0
    for entry in values:
        converted = converter.convert(entry.amount, entry.currency, USD)
        total_usd += converted or 0.0
    total_eur = converter.convert(total_usd, USD, EUR) or 0.0
    return Totals(usd=total_usd, eur=total_eur)


class TotalAggregator:
    """Recomputes :class:`Totals` synchronously after every ledger or currency change."""

    def __init__(
        self,
        ledger: SelectionLedger,
        currency: DisplayCurrencyStore,
        converter: CurrencyConverter,
        *,
        on_total: Optional[Callable[[Totals, str], None]] = None,
    ) -> None:
        self._ledger = ledger
        self._currency = currency
        self._converter = converter
        self._on_total = on_total
        self._current = compute_total(ledger.entries(), converter)
        self._unsubscribers = [
            ledger.subscribe(self.recompute),
            currency.subscribe(lambda _code: self.recompute()),
        ]

    @property
    def current(self) -> Totals:
        return self._current

    def recompute(self) -> Totals:
        self._current = compute_total(self._ledger.entries(), self._converter)
        logger.debug(
            "Total over %d selection(s): %.2f USD / %.2f EUR",
            len(self._ledger),
            self._current.usd,
            self._current.eur,
        )
        if self._on_total is not None:
            self._on_total(self._current, self._currency.code)
        return self._current

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
