"""USD/EUR conversion and money formatting."""
from __future__ import annotations

import logging
import math
from typing import Any, Optional

from trip_board.config.settings import DEFAULT_USD_TO_EUR, SUPPORTED_CURRENCIES

logger = logging.getLogger(__name__)

USD = "USD"
EUR = "EUR"

PLACEHOLDER = "—"

_SYMBOLS = {USD: "$", EUR: "€"}


class UnsupportedCurrencyError(ValueError):
    """Raised when a caller explicitly asks for a currency outside the supported set."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Unsupported currency {code!r}; expected one of {', '.join(SUPPORTED_CURRENCIES)}")
        self.code = code


def _as_amount(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    return amount if math.isfinite(amount) else None


def require_supported(code: str) -> str:
    normalised = (code or "").strip().upper()
    if normalised not in SUPPORTED_CURRENCIES:
        raise UnsupportedCurrencyError(code)
    return normalised


class CurrencyConverter:
    """Converts between USD and EUR using a single USD->EUR multiplier.

    Pairs involving any other code pass the amount through unchanged, so a row
    priced in e.g. ``GBP`` counts at face value in the target currency instead of
    failing the whole total.
    """

    def __init__(self, usd_to_eur: float = DEFAULT_USD_TO_EUR) -> None:
        if not math.isfinite(usd_to_eur) or usd_to_eur <= 0:
            raise ValueError("usd_to_eur must be a positive finite number")
        self.usd_to_eur = usd_to_eur
        self._passthrough_codes: set[str] = set()

    def convert(self, amount: Any, from_code: str, to_code: str) -> Optional[float]:
        value = _as_amount(amount)
        if value is None:
            return None
        if from_code == to_code:
            return value
        if from_code == USD and to_code == EUR:
            return value * self.usd_to_eur
        if from_code == EUR and to_code == USD:
            return value / self.usd_to_eur
        self._note_passthrough(from_code, to_code)
        return value

    def _note_passthrough(self, from_code: str, to_code: str) -> None:
        unknown = from_code if from_code not in SUPPORTED_CURRENCIES else to_code
        if unknown in self._passthrough_codes:
            return
        self._passthrough_codes.add(unknown)
        logger.debug(
            "No rate for %s -> %s; passing amount through unconverted", from_code or "<none>", to_code or "<none>"
        )


def format_money(amount: Any, currency_code: str) -> str:
    value = _as_amount(amount)
    if value is None:
        return PLACEHOLDER
    symbol = _SYMBOLS.get(currency_code)
    if symbol is None:
        return f"{value:.2f} {currency_code}"
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"
