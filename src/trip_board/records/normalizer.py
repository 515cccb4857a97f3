"""Coercion helpers that turn raw Airtable cell values into display-ready forms."""
from __future__ import annotations

import math
import re
from typing import Any, Iterable, Optional
from urllib.parse import urlsplit

LINK_FALLBACK = "Link"

_CURRENCY_SYMBOLS = re.compile(r"[$€£]")
_THOUSANDS = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$")


def _unwrap_single(raw: Any) -> Any:
    # Lookup and rollup columns arrive as one-element lists.
    if isinstance(raw, (list, tuple)) and len(raw) == 1:
        return raw[0]
    return raw


def _iter_values(raw: Any) -> Iterable[Any]:
    if raw is None:
        return ()
    if isinstance(raw, (list, tuple)):
        return raw
    return (raw,)


def to_number_or_none(raw: Any) -> Optional[float]:
    """Parse ``raw`` into a finite float, or ``None`` when nothing numeric is there.

    ``0`` is a real price and is returned as ``0.0``.
    """
    raw = _unwrap_single(raw)
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        cleaned = _CURRENCY_SYMBOLS.sub("", raw).strip()
        if not cleaned:
            return None
        if "," in cleaned:
            # Only US-style grouping ("1,200.50"); a decimal comma is ambiguous.
            if not _THOUSANDS.match(cleaned):
                return None
            cleaned = cleaned.replace(",", "")
        try:
            value = float(cleaned)
        except ValueError:
            return None
    else:
        return None
    return value if math.isfinite(value) else None


def to_display_list(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, (list, tuple)):
        return ", ".join(str(item) for item in raw)
    return str(raw)


def _short_name(value: Any) -> str:
    text = str(value)
    if "+" in text:
        text = text.split("+", 1)[0]
    elif "," in text:
        text = text.split(",", 1)[0]
    return text.strip()


def to_short_names(raw: Any) -> str:
    """Compact label for linked-entity columns.

    ``"Smith+Jones"`` keeps its primary component ``"Smith"``; ``"Lee, Ann"``
    keeps ``"Lee"``.
    """
    names = (_short_name(item) for item in _iter_values(raw))
    return ", ".join(name for name in names if name)


def to_domain_label(url: Any) -> str:
    url = _unwrap_single(url)
    if url is None:
        return ""
    text = str(url).strip()
    if not text:
        return ""
    try:
        parts = urlsplit(text)
        host = parts.hostname
        port = parts.port
    except ValueError:
        return LINK_FALLBACK
    if not parts.scheme or not host:
        return LINK_FALLBACK
    if host.startswith("www."):
        host = host[4:]
    return f"{host}:{port}" if port else host


def to_currency_code(raw: Any) -> str:
    raw = _unwrap_single(raw)
    if raw is None:
        return ""
    return str(raw).strip().upper()


def to_text(raw: Any, default: str = "") -> str:
    text = to_display_list(_unwrap_single(raw)).strip()
    return text or default


def format_amount(amount: float) -> str:
    """Render a raw amount the way it was entered (``120`` rather than ``120.0``)."""
    if amount.is_integer():
        return str(int(amount))
    return str(amount)
