from __future__ import annotations

import pytest

from trip_board.money.currency import CurrencyConverter, UnsupportedCurrencyError
from trip_board.records.models import MonetaryValue
from trip_board.selection import (
    DisplayCurrencyStore,
    SelectionLedger,
    TotalAggregator,
    compute_total,
)
from trip_board.storage import PreferenceStore


@pytest.fixture
def converter() -> CurrencyConverter:
    return CurrencyConverter(0.92)


def test_toggle_is_idempotent():
    ledger = SelectionLedger()
    notifications: list[int] = []
    ledger.subscribe(lambda: notifications.append(len(ledger)))

    assert ledger.toggle("recA", 100.0, "USD", True) is True
    assert ledger.toggle("recA", 100.0, "USD", True) is False
    assert ledger.entries() == {"recA": MonetaryValue(100.0, "USD")}

    assert ledger.toggle("recB", 10.0, "EUR", False) is False
    assert ledger.toggle("recA", 100.0, "USD", False) is True
    assert ledger.toggle("recA", 100.0, "USD", False) is False
    assert not ledger.is_selected("recA")
    assert notifications == [1, 0]


def test_toggle_refreshes_changed_snapshot():
    ledger = SelectionLedger()
    ledger.toggle("recA", 100.0, "USD", True)

    assert ledger.toggle("recA", 120.0, "USD", True) is True
    assert ledger.get("recA") == MonetaryValue(120.0, "USD")


def test_stale_entries_are_kept_until_removed():
    ledger = SelectionLedger()
    ledger.toggle("recA", 1.0, "USD", True)
    ledger.toggle("recB", 2.0, "USD", True)

    assert ledger.stale_identities(["recA"]) == ["recB"]
    assert "recB" in ledger

    assert ledger.deselect_missing(["recA"]) == ["recB"]
    assert list(ledger) == ["recA"]

    ledger.clear()
    assert len(ledger) == 0


def test_unsubscribe_stops_notifications():
    ledger = SelectionLedger()
    calls: list[str] = []
    unsubscribe = ledger.subscribe(lambda: calls.append("x"))
    unsubscribe()
    ledger.toggle("recA", 1.0, "USD", True)
    assert calls == []


def test_compute_total_mixed_currencies(converter):
    entries = {
        "recUSD": MonetaryValue(100.0, "USD"),
        "recEUR": MonetaryValue(100.0, "EUR"),
    }

    totals = compute_total(entries, converter)

    assert totals.usd == pytest.approx(100 + 100 / 0.92)
    assert totals.usd == pytest.approx(208.70, abs=0.005)
    assert totals.eur == pytest.approx(192.00)
    assert totals.eur == totals.usd * 0.92


def test_compute_total_ignores_missing_amounts_and_passes_unknown_codes(converter):
    entries = [
        MonetaryValue(None, "USD"),
        MonetaryValue(10.0, "GBP"),
        MonetaryValue(5.0, ""),
    ]

    totals = compute_total(entries, converter)

    assert totals.usd == pytest.approx(15.0)
    assert compute_total([], converter).usd == 0.0


def test_aggregator_recomputes_on_every_mutation(converter):
    ledger = SelectionLedger()
    currency = DisplayCurrencyStore("USD")
    seen: list[tuple[float, str]] = []
    aggregator = TotalAggregator(
        ledger,
        currency,
        converter,
        on_total=lambda totals, code: seen.append((round(totals.usd, 2), code)),
    )

    ledger.toggle("recA", 100.0, "USD", True)
    ledger.toggle("recB", 100.0, "EUR", True)
    before = aggregator.current
    currency.set("EUR")

    assert aggregator.current == before
    assert aggregator.current.format("EUR") == "€192.00"
    assert aggregator.current.format("USD") == "$208.70"
    assert seen == [(100.0, "USD"), (208.7, "USD"), (208.7, "EUR")]

    aggregator.close()
    ledger.toggle("recA", 100.0, "USD", False)
    assert len(seen) == 3


def test_display_currency_store_persists_changes(tmp_path):
    preferences = PreferenceStore(tmp_path / "prefs.json")
    store = DisplayCurrencyStore.from_preferences(preferences, "USD")
    changes: list[str] = []
    store.subscribe(changes.append)

    assert store.code == "USD"
    assert store.set("usd") is False
    assert store.set("eur") is True
    assert changes == ["EUR"]
    assert preferences.load_display_currency("USD") == "EUR"

    with pytest.raises(UnsupportedCurrencyError):
        store.set("GBP")
    assert store.code == "EUR"
