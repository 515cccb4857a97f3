from __future__ import annotations

import pytest
from pydantic import ValidationError

from trip_board.config.settings import DEFAULT_USD_TO_EUR, Settings
from trip_board.storage import PreferenceStore


@pytest.mark.parametrize("raw", [None, "", "abc", 0, "0", -1, "nan"])
def test_settings_rate_falls_back_to_default(raw):
    assert Settings(usd_to_eur=raw).usd_to_eur == DEFAULT_USD_TO_EUR


def test_settings_accepts_valid_rate_and_currency():
    settings = Settings(usd_to_eur="0.9", default_display_currency="eur")
    assert settings.usd_to_eur == 0.9
    assert settings.default_display_currency == "EUR"
    assert Settings(default_display_currency="GBP").default_display_currency == "USD"


def test_settings_parses_extra_aliases_json():
    settings = Settings(extra_aliases='{"Resort": {"price": ["Nightly"], "name": "Property"}}')
    assert settings.extra_aliases == {"resort": {"price": ("Nightly",), "name": ("Property",)}}

    with pytest.raises(ValidationError):
        Settings(extra_aliases="{not json")


def test_settings_validates_page_size():
    with pytest.raises(ValidationError):
        Settings(page_size=0)


def test_settings_ensure_directories(tmp_path):
    settings = Settings(
        preference_path=tmp_path / "state" / "prefs.json",
        log_dir=tmp_path / "logs",
    )
    settings.ensure_directories()
    assert settings.preference_path.parent.exists()
    assert settings.log_dir.exists()
    assert not settings.airtable_configured()
    assert Settings(airtable_api_key="key", airtable_base_id="app123").airtable_configured()


def test_preference_store_round_trip_and_fallbacks(tmp_path):
    path = tmp_path / "prefs.json"
    store = PreferenceStore(path)

    assert store.load_display_currency("USD") == "USD"
    store.save_display_currency("EUR")
    assert store.load_display_currency("USD") == "EUR"

    path.write_text("{broken")
    assert store.load_display_currency("USD") == "USD"

    path.write_text('{"display_currency": "GBP"}')
    assert store.load_display_currency("USD") == "USD"

    path.write_text('["EUR"]')
    assert store.load_display_currency("USD") == "USD"
