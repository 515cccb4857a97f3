"""Runtime configuration for the trip board.

Relies on pydantic-settings so that environment variables (prefixed with ``TRIP_``)
can override defaults. See `.env.example` for common values.
"""
from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

SUPPORTED_CURRENCIES: tuple[str, ...] = ("USD", "EUR")
DEFAULT_USD_TO_EUR = 0.92
DEFAULT_DISPLAY_CURRENCY = "USD"


class Settings(BaseSettings):
    """Captures runtime configuration for the trip board."""

    airtable_api_key: Optional[str] = Field(default=None, description="Airtable personal access token")
    airtable_base_id: Optional[str] = Field(default=None, description="Airtable base identifier (app...)")
    airtable_api_url: str = Field(
        default="https://api.airtable.com/v0",
        description="Root of the Airtable REST API",
    )
    table_families: str = "Families"
    table_resorts: str = "Resort"
    table_flights: str = "Flights"
    table_extras: str = "Extras"

    empty_families_message: str = "No families found."
    empty_resorts_message: str = "No resorts found."
    empty_flights_message: str = "No flights found."
    empty_extras_message: str = "No extras found."

    usd_to_eur: float = Field(
        default=DEFAULT_USD_TO_EUR,
        description="USD to EUR multiplier; falls back to the default when unset, non-numeric or zero",
    )
    default_display_currency: str = Field(default=DEFAULT_DISPLAY_CURRENCY)
    preference_path: Path = Field(
        default=Path("data/preferences.json"),
        description="JSON file storing the user's display currency preference",
    )

    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("data/logs"))
    http_timeout_s: float = Field(default=15.0, description="Timeout applied to Airtable requests")
    page_size: int = Field(default=100, description="Records requested per Airtable page")
    extra_aliases: dict[str, dict[str, tuple[str, ...]]] = Field(
        default_factory=dict,
        description="Additional field aliases per record kind, tried before the built-in ones",
    )

    model_config = SettingsConfigDict(
        env_prefix="TRIP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
    )

    @field_validator("usd_to_eur", mode="before")
    def _coerce_rate(cls, value: object) -> float:
        if value is None or value == "":
            return DEFAULT_USD_TO_EUR
        try:
            rate = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            logger.warning("Invalid USD->EUR rate %r; using %s", value, DEFAULT_USD_TO_EUR)
            return DEFAULT_USD_TO_EUR
        if not math.isfinite(rate) or rate <= 0:
            logger.warning("Unusable USD->EUR rate %r; using %s", value, DEFAULT_USD_TO_EUR)
            return DEFAULT_USD_TO_EUR
        return rate

    @field_validator("default_display_currency", mode="before")
    def _normalise_display_currency(cls, value: object) -> str:
        code = str(value or "").strip().upper()
        if code not in SUPPORTED_CURRENCIES:
            if code:
                logger.warning("Unsupported display currency %r; using %s", value, DEFAULT_DISPLAY_CURRENCY)
            return DEFAULT_DISPLAY_CURRENCY
        return code

    @field_validator("preference_path", "log_dir", mode="before")
    def _expand_path(cls, value: str | Path) -> Path:
        if isinstance(value, Path):
            return value.expanduser()
        return Path(value).expanduser()

    @field_validator("page_size")
    def _validate_page_size(cls, value: int) -> int:
        if not 1 <= value <= 100:
            raise ValueError("page_size must be between 1 and 100")
        return value

    @field_validator("extra_aliases", mode="before")
    def _parse_extra_aliases(cls, value: object) -> dict[str, dict[str, tuple[str, ...]]]:
        if value in (None, "", {}):
            return {}
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError as exc:  # noqa: TRY003
                raise ValueError("extra_aliases must be valid JSON") from exc
        if not isinstance(value, dict):
            raise TypeError("extra_aliases must map record kinds to attribute alias lists")
        parsed: dict[str, dict[str, tuple[str, ...]]] = {}
        for kind, attributes in value.items():
            if not isinstance(attributes, dict):
                raise TypeError(f"extra_aliases[{kind!r}] must be a mapping")
            parsed[str(kind).lower()] = {
                str(attribute): (aliases,) if isinstance(aliases, str) else tuple(str(a) for a in aliases)
                for attribute, aliases in attributes.items()
            }
        return parsed

    def ensure_directories(self) -> None:
        """Create directories that must exist at runtime."""
        self.preference_path.parent.mkdir(parents=True, exist_ok=True)
        self.log_dir.mkdir(parents=True, exist_ok=True)

    def airtable_configured(self) -> bool:
        return bool(self.airtable_api_key and self.airtable_base_id)
