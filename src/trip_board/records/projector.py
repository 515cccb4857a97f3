"""Utilities to transform raw Airtable records into display rows."""
from __future__ import annotations

from typing import Any, Callable, Iterable, List, Mapping

from trip_board.money.currency import PLACEHOLDER, CurrencyConverter, format_money

from .aliases import DEFAULT_ALIASES, AliasTable
from .models import (
    ExtraRow,
    FamilyRow,
    FlightRow,
    MonetaryValue,
    Record,
    RecordKind,
    ResortRow,
    ViewRow,
)
from .normalizer import (
    format_amount,
    to_currency_code,
    to_display_list,
    to_domain_label,
    to_number_or_none,
    to_short_names,
    to_text,
)
from .resolver import resolve

Projector = Callable[..., ViewRow]


class _Fields:
    """Alias-aware accessor over one record's fields."""

    def __init__(self, record: Record, aliases: Mapping[str, Any]) -> None:
        self._fields = record.fields
        self._aliases = aliases

    def get(self, attribute: str) -> Any:
        return resolve(self._fields, self._aliases.get(attribute, ()))


def _money(fields: _Fields) -> MonetaryValue:
    return MonetaryValue(
        amount=to_number_or_none(fields.get("price")),
        currency=to_currency_code(fields.get("currency")),
    )


def _price_strings(money: MonetaryValue, display_currency: str, converter: CurrencyConverter) -> tuple[str, str]:
    amount = money.amount
    if amount is None or not money.currency:
        return PLACEHOLDER, PLACEHOLDER
    original = f"{format_amount(amount)} {money.currency}"
    converted = format_money(converter.convert(amount, money.currency, display_currency), display_currency)
    return original, converted


def _common(
    record: Record,
    kind: RecordKind,
    display_currency: str,
    converter: CurrencyConverter,
    aliases: AliasTable,
    default_name: str,
) -> tuple[_Fields, dict[str, Any]]:
    fields = _Fields(record, aliases.get(kind, {}))
    money = _money(fields)
    original, converted = _price_strings(money, display_currency, converter)
    link = to_text(fields.get("link"))
    return fields, {
        "identity": record.identity,
        "kind": kind,
        "name": to_text(fields.get("name"), default_name),
        "money": money,
        "original": original,
        "converted": converted,
        "link": link,
        "link_label": to_domain_label(link),
        "notes": to_display_list(fields.get("notes")),
    }


def project_resort(
    record: Record,
    display_currency: str,
    *,
    converter: CurrencyConverter,
    aliases: AliasTable = DEFAULT_ALIASES,
) -> ResortRow:
    fields, common = _common(record, RecordKind.RESORT, display_currency, converter, aliases, "Unnamed Resort")
    return ResortRow(
        **common,
        origin=to_text(fields.get("origin")),
        perks=to_display_list(fields.get("perks")),
        families=to_short_names(fields.get("families")),
    )


def _route(fields: _Fields) -> str:
    route = to_text(fields.get("route"))
    if route:
        return route
    origin = to_text(fields.get("from"))
    destination = to_text(fields.get("to"))
    if origin and destination:
        return f"{origin} → {destination}"
    return origin or destination


def project_flight(
    record: Record,
    display_currency: str,
    *,
    converter: CurrencyConverter,
    aliases: AliasTable = DEFAULT_ALIASES,
) -> FlightRow:
    fields, common = _common(record, RecordKind.FLIGHT, display_currency, converter, aliases, "Unnamed Flight")
    return FlightRow(
        **common,
        route=_route(fields),
        departure=to_text(fields.get("departure")),
        families=to_short_names(fields.get("families")),
    )


def project_extra(
    record: Record,
    display_currency: str,
    *,
    converter: CurrencyConverter,
    aliases: AliasTable = DEFAULT_ALIASES,
) -> ExtraRow:
    fields, common = _common(record, RecordKind.EXTRA, display_currency, converter, aliases, "Unnamed Extra")
    return ExtraRow(
        **common,
        category=to_text(fields.get("category")),
        families=to_short_names(fields.get("families")),
    )


def project_family(
    record: Record,
    display_currency: str,
    *,
    converter: CurrencyConverter,
    aliases: AliasTable = DEFAULT_ALIASES,
) -> FamilyRow:
    fields, common = _common(record, RecordKind.FAMILY, display_currency, converter, aliases, "Unnamed")
    return FamilyRow(
        **common,
        members=to_display_list(fields.get("members")),
        resorts=to_short_names(fields.get("resorts")),
    )


PROJECTORS: dict[RecordKind, Projector] = {
    RecordKind.RESORT: project_resort,
    RecordKind.FLIGHT: project_flight,
    RecordKind.EXTRA: project_extra,
    RecordKind.FAMILY: project_family,
}


def sort_rows(rows: Iterable[ViewRow]) -> List[ViewRow]:
    """Name (case-insensitive) ascending, then raw amount ascending with missing as 0."""
    return sorted(rows, key=lambda row: row.sort_key())


def project_records(
    kind: RecordKind,
    records: Iterable[Record],
    display_currency: str,
    *,
    converter: CurrencyConverter,
    aliases: AliasTable = DEFAULT_ALIASES,
) -> List[ViewRow]:
    projector = PROJECTORS[kind]
    rows = [projector(record, display_currency, converter=converter, aliases=aliases) for record in records]
    return sort_rows(rows)
