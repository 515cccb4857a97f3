"""Column-name aliases per record kind.

Each attribute maps to an ordered tuple of acceptable Airtable column names;
the first one present in a record wins. New spellings belong here (or in the
``TRIP_EXTRA_ALIASES`` setting), not in the projectors.
"""
from __future__ import annotations

from typing import Mapping

from .models import RecordKind
from .resolver import FieldAliasSet

AliasTable = Mapping[RecordKind, Mapping[str, FieldAliasSet]]

PRICE: FieldAliasSet = ("Price input", "Price (input)", "Price")
CURRENCY: FieldAliasSet = ("Currency", "Currency (input)", "Price currency")
LINK: FieldAliasSet = ("Link", "Booking Link", "Booking URL", "URL", "Website")
NOTES: FieldAliasSet = ("Notes", "Note", "Comments")
FAMILIES: FieldAliasSet = (
    "Name (from Families included)",
    "Families included",
    "Name (from Families)",
    "Families",
    "Family",
)

DEFAULT_ALIASES: dict[RecordKind, dict[str, FieldAliasSet]] = {
    RecordKind.RESORT: {
        "name": ("Resort Name", "Resort", "Name"),
        "origin": ("Booking Origin", "Origin", "Booked via"),
        "price": PRICE,
        "currency": CURRENCY,
        "perks": ("Perks", "Perk", "Benefits"),
        "families": FAMILIES,
        "link": LINK,
        "notes": NOTES,
    },
    RecordKind.FLIGHT: {
        "name": ("Flight", "Flight Name", "Airline", "Name"),
        "route": ("Route", "Flight Route"),
        "from": ("From", "Origin", "Departure Airport"),
        "to": ("To", "Destination", "Arrival Airport"),
        "departure": ("Departure", "Departure Date", "Date"),
        "price": PRICE,
        "currency": CURRENCY,
        "families": FAMILIES,
        "link": LINK,
        "notes": NOTES,
    },
    RecordKind.EXTRA: {
        "name": ("Extra", "Item", "Extra Name", "Name"),
        "category": ("Category", "Type"),
        "price": PRICE,
        "currency": CURRENCY,
        "families": FAMILIES,
        "link": LINK,
        "notes": NOTES,
    },
    RecordKind.FAMILY: {
        "name": ("Name", "Family Name", "Family"),
        "members": ("Members", "Travellers", "Travelers", "People"),
        "resorts": ("Resort Name (from Resort)", "Name (from Resort)", "Resort", "Resorts"),
        "price": ("Budget", "Price"),
        "currency": CURRENCY,
        "link": LINK,
        "notes": NOTES,
    },
}


def merge_aliases(
    extra: Mapping[str, Mapping[str, FieldAliasSet]],
    base: AliasTable = DEFAULT_ALIASES,
) -> dict[RecordKind, dict[str, FieldAliasSet]]:
    """Return a copy of ``base`` with ``extra`` aliases placed ahead of the built-in ones.

    ``extra`` is keyed by kind value (``"resort"``) as it arrives from settings.
    """
    merged: dict[RecordKind, dict[str, FieldAliasSet]] = {
        kind: dict(attributes) for kind, attributes in base.items()
    }
    for kind_name, attributes in extra.items():
        kind = RecordKind(kind_name)
        table = merged.setdefault(kind, {})
        for attribute, aliases in attributes.items():
            preferred = tuple(dict.fromkeys(aliases))
            rest = tuple(alias for alias in table.get(attribute, ()) if alias not in preferred)
            table[attribute] = preferred + rest
    return merged
