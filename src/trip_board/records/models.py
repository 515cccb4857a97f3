"""Dataclasses for fetched Airtable records and their display projections."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class RecordKind(str, Enum):
    RESORT = "resort"
    FLIGHT = "flight"
    EXTRA = "extra"
    FAMILY = "family"


class RecordPayload(BaseModel):
    """Shape of one entry in an Airtable ``records`` array."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1)
    fields: dict[str, Any] = Field(default_factory=dict)
    created_time: Optional[str] = Field(default=None, alias="createdTime")


@dataclass(frozen=True, slots=True)
class Record:
    """One fetched row: a stable identity plus its raw field mapping."""

    identity: str
    fields: Mapping[str, Any]
    created_time: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Record":
        parsed = RecordPayload.model_validate(payload)
        return cls(identity=parsed.id, fields=parsed.fields, created_time=parsed.created_time)


@dataclass(frozen=True, slots=True)
class MonetaryValue:
    """Raw, unconverted price of a row.

    ``amount`` is ``None`` when no number could be read; an empty ``currency``
    means the amount cannot be converted.
    """

    amount: Optional[float]
    currency: str = ""

    @property
    def convertible(self) -> bool:
        return self.amount is not None and bool(self.currency)

    def to_dict(self) -> dict[str, object]:
        return {"amount": self.amount, "currency": self.currency}


@dataclass(slots=True)
class ViewRow:
    """Fields shared by every projected row."""

    identity: str
    kind: RecordKind
    name: str
    money: MonetaryValue
    original: str
    converted: str
    link: str = ""
    link_label: str = ""
    notes: str = ""

    def sort_key(self) -> tuple[str, float]:
        return self.name.lower(), self.money.amount or 0.0

    def to_dict(self) -> dict[str, object]:
        return {
            "identity": self.identity,
            "kind": self.kind.value,
            "name": self.name,
            "money": self.money.to_dict(),
            "original": self.original,
            "converted": self.converted,
            "link": self.link,
            "link_label": self.link_label,
            "notes": self.notes,
            **self.details(),
        }

    def details(self) -> dict[str, object]:
        return {}

    @classmethod
    def from_iterable(cls, rows: Iterable["ViewRow"]) -> List[dict[str, object]]:
        return [row.to_dict() for row in rows]


@dataclass(slots=True)
class ResortRow(ViewRow):
    origin: str = ""
    perks: str = ""
    families: str = ""

    def details(self) -> dict[str, object]:
        return {"origin": self.origin, "perks": self.perks, "families": self.families}


@dataclass(slots=True)
class FlightRow(ViewRow):
    route: str = ""
    departure: str = ""
    families: str = ""

    def details(self) -> dict[str, object]:
        return {"route": self.route, "departure": self.departure, "families": self.families}


@dataclass(slots=True)
class ExtraRow(ViewRow):
    category: str = ""
    families: str = ""

    def details(self) -> dict[str, object]:
        return {"category": self.category, "families": self.families}


@dataclass(slots=True)
class FamilyRow(ViewRow):
    members: str = ""
    resorts: str = ""

    def details(self) -> dict[str, object]:
        return {"members": self.members, "resorts": self.resorts}
