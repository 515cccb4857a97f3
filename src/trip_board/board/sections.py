"""Per-kind section definitions and load state."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from trip_board.config.settings import Settings
from trip_board.records.models import Record, RecordKind, ViewRow


class SectionStatus(str, Enum):
    PENDING = "pending"
    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class SectionConfig:
    """Which table feeds a kind and how its section is labelled."""

    kind: RecordKind
    table: str
    title: str
    empty_message: str = "No records found."


@dataclass
class SectionView:
    """Latest outcome of loading one section.

    ``records`` keeps the raw fetch so rows can be re-projected after a currency
    switch without fetching again.
    """

    config: SectionConfig
    status: SectionStatus = SectionStatus.PENDING
    message: str = ""
    records: List[Record] = field(default_factory=list)
    rows: List[ViewRow] = field(default_factory=list)

    @property
    def kind(self) -> RecordKind:
        return self.config.kind

    def to_dict(self, is_selected: Optional[Callable[[str], bool]] = None) -> dict[str, object]:
        """Serialise the section; each row gets a ``checked`` flag from ``is_selected``."""
        rows = ViewRow.from_iterable(self.rows)
        for row, payload in zip(self.rows, rows):
            payload["checked"] = bool(is_selected(row.identity)) if is_selected else False
        return {
            "kind": self.kind.value,
            "table": self.config.table,
            "title": self.config.title,
            "status": self.status.value,
            "message": self.message,
            "rows": rows,
        }


def sections_from_settings(settings: Settings) -> List[SectionConfig]:
    """Section order matches the board layout: families, resorts, flights, extras."""
    return [
        SectionConfig(RecordKind.FAMILY, settings.table_families, "Families", settings.empty_families_message),
        SectionConfig(RecordKind.RESORT, settings.table_resorts, "Resorts", settings.empty_resorts_message),
        SectionConfig(RecordKind.FLIGHT, settings.table_flights, "Flights", settings.empty_flights_message),
        SectionConfig(RecordKind.EXTRA, settings.table_extras, "Extras", settings.empty_extras_message),
    ]
