"""Record models, field resolution and projection helpers."""

from .aliases import DEFAULT_ALIASES, merge_aliases
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
from .projector import (
    project_extra,
    project_family,
    project_flight,
    project_records,
    project_resort,
    sort_rows,
)
from .resolver import resolve

__all__ = [
    "DEFAULT_ALIASES",
    "ExtraRow",
    "FamilyRow",
    "FlightRow",
    "MonetaryValue",
    "Record",
    "RecordKind",
    "ResortRow",
    "ViewRow",
    "merge_aliases",
    "project_extra",
    "project_family",
    "project_flight",
    "project_records",
    "project_resort",
    "resolve",
    "sort_rows",
]
