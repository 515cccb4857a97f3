"""Fetchers for the Airtable data source."""

from .airtable import AirtableClient, FetchError, parse_records
from .snapshot import SnapshotFetcher

__all__ = [
    "AirtableClient",
    "FetchError",
    "SnapshotFetcher",
    "parse_records",
]
