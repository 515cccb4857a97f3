"""Offline fetcher that reads saved Airtable list-records responses from disk."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

from trip_board.records.models import Record

from .airtable import FetchError, parse_records

logger = logging.getLogger(__name__)


class SnapshotFetcher:
    """Serves ``<table>.json`` files from ``root`` with the same contract as the Airtable client.

    Each file holds an Airtable response body (``{"records": [...]}``). A missing
    file is a fetch failure, not an empty table.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def path_for(self, table: str) -> Path:
        return self.root / f"{table}.json"

    async def fetch_table(self, table: str) -> List[Record]:
        path = self.path_for(table)
        if not path.exists():
            raise FetchError(table, f"Error fetching {table}: snapshot {path} not found")
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise FetchError(table, f"Error fetching {table}: {exc}") from exc
        entries = payload.get("records") if isinstance(payload, dict) else payload
        if not isinstance(entries, list):
            raise FetchError(table, f"Error fetching {table}: snapshot {path} has no records list")
        records = parse_records(table, entries)
        logger.info("Loaded %d record(s) for %s from %s", len(records), table, path)
        return records
