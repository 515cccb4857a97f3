"""Client for the Airtable REST API."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from trip_board.records.models import Record

logger = logging.getLogger(__name__)

AIRTABLE_API_URL = "https://api.airtable.com/v0"
MAX_PAGES = 100


def parse_records(table: str, entries: List[Any]) -> List[Record]:
    records: List[Record] = []
    for entry in entries:
        try:
            records.append(Record.from_payload(entry))
        except ValidationError:
            logger.warning("Skipping malformed record in %s: %r", table, entry)
    return records


class FetchError(RuntimeError):
    """Raised when a table cannot be retrieved."""

    def __init__(self, table: str, message: str, *, status: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.table = table
        self.status = status
        self.body = body


class AirtableClient:
    """Thin async wrapper around the list-records endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        base_id: str,
        api_url: str = AIRTABLE_API_URL,
        timeout: float = 15.0,
        page_size: int = 100,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        if not api_key:
            raise ValueError("Airtable API key must be provided")
        if not base_id:
            raise ValueError("Airtable base id must be provided")
        default_headers = {
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
            "User-Agent": "trip-board/0.1.0",
        }
        if headers:
            default_headers.update(headers)
        self._client = httpx.AsyncClient(timeout=timeout, headers=default_headers)
        self._base_url = f"{api_url.rstrip('/')}/{base_id}"
        self._page_size = page_size

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AirtableClient":
        return self

    async def __aexit__(self, exc_type, exc, exc_tb) -> None:
        await self.aclose()

    def table_url(self, table: str) -> str:
        return f"{self._base_url}/{quote(table, safe='')}"

    async def fetch_table(self, table: str) -> List[Record]:
        """Return every record of ``table``, following Airtable's ``offset`` pagination."""
        url = self.table_url(table)
        records: List[Record] = []
        offset: Optional[str] = None
        for page in range(MAX_PAGES):
            params: Dict[str, str] = {"pageSize": str(self._page_size)}
            if offset:
                params["offset"] = offset
            payload = await self._get_page(table, url, params)
            records.extend(parse_records(table, payload.get("records") or []))
            offset = payload.get("offset")
            if not offset:
                break
            logger.debug("Fetching %s page %d", table, page + 2)
        else:
            logger.warning("Stopped paginating %s after %d pages", table, MAX_PAGES)
        logger.info("Fetched %d record(s) from %s", len(records), table)
        return records

    async def _get_page(self, table: str, url: str, params: Dict[str, str]) -> Dict[str, Any]:
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.error("Fetching %s failed: %s", table, exc)
            raise FetchError(table, f"Error fetching {table}: {exc}") from exc
        if response.status_code >= 400:
            body = response.text
            logger.error("Fetching %s failed with HTTP %s: %s", table, response.status_code, body)
            raise FetchError(
                table,
                f"Error fetching {table}: HTTP {response.status_code} {response.reason_phrase} {body}".rstrip(),
                status=response.status_code,
                body=body,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchError(table, f"Error fetching {table}: invalid JSON response") from exc
        if not isinstance(payload, dict):
            raise FetchError(table, f"Error fetching {table}: unexpected response shape")
        return payload
