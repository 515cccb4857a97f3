from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from trip_board.services import AirtableClient, FetchError, SnapshotFetcher


class _DummyAsyncClient:
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self.kwargs = kwargs
        self.calls: list[tuple[str, dict[str, str]]] = []
        self._responses: list[Any] = []
        self.closed = False

    def configure(self, responses: list[Any]) -> None:
        self._responses = list(responses)

    async def get(self, url: str, params: dict[str, str] | None = None) -> httpx.Response:
        self.calls.append((url, dict(params or {})))
        outcome = self._responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        status, payload = outcome
        request = httpx.Request("GET", url)
        if isinstance(payload, str):
            return httpx.Response(status, text=payload, request=request)
        return httpx.Response(status, json=payload, request=request)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def airtable(monkeypatch: pytest.MonkeyPatch) -> tuple[AirtableClient, _DummyAsyncClient]:
    instances: list[_DummyAsyncClient] = []

    def _make_dummy_async_client(*args: Any, **kwargs: Any) -> _DummyAsyncClient:
        client = _DummyAsyncClient(*args, **kwargs)
        instances.append(client)
        return client

    monkeypatch.setattr("trip_board.services.airtable.httpx.AsyncClient", _make_dummy_async_client)
    client = AirtableClient(api_key="secret", base_id="appTEST", page_size=2)
    assert instances, "expected AirtableClient to create an AsyncClient"
    return client, instances[0]


def test_client_sends_bearer_token(airtable):
    _, dummy = airtable
    headers = dummy.kwargs["headers"]
    assert headers["Authorization"] == "Bearer secret"


def test_client_requires_credentials():
    with pytest.raises(ValueError):
        AirtableClient(api_key="", base_id="appTEST")
    with pytest.raises(ValueError):
        AirtableClient(api_key="secret", base_id="")


@pytest.mark.asyncio
async def test_fetch_table_follows_offset_pagination(airtable):
    client, dummy = airtable
    dummy.configure(
        [
            (200, {"records": [{"id": "rec1", "fields": {"Name": "A"}}, {"id": "rec2", "fields": {}}], "offset": "itr1"}),
            (200, {"records": [{"id": "rec3", "fields": {"Name": "C"}, "createdTime": "2024-01-01T00:00:00.000Z"}]}),
        ]
    )

    async with client:
        records = await client.fetch_table("Resort Options")

    assert [record.identity for record in records] == ["rec1", "rec2", "rec3"]
    assert records[2].created_time == "2024-01-01T00:00:00.000Z"
    assert dummy.calls[0] == (
        "https://api.airtable.com/v0/appTEST/Resort%20Options",
        {"pageSize": "2"},
    )
    assert dummy.calls[1][1] == {"pageSize": "2", "offset": "itr1"}
    assert dummy.closed


@pytest.mark.asyncio
async def test_fetch_table_empty_result_is_not_an_error(airtable):
    client, dummy = airtable
    dummy.configure([(200, {"records": []})])

    records = await client.fetch_table("Flights")

    assert records == []


@pytest.mark.asyncio
async def test_fetch_table_raises_on_http_error(airtable):
    client, dummy = airtable
    dummy.configure([(401, '{"error": "AUTHENTICATION_REQUIRED"}')])

    with pytest.raises(FetchError) as excinfo:
        await client.fetch_table("Resort")

    assert excinfo.value.status == 401
    assert excinfo.value.table == "Resort"
    assert "HTTP 401 Unauthorized" in str(excinfo.value)
    assert "AUTHENTICATION_REQUIRED" in excinfo.value.body


@pytest.mark.asyncio
async def test_fetch_table_wraps_transport_errors(airtable):
    client, dummy = airtable
    dummy.configure([httpx.ConnectError("connection refused")])

    with pytest.raises(FetchError, match="connection refused"):
        await client.fetch_table("Extras")


@pytest.mark.asyncio
async def test_fetch_table_skips_malformed_records(airtable):
    client, dummy = airtable
    dummy.configure([(200, {"records": [{"fields": {"Name": "no id"}}, "junk", {"id": "rec9"}]})])

    records = await client.fetch_table("Families")

    assert [record.identity for record in records] == ["rec9"]
    assert records[0].fields == {}


@pytest.mark.asyncio
async def test_snapshot_fetcher_reads_saved_responses(tmp_path):
    (tmp_path / "Resort.json").write_text(json.dumps({"records": [{"id": "rec1", "fields": {"Resort Name": "A"}}]}))
    (tmp_path / "Broken.json").write_text("{")
    fetcher = SnapshotFetcher(tmp_path)

    records = await fetcher.fetch_table("Resort")
    assert records[0].fields == {"Resort Name": "A"}

    with pytest.raises(FetchError, match="not found"):
        await fetcher.fetch_table("Flights")
    with pytest.raises(FetchError):
        await fetcher.fetch_table("Broken")


@pytest.mark.asyncio
async def test_snapshot_fetcher_wraps_undecodable_files(tmp_path):
    (tmp_path / "Extras.json").write_bytes(b'{"records": \xff\xfe}')
    fetcher = SnapshotFetcher(tmp_path)

    with pytest.raises(FetchError, match="Extras"):
        await fetcher.fetch_table("Extras")
