"""Entry point for printing the trip board from Airtable or a saved snapshot."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

from trip_board.board import TripBoard, board_to_dict, render_board
from trip_board.config.settings import SUPPORTED_CURRENCIES, Settings
from trip_board.core.logging import configure_logging
from trip_board.money.currency import UnsupportedCurrencyError
from trip_board.services import AirtableClient, SnapshotFetcher

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show trip resorts, flights, extras and a running total")
    parser.add_argument(
        "--snapshot-dir",
        type=Path,
        default=None,
        help="Read <table>.json Airtable responses from this directory instead of calling the API",
    )
    parser.add_argument(
        "--currency",
        choices=SUPPORTED_CURRENCIES,
        default=None,
        help="Switch the display currency (persisted as the new preference)",
    )
    parser.add_argument(
        "--select",
        action="append",
        metavar="RECORD_ID",
        default=[],
        help="Check a row by record id (repeatable)",
    )
    parser.add_argument("--json", action="store_true", help="Print the board as JSON")
    parser.add_argument("--log-level", default=None, help="Override TRIP_LOG_LEVEL")
    parser.add_argument(
        "--override",
        action="append",
        metavar="KEY=VALUE",
        help="Override a Settings attribute (repeatable). Values accept JSON literals.",
    )
    return parser


def _decode_override(value: str) -> object:
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def _build_settings(parser: argparse.ArgumentParser, args: argparse.Namespace) -> Settings:
    overrides: dict[str, object] = {}
    for entry in args.override or []:
        if "=" not in entry:
            parser.error(f"Override must be in KEY=VALUE form (got '{entry}')")
        key, value = entry.split("=", 1)
        overrides[key.strip()] = _decode_override(value.strip())
    if args.log_level:
        overrides["log_level"] = args.log_level
    return Settings(**overrides)


async def run(settings: Settings, args: argparse.Namespace) -> int:
    if args.snapshot_dir is not None:
        board = TripBoard.from_settings(settings, SnapshotFetcher(args.snapshot_dir))
        await board.load()
    else:
        if not settings.airtable_configured():
            logger.error("Set TRIP_AIRTABLE_API_KEY and TRIP_AIRTABLE_BASE_ID or pass --snapshot-dir")
            return 2
        async with AirtableClient(
            api_key=settings.airtable_api_key or "",
            base_id=settings.airtable_base_id or "",
            api_url=settings.airtable_api_url,
            timeout=settings.http_timeout_s,
            page_size=settings.page_size,
        ) as client:
            board = TripBoard.from_settings(settings, client)
            await board.load()

    if args.currency:
        try:
            board.set_display_currency(args.currency)
        except UnsupportedCurrencyError as exc:
            logger.error("%s", exc)
            return 2

    for identity in args.select:
        try:
            board.toggle(identity, True)
        except KeyError:
            logger.warning("Cannot select %s; no such row on the board", identity)

    if args.json:
        print(json.dumps(board_to_dict(board), indent=2, ensure_ascii=False))
    else:
        print(render_board(board))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = _build_settings(parser, args)
    configure_logging(settings.log_level, settings.log_dir)
    settings.ensure_directories()
    return asyncio.run(run(settings, args))


if __name__ == "__main__":
    raise SystemExit(main())
