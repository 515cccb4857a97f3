"""Coordinates fetching, projection, selection and totals for the whole board."""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Dict, Iterable, List, Optional, Protocol

from trip_board.config.settings import Settings
from trip_board.money.currency import CurrencyConverter
from trip_board.records.aliases import DEFAULT_ALIASES, AliasTable, merge_aliases
from trip_board.records.models import Record, RecordKind, ViewRow
from trip_board.records.projector import project_records
from trip_board.selection.display import DisplayCurrencyStore
from trip_board.selection.ledger import SelectionLedger
from trip_board.selection.totals import TotalAggregator, Totals
from trip_board.services.airtable import FetchError
from trip_board.storage.preferences import PreferenceStore

from .sections import SectionConfig, SectionStatus, SectionView, sections_from_settings

logger = logging.getLogger(__name__)


class TableFetcher(Protocol):
    async def fetch_table(self, table: str) -> List[Record]:
        ...


class TripBoard:
    """Owns the section state and wires the two mutable stores together.

    A currency switch re-projects every loaded section before the total is
    recomputed; both happen inside :meth:`set_display_currency`.
    """

    def __init__(
        self,
        fetcher: TableFetcher,
        sections: Iterable[SectionConfig],
        *,
        currency: DisplayCurrencyStore,
        converter: CurrencyConverter,
        ledger: Optional[SelectionLedger] = None,
        aliases: AliasTable = DEFAULT_ALIASES,
        on_total: Optional[Callable[[Totals, str], None]] = None,
    ) -> None:
        self.fetcher = fetcher
        self.currency = currency
        self.converter = converter
        self.ledger = ledger if ledger is not None else SelectionLedger()
        self.aliases = aliases
        self._sections: Dict[RecordKind, SectionView] = {config.kind: SectionView(config) for config in sections}
        # Subscription order is execution order: rows first, then the total.
        self._unsubscribe_currency = currency.subscribe(self._reproject_all)
        self.aggregator = TotalAggregator(self.ledger, currency, converter, on_total=on_total)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        fetcher: TableFetcher,
        *,
        on_total: Optional[Callable[[Totals, str], None]] = None,
    ) -> "TripBoard":
        preferences = PreferenceStore(settings.preference_path)
        currency = DisplayCurrencyStore.from_preferences(preferences, settings.default_display_currency)
        return cls(
            fetcher,
            sections_from_settings(settings),
            currency=currency,
            converter=CurrencyConverter(settings.usd_to_eur),
            aliases=merge_aliases(settings.extra_aliases),
            on_total=on_total,
        )

    @property
    def sections(self) -> List[SectionView]:
        return list(self._sections.values())

    def section(self, kind: RecordKind) -> SectionView:
        return self._sections[kind]

    @property
    def totals(self) -> Totals:
        return self.aggregator.current

    async def load(self, kinds: Optional[Iterable[RecordKind]] = None) -> List[SectionView]:
        targets = list(kinds) if kinds is not None else list(self._sections)
        return list(await asyncio.gather(*(self.load_section(kind) for kind in targets)))

    async def load_section(self, kind: RecordKind) -> SectionView:
        section = self._sections[kind]
        table = section.config.table
        section.status = SectionStatus.LOADING
        section.message = ""
        try:
            records = await self.fetcher.fetch_table(table)
        except FetchError as exc:
            logger.error("Section %s failed to load: %s", kind.value, exc)
            return self._fail(section, exc)
        except Exception as exc:
            # Fetcher bugs stay scoped to their own section as well.
            logger.exception("Section %s failed to load with an unexpected error", kind.value)
            return self._fail(section, exc)

        section.records = list(records)
        if not section.records:
            section.status = SectionStatus.EMPTY
            section.message = section.config.empty_message
            section.rows = []
            return section

        section.status = SectionStatus.READY
        self._project(section)
        return section

    @staticmethod
    def _fail(section: SectionView, exc: Exception) -> SectionView:
        section.status = SectionStatus.ERROR
        section.message = f"Failed to load {section.config.table}: {exc}"
        section.records = []
        section.rows = []
        return section

    def _project(self, section: SectionView) -> None:
        section.rows = project_records(
            section.kind,
            section.records,
            self.currency.code,
            converter=self.converter,
            aliases=self.aliases,
        )

    def _reproject_all(self, _code: str) -> None:
        for section in self._sections.values():
            if section.status is SectionStatus.READY:
                self._project(section)

    def set_display_currency(self, code: str) -> bool:
        return self.currency.set(code)

    def find_row(self, identity: str) -> Optional[ViewRow]:
        for section in self._sections.values():
            for row in section.rows:
                if row.identity == identity:
                    return row
        return None

    def toggle(self, identity: str, selected: bool) -> bool:
        """Check or uncheck a visible row, snapshotting its raw price into the ledger.

        Unchecking works for identities no longer on the board so stale
        selections can still be removed.
        """
        row = self.find_row(identity)
        if row is None:
            if selected:
                raise KeyError(f"No row with identity {identity!r} is currently displayed")
            return self.ledger.toggle(identity, None, "", False)
        return self.ledger.toggle(identity, row.money.amount, row.money.currency, selected)

    def is_checked(self, identity: str) -> bool:
        return self.ledger.is_selected(identity)

    def close(self) -> None:
        self._unsubscribe_currency()
        self.aggregator.close()
