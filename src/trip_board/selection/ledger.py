"""Selection state that survives re-fetches and re-renders."""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from trip_board.records.models import MonetaryValue

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class SelectionLedger:
    """Selected record identities and the raw price captured when each was checked.

    An entry exists iff the row is checked. Re-projecting rows never adds or
    removes entries; render code asks :meth:`is_selected` for each fresh row.
    Entries for identities missing from a later fetch are kept and still count
    towards the total until deselected or cleared.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, MonetaryValue] = {}
        self._listeners: List[Listener] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identity: object) -> bool:
        return identity in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def toggle(
        self,
        identity: str,
        amount: Optional[float],
        currency: str,
        selected: bool,
    ) -> bool:
        """Add or remove ``identity``; returns True when the ledger changed."""
        if selected:
            snapshot = MonetaryValue(amount=amount, currency=currency or "")
            if self._entries.get(identity) == snapshot:
                return False
            self._entries[identity] = snapshot
            logger.debug("Selected %s (%s %s)", identity, amount, currency)
        else:
            if self._entries.pop(identity, None) is None:
                return False
            logger.debug("Deselected %s", identity)
        self._notify()
        return True

    def is_selected(self, identity: str) -> bool:
        return identity in self._entries

    def get(self, identity: str) -> Optional[MonetaryValue]:
        return self._entries.get(identity)

    def entries(self) -> Dict[str, MonetaryValue]:
        return dict(self._entries)

    def stale_identities(self, known: Iterable[str]) -> List[str]:
        """Selected identities that are not among ``known`` (e.g. dropped by a re-fetch)."""
        known_set = set(known)
        return [identity for identity in self._entries if identity not in known_set]

    def deselect_missing(self, known: Iterable[str]) -> List[str]:
        """Drop entries whose identity is not among ``known``; never called implicitly."""
        stale = self.stale_identities(known)
        for identity in stale:
            del self._entries[identity]
        if stale:
            logger.info("Dropped %d stale selection(s)", len(stale))
            self._notify()
        return stale

    def clear(self) -> None:
        if not self._entries:
            return
        self._entries.clear()
        self._notify()
