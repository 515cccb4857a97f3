"""Process-wide display currency with change notification."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from trip_board.money.currency import require_supported
from trip_board.storage.preferences import PreferenceStore

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]


class DisplayCurrencyStore:
    """Holds the currency prices and totals are shown in.

    Listeners run synchronously, in subscription order, after every change.
    """

    def __init__(self, initial: str, *, preferences: Optional[PreferenceStore] = None) -> None:
        self._code = require_supported(initial)
        self._preferences = preferences
        self._listeners: List[Listener] = []

    @classmethod
    def from_preferences(cls, preferences: PreferenceStore, default: str) -> "DisplayCurrencyStore":
        return cls(preferences.load_display_currency(default), preferences=preferences)

    @property
    def code(self) -> str:
        return self._code

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def set(self, code: str) -> bool:
        """Switch the display currency; returns False when it was already ``code``."""
        normalised = require_supported(code)
        if normalised == self._code:
            return False
        logger.info("Display currency %s -> %s", self._code, normalised)
        self._code = normalised
        if self._preferences is not None:
            self._preferences.save_display_currency(normalised)
        for listener in list(self._listeners):
            listener(normalised)
        return True
