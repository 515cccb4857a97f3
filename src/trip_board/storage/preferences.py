"""JSON persistence for user preferences."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from trip_board.config.settings import SUPPORTED_CURRENCIES

logger = logging.getLogger(__name__)


class PreferenceStore:
    def __init__(self, path: Path) -> None:
        self.path = path

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable preference file %s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed preference file %s", self.path)
            return {}
        return data

    def load_display_currency(self, default: str) -> str:
        stored = self._read().get("display_currency")
        if isinstance(stored, str) and stored.upper() in SUPPORTED_CURRENCIES:
            return stored.upper()
        if stored is not None:
            logger.warning("Stored display currency %r is not supported; using %s", stored, default)
        return default

    def save_display_currency(self, code: str) -> Path:
        data = self._read()
        data["display_currency"] = code
        data["updated_at"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))
        return self.path
