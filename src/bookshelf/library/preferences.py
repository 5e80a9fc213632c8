"""Key/value preference storage (visibility maps, theme)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from .models import ColumnVisibility, FilterVisibility

log = logging.getLogger(__name__)

COLUMN_VISIBILITY_KEY = "columnVisibility"
FILTER_VISIBILITY_KEY = "filterVisibility"
THEME_KEY = "theme"

THEMES = ("light", "dark")
DEFAULT_THEME = "light"


class PreferenceStore:
    """String key -> string value map persisted as one JSON object."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._values = self._read()

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            log.warning("Ignoring unreadable preferences %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            log.warning("Ignoring malformed preferences %s", self._path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(self._values, indent=2), encoding="utf-8")


def load_column_visibility(store: PreferenceStore) -> ColumnVisibility:
    return ColumnVisibility.from_json(store.get(COLUMN_VISIBILITY_KEY))


def save_column_visibility(store: PreferenceStore, visibility: ColumnVisibility) -> None:
    store.set(COLUMN_VISIBILITY_KEY, visibility.to_json())


def load_filter_visibility(store: PreferenceStore) -> FilterVisibility:
    return FilterVisibility.from_json(store.get(FILTER_VISIBILITY_KEY))


def save_filter_visibility(store: PreferenceStore, visibility: FilterVisibility) -> None:
    store.set(FILTER_VISIBILITY_KEY, visibility.to_json())


def load_theme(store: PreferenceStore) -> str:
    theme = store.get(THEME_KEY)
    return theme if theme in THEMES else DEFAULT_THEME


def save_theme(store: PreferenceStore, theme: str) -> None:
    if theme not in THEMES:
        raise ValueError(f"Unknown theme: {theme}. Supported: {', '.join(THEMES)}")
    store.set(THEME_KEY, theme)
