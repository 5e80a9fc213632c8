"""View state over the book store: collection, filters, sort, visibility."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Optional

from . import preferences as prefs_mod
from .database import Database
from .export import EXPORT_FILENAME, to_csv, write_csv
from .models import (
    Book,
    ColumnVisibility,
    FilterVisibility,
    Filters,
    filters_field,
    validate_book,
)
from .preferences import PreferenceStore
from .query import apply, suggestions

log = logging.getLogger(__name__)


class Catalog:
    """Owns what the library screen shows.

    Every mutation goes to the store and is followed by a full reload, so
    ``books`` is only ever replaced by what the store returns. A failed
    mutation leaves it untouched.
    """

    def __init__(
        self,
        db: Database,
        prefs: PreferenceStore,
        export_dir: Optional[Path] = None,
        sort_key: str = "title",
    ) -> None:
        self._db = db
        self._prefs = prefs
        self.export_dir = export_dir or Path.home()
        self.books: list[Book] = []
        self.filters = Filters()
        self.sort_key = sort_key
        self.descending = False
        self.column_visibility = prefs_mod.load_column_visibility(prefs)
        self.filter_visibility = prefs_mod.load_filter_visibility(prefs)
        self.theme = prefs_mod.load_theme(prefs)

    # ── Collection ─────────────────────────────────────

    def load(self) -> list[Book]:
        self.books = self._db.list_books()
        log.debug("Loaded %d books", len(self.books))
        return self.books

    @property
    def visible_books(self) -> list[Book]:
        return apply(self.books, self.filters, self.sort_key, self.descending)

    def get(self, book_id: int) -> Optional[Book]:
        for book in self.books:
            if book.id == book_id:
                return book
        return None

    def save_book(self, book: Book) -> int:
        """Add a draft (no id) or rewrite an existing book."""
        validate_book(book)
        if book.id is None:
            book_id = self._db.add_book(book)
        else:
            book_id = self._db.update_book(book)
        self.load()
        return book_id

    def delete_book(self, book_id: int) -> None:
        self._db.delete_book(book_id)
        self.load()

    def toggle_favorite(self, book: Book) -> Book:
        updated = dataclasses.replace(book, favorite=not book.favorite)
        self._db.update_book(updated)
        self.load()
        return updated

    # ── Filters & sort ─────────────────────────────────

    def set_filter(self, key: str, value) -> None:
        """Set one filter by its canonical key (``readStatus``, ``favorite``...)."""
        attr = filters_field(key)
        if attr == "favorite":
            value = bool(value)
        elif isinstance(value, (list, tuple)):
            value = ",".join(value)
        setattr(self.filters, attr, value)

    def clear_filters(self) -> None:
        self.filters = Filters()

    def set_sort(self, sort_key: str, descending: bool = False) -> None:
        self.sort_key = sort_key
        self.descending = descending

    def suggestions(self, key: str) -> list[str]:
        return suggestions(self.books, key)

    # ── Preferences ────────────────────────────────────

    def save_column_visibility(self, visibility: ColumnVisibility) -> None:
        self.column_visibility = visibility.copy()
        prefs_mod.save_column_visibility(self._prefs, self.column_visibility)

    def save_filter_visibility(self, visibility: FilterVisibility) -> None:
        self.filter_visibility = visibility.copy()
        prefs_mod.save_filter_visibility(self._prefs, self.filter_visibility)

    def toggle_theme(self) -> str:
        self.theme = "dark" if self.theme == "light" else "light"
        prefs_mod.save_theme(self._prefs, self.theme)
        return self.theme

    # ── Export ─────────────────────────────────────────

    def to_csv(self) -> str:
        return to_csv(self.visible_books, self.column_visibility)

    def export_csv(self, path: Optional[Path] = None) -> Path:
        target = path or self.export_dir / EXPORT_FILENAME
        return write_csv(target, self.to_csv())
