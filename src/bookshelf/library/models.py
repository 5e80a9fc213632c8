"""Data models for the book catalog."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from datetime import date
from typing import Optional

log = logging.getLogger(__name__)

LANGUAGES = ("English", "Ukrainian")
GENRES = ("Fiction", "Non-Fiction")
READ_STATUSES = ("Read", "Unread", "Did not finish")
BOOK_TYPES = ("Paper", "E-book", "Audiobook")

# Canonical field key -> Book attribute
FIELD_ATTRS = {
    "id": "id",
    "title": "title",
    "author": "author",
    "genre": "genre",
    "publisher": "publisher",
    "publishDate": "publish_date",
    "comment": "comment",
    "coverImage": "cover_image",
    "language": "language",
    "readStatus": "read_status",
    "bookType": "book_type",
    "dateOfReading": "date_of_reading",
    "rating": "rating",
    "favorite": "favorite",
}

COLUMN_KEYS = (
    "favorite",
    "title",
    "author",
    "publisher",
    "publishDate",
    "genre",
    "language",
    "bookType",
    "readStatus",
    "dateOfReading",
    "rating",
    "actions",
)

FILTER_KEYS = (
    "title",
    "author",
    "publisher",
    "genre",
    "language",
    "readStatus",
    "bookType",
    "favorite",
)


class ValidationError(ValueError):
    """A book draft is missing a required field or carries a bad value."""


@dataclass
class Book:
    title: str
    id: Optional[int] = None  # assigned by the store on first insert
    author: Optional[str] = None
    genre: Optional[str] = None
    publisher: Optional[str] = None
    publish_date: Optional[str] = None
    comment: Optional[str] = None
    cover_image: Optional[str] = None  # data: URI
    language: str = "English"
    read_status: str = "Unread"
    book_type: Optional[str] = "Paper"
    date_of_reading: Optional[str] = None  # YYYY-MM-DD
    rating: Optional[int] = None  # 0 - 5
    favorite: bool = False

    def value(self, key: str):
        """Return the value stored under a canonical field key."""
        return getattr(self, attr_for(key))


def attr_for(key: str) -> str:
    """Map a canonical field key (or a plain attribute name) to an attribute."""
    if key in FIELD_ATTRS:
        return FIELD_ATTRS[key]
    if key in _BOOK_ATTRS:
        return key
    raise KeyError(key)


_BOOK_ATTRS = {f.name for f in fields(Book)}


def validate_book(book: Book) -> None:
    if not book.title or not book.title.strip():
        raise ValidationError("Please enter the book title")
    if not book.language:
        raise ValidationError("Please select a language")
    if book.read_status not in READ_STATUSES:
        raise ValidationError("Please select a reading status")
    if book.book_type is not None and book.book_type not in BOOK_TYPES:
        raise ValidationError(f"Unknown book type: {book.book_type}")
    if book.rating is not None:
        if isinstance(book.rating, bool) or not isinstance(book.rating, int):
            raise ValidationError(f"Rating must be a whole number: {book.rating!r}")
        if not 0 <= book.rating <= 5:
            raise ValidationError(f"Rating must be between 0 and 5: {book.rating}")
    if book.date_of_reading:
        try:
            date.fromisoformat(book.date_of_reading)
        except ValueError:
            raise ValidationError(
                f"Date of reading must be YYYY-MM-DD: {book.date_of_reading}"
            ) from None


@dataclass
class Filters:
    """Transient filter state. Text fields hold comma-joined terms."""

    title: str = ""
    author: str = ""
    publisher: str = ""
    genre: str = ""
    language: str = ""
    read_status: str = ""
    book_type: str = ""
    favorite: bool = False

    @property
    def is_active(self) -> bool:
        return any(getattr(self, f.name) for f in fields(self))


class Visibility:
    """Ordered on/off map over a fixed set of keys. Defaults to all on."""

    KEYS: tuple[str, ...] = ()

    def __init__(self, flags: Optional[dict[str, bool]] = None) -> None:
        self._flags = dict.fromkeys(self.KEYS, True)
        if flags:
            for key, value in flags.items():
                if key in self._flags:
                    self._flags[key] = bool(value)

    def __getitem__(self, key: str) -> bool:
        return self._flags[key]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Visibility):
            return NotImplemented
        return type(self) is type(other) and self._flags == other._flags

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._flags!r})"

    def as_dict(self) -> dict[str, bool]:
        return dict(self._flags)

    def set(self, key: str, visible: bool) -> None:
        if key not in self._flags:
            raise KeyError(key)
        self._flags[key] = visible

    def toggle(self, key: str) -> None:
        self.set(key, not self[key])

    def reset(self) -> None:
        for key in self._flags:
            self._flags[key] = True

    def visible_keys(self) -> list[str]:
        return [k for k in self.KEYS if self._flags[k]]

    def copy(self):
        return type(self)(self._flags)

    def to_json(self) -> str:
        return json.dumps(self._flags)

    @classmethod
    def from_json(cls, raw: Optional[str]):
        """Parse stored JSON, falling back to defaults on anything malformed."""
        if not raw:
            return cls()
        try:
            data = json.loads(raw)
        except ValueError:
            log.warning("Stored %s is not JSON, using defaults", cls.__name__)
            return cls()
        if not isinstance(data, dict) or not all(
            isinstance(v, bool) for v in data.values()
        ):
            log.warning("Stored %s is malformed, using defaults", cls.__name__)
            return cls()
        return cls(data)


class ColumnVisibility(Visibility):
    KEYS = COLUMN_KEYS


class FilterVisibility(Visibility):
    KEYS = FILTER_KEYS


# Canonical filter key -> Filters attribute, in display order
FILTER_FIELDS = {
    "title": "title",
    "author": "author",
    "publisher": "publisher",
    "genre": "genre",
    "language": "language",
    "readStatus": "read_status",
    "bookType": "book_type",
    "favorite": "favorite",
}


def filters_field(key: str) -> str:
    """Filters attribute for a canonical filter key."""
    return FILTER_FIELDS[key]