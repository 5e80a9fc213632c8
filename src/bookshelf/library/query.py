"""Filtering and sorting over the in-memory book collection."""

from __future__ import annotations

import unicodedata
from typing import Iterable

from .models import Book, Filters, attr_for

TEXT_FILTERS = ("title", "author", "publisher")
CHOICE_FILTERS = ("genre", "language", "read_status", "book_type")

# Cyrillic letters that code point order misplaces in the Ukrainian alphabet
_CYRILLIC_WEIGHTS = {
    "ґ": ord("г") + 0.5,
    "є": ord("е") + 0.5,
    "і": ord("и") + 0.25,
    "ї": ord("и") + 0.5,
    "й": ord("и") + 0.75,
}


def _primary_weight(ch: str) -> float:
    return _CYRILLIC_WEIGHTS.get(ch, float(ord(ch)))


def collation_key(text: str) -> tuple:
    """Locale-aware sort key: base letters, then accents, then case.

    Lower case sorts before upper case on the final level.
    """
    primary: list[float] = []
    secondary: list[str] = []
    tertiary: list[int] = []
    for ch in text:
        case = 1 if ch.isupper() else 0
        folded = ch.casefold()
        if folded in ("й", "ї"):
            # letters of their own, not и with a breve or і with a diaeresis
            primary.append(_primary_weight(folded))
            secondary.append("")
            tertiary.append(case)
            continue
        decomposed = unicodedata.normalize("NFD", ch)
        marks = "".join(c for c in decomposed[1:] if unicodedata.combining(c))
        for c in decomposed[0].casefold():
            primary.append(_primary_weight(c))
        secondary.append(marks)
        tertiary.append(case)
    return (tuple(primary), tuple(secondary), tuple(tertiary))


def _terms(value: str) -> list[str]:
    return [term.strip().lower() for term in value.split(",")]


def _matches_text(book_value, terms: list[str]) -> bool:
    if not book_value:
        return False
    haystack = str(book_value).lower()
    return any(term in haystack for term in terms)


def filter_books(books: Iterable[Book], filters: Filters) -> list[Book]:
    """Keep books satisfying every active filter.

    Terms within one field are OR-ed, fields are AND-ed.
    """
    result = list(books)

    for name in TEXT_FILTERS:
        value = getattr(filters, name)
        if value:
            terms = _terms(value)
            result = [b for b in result if _matches_text(getattr(b, name), terms)]

    for name in CHOICE_FILTERS:
        value = getattr(filters, name)
        if value:
            allowed = set(value.split(","))
            result = [
                b for b in result if getattr(b, name) and getattr(b, name) in allowed
            ]

    if filters.favorite:
        result = [b for b in result if b.favorite is True]

    return result


def _sort_value(value):
    if isinstance(value, bool):
        # True first
        return (0, not value)
    if isinstance(value, (int, float)):
        return (1, value)
    if isinstance(value, str):
        return (2, collation_key(value))
    return (3, 0)


def sort_books(
    books: Iterable[Book], sort_key: str = "title", descending: bool = False
) -> list[Book]:
    """Stable sort on one field. Missing values always come last.

    An unknown key leaves the order unchanged.
    """
    books = list(books)
    try:
        attr = attr_for(sort_key)
    except KeyError:
        return books

    present = [b for b in books if getattr(b, attr) is not None]
    missing = [b for b in books if getattr(b, attr) is None]
    present.sort(key=lambda b: _sort_value(getattr(b, attr)), reverse=descending)
    return present + missing


def apply(
    books: Iterable[Book],
    filters: Filters,
    sort_key: str = "title",
    descending: bool = False,
) -> list[Book]:
    return sort_books(filter_books(books, filters), sort_key, descending)


def suggestions(books: Iterable[Book], key: str) -> list[str]:
    """Sorted distinct non-empty values of a field, for filter autocomplete."""
    attr = attr_for(key)
    values = {getattr(b, attr) for b in books}
    return sorted((v for v in values if v), key=collation_key)
