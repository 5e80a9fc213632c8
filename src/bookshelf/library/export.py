"""CSV export of the visible catalog rows."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from .models import Book, ColumnVisibility

log = logging.getLogger(__name__)

EXPORT_FILENAME = "books.csv"

# UI-only columns, never exported
NON_EXPORTED = ("actions", "favorite")


def export_columns(visibility: ColumnVisibility) -> list[str]:
    return [k for k in visibility.visible_keys() if k not in NON_EXPORTED]


def column_header(key: str) -> str:
    """``publishDate`` -> ``Publish Date``."""
    spaced = re.sub(r"([A-Z])", r" \1", key)
    return spaced[:1].upper() + spaced[1:]


def _cell(key: str, value) -> str:
    if key == "rating":
        return str(value) if value is not None else "0"
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    text = str(value)
    if "," in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def to_csv(books: Iterable[Book], visibility: ColumnVisibility) -> str:
    """Render books as CSV in their given order. Only ``,`` triggers quoting."""
    columns = export_columns(visibility)
    lines = [",".join(column_header(c) for c in columns)]
    for book in books:
        lines.append(",".join(_cell(c, book.value(c)) for c in columns))
    return "\n".join(lines) + "\n"


def write_csv(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8"))
    log.info("Exported %d rows to %s", text.count("\n") - 1, path)
    return path
