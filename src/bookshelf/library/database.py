"""SQLite store for the book catalog."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Optional

from .models import Book

log = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS books (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    author TEXT,
    genre TEXT,
    publisher TEXT,
    publish_date TEXT,
    comment TEXT,
    cover_image TEXT,
    language TEXT NOT NULL DEFAULT 'English',
    read_status TEXT NOT NULL DEFAULT 'Unread',
    book_type TEXT DEFAULT 'Paper',
    date_of_reading TEXT,
    rating INTEGER,
    favorite INTEGER NOT NULL DEFAULT 0
);

CREATE INDEX IF NOT EXISTS idx_books_title ON books(title);
CREATE INDEX IF NOT EXISTS idx_books_author ON books(author);
CREATE INDEX IF NOT EXISTS idx_books_genre ON books(genre);
CREATE INDEX IF NOT EXISTS idx_books_language ON books(language);
CREATE INDEX IF NOT EXISTS idx_books_read_status ON books(read_status);
CREATE INDEX IF NOT EXISTS idx_books_book_type ON books(book_type);
CREATE INDEX IF NOT EXISTS idx_books_favorite ON books(favorite);
"""

_COLUMNS = (
    "title",
    "author",
    "genre",
    "publisher",
    "publish_date",
    "comment",
    "cover_image",
    "language",
    "read_status",
    "book_type",
    "date_of_reading",
    "rating",
    "favorite",
)


class StoreError(Exception):
    """A catalog store operation failed."""


class BookNotFoundError(StoreError, LookupError):
    def __init__(self, book_id: int) -> None:
        super().__init__(f"No book with id {book_id}")
        self.book_id = book_id


class Database:
    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._init_schema()

    def _init_schema(self) -> None:
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        try:
            cur = self._conn.execute(sql, params)
            self._conn.commit()
            return cur
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

    def _query(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        try:
            return self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

    def add_book(self, book: Book) -> int:
        """Insert a new book and return its assigned id. Any draft id is ignored."""
        placeholders = ", ".join("?" for _ in _COLUMNS)
        cur = self._execute(
            f"INSERT INTO books ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
            self._book_values(book),
        )
        book_id = cur.lastrowid
        log.info("Added book %d: %s", book_id, book.title)
        return book_id

    def update_book(self, book: Book) -> int:
        if book.id is None:
            raise ValueError("Book ID is required for update")
        assignments = ", ".join(f"{c} = ?" for c in _COLUMNS)
        cur = self._execute(
            f"UPDATE books SET {assignments} WHERE id = ?",
            self._book_values(book) + (book.id,),
        )
        if cur.rowcount == 0:
            raise BookNotFoundError(book.id)
        log.info("Updated book %d: %s", book.id, book.title)
        return book.id

    def delete_book(self, book_id: int) -> None:
        self._execute("DELETE FROM books WHERE id = ?", (book_id,))
        log.info("Deleted book %d", book_id)

    def get_book(self, book_id: int) -> Optional[Book]:
        rows = self._query("SELECT * FROM books WHERE id = ?", (book_id,))
        return self._row_to_book(rows[0]) if rows else None

    def list_books(self) -> list[Book]:
        rows = self._query("SELECT * FROM books ORDER BY id")
        return [self._row_to_book(r) for r in rows]

    @staticmethod
    def _book_values(book: Book) -> tuple:
        return (
            book.title,
            book.author,
            book.genre,
            book.publisher,
            book.publish_date,
            book.comment,
            book.cover_image,
            book.language,
            book.read_status,
            book.book_type,
            book.date_of_reading,
            book.rating,
            int(bool(book.favorite)),
        )

    @staticmethod
    def _row_to_book(row: sqlite3.Row) -> Book:
        return Book(
            id=row["id"],
            title=row["title"],
            author=row["author"],
            genre=row["genre"],
            publisher=row["publisher"],
            publish_date=row["publish_date"],
            comment=row["comment"],
            cover_image=row["cover_image"],
            language=row["language"],
            read_status=row["read_status"],
            book_type=row["book_type"],
            date_of_reading=row["date_of_reading"],
            rating=row["rating"],
            favorite=bool(row["favorite"]),
        )
