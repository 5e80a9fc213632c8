"""Shared fixtures for tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from bookshelf.config import AppConfig
from bookshelf.library.catalog import Catalog
from bookshelf.library.database import Database
from bookshelf.library.models import Book
from bookshelf.library.preferences import PreferenceStore


@pytest.fixture
def db(tmp_path: Path) -> Database:
    db_path = tmp_path / "test.db"
    database = Database(db_path)
    yield database
    database.close()


@pytest.fixture
def prefs(tmp_path: Path) -> PreferenceStore:
    return PreferenceStore(tmp_path / "prefs" / "preferences.json")


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        data_dir=tmp_path / "data",
        config_dir=tmp_path / "config",
        export_dir=tmp_path / "export",
    )


@pytest.fixture
def catalog(db: Database, prefs: PreferenceStore, tmp_path: Path) -> Catalog:
    return Catalog(db, prefs, export_dir=tmp_path / "export")


@pytest.fixture
def books() -> list[Book]:
    return [
        Book(
            id=1,
            title="The Hobbit",
            author="J. R. R. Tolkien",
            publisher="Allen & Unwin",
            genre="Fiction",
            read_status="Read",
            rating=5,
            favorite=True,
        ),
        Book(
            id=2,
            title="Sapiens",
            author="Yuval Noah Harari",
            publisher="Harper",
            genre="Non-Fiction",
            book_type="E-book",
            rating=4,
        ),
        Book(
            id=3,
            title="Кобзар",
            author="Тарас Шевченко",
            genre="Poetry",
            language="Ukrainian",
            read_status="Did not finish",
            book_type="Audiobook",
        ),
        Book(
            id=4,
            title="Dune",
            author="Frank Herbert",
            genre="Fiction",
            book_type=None,
            rating=3,
        ),
    ]
