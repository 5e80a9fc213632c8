"""Tests for filtering and sorting."""

from __future__ import annotations

import copy

import pytest

from bookshelf.library.models import Book, Filters
from bookshelf.library.query import (
    apply,
    collation_key,
    filter_books,
    sort_books,
    suggestions,
)


def _titles(books: list[Book]) -> list[str]:
    return [b.title for b in books]


class TestFilterBooks:
    def test_empty_filters_keep_everything(self, books: list[Book]):
        assert filter_books(books, Filters()) == books

    def test_title_substring_case_insensitive(self, books: list[Book]):
        result = filter_books(books, Filters(title="hOBB"))
        assert _titles(result) == ["The Hobbit"]

    def test_title_terms_are_ored_and_trimmed(self, books: list[Book]):
        result = filter_books(books, Filters(title=" dune , sapiens"))
        assert _titles(result) == ["Sapiens", "Dune"]

    def test_author_missing_never_matches(self):
        books = [Book(title="A", author=None), Book(title="B", author="Ann")]
        assert _titles(filter_books(books, Filters(author="a"))) == ["B"]

    def test_publisher_filter(self, books: list[Book]):
        result = filter_books(books, Filters(publisher="harper"))
        assert _titles(result) == ["Sapiens"]

    def test_genre_exact_membership(self):
        books = [
            Book(title="F", genre="Fiction"),
            Book(title="P", genre="Poetry"),
            Book(title="N", genre="Non-Fiction"),
        ]
        result = filter_books(books, Filters(genre="Fiction,Non-Fiction", title=""))
        assert _titles(result) == ["F", "N"]

    def test_choice_terms_not_trimmed_or_folded(self, books: list[Book]):
        assert filter_books(books, Filters(genre="fiction")) == []
        assert filter_books(books, Filters(genre="Poetry, Fiction")) == [books[2]]

    def test_language_and_status(self, books: list[Book]):
        result = filter_books(books, Filters(language="Ukrainian"))
        assert _titles(result) == ["Кобзар"]
        result = filter_books(books, Filters(read_status="Read,Did not finish"))
        assert _titles(result) == ["The Hobbit", "Кобзар"]

    def test_book_type_missing_never_matches(self, books: list[Book]):
        result = filter_books(books, Filters(book_type="Paper"))
        assert _titles(result) == ["The Hobbit"]

    def test_favorite_only(self, books: list[Book]):
        assert _titles(filter_books(books, Filters(favorite=True))) == ["The Hobbit"]

    def test_fields_are_anded(self, books: list[Book]):
        result = filter_books(books, Filters(genre="Fiction", author="herbert"))
        assert _titles(result) == ["Dune"]

    def test_input_not_mutated(self, books: list[Book]):
        before = copy.deepcopy(books)
        filter_books(books, Filters(title="dune"))
        assert books == before


class TestSortBooks:
    def test_title_ascending(self):
        books = [Book(title="Zoo", rating=None), Book(title="Ant", rating=3)]
        assert _titles(sort_books(books, "title")) == ["Ant", "Zoo"]

    def test_rating_defined_before_missing(self):
        books = [Book(title="Zoo", rating=None), Book(title="Ant", rating=3)]
        assert _titles(sort_books(books, "rating")) == ["Ant", "Zoo"]

    def test_numbers_arithmetic(self):
        books = [Book(title=str(r), rating=r) for r in (5, 0, 3)]
        assert _titles(sort_books(books, "rating")) == ["0", "3", "5"]

    def test_true_before_false(self):
        books = [Book(title="n", favorite=False), Book(title="y", favorite=True)]
        assert _titles(sort_books(books, "favorite")) == ["y", "n"]

    def test_missing_last_in_both_directions(self, books: list[Book]):
        asc = sort_books(books, "rating")
        desc = sort_books(books, "rating", descending=True)
        assert asc[-1].rating is None
        assert desc[-1].rating is None
        assert [b.rating for b in desc[:-1]] == [5, 4, 3]

    def test_stable_for_ties(self):
        a = Book(id=1, title="Same")
        b = Book(id=2, title="Same")
        assert [x.id for x in sort_books([a, b], "title")] == [1, 2]
        assert [x.id for x in sort_books([b, a], "title")] == [2, 1]
        assert [x.id for x in sort_books([b, a], "title", descending=True)] == [2, 1]

    def test_unknown_key_keeps_order(self, books: list[Book]):
        assert sort_books(books, "isbn") == books

    def test_canonical_and_attribute_keys(self, books: list[Book]):
        assert sort_books(books, "readStatus") == sort_books(books, "read_status")

    def test_case_insensitive_then_lower_first(self):
        books = [Book(title=t) for t in ("banana", "Apple", "B", "b")]
        assert _titles(sort_books(books, "title")) == ["Apple", "b", "B", "banana"]

    def test_accents_secondary(self):
        books = [Book(title=t) for t in ("egg", "Éclair", "eat")]
        assert _titles(sort_books(books, "title")) == ["eat", "Éclair", "egg"]

    def test_ukrainian_alphabet(self):
        titles = ["Йогурт", "Їжак", "Іван", "Дім", "Ґава", "Гора", "Ера", "Єнот"]
        result = sort_books([Book(title=t) for t in titles], "title")
        assert _titles(result) == [
            "Гора",
            "Ґава",
            "Дім",
            "Ера",
            "Єнот",
            "Іван",
            "Їжак",
            "Йогурт",
        ]

    def test_yi_is_its_own_letter_after_i(self):
        books = [Book(title="Їжак"), Book(title="Іяр"), Book(title="Йод")]
        assert _titles(sort_books(books, "title")) == ["Іяр", "Їжак", "Йод"]

    def test_latin_before_cyrillic(self, books: list[Book]):
        assert _titles(sort_books(books, "title"))[-1] == "Кобзар"


class TestApply:
    @pytest.mark.parametrize("key", ["title", "rating", "genre", "favorite", "bogus"])
    def test_idempotent(self, books: list[Book], key: str):
        filters = Filters(genre="Fiction,Non-Fiction,Poetry")
        once = apply(books, filters, key)
        assert apply(once, filters, key) == once

    def test_result_is_subset_satisfying_filters(self, books: list[Book]):
        filters = Filters(genre="Fiction", title="e")
        result = apply(books, filters, "title")
        assert all(b in books for b in result)
        assert all(b.genre == "Fiction" and "e" in b.title.lower() for b in result)

    def test_empty_filters_only_reorder(self, books: list[Book]):
        result = apply(books, Filters(), "title")
        assert sorted(b.id for b in result) == sorted(b.id for b in books)
        assert _titles(result) == ["Dune", "Sapiens", "The Hobbit", "Кобзар"]

    def test_default_sort_is_title(self, books: list[Book]):
        assert apply(books, Filters()) == apply(books, Filters(), "title")

    def test_input_list_not_reordered(self, books: list[Book]):
        ids = [b.id for b in books]
        apply(books, Filters(), "title")
        assert [b.id for b in books] == ids


class TestSuggestions:
    def test_distinct_sorted_non_empty(self):
        books = [
            Book(title="A", author="Zed"),
            Book(title="B", author="amy"),
            Book(title="C", author="Zed"),
            Book(title="D", author=None),
            Book(title="E", author=""),
        ]
        assert suggestions(books, "author") == ["amy", "Zed"]


class TestCollationKey:
    def test_equal_strings_equal_keys(self):
        assert collation_key("Кобзар") == collation_key("Кобзар")

    def test_prefix_sorts_first(self):
        assert collation_key("Ant") < collation_key("Anthem")
