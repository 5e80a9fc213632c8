from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen, Screen
from textual.suggester import SuggestFromList
from textual.widgets import (
    Button,
    Checkbox,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Static,
)

from bookshelf.library.database import StoreError
from bookshelf.library.models import FILTER_KEYS, Book, ValidationError
from bookshelf.library.query import TEXT_FILTERS
from bookshelf.ui.screens.book_form_screen import BookFormScreen
from bookshelf.ui.screens.visibility_screen import (
    COLUMN_LABELS,
    FILTER_LABELS,
    VisibilityScreen,
)

if TYPE_CHECKING:
    from bookshelf.app import BookshelfApp
    from bookshelf.library.catalog import Catalog

log = logging.getLogger(__name__)

SORT_OPTIONS = [
    ("title", "Title"),
    ("author", "Author"),
    ("publisher", "Publisher"),
    ("publishDate", "Published"),
    ("genre", "Genre"),
    ("language", "Language"),
    ("bookType", "Type"),
    ("readStatus", "Status"),
    ("dateOfReading", "Date Read"),
    ("rating", "Rating"),
    ("favorite", "Favorite"),
]

FILTER_PLACEHOLDERS = {
    "title": "Title...",
    "author": "Author...",
    "publisher": "Publisher...",
    "genre": "Fiction,Non-Fiction",
    "language": "English,Ukrainian",
    "readStatus": "Read,Unread,Did not finish",
    "bookType": "Paper,E-book,Audiobook",
}


def _cell(key: str, book: Book) -> str:
    value = book.value(key)
    if key == "favorite":
        return "★" if value else "☆"
    if key == "rating":
        return "★" * value if value else ""
    return "" if value is None else str(value)


class ConfirmDeleteScreen(ModalScreen[bool]):
    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("y", "confirm", "Yes"),
        Binding("n", "cancel", "No"),
    ]

    def __init__(self, book_title: str) -> None:
        super().__init__()
        self._book_title = book_title

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-delete-dialog"):
            yield Label(
                f'Delete "{self._book_title}" from the collection?',
                id="confirm-delete-msg",
            )
            with Horizontal(id="confirm-delete-buttons"):
                yield Button("Delete (y)", variant="error", id="cd-yes")
                yield Button("Cancel (n)", variant="default", id="cd-no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "cd-yes")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class LibraryScreen(Screen):
    BINDINGS = [
        Binding("A", "add_book", "Add"),
        Binding("E", "edit_book", "Edit"),
        Binding("D", "delete_book", "Delete"),
        Binding("F", "toggle_favorite", "Favorite"),
        Binding("s", "cycle_sort", "Sort"),
        Binding("r", "reverse_sort", "Reverse"),
        Binding("X", "export_csv", "Export CSV"),
        Binding("C", "clear_filters", "Clear filters"),
        Binding("L", "customize_columns", "Columns"),
        Binding("K", "customize_filters", "Filters"),
        Binding("T", "toggle_theme", "Theme"),
        Binding("q", "quit_app", "Quit"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._sort_index = 0

    @property
    def bs(self) -> BookshelfApp:
        return self.app  # type: ignore[return-value]

    @property
    def catalog(self) -> Catalog:
        return self.bs.catalog

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="library-header")
        with Horizontal(id="filter-bar"):
            yield from self._filter_widgets()
        yield DataTable(id="book-table")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#book-table", DataTable)
        table.cursor_type = "row"
        try:
            self.catalog.load()
        except StoreError as e:
            log.exception("Loading books failed")
            self.notify(f"Failed to load books: {e}", severity="error")
        sort_keys = [key for key, _ in SORT_OPTIONS]
        if self.catalog.sort_key in sort_keys:
            self._sort_index = sort_keys.index(self.catalog.sort_key)
        else:
            log.warning(
                "Unknown sort key %r, sorting by title", self.catalog.sort_key
            )
            self.catalog.set_sort("title", self.catalog.descending)
        self._apply_filter_visibility()
        self._refresh_suggestions()
        self._refresh_books()
        table.focus()

    # ── Rendering ───────────────────────────────

    def _filter_widgets(self):
        for key in FILTER_KEYS:
            if key == "favorite":
                yield Checkbox(FILTER_LABELS[key], id=f"filter-{key}")
            else:
                yield Input(
                    placeholder=FILTER_PLACEHOLDERS[key],
                    id=f"filter-{key}",
                    classes="filter-input",
                )

    def _apply_filter_visibility(self) -> None:
        visibility = self.catalog.filter_visibility
        for key in FILTER_KEYS:
            self.query_one(f"#filter-{key}").display = visibility[key]

    def _refresh_suggestions(self) -> None:
        for key in TEXT_FILTERS:
            self.query_one(f"#filter-{key}", Input).suggester = SuggestFromList(
                self.catalog.suggestions(key), case_sensitive=False
            )

    def _refresh_books(self) -> None:
        table = self.query_one("#book-table", DataTable)
        table.clear(columns=True)

        columns = [
            k for k in self.catalog.column_visibility.visible_keys() if k != "actions"
        ]
        table.add_columns(*(COLUMN_LABELS[k] for k in columns))

        books = self.catalog.visible_books
        for book in books:
            table.add_row(*(_cell(k, book) for k in columns), key=str(book.id))

        sort_label = SORT_OPTIONS[self._sort_index][1]
        direction = "desc" if self.catalog.descending else "asc"
        shown = len(books)
        total = len(self.catalog.books)
        filtered = "  (filtered)" if self.catalog.filters.is_active else ""
        self.query_one("#library-header", Static).update(
            f" My Book Collection  ({shown} of {total} books){filtered}"
            f"  Sort: {sort_label} {direction}"
        )

    def _selected_book(self) -> Optional[Book]:
        table = self.query_one("#book-table", DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return self.catalog.get(int(row_key.value))

    # ── Filters ─────────────────────────────────

    @on(Input.Changed, ".filter-input")
    def on_filter_changed(self, event: Input.Changed) -> None:
        key = event.input.id.removeprefix("filter-")
        self.catalog.set_filter(key, event.value)
        self._refresh_books()

    @on(Checkbox.Changed, "#filter-favorite")
    def on_favorite_filter_changed(self, event: Checkbox.Changed) -> None:
        self.catalog.set_filter("favorite", event.value)
        self._refresh_books()

    def action_clear_filters(self) -> None:
        self.catalog.clear_filters()
        for inp in self.query(".filter-input").results(Input):
            inp.value = ""
        self.query_one("#filter-favorite", Checkbox).value = False
        self._refresh_books()

    # ── Add / Edit ──────────────────────────────

    def action_add_book(self) -> None:
        self.app.push_screen(
            BookFormScreen(max_cover_bytes=self.bs.config.max_cover_bytes),
            callback=self._on_book_saved,
        )

    def action_edit_book(self) -> None:
        book = self._selected_book()
        if not book:
            return
        self.app.push_screen(
            BookFormScreen(book, max_cover_bytes=self.bs.config.max_cover_bytes),
            callback=self._on_book_saved,
        )

    @on(DataTable.RowSelected, "#book-table")
    def on_row_selected(self, event: DataTable.RowSelected) -> None:
        self.action_edit_book()

    def _on_book_saved(self, book: Optional[Book]) -> None:
        if book is None:
            return
        is_new = book.id is None
        try:
            self.catalog.save_book(book)
        except (ValidationError, StoreError, ValueError) as e:
            log.exception("Saving book failed")
            self.notify(f"Failed to save book: {e}", severity="error")
            return
        self._refresh_books()
        self._refresh_suggestions()
        self.notify(
            "Book added successfully" if is_new else "Book updated successfully"
        )

    # ── Delete / Favorite ───────────────────────

    def action_delete_book(self) -> None:
        book = self._selected_book()
        if not book:
            return
        self.app.push_screen(
            ConfirmDeleteScreen(book.title),
            callback=lambda confirmed: self._on_delete_confirmed(confirmed, book.id),
        )

    def _on_delete_confirmed(self, confirmed: bool | None, book_id: int) -> None:
        if not confirmed:
            return
        try:
            self.catalog.delete_book(book_id)
        except StoreError as e:
            log.exception("Deleting book %s failed", book_id)
            self.notify(f"Failed to delete book: {e}", severity="error")
            return
        self._refresh_books()
        self._refresh_suggestions()
        self.notify("Book deleted successfully")

    def action_toggle_favorite(self) -> None:
        book = self._selected_book()
        if not book:
            return
        try:
            updated = self.catalog.toggle_favorite(book)
        except StoreError as e:
            log.exception("Updating favorite for book %s failed", book.id)
            self.notify(f"Failed to update favorite status: {e}", severity="error")
            return
        self._refresh_books()
        self.notify(
            "Added to favorites" if updated.favorite else "Removed from favorites"
        )

    # ── Sort ────────────────────────────────────

    def action_cycle_sort(self) -> None:
        self._sort_index = (self._sort_index + 1) % len(SORT_OPTIONS)
        self.catalog.set_sort(SORT_OPTIONS[self._sort_index][0])
        self._refresh_books()

    def action_reverse_sort(self) -> None:
        self.catalog.set_sort(self.catalog.sort_key, not self.catalog.descending)
        self._refresh_books()

    # ── Export ──────────────────────────────────

    def action_export_csv(self) -> None:
        try:
            path = self.catalog.export_csv()
        except OSError as e:
            log.exception("CSV export failed")
            self.notify(f"Failed to export CSV: {e}", severity="error")
            return
        self.notify(f"CSV file exported successfully: {path}")

    # ── Customization ───────────────────────────

    def action_customize_columns(self) -> None:
        self.app.push_screen(
            VisibilityScreen(
                "Customize Columns", self.catalog.column_visibility, COLUMN_LABELS
            ),
            callback=self._on_columns_saved,
        )

    def _on_columns_saved(self, visibility) -> None:
        if visibility is None:
            return
        try:
            self.catalog.save_column_visibility(visibility)
        except OSError as e:
            log.exception("Saving column visibility failed")
            self.notify(f"Failed to save columns: {e}", severity="error")
        self._refresh_books()

    def action_customize_filters(self) -> None:
        self.app.push_screen(
            VisibilityScreen(
                "Customize Filters", self.catalog.filter_visibility, FILTER_LABELS
            ),
            callback=self._on_filters_saved,
        )

    def _on_filters_saved(self, visibility) -> None:
        if visibility is None:
            return
        try:
            self.catalog.save_filter_visibility(visibility)
        except OSError as e:
            log.exception("Saving filter visibility failed")
            self.notify(f"Failed to save filters: {e}", severity="error")
        self._apply_filter_visibility()

    def action_toggle_theme(self) -> None:
        self.bs.action_toggle_theme()

    def action_quit_app(self) -> None:
        self.app.exit()
