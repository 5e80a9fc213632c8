from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import (
    Button,
    Checkbox,
    DirectoryTree,
    Input,
    Label,
    Select,
    TextArea,
)

from bookshelf.library.covers import (
    IMAGE_EXTENSIONS,
    MAX_COVER_BYTES,
    Rejected,
    load_cover,
)
from bookshelf.library.models import (
    BOOK_TYPES,
    LANGUAGES,
    READ_STATUSES,
    Book,
    ValidationError,
    validate_book,
)


class ImageDirectoryTree(DirectoryTree):
    def filter_paths(self, paths: Iterable[Path]) -> Iterable[Path]:
        return sorted(
            [p for p in paths if p.is_dir() or p.suffix.lower() in IMAGE_EXTENSIONS],
            key=lambda p: (not p.is_dir(), p.name.lower()),
        )


class FilePickerScreen(ModalScreen[str | None]):
    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, start_path: str = "~") -> None:
        super().__init__()
        self._start = str(Path(start_path).expanduser().resolve())

    def compose(self) -> ComposeResult:
        with Vertical(id="file-picker-dialog"):
            yield Label("Select a cover image", id="file-picker-title")
            yield ImageDirectoryTree(self._start, id="file-tree")
            with Horizontal(id="file-picker-buttons"):
                yield Button("Cancel [Esc]", variant="default", id="fp-cancel")

    def on_mount(self) -> None:
        self.query_one("#file-tree", ImageDirectoryTree).focus()

    @on(DirectoryTree.FileSelected)
    def on_file_selected(self, event: DirectoryTree.FileSelected) -> None:
        self.dismiss(str(event.path))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "fp-cancel":
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


def _blank_to_none(value: str) -> Optional[str]:
    value = value.strip()
    return value or None


class BookFormScreen(ModalScreen[Optional[Book]]):
    """Add or edit one book. Dismisses with the draft, or None on cancel."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+s", "save", "Save"),
    ]

    def __init__(
        self, book: Optional[Book] = None, max_cover_bytes: int = MAX_COVER_BYTES
    ) -> None:
        super().__init__()
        self._book = book
        self._max_cover_bytes = max_cover_bytes
        self._cover_image = book.cover_image if book else None
        self._favorite = book.favorite if book else False

    def compose(self) -> ComposeResult:
        book = self._book or Book(title="")
        heading = "Edit Book" if book.id is not None else "Add New Book"
        languages = list(LANGUAGES)
        if book.language not in languages:
            languages.append(book.language)

        with VerticalScroll(id="book-form-dialog"):
            yield Label(heading, id="book-form-title")
            yield Label("Title *")
            yield Input(book.title, placeholder="Book title", id="f-title")
            yield Label("Author")
            yield Input(book.author or "", placeholder="Author", id="f-author")
            yield Label("Publisher")
            yield Input(
                book.publisher or "", placeholder="Publisher", id="f-publisher"
            )
            yield Label("Publish date")
            yield Input(
                book.publish_date or "", placeholder="e.g. 1999", id="f-publish-date"
            )
            yield Label("Genre")
            yield Input(book.genre or "", placeholder="Fiction", id="f-genre")
            yield Label("Language *")
            yield Select(
                [(lang, lang) for lang in languages],
                value=book.language,
                allow_blank=False,
                id="f-language",
            )
            yield Label("Reading status *")
            yield Select(
                [(status, status) for status in READ_STATUSES],
                value=book.read_status,
                allow_blank=False,
                id="f-read-status",
            )
            yield Label("Book type")
            yield Select(
                [(kind, kind) for kind in BOOK_TYPES],
                value=book.book_type if book.book_type else Select.BLANK,
                id="f-book-type",
            )
            yield Label("Date of reading")
            yield Input(
                book.date_of_reading or "",
                placeholder="YYYY-MM-DD",
                id="f-date-of-reading",
            )
            yield Label("Rating (0-5)")
            yield Input(
                "" if book.rating is None else str(book.rating),
                placeholder="0-5",
                restrict=r"[0-5]?",
                id="f-rating",
            )
            yield Checkbox("Favorite", self._favorite, id="f-favorite")
            yield Label("Comment")
            yield TextArea(book.comment or "", id="f-comment")
            yield Label(self._cover_status(), id="f-cover-status")
            with Horizontal(classes="form-buttons"):
                yield Button("Choose cover", id="f-cover-pick")
                yield Button("Remove cover", id="f-cover-remove")
            with Horizontal(classes="form-buttons"):
                yield Button("Cancel", id="f-cancel")
                yield Button("Save", variant="primary", id="f-save")

    def on_mount(self) -> None:
        self.query_one("#f-title", Input).focus()

    def _cover_status(self) -> str:
        return "Cover: set" if self._cover_image else "Cover: none"

    # ── Cover ───────────────────────────────────

    @on(Button.Pressed, "#f-cover-pick")
    def on_cover_pick(self) -> None:
        self.app.push_screen(FilePickerScreen("~"), callback=self._on_cover_picked)

    def _on_cover_picked(self, result: str | None) -> None:
        if not result:
            return
        outcome = load_cover(Path(result), self._max_cover_bytes)
        if isinstance(outcome, Rejected):
            self.notify(outcome.reason, severity="warning")
            return
        self._cover_image = outcome.to_data_uri()
        self.query_one("#f-cover-status", Label).update(self._cover_status())

    @on(Button.Pressed, "#f-cover-remove")
    def on_cover_remove(self) -> None:
        self._cover_image = None
        self.query_one("#f-cover-status", Label).update(self._cover_status())

    # ── Save / Cancel ───────────────────────────

    def _collect(self) -> Book:
        def text(widget_id: str) -> Optional[str]:
            return _blank_to_none(self.query_one(widget_id, Input).value)

        book_type = self.query_one("#f-book-type", Select).value
        rating = text("#f-rating")
        return Book(
            id=self._book.id if self._book else None,
            title=self.query_one("#f-title", Input).value.strip(),
            author=text("#f-author"),
            publisher=text("#f-publisher"),
            publish_date=text("#f-publish-date"),
            genre=text("#f-genre"),
            language=str(self.query_one("#f-language", Select).value),
            read_status=str(self.query_one("#f-read-status", Select).value),
            book_type=book_type if isinstance(book_type, str) else None,
            date_of_reading=text("#f-date-of-reading") or "",
            rating=int(rating) if rating is not None else None,
            comment=_blank_to_none(self.query_one("#f-comment", TextArea).text),
            cover_image=self._cover_image,
            favorite=self.query_one("#f-favorite", Checkbox).value,
        )

    def action_save(self) -> None:
        book = self._collect()
        try:
            validate_book(book)
        except ValidationError as e:
            self.notify(str(e), severity="error")
            return
        self.dismiss(book)

    @on(Button.Pressed, "#f-save")
    def on_save(self) -> None:
        self.action_save()

    @on(Button.Pressed, "#f-cancel")
    def on_cancel(self) -> None:
        self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
