"""Dialog for choosing which columns or filters are shown."""

from __future__ import annotations

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Grid, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Checkbox, Label

from bookshelf.library.models import Visibility

COLUMN_LABELS = {
    "favorite": "Favorite",
    "title": "Title",
    "author": "Author",
    "publisher": "Publisher",
    "publishDate": "Published",
    "genre": "Genre",
    "language": "Language",
    "bookType": "Type",
    "readStatus": "Status",
    "dateOfReading": "Date Read",
    "rating": "Rating",
    "actions": "Actions",
}

FILTER_LABELS = {
    "title": "Title",
    "author": "Author",
    "publisher": "Publisher",
    "genre": "Genre",
    "language": "Language",
    "readStatus": "Status",
    "bookType": "Book Type",
    "favorite": "Favorites",
}


class VisibilityScreen(ModalScreen[Visibility | None]):
    """Edits a copy of the map; the caller gets it back only on save."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(
        self, title: str, visibility: Visibility, labels: dict[str, str]
    ) -> None:
        super().__init__()
        self._title = title
        self._visibility = visibility.copy()
        self._labels = labels

    def compose(self) -> ComposeResult:
        with Vertical(id="visibility-dialog"):
            yield Label(self._title, id="visibility-title")
            yield Label("Select items to display:")
            with Grid(id="visibility-grid"):
                for key in self._visibility.KEYS:
                    yield Checkbox(
                        self._labels[key], self._visibility[key], id=f"vis-{key}"
                    )
            with Horizontal(id="visibility-buttons"):
                yield Button("Reset to Default", id="vis-reset")
                yield Button("Cancel", id="vis-cancel")
                yield Button("Save Preferences", variant="primary", id="vis-save")

    @on(Checkbox.Changed)
    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        key = event.checkbox.id.removeprefix("vis-")
        self._visibility.set(key, event.value)

    @on(Button.Pressed, "#vis-reset")
    def on_reset(self) -> None:
        self._visibility.reset()
        for key in self._visibility.KEYS:
            self.query_one(f"#vis-{key}", Checkbox).value = True

    @on(Button.Pressed, "#vis-save")
    def on_save(self) -> None:
        self.dismiss(self._visibility)

    @on(Button.Pressed, "#vis-cancel")
    def on_cancel(self) -> None:
        self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
