"""Bookshelf - personal library catalog."""

from __future__ import annotations

import logging

from textual.app import App

from bookshelf.config import AppConfig, load_config
from bookshelf.library.catalog import Catalog
from bookshelf.library.database import Database
from bookshelf.library.preferences import PreferenceStore
from bookshelf.ui.screens.library_screen import LibraryScreen
from bookshelf.ui.themes import APP_CSS

log = logging.getLogger(__name__)

TEXTUAL_THEMES = {
    "light": "textual-light",
    "dark": "textual-dark",
}


class BookshelfApp(App):
    """Catalog of the books you own or have read."""

    TITLE = "Bookshelf"
    CSS = APP_CSS

    def __init__(self, config: AppConfig | None = None) -> None:
        super().__init__()
        self.config = config or load_config()
        self.db = Database(self.config.db_path)
        self.prefs = PreferenceStore(self.config.prefs_path)
        self.catalog = Catalog(
            self.db,
            self.prefs,
            export_dir=self.config.export_dir,
            sort_key=self.config.default_sort_key,
        )

    def on_mount(self) -> None:
        self._apply_theme()
        self.push_screen(LibraryScreen())

    def _apply_theme(self) -> None:
        self.theme = TEXTUAL_THEMES[self.catalog.theme]

    def action_toggle_theme(self) -> None:
        try:
            self.catalog.toggle_theme()
        except OSError as e:
            log.exception("Saving theme failed")
            self.notify(f"Failed to save theme: {e}", severity="error")
        self._apply_theme()

    def on_unmount(self) -> None:
        self.db.close()


def _setup_logging(config: AppConfig) -> None:
    handler = logging.FileHandler(config.log_path, encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    root = logging.getLogger("bookshelf")
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)


def main() -> None:
    config = load_config()
    _setup_logging(config)

    app = BookshelfApp(config=config)
    app.run()


if __name__ == "__main__":
    main()
