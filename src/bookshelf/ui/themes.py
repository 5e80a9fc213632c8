"""Textual CSS for bookshelf."""

APP_CSS = """
/* ── Global ────────────────────────────────── */
Screen {
    background: $surface;
}

/* ── Library Screen ────────────────────────── */
#library-header {
    dock: top;
    height: 3;
    padding: 1 2;
    background: $primary;
    color: $text;
    text-style: bold;
}

#filter-bar {
    height: auto;
    padding: 0 1;
    background: $surface-darken-1;
}

.filter-input {
    width: 1fr;
}

#filter-favorite {
    width: auto;
}

#book-table {
    height: 1fr;
}

/* ── Confirm delete ────────────────────────── */
ConfirmDeleteScreen {
    align: center middle;
}

#confirm-delete-dialog {
    width: 60;
    height: 9;
    background: $surface;
    border: solid $error;
    padding: 1 2;
}

#confirm-delete-msg {
    text-align: center;
    margin: 1 0;
}

#confirm-delete-buttons {
    align: center middle;
    height: 3;
}

#confirm-delete-buttons Button {
    margin: 0 2;
}

/* ── Book form ─────────────────────────────── */
BookFormScreen {
    align: center middle;
}

#book-form-dialog {
    width: 80%;
    height: 90%;
    background: $surface;
    border: solid $primary;
    padding: 1 2;
}

#book-form-title {
    text-style: bold;
    margin-bottom: 1;
}

#f-comment {
    height: 5;
}

.form-buttons {
    height: 3;
    margin-top: 1;
}

.form-buttons Button {
    margin: 0 1;
}

/* ── File picker ───────────────────────────── */
FilePickerScreen {
    align: center middle;
}

#file-picker-dialog {
    width: 80%;
    height: 80%;
    background: $surface;
    border: solid $primary;
    padding: 1 2;
}

#file-picker-title {
    text-align: center;
    text-style: bold;
    margin-bottom: 1;
}

#file-tree {
    height: 1fr;
    margin-bottom: 1;
}

#file-picker-buttons {
    align: center middle;
    height: 3;
}

/* ── Visibility dialog ─────────────────────── */
VisibilityScreen {
    align: center middle;
}

#visibility-dialog {
    width: 64;
    height: auto;
    background: $surface;
    border: solid $primary;
    padding: 1 2;
}

#visibility-title {
    text-style: bold;
    margin-bottom: 1;
}

#visibility-grid {
    grid-size: 2;
    height: auto;
    margin: 1 0;
}

#visibility-buttons {
    align: center middle;
    height: 3;
}

#visibility-buttons Button {
    margin: 0 1;
}
"""
