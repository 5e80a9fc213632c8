"""Tests for cover image intake."""

from __future__ import annotations

import base64
from pathlib import Path

from bookshelf.library.covers import (
    MAX_COVER_BYTES,
    Rejected,
    Selected,
    check_cover,
    load_cover,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\0" * 16


class TestCheckCover:
    def test_accepts_image(self):
        outcome = check_cover(PNG_BYTES, "image/png")
        assert outcome == Selected(data=PNG_BYTES, mime_type="image/png")

    def test_rejects_non_image(self):
        outcome = check_cover(b"%PDF", "application/pdf")
        assert outcome == Rejected("You can only upload image files!")

    def test_rejects_missing_type(self):
        assert isinstance(check_cover(PNG_BYTES, ""), Rejected)

    def test_limit_is_exclusive(self):
        just_under = b"\0" * (MAX_COVER_BYTES - 1)
        assert isinstance(check_cover(just_under, "image/jpeg"), Selected)
        at_limit = b"\0" * MAX_COVER_BYTES
        outcome = check_cover(at_limit, "image/jpeg")
        assert outcome == Rejected("Image must be smaller than 5MB!")

    def test_custom_limit(self):
        outcome = check_cover(b"\0" * 10, "image/gif", max_bytes=10)
        assert isinstance(outcome, Rejected)

    def test_data_uri(self):
        uri = Selected(data=b"abc", mime_type="image/png").to_data_uri()
        assert uri == "data:image/png;base64," + base64.b64encode(b"abc").decode()


class TestLoadCover:
    def test_loads_png(self, tmp_path: Path):
        path = tmp_path / "cover.png"
        path.write_bytes(PNG_BYTES)
        outcome = load_cover(path)
        assert isinstance(outcome, Selected)
        assert outcome.mime_type == "image/png"
        assert outcome.data == PNG_BYTES

    def test_missing_file(self, tmp_path: Path):
        outcome = load_cover(tmp_path / "nope.png")
        assert isinstance(outcome, Rejected)
        assert "not found" in outcome.reason

    def test_non_image_extension(self, tmp_path: Path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        assert load_cover(path) == Rejected("You can only upload image files!")

    def test_too_large_file(self, tmp_path: Path):
        path = tmp_path / "big.jpg"
        path.write_bytes(b"\0" * 2048)
        outcome = load_cover(path, max_bytes=1024)
        assert isinstance(outcome, Rejected)
        assert "smaller than" in outcome.reason
