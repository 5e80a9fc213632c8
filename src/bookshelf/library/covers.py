"""Cover image intake: accept an image file or say why it was refused."""

from __future__ import annotations

import base64
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Union

log = logging.getLogger(__name__)

MAX_COVER_BYTES = 5 * 1024 * 1024

IMAGE_EXTENSIONS = {
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".webp",
    ".bmp",
    ".svg",
}


@dataclass(frozen=True)
class Selected:
    data: bytes
    mime_type: str

    def to_data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


@dataclass(frozen=True)
class Rejected:
    reason: str


CoverUpload = Union[Selected, Rejected]


def _too_large(max_bytes: int) -> Rejected:
    return Rejected(f"Image must be smaller than {max_bytes / 1024 / 1024:g}MB!")


def check_cover(
    data: bytes, mime_type: str, max_bytes: int = MAX_COVER_BYTES
) -> CoverUpload:
    if not mime_type or not mime_type.startswith("image/"):
        return Rejected("You can only upload image files!")
    if len(data) >= max_bytes:
        return _too_large(max_bytes)
    return Selected(data=data, mime_type=mime_type)


def load_cover(path: Path, max_bytes: int = MAX_COVER_BYTES) -> CoverUpload:
    """Read an image file from disk as a cover candidate."""
    path = Path(path).expanduser()
    if not path.is_file():
        return Rejected(f"File not found: {path}")

    mime_type, _ = mimetypes.guess_type(path.name)
    if not mime_type or not mime_type.startswith("image/"):
        outcome = Rejected("You can only upload image files!")
    elif path.stat().st_size >= max_bytes:
        outcome = _too_large(max_bytes)
    else:
        outcome = check_cover(path.read_bytes(), mime_type, max_bytes)

    if isinstance(outcome, Rejected):
        log.warning("Cover rejected (%s): %s", path, outcome.reason)
    return outcome
