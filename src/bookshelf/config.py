"""Configuration management via .env file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from bookshelf.library.covers import MAX_COVER_BYTES

log = logging.getLogger(__name__)


def _xdg_data_home() -> Path:
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def _xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


@dataclass
class AppConfig:
    # Paths
    data_dir: Path = field(default_factory=lambda: _xdg_data_home() / "bookshelf")
    config_dir: Path = field(default_factory=lambda: _xdg_config_home() / "bookshelf")
    export_dir: Path = field(default_factory=Path.home)
    db_path: Path = field(init=False)
    prefs_path: Path = field(init=False)
    log_path: Path = field(init=False)

    # Catalog defaults
    default_sort_key: str = "title"
    max_cover_bytes: int = MAX_COVER_BYTES

    def __post_init__(self) -> None:
        self.db_path = self.data_dir / "bookshelf.db"
        self.prefs_path = self.config_dir / "preferences.json"
        self.log_path = self.data_dir / "bookshelf.log"
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.config_dir.mkdir(parents=True, exist_ok=True)


def _env_path(name: str) -> Optional[Path]:
    value = os.getenv(name)
    return Path(value).expanduser() if value else None


def _env_megabytes(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(float(value) * 1024 * 1024)
    except ValueError:
        log.warning("Ignoring %s=%r, not a number", name, value)
        return default


def load_config(env_path: Optional[Path] = None) -> AppConfig:
    """Load config from .env file. Searches CWD then config dir."""
    search_paths = [
        env_path,
        Path.cwd() / ".env",
        _xdg_config_home() / "bookshelf" / ".env",
        Path.home() / ".env",
    ]
    for p in search_paths:
        if p and p.exists():
            load_dotenv(p)
            break

    overrides: dict = {}
    for name, attr in (
        ("BOOKSHELF_DATA_DIR", "data_dir"),
        ("BOOKSHELF_CONFIG_DIR", "config_dir"),
        ("BOOKSHELF_EXPORT_DIR", "export_dir"),
    ):
        path = _env_path(name)
        if path:
            overrides[attr] = path

    return AppConfig(
        default_sort_key=os.getenv("BOOKSHELF_DEFAULT_SORT", "title"),
        max_cover_bytes=_env_megabytes("BOOKSHELF_MAX_COVER_MB", MAX_COVER_BYTES),
        **overrides,
    )
