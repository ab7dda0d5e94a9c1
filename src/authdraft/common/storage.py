"""Where authdraft keeps files between runs; today that is only the HTTP response cache."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "authdraft"
HTTP_CACHE_FILENAME: Final[str] = "http-cache.sqlite"


def _platform_data_home() -> Path:
    if os.name == "nt":
        local_app_data = os.getenv("LOCALAPPDATA")
        return Path(local_app_data) if local_app_data else Path.home() / "AppData" / "Local"
    xdg_data_home = os.getenv("XDG_DATA_HOME")
    return Path(xdg_data_home) if xdg_data_home else Path.home() / ".local" / "share"


def get_data_dir() -> Path:
    """``AUTHDRAFT_DATA_DIR`` if set, else an ``authdraft`` folder in the platform data home."""

    override = os.getenv("AUTHDRAFT_DATA_DIR")
    data_dir = Path(override) if override else _platform_data_home() / APP_DIR_NAME
    return data_dir.expanduser().resolve()


def ensure_data_dir(path: Path | None = None) -> Path:
    data_dir = path or get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_http_cache_path() -> Path:
    return ensure_data_dir() / HTTP_CACHE_FILENAME
