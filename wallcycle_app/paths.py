from __future__ import annotations

import os
from pathlib import Path


def _xdg(var: str, fallback: str) -> Path:
    value = os.environ.get(var)
    return Path(value).expanduser() if value else Path.home() / fallback


def cache_root() -> Path:
    return _xdg("XDG_CACHE_HOME", ".cache")


def config_root() -> Path:
    return _xdg("XDG_CONFIG_HOME", ".config")


def wallpaper_dir() -> Path:
    # Override with WALLCYCLE_WALLPAPER_DIR.
    env = os.environ.get("WALLCYCLE_WALLPAPER_DIR")
    if env:
        return Path(env).expanduser()
    return Path.home() / "wallpapers"


def log_file() -> Path:
    # Override with WALLCYCLE_LOG_FILE.
    env = os.environ.get("WALLCYCLE_LOG_FILE")
    if env:
        return Path(env).expanduser()
    return cache_root() / "wallpaper_switcher.log"


def wal_cache_dir() -> Path:
    return cache_root() / "wal"


def dunstrc_path() -> Path:
    return config_root() / "dunst" / "dunstrc"
