from __future__ import annotations

import random
from pathlib import Path

from .errors import NoWallpapersFound


IMAGE_SUFFIXES: frozenset[str] = frozenset(
    {
        ".jpg",
        ".jpeg",
        ".png",
    }
)


def list_images(directory: Path) -> list[Path]:
    """Return image files anywhere below directory, sorted by path."""

    if not directory.is_dir():
        return []

    images: list[Path] = []
    for child in directory.rglob("*"):
        if child.suffix.lower() not in IMAGE_SUFFIXES:
            continue
        if not child.is_file():
            continue
        images.append(child)

    return sorted(images)


def pick_random_wallpaper(
    directory: Path, rng: random.Random | None = None
) -> Path:
    images = list_images(directory)
    if not images:
        raise NoWallpapersFound(f"No wallpapers found in '{directory}'.")
    return (rng or random).choice(images)
