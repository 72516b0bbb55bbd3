from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from . import commands
from .errors import CommandFailed, ThemeApplyFailed


WAL_TIMEOUT_S = 120.0


@dataclass(frozen=True)
class ColorScheme:
    background: str
    foreground: str
    colors: dict[str, str] = field(default_factory=dict)

    def variables(self) -> dict[str, str]:
        """Names usable in notifier color rules: background, foreground, colorN."""

        out = dict(self.colors)
        out["background"] = self.background
        out["foreground"] = self.foreground
        return out


def load_colors(path: Path) -> ColorScheme | None:
    """Load pywal's colors.json. Returns None when the file does not exist."""

    if not path.exists():
        return None

    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")

    special = data.get("special")
    colors = data.get("colors")
    if not isinstance(special, dict) or not isinstance(colors, dict):
        raise ValueError(f"{path}: missing 'special' or 'colors'")

    background = special.get("background")
    foreground = special.get("foreground")
    if not isinstance(background, str) or not isinstance(foreground, str):
        raise ValueError(f"{path}: missing background/foreground")

    return ColorScheme(
        background=background,
        foreground=foreground,
        colors={
            k: v
            for k, v in colors.items()
            if isinstance(k, str) and isinstance(v, str)
        },
    )


class PywalThemeEngine:
    def __init__(self, cache_dir: Path, *, timeout: float = WAL_TIMEOUT_S):
        self.cache_dir = cache_dir
        self._timeout = timeout

    @property
    def colors_path(self) -> Path:
        return self.cache_dir / "colors.json"

    def apply(self, image: Path) -> None:
        # -q quiet, -n skip setting the wallpaper (swww does that later).
        try:
            commands.run(["wal", "-q", "-n", "-i", str(image)], timeout=self._timeout)
        except CommandFailed as e:
            raise ThemeApplyFailed(
                f"pywal failed to apply colors for '{image}': {e}"
            ) from e

    def colors(self) -> ColorScheme | None:
        return load_colors(self.colors_path)
