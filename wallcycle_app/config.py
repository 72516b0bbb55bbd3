from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from . import paths
from .transition import TransitionSettings


DEFAULT_INTERVAL_MINUTES = 15

COMPOSITORS = ("hyprland", "qt")


@dataclass(frozen=True)
class Config:
    wallpaper_dir: Path
    log_file: Path
    wal_cache_dir: Path
    dunstrc: Path
    interval_minutes: int = DEFAULT_INTERVAL_MINUTES
    notifications: bool = True
    daemon: bool = False
    compositor: str = "hyprland"
    transition: TransitionSettings = field(default_factory=TransitionSettings)

    @classmethod
    def defaults(cls) -> "Config":
        return cls(
            wallpaper_dir=paths.wallpaper_dir(),
            log_file=paths.log_file(),
            wal_cache_dir=paths.wal_cache_dir(),
            dunstrc=paths.dunstrc_path(),
        )


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"ERROR: {message}\n")


def _interval(value: str) -> int:
    if not value.isdigit() or int(value) < 1:
        raise argparse.ArgumentTypeError(
            f"--interval requires a positive integer argument (got {value!r})"
        )
    return int(value)


def build_parser(defaults: Config) -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="wallcycle",
        allow_abbrev=False,
        description=(
            "Pick a random wallpaper, theme the desktop with pywal, reload "
            "waybar and dunst, and set it with a swww grow transition from "
            "the cursor (falling back to center)."
        ),
    )
    parser.add_argument(
        "--daemon",
        action="store_true",
        help="Run forever, changing wallpaper every --interval minutes.",
    )
    parser.add_argument(
        "--interval",
        type=_interval,
        default=defaults.interval_minutes,
        metavar="MINUTES",
        help="Minutes between changes in --daemon mode (default: %(default)s).",
    )
    parser.add_argument(
        "--wallpaper-dir",
        type=Path,
        default=defaults.wallpaper_dir,
        metavar="DIR",
        help="Directory containing wallpapers (default: %(default)s).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=defaults.log_file,
        metavar="PATH",
        help="Append-only log file (default: %(default)s).",
    )
    parser.add_argument(
        "--no-notify",
        action="store_true",
        help="Disable desktop notifications.",
    )
    parser.add_argument(
        "--compositor",
        choices=COMPOSITORS,
        default=defaults.compositor,
        help="Where to read cursor and monitor geometry (default: %(default)s).",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> Config:
    """Overlay command-line flags on the defaults. Exits 1 on bad arguments."""

    defaults = Config.defaults()
    args = build_parser(defaults).parse_args(argv)
    return Config(
        wallpaper_dir=args.wallpaper_dir.expanduser(),
        log_file=args.log_file.expanduser(),
        wal_cache_dir=defaults.wal_cache_dir,
        dunstrc=defaults.dunstrc,
        interval_minutes=args.interval,
        notifications=not args.no_notify,
        daemon=args.daemon,
        compositor=args.compositor,
        transition=defaults.transition,
    )
