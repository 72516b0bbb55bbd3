from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .config import Config
from .desktop import DesktopNotifier, DunstNotifier, WaybarStatusBar
from .errors import CommandFailed, CycleError, ThemeApplyFailed
from .image import pick_random_wallpaper
from .monitor import Compositor, HyprlandCompositor, QtScreenCompositor
from .theme import ColorScheme, PywalThemeEngine
from .transition import SwwwWallpaperSetter, WallpaperSetter, apply_with_transition


LOG = logging.getLogger(__name__)

# Failures of the best-effort steps; anything else is a bug and propagates.
BEST_EFFORT_ERRORS = (CommandFailed, OSError, ValueError)


class ThemeEngine(Protocol):
    def apply(self, image: Path) -> None: ...

    def colors(self) -> ColorScheme | None: ...


class StatusBar(Protocol):
    def reload(self) -> bool: ...


class Notifier(Protocol):
    def inject_colors(self, scheme: ColorScheme) -> int: ...

    def restart(self) -> None: ...


class UserNotifier(Protocol):
    def notify(self, summary: str, body: str) -> bool: ...


@dataclass
class Collaborators:
    theme: ThemeEngine
    status_bar: StatusBar
    notifier: Notifier
    compositor: Compositor
    setter: WallpaperSetter
    desktop: UserNotifier

    @classmethod
    def from_config(cls, config: Config) -> "Collaborators":
        compositor: Compositor
        if config.compositor == "qt":
            compositor = QtScreenCompositor()
        else:
            compositor = HyprlandCompositor()
        return cls(
            theme=PywalThemeEngine(config.wal_cache_dir),
            status_bar=WaybarStatusBar(),
            notifier=DunstNotifier(config.dunstrc),
            compositor=compositor,
            setter=SwwwWallpaperSetter(),
            desktop=DesktopNotifier(),
        )


def _reload_status_bar(collab: Collaborators) -> None:
    try:
        if collab.status_bar.reload():
            LOG.info("Sent SIGUSR2 to waybar (reload requested).")
        else:
            LOG.warning("waybar not running; skipping reload.")
    except BEST_EFFORT_ERRORS as e:
        LOG.error("Waybar reload failed (%s). Continuing anyway.", e)


def _refresh_notifier(collab: Collaborators, config: Config) -> None:
    try:
        scheme = collab.theme.colors()
        if scheme is None:
            LOG.warning("Pywal colors not found; skipping Dunst injection.")
        else:
            count = collab.notifier.inject_colors(scheme)
            LOG.info("Injected Dunst colors into %s (%d keys).", config.dunstrc, count)
    except BEST_EFFORT_ERRORS as e:
        LOG.error("Dunst color injection failed (%s). Continuing anyway.", e)

    try:
        collab.notifier.restart()
    except BEST_EFFORT_ERRORS as e:
        LOG.error("Dunst restart failed (%s). Continuing anyway.", e)
    else:
        LOG.info("Dunst restarted.")


def _notify_user(collab: Collaborators, image: Path) -> None:
    try:
        sent = collab.desktop.notify("Wallpaper Changed", f"New wallpaper: {image.name}")
    except BEST_EFFORT_ERRORS as e:
        LOG.error("Desktop notification failed (%s).", e)
        return
    if sent:
        LOG.info("Notification sent for '%s'.", image.name)
    else:
        LOG.warning("notify-send not available; notification skipped.")


def run_cycle(
    config: Config,
    collab: Collaborators,
    rng: random.Random | None = None,
) -> Path:
    """Run one wallpaper change. Returns the image that was set.

    Raises a CycleError subclass when no image is found, pywal fails, or
    swww could not set the wallpaper even centered.
    """

    selected = pick_random_wallpaper(config.wallpaper_dir, rng)
    LOG.info("Selected random wallpaper: %s", selected)

    if not selected.is_file():
        raise ThemeApplyFailed(f"Wallpaper '{selected}' not found.")
    collab.theme.apply(selected)
    LOG.info("Pywal applied for '%s'.", selected)

    _reload_status_bar(collab)
    _refresh_notifier(collab, config)

    apply_with_transition(
        selected,
        compositor=collab.compositor,
        setter=collab.setter,
        settings=config.transition,
    )

    if config.notifications:
        _notify_user(collab, selected)
    return selected


def run_once(
    config: Config,
    collab: Collaborators,
    rng: random.Random | None = None,
) -> bool:
    LOG.info("=== Starting wallpaper change cycle ===")
    try:
        run_cycle(config, collab, rng)
    except CycleError as e:
        LOG.error("%s", e)
        LOG.info("Cycle FAILED.")
        return False
    LOG.info("Cycle completed successfully.")
    return True


def run_daemon(
    config: Config,
    collab: Collaborators,
    *,
    sleep: Callable[[float], None] | None = None,
    rng: random.Random | None = None,
) -> None:
    """Repeat run_once every interval until the process is killed."""

    sleep = sleep or time.sleep
    minutes = config.interval_minutes
    LOG.info("Entering daemon mode: will change every %d minute(s).", minutes)
    while True:
        LOG.info("Sleeping for %d minute(s)...", minutes)
        sleep(minutes * 60)
        run_once(config, collab, rng)
