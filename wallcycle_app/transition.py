from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Union

from . import commands
from .errors import CommandFailed, LocatorError, WallpaperSetFailed
from .monitor import Compositor, Point, locate_transition_position


LOG = logging.getLogger(__name__)

SWWW_TIMEOUT_S = 30.0

CENTER = "center"

TransitionPosition = Union[Point, str]


@dataclass(frozen=True)
class TransitionSettings:
    type: str = "grow"
    step: int = 90
    anchored_duration: float = 2.0
    center_duration: float = 1.0


def format_position(position: TransitionPosition) -> str:
    if isinstance(position, Point):
        return f"{position.x},{position.y}"
    return position


class WallpaperSetter(Protocol):
    def set_wallpaper(
        self,
        image: Path,
        *,
        position: TransitionPosition,
        transition_type: str,
        step: int,
        duration: float,
    ) -> None: ...


class SwwwWallpaperSetter:
    def __init__(self, *, timeout: float = SWWW_TIMEOUT_S):
        self._timeout = timeout

    def set_wallpaper(
        self,
        image: Path,
        *,
        position: TransitionPosition,
        transition_type: str,
        step: int,
        duration: float,
    ) -> None:
        commands.run(
            [
                "swww",
                "img",
                str(image),
                "--transition-type",
                transition_type,
                "--transition-pos",
                format_position(position),
                "--transition-step",
                str(step),
                "--transition-duration",
                str(duration),
            ],
            timeout=self._timeout,
        )


def apply_with_transition(
    image: Path,
    *,
    compositor: Compositor,
    setter: WallpaperSetter,
    settings: TransitionSettings = TransitionSettings(),
) -> TransitionPosition:
    """Set the wallpaper growing from the cursor, falling back to center.

    Returns the position that was used. Raises WallpaperSetFailed only when
    the centered attempt fails as well.
    """

    try:
        pos = locate_transition_position(compositor)
    except LocatorError as e:
        LOG.warning("Could not detect cursor/monitor (%s). Falling back to center.", e)
    else:
        try:
            setter.set_wallpaper(
                image,
                position=pos,
                transition_type=settings.type,
                step=settings.step,
                duration=settings.anchored_duration,
            )
        except CommandFailed as e:
            LOG.warning(
                "swww failed with --transition-pos %s (%s). Falling back to center.",
                format_position(pos),
                e,
            )
        else:
            LOG.info(
                "Wallpaper set via swww from cursor (inverted Y = %s): '%s'.",
                format_position(pos),
                image,
            )
            return pos

    try:
        setter.set_wallpaper(
            image,
            position=CENTER,
            transition_type=settings.type,
            step=settings.step,
            duration=settings.center_duration,
        )
    except CommandFailed as e:
        LOG.error(
            "swww failed to set wallpaper '%s' even with 'center': %s", image, e
        )
        raise WallpaperSetFailed(f"Could not set wallpaper {image}: {e}") from e

    LOG.info("Wallpaper set via swww from center (fallback): '%s'.", image)
    return CENTER
