from __future__ import annotations

import json
import shutil
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from . import commands
from .errors import CommandFailed, GeometryUnavailable, NoMonitorMatch


HYPRCTL_TIMEOUT_S = 2.0


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class MonitorRect:
    x: int
    y: int
    width: int
    height: int
    name: str = ""

    def contains(self, point: Point) -> bool:
        # Half-open on both axes: the right and bottom edges belong to the
        # neighbouring monitor.
        return (
            self.x <= point.x < self.x + self.width
            and self.y <= point.y < self.y + self.height
        )


class Compositor(Protocol):
    def cursor_position(self) -> Point: ...

    def monitors(self) -> list[MonitorRect]: ...


def round_coordinate(value: float) -> int:
    """Round to the nearest integer, ties to even (100.5 -> 100, 101.5 -> 102)."""

    return int(round(value))


def parse_cursor_position(text: str) -> Point:
    """Parse ``hyprctl cursorpos`` output such as ``"1234.000000, 567.000000"``."""

    parts = [p.strip() for p in (text or "").strip().split(",")]
    if len(parts) != 2 or not all(parts):
        raise GeometryUnavailable(f"Unexpected cursor position: {text!r}")
    try:
        x, y = (round_coordinate(float(p)) for p in parts)
    except (ValueError, OverflowError) as e:
        # Also covers "nan" and "inf", which float() accepts but int() rejects.
        raise GeometryUnavailable(f"Unexpected cursor position: {text!r}") from e
    return Point(x, y)


def parse_monitors(data: object) -> list[MonitorRect]:
    """Turn decoded ``hyprctl monitors -j`` output into rectangles.

    Items that are not objects or lack integer geometry are skipped; an
    unusable response as a whole raises GeometryUnavailable.
    """

    if not isinstance(data, list):
        raise GeometryUnavailable("Monitor list is not a JSON array")

    rects: list[MonitorRect] = []
    for item in data:
        if not isinstance(item, dict):
            continue
        geometry = [item.get(k) for k in ("x", "y", "width", "height")]
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in geometry):
            continue
        name = item.get("name")
        rects.append(
            MonitorRect(*geometry, name=name if isinstance(name, str) else "")
        )

    if not rects:
        raise GeometryUnavailable("No usable monitor geometry")
    return rects


def resolve_local_position(pointer: Point, monitors: Sequence[MonitorRect]) -> Point:
    """Map a global pointer onto the first monitor containing it.

    The result is monitor-local with Y measured from the bottom edge, which
    is where swww puts its origin.
    """

    for mon in monitors:
        if mon.contains(pointer):
            return Point(
                pointer.x - mon.x,
                mon.height - (pointer.y - mon.y),
            )
    raise NoMonitorMatch(f"No monitor contains cursor at {pointer.x},{pointer.y}")


def locate_transition_position(compositor: Compositor) -> Point:
    """Query the pointer and monitors once; raises LocatorError subclasses on failure."""

    pointer = compositor.cursor_position()
    return resolve_local_position(pointer, compositor.monitors())


class HyprlandCompositor:
    def __init__(self, *, timeout: float = HYPRCTL_TIMEOUT_S):
        self._timeout = timeout

    def _hyprctl(self, args: Sequence[str]) -> str:
        if not shutil.which("hyprctl"):
            raise GeometryUnavailable("hyprctl not found")
        try:
            proc = commands.run(["hyprctl", *args], timeout=self._timeout)
        except CommandFailed as e:
            raise GeometryUnavailable(str(e)) from e
        return proc.stdout

    def cursor_position(self) -> Point:
        return parse_cursor_position(self._hyprctl(["cursorpos"]))

    def monitors(self) -> list[MonitorRect]:
        try:
            out = self._hyprctl(("monitors", "-j"))
        except GeometryUnavailable:
            # Older hyprctl releases only accept the flag first.
            out = self._hyprctl(("-j", "monitors"))
        try:
            data = json.loads(out)
        except json.JSONDecodeError as e:
            raise GeometryUnavailable(f"Invalid JSON from hyprctl: {e}") from e
        return parse_monitors(data)


class QtScreenCompositor:
    """Screen geometry and cursor from Qt, for sessions without Hyprland.

    Under a native Wayland platform plugin QCursor.pos() reports the last
    position seen by a Qt window (often 0,0), so the anchor is only reliable
    on X11 or XWayland. A platform plugin that cannot connect aborts inside
    Qt and cannot be turned into GeometryUnavailable.
    """

    def __init__(self) -> None:
        self._app = None

    def _gui(self):
        try:
            from PySide6 import QtGui
        except ImportError as e:
            raise GeometryUnavailable(f"PySide6 unavailable: {e}") from e

        if QtGui.QGuiApplication.instance() is None:
            try:
                self._app = QtGui.QGuiApplication([])
            except RuntimeError as e:
                raise GeometryUnavailable(f"Qt could not start: {e}") from e
        return QtGui

    def cursor_position(self) -> Point:
        QtGui = self._gui()
        pos = QtGui.QCursor.pos()
        return Point(pos.x(), pos.y())

    def monitors(self) -> list[MonitorRect]:
        QtGui = self._gui()

        rects: list[MonitorRect] = []
        for i, screen in enumerate(QtGui.QGuiApplication.screens(), start=1):
            geo = screen.geometry()
            rects.append(
                MonitorRect(
                    geo.x(),
                    geo.y(),
                    geo.width(),
                    geo.height(),
                    name=screen.name() or f"Screen {i}",
                )
            )
        if not rects:
            raise GeometryUnavailable("Qt reports no screens")
        return rects
