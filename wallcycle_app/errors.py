from __future__ import annotations

from collections.abc import Sequence


class CommandFailed(RuntimeError):
    """An external program could not be started, timed out, or exited non-zero."""

    def __init__(
        self,
        args: Sequence[str],
        message: str,
        *,
        returncode: int | None = None,
    ):
        super().__init__(f"{args[0] if args else '?'}: {message}")
        self.command = list(args)
        self.returncode = returncode


class CycleError(RuntimeError):
    """Aborts the current wallpaper cycle (the process keeps running)."""


class NoWallpapersFound(CycleError):
    pass


class ThemeApplyFailed(CycleError):
    pass


class WallpaperSetFailed(CycleError):
    pass


class LocatorError(RuntimeError):
    """Cursor anchoring is unavailable; callers fall back to center."""


class GeometryUnavailable(LocatorError):
    pass


class NoMonitorMatch(LocatorError):
    pass
