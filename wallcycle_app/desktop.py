from __future__ import annotations

import shutil
import signal
from pathlib import Path

from . import commands, dunstrc
from .processes import ProcessHandle
from .theme import ColorScheme


APP_NAME = "WallpaperSwitcher"


class WaybarStatusBar:
    def __init__(self, process: ProcessHandle | None = None):
        self.process = process or ProcessHandle("waybar")

    def reload(self) -> bool:
        """Ask waybar to reload its style. Returns False if it is not running."""

        if not self.process.is_running():
            return False
        return self.process.send_signal(signal.SIGUSR2)


class DunstNotifier:
    def __init__(self, config_path: Path, process: ProcessHandle | None = None):
        self.config_path = config_path
        self.process = process or ProcessHandle("dunst")

    def inject_colors(self, scheme: ColorScheme) -> int:
        return dunstrc.inject_colors(self.config_path, scheme)

    def restart(self) -> None:
        if self.process.is_running():
            self.process.terminate()
        self.process.spawn_detached()


class DesktopNotifier:
    def __init__(self, app_name: str = APP_NAME):
        self.app_name = app_name

    def notify(self, summary: str, body: str) -> bool:
        """Send a desktop notification. Returns False if notify-send is missing."""

        if not shutil.which("notify-send"):
            return False
        commands.run(["notify-send", f"--app-name={self.app_name}", summary, body])
        return True
