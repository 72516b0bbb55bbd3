from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from wallcycle_app.config import Config
from wallcycle_app.cycle import Collaborators
from wallcycle_app.errors import CommandFailed, GeometryUnavailable, ThemeApplyFailed
from wallcycle_app.monitor import MonitorRect, Point
from wallcycle_app.theme import ColorScheme


class FakeCompositor:
    def __init__(self, cursor=None, monitors=None):
        self.cursor = cursor
        self.rects = monitors
        self.calls: list[str] = []

    def cursor_position(self) -> Point:
        self.calls.append("cursor")
        if self.cursor is None:
            raise GeometryUnavailable("no cursor")
        return self.cursor

    def monitors(self) -> list[MonitorRect]:
        self.calls.append("monitors")
        if self.rects is None:
            raise GeometryUnavailable("no monitors")
        return list(self.rects)


class FakeSetter:
    def __init__(self, fail_positions=()):
        self.fail_positions = set(fail_positions)
        self.calls: list[dict] = []

    def set_wallpaper(self, image, *, position, transition_type, step, duration):
        self.calls.append(
            {
                "image": image,
                "position": position,
                "type": transition_type,
                "step": step,
                "duration": duration,
            }
        )
        if position in self.fail_positions or "*" in self.fail_positions:
            raise CommandFailed(["swww"], "boom", returncode=1)


class FakeTheme:
    def __init__(self, *, fail=False, scheme=None):
        self.fail = fail
        self.scheme = scheme
        self.applied: list[Path] = []

    def apply(self, image: Path) -> None:
        self.applied.append(image)
        if self.fail:
            raise ThemeApplyFailed(f"pywal failed for {image}")

    def colors(self):
        return self.scheme


class FakeStatusBar:
    def __init__(self, *, running=True, fail=False):
        self.running = running
        self.fail = fail
        self.reloads = 0

    def reload(self) -> bool:
        if self.fail:
            raise CommandFailed(["pkill"], "denied", returncode=3)
        if not self.running:
            return False
        self.reloads += 1
        return True


class FakeNotifier:
    def __init__(self, *, fail_restart=False):
        self.fail_restart = fail_restart
        self.injected: list[ColorScheme] = []
        self.restarts = 0

    def inject_colors(self, scheme: ColorScheme) -> int:
        self.injected.append(scheme)
        return 3

    def restart(self) -> None:
        if self.fail_restart:
            raise CommandFailed(["dunst"], "no display")
        self.restarts += 1


class FakeDesktop:
    def __init__(self, *, available=True):
        self.available = available
        self.sent: list[tuple[str, str]] = []

    def notify(self, summary: str, body: str) -> bool:
        if not self.available:
            return False
        self.sent.append((summary, body))
        return True


SCHEME = ColorScheme(
    background="#101010",
    foreground="#e0e0e0",
    colors={f"color{i}": f"#0000{i:02d}" for i in range(16)},
)


@pytest.fixture
def scheme() -> ColorScheme:
    return SCHEME


@pytest.fixture
def wallpaper_dir(tmp_path: Path) -> Path:
    d = tmp_path / "wallpapers"
    d.mkdir()
    (d / "a.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    return d


@pytest.fixture
def config(tmp_path: Path, wallpaper_dir: Path) -> Config:
    return Config(
        wallpaper_dir=wallpaper_dir,
        log_file=tmp_path / "cache" / "wallpaper_switcher.log",
        wal_cache_dir=tmp_path / "cache" / "wal",
        dunstrc=tmp_path / "config" / "dunst" / "dunstrc",
    )


@pytest.fixture
def collab() -> Collaborators:
    return Collaborators(
        theme=FakeTheme(scheme=SCHEME),
        status_bar=FakeStatusBar(),
        notifier=FakeNotifier(),
        compositor=FakeCompositor(
            cursor=Point(100, 200),
            monitors=[MonitorRect(0, 0, 1920, 1080, name="DP-1")],
        ),
        setter=FakeSetter(),
        desktop=FakeDesktop(),
    )


class FakeRun:
    """Stand-in for subprocess.run keyed on the program name."""

    def __init__(self):
        self.calls: list[list[str]] = []
        self.responses: dict[str, tuple[int, str, str]] = {}
        self.missing: set[str] = set()
        self.errors: dict[str, OSError] = {}

    def set(self, program: str, returncode=0, stdout="", stderr=""):
        self.responses[program] = (returncode, stdout, stderr)

    def __call__(self, args, **kwargs):
        args = list(args)
        self.calls.append(args)
        key = " ".join(args[:2])
        if args[0] in self.missing:
            raise FileNotFoundError(args[0])
        if args[0] in self.errors:
            raise self.errors[args[0]]
        rc, out, err = self.responses.get(key, self.responses.get(args[0], (0, "", "")))
        return subprocess.CompletedProcess(args, rc, stdout=out, stderr=err)


@pytest.fixture
def fake_run(monkeypatch) -> FakeRun:
    fake = FakeRun()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake
