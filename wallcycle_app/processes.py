from __future__ import annotations

import signal
import subprocess
import time

from . import commands
from .errors import CommandFailed


PROCESS_TIMEOUT_S = 5.0


class ProcessHandle:
    """Find, signal, stop, and launch a session process by its exact name."""

    def __init__(self, name: str, *, timeout: float = PROCESS_TIMEOUT_S):
        self.name = name
        self._timeout = timeout

    def is_running(self) -> bool:
        try:
            commands.run(["pgrep", "-x", self.name], timeout=self._timeout)
        except CommandFailed as e:
            # pgrep exits 1 when nothing matched.
            if e.returncode == 1:
                return False
            raise
        return True

    def _pkill(self, *flags: str) -> bool:
        try:
            commands.run(["pkill", *flags, "-x", self.name], timeout=self._timeout)
        except CommandFailed as e:
            # The process may exit between is_running() and pkill.
            if e.returncode == 1:
                return False
            raise
        return True

    def send_signal(self, sig: signal.Signals) -> bool:
        """Signal every matching process. Returns False if none matched."""

        sig = signal.Signals(sig)
        return self._pkill(f"-{sig.name.removeprefix('SIG')}")

    def terminate(self, *, settle_s: float = 0.2) -> bool:
        if not self._pkill():
            return False
        if settle_s > 0:
            time.sleep(settle_s)
        return True

    def spawn_detached(self, *args: str) -> subprocess.Popen:
        try:
            return subprocess.Popen(
                [self.name, *args],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            raise CommandFailed([self.name, *args], str(e)) from e
