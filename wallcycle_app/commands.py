from __future__ import annotations

import subprocess
from collections.abc import Sequence

from .errors import CommandFailed


DEFAULT_TIMEOUT_S = 10.0


def run(
    args: Sequence[str], *, timeout: float | None = DEFAULT_TIMEOUT_S
) -> subprocess.CompletedProcess[str]:
    """Run an external program and return its completed process.

    Raises CommandFailed when the program is missing or cannot be executed,
    times out, or exits non-zero. The message carries stderr (or stdout)
    of the failed run.
    """

    args = list(args)
    try:
        proc = subprocess.run(
            args,
            check=False,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise CommandFailed(args, "command not found") from e
    except subprocess.TimeoutExpired as e:
        raise CommandFailed(args, f"timed out after {timeout}s") from e
    except OSError as e:
        # Not executable, bad interpreter, and similar exec failures.
        raise CommandFailed(args, str(e)) from e

    if proc.returncode != 0:
        msg = (proc.stderr or proc.stdout or "").strip() or (
            f"exited with status {proc.returncode}"
        )
        raise CommandFailed(args, msg, returncode=proc.returncode)
    return proc
