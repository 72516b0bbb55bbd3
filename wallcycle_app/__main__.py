from __future__ import annotations

import sys
from collections.abc import Sequence

from .config import parse_args
from .cycle import Collaborators, run_daemon, run_once
from .logs import configure_logging


def main(
    argv: Sequence[str] | None = None,
    *,
    collaborators: Collaborators | None = None,
) -> int:
    config = parse_args(argv)

    if not config.wallpaper_dir.is_dir():
        print(
            f"ERROR: Wallpaper directory '{config.wallpaper_dir}' not found.",
            file=sys.stderr,
        )
        return 1

    configure_logging(config.log_file)
    collab = collaborators or Collaborators.from_config(config)

    # The exit status does not reflect a failed cycle; see the log.
    run_once(config, collab)
    if config.daemon:
        run_daemon(config, collab)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
