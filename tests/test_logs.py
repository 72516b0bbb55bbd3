import logging
import re

import pytest

from wallcycle_app.logs import LOGGER_NAME, AppendFileHandler, configure_logging


LINE_RE = re.compile(r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] ")


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "cache" / "wallpaper_switcher.log"
    yield path
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_lines_are_timestamped(log_file, capsys):
    configure_logging(log_file)
    log = logging.getLogger("wallcycle_app.cycle")
    log.info("Selected random wallpaper: /w/a.png")
    log.warning("waybar not running; skipping reload.")
    log.error("swww failed")

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    assert all(LINE_RE.match(line) for line in lines)
    assert lines[0].endswith("] Selected random wallpaper: /w/a.png")
    assert lines[1].endswith("] WARNING: waybar not running; skipping reload.")
    assert lines[2].endswith("] ERROR: swww failed")

    # Echoed to stdout as well.
    assert capsys.readouterr().out.splitlines() == lines


def test_file_is_not_held_open(log_file):
    configure_logging(log_file)
    logging.getLogger("wallcycle_app").info("one")
    handler = next(
        h for h in logging.getLogger(LOGGER_NAME).handlers if isinstance(h, AppendFileHandler)
    )
    assert handler.stream is None

    log_file.unlink()
    logging.getLogger("wallcycle_app").info("two")
    assert log_file.read_text(encoding="utf-8").rstrip().endswith("] two")


def test_appends_to_existing_log(log_file):
    log_file.parent.mkdir(parents=True)
    log_file.write_text("[2024-01-01 00:00:00] earlier\n", encoding="utf-8")
    configure_logging(log_file)
    logging.getLogger("wallcycle_app").info("later")
    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "[2024-01-01 00:00:00] earlier"
    assert lines[1].endswith("] later")


def test_reconfigure_replaces_handlers(log_file, tmp_path):
    configure_logging(log_file)
    configure_logging(tmp_path / "other.log")
    assert len(logging.getLogger(LOGGER_NAME).handlers) == 2
