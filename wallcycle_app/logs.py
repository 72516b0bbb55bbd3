from __future__ import annotations

import logging
import sys
from pathlib import Path


LOGGER_NAME = "wallcycle_app"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LineFormatter(logging.Formatter):
    """``[YYYY-MM-DD HH:MM:SS] message``, with WARNING:/ERROR: for problems."""

    def __init__(self) -> None:
        super().__init__("[%(asctime)s] %(message)s", datefmt=DATE_FORMAT)

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        if record.levelno >= logging.WARNING:
            prefix = f"[{record.asctime}] "
            level = "ERROR" if record.levelno >= logging.ERROR else "WARNING"
            line = f"{prefix}{level}: {line[len(prefix):]}"
        return line


class AppendFileHandler(logging.FileHandler):
    """Opens the log for each record and closes it again afterwards."""

    def __init__(self, filename: Path):
        super().__init__(filename, mode="a", encoding="utf-8", delay=True)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            super().emit(record)
        finally:
            self.close()


def configure_logging(log_file: Path, *, level: int = logging.INFO) -> logging.Logger:
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = LineFormatter()
    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(formatter)
    file_handler = AppendFileHandler(log_file)
    file_handler.setFormatter(formatter)

    logger.addHandler(stream)
    logger.addHandler(file_handler)
    logger.setLevel(level)
    return logger
