"""Logging setup for the ``numorder`` logger namespace.

Console output goes through rich; messages may already carry ANSI escapes from
:mod:`numorder.style`, which are decoded into rich styles on the console and
stripped in the log file.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

LOGGER_NAME = "numorder"
FILE_FORMAT = "%(asctime)s %(levelname)s [%(name)s]: %(message)s"


class AnsiRichHandler(RichHandler):
    def render_message(self, record: logging.LogRecord, message: str):
        return Text.from_ansi(message)


class PlainFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return Text.from_ansi(super().format(record)).plain


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def setup_logging(
    level: Union[int, str] = "INFO",
    log_file: Optional[Path] = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Configure the package logger; calling it again replaces earlier handlers."""
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    for h in list(logger.handlers):
        if getattr(h, "_numorder", False):
            logger.removeHandler(h)
            h.close()

    rich_handler = AnsiRichHandler(
        console=console or Console(stderr=True),
        markup=False,
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler._numorder = True
    logger.addHandler(rich_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(PlainFormatter(FILE_FORMAT))
        file_handler._numorder = True
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
