#!/usr/bin/env python3
"""Nikobus - a driver for the Nikobus serial bus.

The frame log: a record of every frame received from (or sent to) the bus.

Frames are logged at INFO, and invalid frames at WARNING, with optional extras:
- error_text: why the frame is invalid, e.g. * Invalid frame
- comment:    a note about the frame, e.g. # Tx
"""

from __future__ import annotations

import logging
import shutil
import sys
from datetime import datetime as dt
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Final

import colorlog

from .version import VERSION

_LOGGER = logging.getLogger(__name__)

FRAME_LOGGER: Final = logging.getLogger(f"{__package__}.frame_log")

_CONSOLE_WIDTH: Final = shutil.get_terminal_size(fallback=(2000, 24)).columns - 1

FILE_FMT: Final = "%(asctime)s %(message)s%(error_text)s%(comment)s"
CONSOLE_FMT: Final = (
    f"%(log_color)s%(asctime)s %(message).{_CONSOLE_WIDTH - 13}s"
    "%(red)s%(error_text)s%(cyan)s%(comment)s"
)

LOG_COLOURS: Final = {
    "DEBUG": "white",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "bold_red",
    "CRITICAL": "bold_red",
}


class _FrameFormatterMixin:
    """Format the extras of a frame record, and its time to the millisecond."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        timestamp = dt.fromtimestamp(record.created)
        if datefmt:
            return timestamp.strftime(datefmt)
        return timestamp.isoformat(timespec="milliseconds")

    def format(self, record: logging.LogRecord) -> str:
        record = logging.makeLogRecord(record.__dict__)  # don't alter the original

        error_text = getattr(record, "error_text", None)
        record.error_text = f" * {error_text}" if error_text else ""

        comment = getattr(record, "comment", None)
        record.comment = f" # {comment}" if comment else ""

        return super().format(record)  # type: ignore[misc, no-any-return]


class FrameFormatter(_FrameFormatterMixin, logging.Formatter):
    pass


class ColoredFrameFormatter(_FrameFormatterMixin, colorlog.ColoredFormatter):
    pass


class FrameLogFilter(logging.Filter):  # INFO (frames) & WARNING (invalid frames)
    """For frame log files, process only frames (i.e. not debug/error messages)."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno in (logging.INFO, logging.WARNING)


class StdErrFilter(logging.Filter):  # record.levelno >= logging.WARNING
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.WARNING


class StdOutFilter(logging.Filter):  # record.levelno < logging.WARNING
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def _file_handler(
    file_name: str, rotate_backups: int = 0, rotate_bytes: int | None = None
) -> logging.Handler:
    """Return a handler for the frame log file, with the requested rotation policy.

    - rotate_bytes:   rotate when the file exceeds this size (keeping >= 2 backups)
    - rotate_backups: otherwise, rotate at midnight (keeping this many backups)
    - neither:        never rotate
    """

    handler: logging.Handler

    if rotate_bytes:
        handler = RotatingFileHandler(
            file_name, maxBytes=rotate_bytes, backupCount=rotate_backups or 2
        )
    elif rotate_backups:
        handler = TimedRotatingFileHandler(
            file_name, when="midnight", backupCount=rotate_backups
        )
    else:
        handler = logging.FileHandler(file_name)

    handler.setFormatter(FrameFormatter(fmt=FILE_FMT))
    handler.setLevel(logging.INFO)
    handler.addFilter(FrameLogFilter())
    return handler


def _console_handlers() -> list[logging.Handler]:
    """Return colored handlers: frames to stdout, invalid frames to stderr."""

    formatter = ColoredFrameFormatter(
        fmt=CONSOLE_FMT, reset=True, log_colors=LOG_COLOURS
    )

    stderr = logging.StreamHandler(stream=sys.stderr)
    stderr.setLevel(logging.WARNING)
    stderr.addFilter(StdErrFilter())

    stdout = logging.StreamHandler(stream=sys.stdout)
    stdout.setLevel(logging.DEBUG)
    stdout.addFilter(StdOutFilter())

    for handler in (stderr, stdout):
        handler.setFormatter(formatter)
    return [stderr, stdout]


def set_frame_logging(
    logger: logging.Logger,
    cc_console: bool = False,
    file_name: str | None = None,
    rotate_backups: int = 0,
    rotate_bytes: int | None = None,
) -> None:
    """Configure the frame logger: to a file, and/or (carbon-copied) to the console.

    If neither, the frame logger is effectively disabled. Can be called more than once:
    any existing handlers are replaced.
    """

    logger.propagate = False  # the frame log is distinct from any app/debug logging

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if not file_name and not cc_console:
        logger.setLevel(logging.CRITICAL)
        return

    logger.setLevel(logging.DEBUG)

    if file_name:
        logger.addHandler(_file_handler(file_name, rotate_backups, rotate_bytes))
    if cc_console:
        for handler in _console_handlers():
            logger.addHandler(handler)

    _LOGGER.debug("Frame logging enabled: file=%s, console=%s", file_name, cc_console)
    logger.warning("", extra={"comment": f"nikobus_tx {VERSION}"})  # 1st log line
