"""Loggers that write one JSON object per line."""

from __future__ import annotations

import json
import logging
import os
import threading
from datetime import datetime
from pathlib import Path

__all__ = ["set_json_format", "make_json_file_logger"]

_LEVEL_NAMES = (
    (logging.CRITICAL, "critical"),
    (logging.ERROR, "error"),
    (logging.WARNING, "warning"),
    (logging.INFO, "info"),
    (logging.DEBUG, "debug"),
)

_created_names: set[str] = set()
_created_lock = threading.Lock()


def _level_name(levelno: int) -> str:
    for threshold, name in _LEVEL_NAMES:
        if levelno >= threshold:
            return name
    return "trace"


class _JsonLineFormatter(logging.Formatter):
    """Formats a record as a single-line JSON object."""

    def __init__(self, messages_are_json: bool) -> None:
        super().__init__()
        self.messages_are_json = messages_are_json

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).astimezone()
        message = record.getMessage()
        if not self.messages_are_json:
            message = json.dumps(message)
        return (
            f'{{"time": "{stamp.isoformat(timespec="microseconds")}", '
            f'"epoch_secs": {int(record.created)}, '
            f'"epoch_ms": {int(record.msecs)}, '
            f'"name": {json.dumps(record.name)}, '
            f'"level": "{_level_name(record.levelno)}", '
            f'"process": {record.process}, '
            f'"thread": {record.thread}, '
            f'"message": {message}}}'
        )


def set_json_format(logger: logging.Logger, messages_are_json: bool) -> None:
    """Make every handler of ``logger`` emit JSON lines.

    When ``messages_are_json`` is true the message is embedded as raw JSON,
    otherwise it is embedded as a JSON string.
    """
    formatter = _JsonLineFormatter(messages_are_json)
    for handler in logger.handlers:
        handler.setFormatter(formatter)


def make_json_file_logger(
    name: str, path: str | os.PathLike, messages_are_json: bool = False
) -> logging.Logger:
    """Create a logger called ``name`` writing JSON lines to ``path``.

    Raises ValueError if a file logger with that name was already created.
    """
    with _created_lock:
        if name in _created_names:
            raise ValueError(f"logger with name '{name}' already exists")
        _created_names.add(name)

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    logger.addHandler(logging.FileHandler(target, encoding="utf-8"))
    set_json_format(logger, messages_are_json)
    return logger