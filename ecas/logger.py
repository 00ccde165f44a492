"""Leveled logging to standard error; errors raise EcasError."""

from __future__ import annotations

import inspect
import os
import sys
import threading
from enum import IntEnum
from typing import NoReturn


class EcasError(RuntimeError):
    """Raised where the engine meets a fatal error."""


class LogLevel(IntEnum):
    INFO_SIMPLE = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


_LEVEL_TAGS = "IIWE"
_lock = threading.Lock()
_min_level = LogLevel.INFO_SIMPLE


def set_min_log_level(level) -> None:
    """Messages below ``level`` are dropped."""
    global _min_level
    _min_level = LogLevel(level)


def _caller_location() -> tuple[str, int]:
    frame = inspect.currentframe()
    while frame is not None and frame.f_code.co_filename == __file__:
        frame = frame.f_back
    if frame is None:
        return "?", 0
    return os.path.basename(frame.f_code.co_filename), frame.f_lineno


def log(level, message: str) -> None:
    """Write ``message`` at ``level``; an ERROR message raises EcasError."""
    level = LogLevel(level)
    if level < _min_level:
        return
    with _lock:
        if level != LogLevel.INFO_SIMPLE:
            fname, line = _caller_location()
            sys.stderr.write(f"<{_LEVEL_TAGS[level]}> {fname}:{line}] ")
        sys.stderr.write(message)
        sys.stderr.flush()
    if level == LogLevel.ERROR:
        raise EcasError(message.strip())


def fail(message: str) -> NoReturn:
    """Log ``message`` as an error and raise EcasError."""
    log(LogLevel.ERROR, message)
    raise EcasError(message.strip())