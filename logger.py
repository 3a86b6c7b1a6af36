"""Console logger with level filtering."""

from __future__ import annotations

import sys
from typing import TextIO


_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}


class Logger:
    """Minimal logger: INFO lines print bare, other levels carry a prefix."""

    def __init__(self, level: str = "INFO", stream: TextIO | None = None) -> None:
        self._level = _LEVELS.get(level.upper(), _LEVELS["INFO"])
        self._stream = stream

    def set_stream(self, stream: TextIO | None) -> None:
        self._stream = stream

    def set_level(self, level: str) -> None:
        self._level = _LEVELS.get(level.upper(), _LEVELS["INFO"])

    def is_enabled(self, level: str) -> bool:
        return self._level <= _LEVELS.get(level.upper(), _LEVELS["INFO"])

    def _write(self, level: str, message: str) -> None:
        if not self.is_enabled(level):
            return
        stream = self._stream or sys.stdout
        prefix = "" if level == "INFO" else f"[{level}] "
        print(f"{prefix}{message}", file=stream)

    def debug(self, message: str) -> None:
        self._write("DEBUG", message)

    def info(self, message: str) -> None:
        self._write("INFO", message)

    def warn(self, message: str) -> None:
        self._write("WARN", message)

    def error(self, message: str) -> None:
        self._write("ERROR", message)


_LOGGER = Logger()


def get_logger() -> Logger:
    """Return the shared logger instance."""
    return _LOGGER
