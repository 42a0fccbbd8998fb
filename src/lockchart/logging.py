# Copyright (c) 2024-2025 Veritas Collaborative, LLC
# SPDX-License-Identifier: LicenseRef-MCSL

"""Structured logging for lockchart.

Log records go to stderr (and optionally a rotating file). They are separate
from the verbosity channel in ``lockchart.diagnostics``, which prints the lock
operations themselves on stdout.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from lockchart.config import config

_EXTRA_FIELDS = ("pid", "mechanism")

_loggers: Dict[str, "LCLogger"] = {}


class LCFormatter(logging.Formatter):
    """Console or JSON formatter that carries lockchart's extra fields."""

    def __init__(self, json_format: bool = False):
        super().__init__()
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%H:%M:%S")
        if self.json_format:
            payload: Dict[str, Any] = {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            for field in _EXTRA_FIELDS:
                if hasattr(record, field):
                    payload[field] = getattr(record, field)
            if record.exc_info:
                payload["exception"] = self.formatException(record.exc_info)
            return json.dumps(payload, default=str)

        line = f"{timestamp} {record.levelname:<8} {record.name}: {record.getMessage()}"
        extras = [
            f"{field}={getattr(record, field)}"
            for field in _EXTRA_FIELDS
            if hasattr(record, field)
        ]
        if extras:
            line += f" [{' '.join(extras)}]"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class _StderrHandler(logging.StreamHandler):
    """Stream handler bound to whatever sys.stderr is at emit time."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


class LCLogger:
    """Thin wrapper that accepts extra fields as keyword arguments."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(_resolve_level(config.logging.level))
        self.logger.propagate = False

        if not self.logger.handlers:
            stream = _StderrHandler()
            stream.setLevel(_resolve_level(config.logging.level))
            stream.setFormatter(LCFormatter(json_format=config.logging.json_format))
            self.logger.addHandler(stream)

            log_file = config.logging.log_file
            if log_file is not None:
                try:
                    log_file.parent.mkdir(parents=True, exist_ok=True)
                    file_handler = RotatingFileHandler(
                        log_file, maxBytes=1_000_000, backupCount=3
                    )
                except (PermissionError, OSError):
                    file_handler = None
                if file_handler is not None:
                    file_handler.setLevel(logging.DEBUG)
                    file_handler.setFormatter(LCFormatter(json_format=True))
                    self.logger.addHandler(file_handler)

    def _log(self, level: int, msg: str, exc_info: bool = False, **extra: Any) -> None:
        self.logger.log(level, msg, exc_info=exc_info, extra=extra or None)

    def debug(self, msg: str, **extra: Any) -> None:
        self._log(logging.DEBUG, msg, **extra)

    def info(self, msg: str, **extra: Any) -> None:
        self._log(logging.INFO, msg, **extra)

    def warning(self, msg: str, **extra: Any) -> None:
        self._log(logging.WARNING, msg, **extra)

    def error(self, msg: str, **extra: Any) -> None:
        self._log(logging.ERROR, msg, **extra)

    def exception(self, msg: str, **extra: Any) -> None:
        self._log(logging.ERROR, msg, exc_info=True, **extra)


def parse_log_level(level: Any) -> int:
    """Map a level name or number to a logging level. Unknown names raise ValueError."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def _resolve_level(level: Any) -> int:
    try:
        return parse_log_level(level)
    except ValueError:
        return logging.WARNING


def get_logger(name: str) -> LCLogger:
    """Return the cached logger for ``name``."""
    if name not in _loggers:
        _loggers[name] = LCLogger(name)
    return _loggers[name]


def set_log_level(level: Any) -> None:
    """Set the level of every logger created so far."""
    resolved = _resolve_level(level)
    for wrapper in _loggers.values():
        wrapper.logger.setLevel(resolved)
        for handler in wrapper.logger.handlers:
            if not isinstance(handler, RotatingFileHandler):
                handler.setLevel(resolved)


def enable_debug() -> None:
    set_log_level(logging.DEBUG)


__all__ = [
    "LCFormatter",
    "LCLogger",
    "enable_debug",
    "get_logger",
    "parse_log_level",
    "set_log_level",
]
