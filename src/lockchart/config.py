# Copyright (c) 2024-2025 Veritas Collaborative, LLC
# SPDX-License-Identifier: LicenseRef-MCSL

"""Configuration for lockchart.

Environment-derived defaults live in ``config``. Everything that varies per
run is carried by ``RunOptions`` and passed down explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from lockchart.models import LockMechanism


def _env_path(name: str) -> Optional[Path]:
    value = os.environ.get(name, "").strip()
    return Path(value).expanduser() if value else None


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class LoggingConfig:
    """Log level and sinks."""

    level: str = field(default_factory=lambda: os.environ.get("LOCKCHART_LOG_LEVEL", "WARNING"))
    log_file: Optional[Path] = field(default_factory=lambda: _env_path("LOCKCHART_LOG_FILE"))
    json_format: bool = field(default_factory=lambda: _env_flag("LOCKCHART_LOG_JSON"))


@dataclass
class ProbeConfig:
    """Defaults for the lock probe."""

    # Mechanism used for a party the command line leaves unspecified.
    default_mechanism: str = field(
        default_factory=lambda: os.environ.get("LOCKCHART_MECHANISM", "sharemode").strip().lower()
    )


@dataclass
class LockchartConfig:
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    probe: ProbeConfig = field(default_factory=ProbeConfig)


config = LockchartConfig()


@dataclass(frozen=True)
class RunOptions:
    """Everything one sweep needs, resolved from the command line."""

    path_a: str
    path_b: str
    mechanism_a: LockMechanism
    mechanism_b: LockMechanism
    verbosity: int = 0
    resource_fork: bool = False
    json_output: bool = False


__all__ = [
    "LockchartConfig",
    "LoggingConfig",
    "ProbeConfig",
    "RunOptions",
    "config",
]
