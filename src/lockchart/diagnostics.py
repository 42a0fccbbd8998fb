# Copyright (c) 2024-2025 Veritas Collaborative, LLC
# SPDX-License-Identifier: LicenseRef-MCSL

"""Verbosity channel for lock operations.

Level 1 prints failing operations and per-cell results, level 2 also prints
every operation that succeeded. Nothing written here affects a verdict.
"""

from __future__ import annotations

import sys
from typing import Optional

from rich.console import Console

from lockchart.models import Party

VERBOSE = 1
EXTRA_VERBOSE = 2


class Diagnostics:
    def __init__(self, verbosity: int = 0, console: Optional[Console] = None):
        self.verbosity = max(0, int(verbosity))
        self._console = console

    @classmethod
    def quiet(cls) -> "Diagnostics":
        return cls(0)

    @property
    def console(self) -> Console:
        if self._console is None:
            self._console = Console(highlight=False, soft_wrap=True)
        return self._console

    def _emit(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)
        # A forked child leaves through os._exit, which skips buffer flushing.
        try:
            self.console.file.flush()
        except (AttributeError, ValueError):
            pass

    def attempted(self, text: str) -> None:
        if self.verbosity >= EXTRA_VERBOSE:
            self._emit(text)

    def failed(self, text: str, exc: Optional[BaseException] = None) -> None:
        if self.verbosity >= VERBOSE:
            if exc is not None and getattr(exc, "strerror", None):
                text = f"{text}: {exc.strerror}"
            self._emit(text)

    def header(self, path_a: str, path_b: str) -> None:
        if self.verbosity >= VERBOSE:
            self._emit(f"       {path_a:<32} {path_b:<32}")

    def cell(self, ok: bool, first: Party, second: Party) -> None:
        if self.verbosity >= VERBOSE:
            marker = " ok " if ok else "fail"
            self._emit(f"{marker} : {first.describe():<36} {second.describe():<36}")


def flush_stdio() -> None:
    """Flush Python-level stdio buffers before fork or os._exit."""
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (AttributeError, ValueError, OSError):
            pass


__all__ = ["Diagnostics", "EXTRA_VERBOSE", "VERBOSE", "flush_stdio"]
