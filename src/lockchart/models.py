# Copyright (c) 2024-2025 Veritas Collaborative, LLC
# SPDX-License-Identifier: LicenseRef-MCSL

"""Value types for the lock compatibility probe."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from itertools import product
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional, Tuple


class LockDisposition(str, Enum):
    """Requested lock strength. Declaration order is the table order."""

    EXCLUSIVE = "exclusive"
    SHARED = "shared"
    NONE = "none"

    @property
    def label(self) -> str:
        return _DISPOSITION_LABELS[self]


class LockMechanism(str, Enum):
    """OS-level technique used to request a lock."""

    SHAREMODE = "sharemode"  # O_EXLOCK / O_SHLOCK at open time
    FLOCK = "flock"  # whole-file advisory lock
    FCNTL = "fcntl"  # F_SETLK record lock over the whole file

    @property
    def label(self) -> str:
        return self.value

    @property
    def option(self) -> str:
        return _MECHANISM_OPTIONS[self]

    @classmethod
    def from_option(cls, letter: str) -> "LockMechanism":
        for mechanism, option in _MECHANISM_OPTIONS.items():
            if option == letter:
                return mechanism
        raise ValueError(f"Unknown mechanism option: {letter!r}")

    @classmethod
    def parse(cls, value: str) -> "LockMechanism":
        """Accept a mechanism name (``flock``) or its option letter (``l``)."""
        text = (value or "").strip().lower()
        try:
            return cls(text)
        except ValueError:
            return cls.from_option(text)


class AccessIntent(str, Enum):
    """How the handle is opened."""

    READ = "read"
    WRITE = "write"
    READ_WRITE = "read_write"

    @property
    def open_flags(self) -> int:
        return _INTENT_FLAGS[self]

    @property
    def label(self) -> str:
        return _INTENT_LABELS[self]

    @property
    def short(self) -> str:
        return _INTENT_SHORT[self]


_DISPOSITION_LABELS = MappingProxyType(
    {
        LockDisposition.EXCLUSIVE: "exclusive",
        LockDisposition.SHARED: "shared",
        LockDisposition.NONE: "no",
    }
)

_MECHANISM_OPTIONS = MappingProxyType(
    {
        LockMechanism.SHAREMODE: "s",
        LockMechanism.FLOCK: "l",
        LockMechanism.FCNTL: "c",
    }
)

_INTENT_FLAGS = MappingProxyType(
    {
        AccessIntent.READ: os.O_RDONLY,
        AccessIntent.WRITE: os.O_WRONLY,
        AccessIntent.READ_WRITE: os.O_RDWR,
    }
)

_INTENT_LABELS = MappingProxyType(
    {
        AccessIntent.READ: "read only",
        AccessIntent.WRITE: "write only",
        AccessIntent.READ_WRITE: "read/write",
    }
)

_INTENT_SHORT = MappingProxyType(
    {
        AccessIntent.READ: "R",
        AccessIntent.WRITE: "W",
        AccessIntent.READ_WRITE: "RW",
    }
)


@dataclass(frozen=True)
class Party:
    """One side of a trial."""

    path: str
    intent: AccessIntent
    disposition: LockDisposition
    mechanism: LockMechanism

    def describe(self) -> str:
        return f"{self.intent.label} with {self.disposition.label} {self.mechanism.label}"


@dataclass(frozen=True)
class Combination:
    """A (disposition, intent) pair: one row or column of the grid."""

    disposition: LockDisposition
    intent: AccessIntent

    def party(self, path: str, mechanism: LockMechanism) -> Party:
        return Party(
            path=path,
            intent=self.intent,
            disposition=self.disposition,
            mechanism=mechanism,
        )


# Row/column order of the grid: disposition-major, then access intent.
AXIS: Tuple[Combination, ...] = tuple(
    Combination(disposition, intent) for disposition, intent in product(LockDisposition, AccessIntent)
)
AXIS_INDEX: MappingProxyType = MappingProxyType({combo: i for i, combo in enumerate(AXIS)})
GRID_SIZE = len(AXIS)


class GridFrozenError(RuntimeError):
    pass


class CellAlreadySetError(RuntimeError):
    pass


class OutcomeGrid:
    """9x9 table of verdicts, filled once per cell and then frozen."""

    def __init__(self) -> None:
        self._cells: List[List[Optional[bool]]] = [[None] * GRID_SIZE for _ in range(GRID_SIZE)]
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def record(self, first: Combination, second: Combination, verdict: bool) -> None:
        if self._frozen:
            raise GridFrozenError("Outcome grid is frozen")
        row, col = AXIS_INDEX[first], AXIS_INDEX[second]
        if self._cells[row][col] is not None:
            raise CellAlreadySetError(f"Cell ({row}, {col}) already recorded")
        self._cells[row][col] = bool(verdict)

    def get(self, first: Combination, second: Combination) -> Optional[bool]:
        return self._cells[AXIS_INDEX[first]][AXIS_INDEX[second]]

    def __getitem__(self, index: Tuple[int, int]) -> Optional[bool]:
        row, col = index
        return self._cells[row][col]

    def filled(self) -> int:
        return sum(1 for row in self._cells for cell in row if cell is not None)

    def is_complete(self) -> bool:
        return self.filled() == GRID_SIZE * GRID_SIZE

    def freeze(self) -> "OutcomeGrid":
        if not self.is_complete():
            raise ValueError(f"Outcome grid incomplete ({self.filled()} of {GRID_SIZE * GRID_SIZE} cells)")
        self._frozen = True
        return self

    def rows(self) -> Tuple[Tuple[Optional[bool], ...], ...]:
        return tuple(tuple(row) for row in self._cells)

    def items(self) -> Iterator[Tuple[Combination, Combination, Optional[bool]]]:
        for row, first in enumerate(AXIS):
            for col, second in enumerate(AXIS):
                yield first, second, self._cells[row][col]

    def counts(self) -> Dict[str, int]:
        values = [cell for row in self._cells for cell in row if cell is not None]
        return {"passed": sum(1 for v in values if v), "failed": sum(1 for v in values if not v)}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OutcomeGrid):
            return NotImplemented
        return self.rows() == other.rows()

    def __repr__(self) -> str:
        return f"OutcomeGrid(filled={self.filled()}, frozen={self._frozen})"


__all__ = [
    "AXIS",
    "AXIS_INDEX",
    "GRID_SIZE",
    "AccessIntent",
    "CellAlreadySetError",
    "Combination",
    "GridFrozenError",
    "LockDisposition",
    "LockMechanism",
    "OutcomeGrid",
    "Party",
]
