# Copyright (c) 2024-2025 Veritas Collaborative, LLC
# SPDX-License-Identifier: LicenseRef-MCSL

"""Render an outcome grid as the compatibility table or as JSON."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from lockchart.models import AXIS, AccessIntent, Combination, LockDisposition, LockMechanism, OutcomeGrid

GRID_SCHEMA = "lockchart.grid.v1"

PASS_MARK = "."
FAIL_MARK = "x"
UNSET_MARK = "?"

GROUP_SIZE = len(AccessIntent)
LABEL_WIDTH = 17
CELL_WIDTH = 4
GROUP_GAP = "  "
HEADER_GAP = "| "


def _mark(value: Optional[bool]) -> str:
    if value is None:
        return UNSET_MARK
    return PASS_MARK if value else FAIL_MARK


def _gap(index: int, gap: str) -> str:
    return gap if index and index % GROUP_SIZE == 0 else ""


def _row_label(index: int, combo: Combination) -> str:
    title = combo.disposition.value if index % GROUP_SIZE == 0 else ""
    return f"{title:<12}{combo.intent.short:<{LABEL_WIDTH - 12}}"


def render_table(grid: OutcomeGrid, mechanism_a: LockMechanism, mechanism_b: LockMechanism) -> str:
    """Rows are the holder's combinations, columns the attempted ones."""
    group_width = GROUP_SIZE * CELL_WIDTH
    titles = HEADER_GAP.join(f"{d.value:<{group_width}}" for d in LockDisposition)
    intents = "".join(
        f"{_gap(j, HEADER_GAP)}{combo.intent.short:<{CELL_WIDTH}}" for j, combo in enumerate(AXIS)
    )

    lines: List[str] = [
        f"{'':<{LABEL_WIDTH - 4}}\\   {mechanism_b.label}",
        f"{mechanism_a.label:<{LABEL_WIDTH - 4}} \\  Attempted mode",
        f"{'Current mode':<{LABEL_WIDTH - 3}}\\  {titles}".rstrip(),
        f"{'':<{LABEL_WIDTH}}{intents}".rstrip(),
    ]
    width = max(len(line) for line in lines)

    for i, first in enumerate(AXIS):
        if _gap(i, "-"):
            lines.append("-" * width)
        cells = "".join(
            f"{_gap(j, GROUP_GAP)}{_mark(grid[i, j]):<{CELL_WIDTH}}" for j in range(len(AXIS))
        )
        lines.append(f"{_row_label(i, first)}{cells}".rstrip())
    return "\n".join(lines)


def _combo_json(combo: Combination) -> Dict[str, str]:
    return {"disposition": combo.disposition.value, "intent": combo.intent.value}


def grid_to_json(grid: OutcomeGrid, mechanism_a: LockMechanism, mechanism_b: LockMechanism) -> Dict[str, Any]:
    counts = grid.counts()
    return {
        "schema": GRID_SCHEMA,
        "mechanisms": {"first": mechanism_a.value, "second": mechanism_b.value},
        "axis": [_combo_json(combo) for combo in AXIS],
        "cells": [
            {"first": _combo_json(first), "second": _combo_json(second), "ok": ok}
            for first, second, ok in grid.items()
        ],
        "passed": counts["passed"],
        "failed": counts["failed"],
    }


__all__ = [
    "FAIL_MARK",
    "GRID_SCHEMA",
    "PASS_MARK",
    "UNSET_MARK",
    "grid_to_json",
    "render_table",
]
