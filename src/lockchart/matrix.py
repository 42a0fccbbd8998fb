# Copyright (c) 2024-2025 Veritas Collaborative, LLC
# SPDX-License-Identifier: LicenseRef-MCSL

"""Matrix driver: one trial per (first, second) combination."""

from __future__ import annotations

from typing import Callable, Iterator, Optional, Tuple

from lockchart.diagnostics import Diagnostics
from lockchart.logging import get_logger
from lockchart.models import AXIS, Combination, LockMechanism, OutcomeGrid, Party
from lockchart.trial import run_trial

logger = get_logger(__name__)

TrialFn = Callable[..., bool]


def iter_cells() -> Iterator[Tuple[Combination, Combination]]:
    """Disposition A, intent A, disposition B, intent B; innermost last."""
    for first in AXIS:
        for second in AXIS:
            yield first, second


def sweep(
    path_a: str,
    path_b: str,
    mechanism_a: LockMechanism,
    mechanism_b: LockMechanism,
    *,
    diagnostics: Optional[Diagnostics] = None,
    trial: TrialFn = run_trial,
) -> OutcomeGrid:
    """Run all 81 trials sequentially and return the frozen grid.

    Mechanisms are fixed for the whole sweep so rows and columns stay
    comparable.
    """
    diagnostics = diagnostics or Diagnostics.quiet()
    grid = OutcomeGrid()

    for first_combo, second_combo in iter_cells():
        first = first_combo.party(path_a, mechanism_a)
        second = second_combo.party(path_b, mechanism_b)
        ok = trial(first, second, diagnostics=diagnostics)
        diagnostics.cell(ok, first, second)
        grid.record(first_combo, second_combo, ok)

    counts = grid.counts()
    logger.info(
        f"Sweep complete: {counts['passed']} passed, {counts['failed']} failed",
        mechanism=f"{mechanism_a.value}/{mechanism_b.value}",
    )
    return grid.freeze()


__all__ = ["iter_cells", "sweep"]
