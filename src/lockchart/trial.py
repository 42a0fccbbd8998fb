# Copyright (c) 2024-2025 Veritas Collaborative, LLC
# SPDX-License-Identifier: LicenseRef-MCSL

"""One two-party lock compatibility trial.

Party A opens and locks in this process and keeps holding while party B
repeats the same sequence in a forked child. The verdict is whether B's
sequence went through.
"""

from __future__ import annotations

import os
from typing import Optional

from lockchart.diagnostics import Diagnostics
from lockchart.exceptions import HandleReleaseError
from lockchart.isolation import IsolatedTask
from lockchart.logging import get_logger
from lockchart.models import Party
from lockchart.primitives import apply_lock, open_flags_for

logger = get_logger(__name__)

OUTER = "outer"
INNER = "inner"


def party_open_flags(party: Party) -> int:
    """Access flags, any open-time lock flags, and O_NONBLOCK."""
    return party.intent.open_flags | open_flags_for(party.disposition, party.mechanism) | os.O_NONBLOCK


def release_handle(fd: int) -> None:
    try:
        os.close(fd)
    except OSError as exc:
        raise HandleReleaseError(fd, details=str(exc)) from exc


def acquire(party: Party, *, role: str = OUTER, diagnostics: Optional[Diagnostics] = None) -> Optional[int]:
    """Open and lock for ``party``. Returns the held handle, or None when refused."""
    diagnostics = diagnostics or Diagnostics.quiet()
    flags = party_open_flags(party)
    text = f"{role} open({party.path}, {flags:#04x})"
    try:
        fd = os.open(party.path, flags)
    except OSError as exc:
        diagnostics.failed(text, exc)
        return None
    diagnostics.attempted(text)

    if not apply_lock(fd, party.disposition, party.mechanism, diagnostics):
        release_handle(fd)
        return None
    return fd


def _attempt_second(party: Party, diagnostics: Diagnostics) -> bool:
    # Runs in the child; the handle is released by process exit.
    return acquire(party, role=INNER, diagnostics=diagnostics) is not None


def run_trial(first: Party, second: Party, *, diagnostics: Optional[Diagnostics] = None) -> bool:
    """Return True iff ``second`` can open and lock while ``first`` holds."""
    diagnostics = diagnostics or Diagnostics.quiet()
    # Resolve B's flags up front so an unsupported mechanism fails here, not in the child.
    party_open_flags(second)

    fd = acquire(first, role=OUTER, diagnostics=diagnostics)
    if fd is None:
        return False

    try:
        outcome = IsolatedTask(_attempt_second, second, diagnostics).run()
    finally:
        release_handle(fd)

    if not outcome.exited:
        logger.warning(
            f"Second party terminated abnormally: {outcome.describe()}",
            pid=outcome.pid,
        )
    return outcome.succeeded


__all__ = [
    "INNER",
    "OUTER",
    "acquire",
    "party_open_flags",
    "release_handle",
    "run_trial",
]
