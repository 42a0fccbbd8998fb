"""Shared expectations for lock semantics tests."""

from __future__ import annotations

import os
from typing import Tuple

import pytest

from lockchart.models import AccessIntent, LockDisposition, LockMechanism
from lockchart.primitives import mechanism_supported

requires_fork = pytest.mark.skipif(not hasattr(os, "fork"), reason="os.fork unavailable")
requires_sharemode = pytest.mark.skipif(
    not mechanism_supported(LockMechanism.SHAREMODE),
    reason="O_EXLOCK/O_SHLOCK unavailable on this platform",
)

POST_OPEN_MECHANISMS = (LockMechanism.FLOCK, LockMechanism.FCNTL)


def record_lock_valid(disposition: LockDisposition, intent: AccessIntent) -> bool:
    """A read lock needs read access, a write lock needs write access."""
    if disposition is LockDisposition.NONE:
        return True
    if disposition is LockDisposition.EXCLUSIVE:
        return intent in (AccessIntent.WRITE, AccessIntent.READ_WRITE)
    return intent in (AccessIntent.READ, AccessIntent.READ_WRITE)


def expected_verdict(
    mechanism: LockMechanism,
    first: Tuple[LockDisposition, AccessIntent],
    second: Tuple[LockDisposition, AccessIntent],
) -> bool:
    """Reference verdict for flock/fcntl on a local POSIX filesystem."""
    if mechanism is LockMechanism.FCNTL:
        if not (record_lock_valid(*first) and record_lock_valid(*second)):
            return False
    if LockDisposition.NONE in (first[0], second[0]):
        return True
    return first[0] is LockDisposition.SHARED and second[0] is LockDisposition.SHARED
