# Copyright (c) 2024-2025 Veritas Collaborative, LLC
# SPDX-License-Identifier: LicenseRef-MCSL

"""Lock primitive adapter.

Turns a (disposition, mechanism) pair into the concrete calls that take the
lock. Sharemode locks are folded into the open flags, so they are consulted
through ``open_flags_for`` before the handle exists; flock and fcntl locks are
taken on the open handle by ``apply_lock``. Every call is non-blocking.
"""

from __future__ import annotations

import fcntl
import os
from types import MappingProxyType
from typing import Optional

from lockchart.diagnostics import Diagnostics
from lockchart.exceptions import UnsupportedMechanismError
from lockchart.models import LockDisposition, LockMechanism

# Only BSD-derived systems (macOS included) expose open-time locks.
O_EXLOCK: Optional[int] = getattr(os, "O_EXLOCK", None)
O_SHLOCK: Optional[int] = getattr(os, "O_SHLOCK", None)

_FLOCK_OPS = MappingProxyType(
    {
        LockDisposition.EXCLUSIVE: fcntl.LOCK_EX,
        LockDisposition.SHARED: fcntl.LOCK_SH,
    }
)

# fcntl.lockf issues F_SETLK with F_WRLCK for LOCK_EX and F_RDLCK for LOCK_SH.
_RECORD_LOCK_TYPES = MappingProxyType(
    {
        LockDisposition.EXCLUSIVE: "F_WRLCK",
        LockDisposition.SHARED: "F_RDLCK",
    }
)


def mechanism_supported(mechanism: LockMechanism) -> bool:
    if mechanism is LockMechanism.SHAREMODE:
        return O_EXLOCK is not None and O_SHLOCK is not None
    return True


def open_flags_for(disposition: LockDisposition, mechanism: LockMechanism) -> int:
    """Extra open flags that take the lock at open time (sharemode only)."""
    if mechanism is not LockMechanism.SHAREMODE or disposition is LockDisposition.NONE:
        return 0
    if not mechanism_supported(mechanism):
        raise UnsupportedMechanismError(mechanism, details="os.O_EXLOCK is unavailable")
    if disposition is LockDisposition.EXCLUSIVE:
        return O_EXLOCK
    return O_SHLOCK


def describe_lock_call(fd: int, disposition: LockDisposition, mechanism: LockMechanism) -> str:
    if mechanism is LockMechanism.FLOCK:
        return f"flock({fd}, {_FLOCK_OPS[disposition] | fcntl.LOCK_NB:#04x})"
    if mechanism is LockMechanism.FCNTL:
        return f"fcntl({fd}, F_SETLK, {{.l_type = {_RECORD_LOCK_TYPES[disposition]}}})"
    return f"sharemode({fd}, {disposition.value}) taken at open"


def _flock(fd: int, disposition: LockDisposition) -> None:
    fcntl.flock(fd, _FLOCK_OPS[disposition] | fcntl.LOCK_NB)


def _record_lock(fd: int, disposition: LockDisposition) -> None:
    # length 0 from offset 0 (SEEK_SET) covers the file to its end, growth included
    fcntl.lockf(fd, _FLOCK_OPS[disposition] | fcntl.LOCK_NB, 0, 0, os.SEEK_SET)


_POST_OPEN_LOCKS = MappingProxyType(
    {
        LockMechanism.FLOCK: _flock,
        LockMechanism.FCNTL: _record_lock,
    }
)


def apply_lock(
    fd: int,
    disposition: LockDisposition,
    mechanism: LockMechanism,
    diagnostics: Optional[Diagnostics] = None,
) -> bool:
    """Take the post-open lock on ``fd``. Returns False when it is refused."""
    if disposition is LockDisposition.NONE:
        return True

    call = _POST_OPEN_LOCKS.get(mechanism)
    if call is None:
        return True

    diagnostics = diagnostics or Diagnostics.quiet()
    text = describe_lock_call(fd, disposition, mechanism)
    try:
        call(fd, disposition)
    except OSError as exc:
        diagnostics.failed(text, exc)
        return False
    diagnostics.attempted(text)
    return True


__all__ = [
    "apply_lock",
    "describe_lock_call",
    "mechanism_supported",
    "open_flags_for",
]
