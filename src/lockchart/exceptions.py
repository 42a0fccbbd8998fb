# Copyright (c) 2024-2025 Veritas Collaborative, LLC
# SPDX-License-Identifier: LicenseRef-MCSL

"""Exception hierarchy for lockchart.

Open and lock failures observed during a trial are never raised: they are the
measurement. Everything here signals either a malformed invocation or a broken
harness, and aborts the run.
"""

from __future__ import annotations

from typing import Optional


class LockchartError(Exception):
    """Base exception for lockchart."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class UsageError(LockchartError):
    """Malformed invocation or options the host cannot honour."""


class UnsupportedMechanismError(UsageError):
    """Lock mechanism not available on this platform."""

    def __init__(self, mechanism, details: Optional[str] = None):
        self.mechanism = mechanism
        name = getattr(mechanism, "label", str(mechanism))
        super().__init__(f"{name} locking is not supported on this platform", details)


class HarnessError(LockchartError):
    """Program-level failure; no finding about the filesystem can be made."""


class IsolationError(HarnessError):
    """The isolated child for party B could not be created."""


class HandleReleaseError(HarnessError):
    """A held handle could not be closed."""

    def __init__(self, fd: int, details: Optional[str] = None):
        self.fd = fd
        super().__init__(f"Failed to close handle {fd}", details)


__all__ = [
    "HandleReleaseError",
    "HarnessError",
    "IsolationError",
    "LockchartError",
    "UnsupportedMechanismError",
    "UsageError",
]
