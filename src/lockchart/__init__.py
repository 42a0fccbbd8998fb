# Copyright (c) 2024-2025 Veritas Collaborative, LLC
# SPDX-License-Identifier: LicenseRef-MCSL

"""lockchart: probe cross-process file lock compatibility."""

__version__ = "0.1.0"

from lockchart.models import (  # noqa: E402
    AccessIntent,
    LockDisposition,
    LockMechanism,
    OutcomeGrid,
    Party,
)

__all__ = [
    "AccessIntent",
    "LockDisposition",
    "LockMechanism",
    "OutcomeGrid",
    "Party",
    "__version__",
]
