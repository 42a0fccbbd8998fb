# Copyright (c) 2024-2025 Veritas Collaborative, LLC
# SPDX-License-Identifier: LicenseRef-MCSL

"""Target path rewriting."""

from __future__ import annotations

import sys

from lockchart.exceptions import UsageError

RESOURCE_FORK_SUFFIX = "..namedfork/rsrc"


def resource_fork_supported(platform: str | None = None) -> bool:
    return (platform or sys.platform) == "darwin"


def resource_fork_path(path: str) -> str:
    """Address the resource fork of ``path`` instead of its data fork."""
    return f"{path.rstrip('/')}/{RESOURCE_FORK_SUFFIX}"


def resolve_target(path: str, *, resource_fork: bool = False, platform: str | None = None) -> str:
    if not path:
        raise UsageError("Target path must not be empty")
    if not resource_fork:
        return path
    if not resource_fork_supported(platform):
        raise UsageError(
            "Resource forks are only addressable on macOS",
            details=f"platform is {platform or sys.platform}",
        )
    return resource_fork_path(path)


__all__ = [
    "RESOURCE_FORK_SUFFIX",
    "resolve_target",
    "resource_fork_path",
    "resource_fork_supported",
]
