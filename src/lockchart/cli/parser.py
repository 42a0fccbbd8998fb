# Copyright (c) 2024-2025 Veritas Collaborative, LLC
# SPDX-License-Identifier: LicenseRef-MCSL

"""Parser construction for the lockchart CLI."""

from __future__ import annotations

import argparse

from lockchart import __version__
from lockchart.models import LockMechanism

DESCRIPTION = """
Probe how two processes' lock requests on a file interact.

Party A opens PATH1 and takes its lock, then a forked party B opens PATH2 and
tries its own. Every disposition (exclusive, shared, none) and access mode
(R, W, RW) is tried on both sides, and the 9x9 result is printed as a table:
'.' means B succeeded, 'x' means it was refused.
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the lockchart argument parser."""
    parser = argparse.ArgumentParser(
        prog="lockchart",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", "-V", action="version", version=f"lockchart {__version__}")
    parser.add_argument(
        "-f",
        "--resource-fork",
        action="store_true",
        help="Use the resource fork (macOS), default is the data fork",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="-v prints failing operations and per-cell results, -vv prints every open and lock call",
    )
    mechanism_help = {
        LockMechanism.SHAREMODE: "Use sharemode (lock on open)",
        LockMechanism.FLOCK: "Use flock",
        LockMechanism.FCNTL: "Use fcntl record locks",
    }
    for mechanism in LockMechanism:
        parser.add_argument(
            f"-{mechanism.option}",
            dest="mechanisms",
            action="append_const",
            const=mechanism,
            help=f"{mechanism_help[mechanism]}; first occurrence applies to PATH1, second to PATH2",
        )
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    parser.add_argument(
        "--log-level",
        help="Log level for stderr logging (default: LOCKCHART_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("path_a", metavar="PATH1", help="File opened and locked first")
    parser.add_argument("path_b", metavar="PATH2", help="File the forked party attempts")
    return parser


__all__ = ["build_parser"]
