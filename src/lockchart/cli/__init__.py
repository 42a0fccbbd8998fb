# Copyright (c) 2024-2025 Veritas Collaborative, LLC
# SPDX-License-Identifier: LicenseRef-MCSL

"""Command-line entrypoint for lockchart."""

from __future__ import annotations

from typing import Optional, Sequence

from .parser import build_parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments and run the chart. Argparse exits 2 on bad usage."""
    from lockchart.commands.chart_cmd import chart_command

    args = build_parser().parse_args(argv)
    return chart_command(args)


__all__ = ["build_parser", "main"]
