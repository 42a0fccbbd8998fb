# Copyright (c) 2024-2025 Veritas Collaborative, LLC
# SPDX-License-Identifier: LicenseRef-MCSL

"""CLI command: run the lock compatibility sweep and print the chart."""

from __future__ import annotations

import json
from argparse import Namespace
from typing import List, Optional

from rich.console import Console

from lockchart.cli.exit_codes import EXIT_ERROR, EXIT_SUCCESS, EXIT_USAGE
from lockchart.config import RunOptions, config
from lockchart.diagnostics import Diagnostics
from lockchart.exceptions import HarnessError, UnsupportedMechanismError, UsageError
from lockchart.logging import get_logger, parse_log_level, set_log_level
from lockchart.matrix import sweep
from lockchart.models import LockMechanism
from lockchart.paths import resolve_target
from lockchart.primitives import mechanism_supported
from lockchart.report import grid_to_json, render_table

console = Console()
error_console = Console(stderr=True)
logger = get_logger(__name__)

MAX_MECHANISMS = 2


def _default_mechanism() -> LockMechanism:
    value = config.probe.default_mechanism
    try:
        return LockMechanism.parse(value)
    except ValueError as exc:
        raise UsageError(f"Invalid default mechanism {value!r}", details="set LOCKCHART_MECHANISM") from exc


def apply_log_level(value: Optional[str]) -> None:
    level = (value or "").strip()
    if not level:
        return
    try:
        resolved = parse_log_level(level)
    except ValueError as exc:
        raise UsageError(
            f"Invalid log level {level!r}",
            details="use DEBUG, INFO, WARNING, ERROR or CRITICAL",
        ) from exc
    set_log_level(resolved)


def resolve_options(args: Namespace) -> RunOptions:
    """Validate parsed arguments into the options for one sweep."""
    mechanisms: List[LockMechanism] = list(getattr(args, "mechanisms", None) or [])
    if len(mechanisms) > MAX_MECHANISMS:
        raise UsageError(
            "At most two lock mechanisms may be given",
            details=", ".join(m.value for m in mechanisms),
        )
    while len(mechanisms) < MAX_MECHANISMS:
        mechanisms.append(_default_mechanism())
    for mechanism in mechanisms:
        if not mechanism_supported(mechanism):
            raise UnsupportedMechanismError(mechanism, details="pick -l (flock) or -c (fcntl)")

    resource_fork = bool(getattr(args, "resource_fork", False))
    return RunOptions(
        path_a=resolve_target(getattr(args, "path_a", "") or "", resource_fork=resource_fork),
        path_b=resolve_target(getattr(args, "path_b", "") or "", resource_fork=resource_fork),
        mechanism_a=mechanisms[0],
        mechanism_b=mechanisms[1],
        verbosity=int(getattr(args, "verbose", 0) or 0),
        resource_fork=resource_fork,
        json_output=bool(getattr(args, "json", False)),
    )


def chart_command(args: Namespace) -> int:
    try:
        apply_log_level(getattr(args, "log_level", None))
        options = resolve_options(args)
    except UsageError as exc:
        error_console.print(str(exc), style="red", markup=False, soft_wrap=True)
        return EXIT_USAGE

    diagnostics = Diagnostics(options.verbosity, console=console)
    diagnostics.header(options.path_a, options.path_b)
    try:
        grid = sweep(
            options.path_a,
            options.path_b,
            options.mechanism_a,
            options.mechanism_b,
            diagnostics=diagnostics,
        )
    except HarnessError as exc:
        logger.error(f"Sweep aborted: {exc}")
        error_console.print(str(exc), style="red", markup=False, soft_wrap=True)
        return EXIT_ERROR

    if options.json_output:
        payload = grid_to_json(grid, options.mechanism_a, options.mechanism_b)
        payload["paths"] = {"first": options.path_a, "second": options.path_b}
        console.print(json.dumps(payload, indent=2, sort_keys=True), markup=False, soft_wrap=True)
    else:
        console.print(
            render_table(grid, options.mechanism_a, options.mechanism_b),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
    return EXIT_SUCCESS


__all__ = ["apply_log_level", "chart_command", "resolve_options"]
