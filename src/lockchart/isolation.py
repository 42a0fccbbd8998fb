# Copyright (c) 2024-2025 Veritas Collaborative, LLC
# SPDX-License-Identifier: LicenseRef-MCSL

"""Run one callable in a forked child and collect its exit status.

Lock state for flock, fcntl and sharemode locks is scoped to the process or
open file description, so the second party of a trial must run in a real
process rather than a thread. The child reports through its exit status only.
"""

from __future__ import annotations

import os
import signal
from dataclasses import dataclass
from typing import Any, Callable, Optional

from lockchart.diagnostics import flush_stdio
from lockchart.exceptions import IsolationError
from lockchart.logging import get_logger

logger = get_logger(__name__)

EXIT_TASK_SUCCESS = 0
EXIT_TASK_FAILURE = 1
# EX_SOFTWARE from sysexits.h
EXIT_TASK_CRASHED = 70


@dataclass(frozen=True)
class TaskOutcome:
    pid: int
    status: int

    @property
    def exited(self) -> bool:
        return os.WIFEXITED(self.status)

    @property
    def exit_code(self) -> Optional[int]:
        return os.WEXITSTATUS(self.status) if self.exited else None

    @property
    def signal(self) -> Optional[int]:
        return os.WTERMSIG(self.status) if os.WIFSIGNALED(self.status) else None

    @property
    def succeeded(self) -> bool:
        return self.exited and self.exit_code == EXIT_TASK_SUCCESS

    def describe(self) -> str:
        if self.exited:
            return f"exited {self.exit_code}"
        if self.signal is not None:
            try:
                name = signal.Signals(self.signal).name
            except ValueError:
                name = "unknown"
            return f"killed by signal {self.signal} ({name})"
        return f"stopped (status {self.status:#x})"


class IsolatedTask:
    """Fork, run ``target(*args)`` in the child, exit with its truthiness."""

    def __init__(self, target: Callable[..., Any], *args: Any):
        self._target = target
        self._args = args
        self.pid: Optional[int] = None

    def start(self) -> "IsolatedTask":
        if self.pid is not None:
            raise RuntimeError("Task already started")
        flush_stdio()
        try:
            pid = os.fork()
        except OSError as exc:
            raise IsolationError("Failed to fork child process", details=str(exc)) from exc

        if pid == 0:
            self._run_child()
        self.pid = pid
        return self

    def _run_child(self) -> None:
        code = EXIT_TASK_CRASHED
        try:
            code = EXIT_TASK_SUCCESS if self._target(*self._args) else EXIT_TASK_FAILURE
        except BaseException:  # noqa: BLE001
            logger.exception("Isolated task raised", pid=os.getpid())
        finally:
            flush_stdio()
            os._exit(code)

    def join(self) -> TaskOutcome:
        """Block until the child terminates. There is no timeout."""
        if self.pid is None:
            raise RuntimeError("Task not started")
        pid, status = os.waitpid(self.pid, 0)
        outcome = TaskOutcome(pid=pid, status=status)
        logger.debug(f"Isolated task {outcome.describe()}", pid=pid)
        return outcome

    def run(self) -> TaskOutcome:
        return self.start().join()


__all__ = [
    "EXIT_TASK_CRASHED",
    "EXIT_TASK_FAILURE",
    "EXIT_TASK_SUCCESS",
    "IsolatedTask",
    "TaskOutcome",
]
