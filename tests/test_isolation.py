"""Tests for the forked isolated task."""

from __future__ import annotations

import os
import signal

import pytest

from lockchart.exceptions import IsolationError
from lockchart.isolation import (
    EXIT_TASK_CRASHED,
    EXIT_TASK_FAILURE,
    EXIT_TASK_SUCCESS,
    IsolatedTask,
    TaskOutcome,
)
from tests.helpers import requires_fork

pytestmark = requires_fork


def _kill_self() -> bool:
    os.kill(os.getpid(), signal.SIGKILL)
    return True


def _explode() -> bool:
    raise RuntimeError("boom")


class TestIsolatedTask:
    def test_truthy_target_succeeds(self):
        outcome = IsolatedTask(lambda: True).run()
        assert outcome.exited
        assert outcome.exit_code == EXIT_TASK_SUCCESS
        assert outcome.succeeded

    def test_falsy_target_fails(self):
        outcome = IsolatedTask(lambda: None).run()
        assert outcome.exit_code == EXIT_TASK_FAILURE
        assert not outcome.succeeded

    def test_arguments_reach_child(self):
        outcome = IsolatedTask(lambda a, b: a + b == 5, 2, 3).run()
        assert outcome.succeeded

    def test_exception_in_child_is_a_crash_exit(self):
        outcome = IsolatedTask(_explode).run()
        assert outcome.exit_code == EXIT_TASK_CRASHED
        assert not outcome.succeeded

    def test_signal_death_is_not_success(self):
        outcome = IsolatedTask(_kill_self).run()
        assert not outcome.exited
        assert outcome.exit_code is None
        assert outcome.signal == signal.SIGKILL
        assert not outcome.succeeded
        assert "SIGKILL" in outcome.describe()

    def test_child_memory_is_isolated(self):
        state = {"touched": False}

        def _mutate() -> bool:
            state["touched"] = True
            return True

        assert IsolatedTask(_mutate).run().succeeded
        assert state["touched"] is False

    def test_fork_failure_raises_isolation_error(self, monkeypatch):
        def _fail():
            raise OSError(11, "Resource temporarily unavailable")

        monkeypatch.setattr(os, "fork", _fail)
        with pytest.raises(IsolationError) as exc_info:
            IsolatedTask(lambda: True).start()
        assert "Resource temporarily unavailable" in str(exc_info.value)

    def test_join_requires_start(self):
        with pytest.raises(RuntimeError):
            IsolatedTask(lambda: True).join()

    def test_start_twice_rejected(self):
        task = IsolatedTask(lambda: True).start()
        try:
            with pytest.raises(RuntimeError):
                task.start()
        finally:
            task.join()


class TestTaskOutcome:
    def test_describe_exit(self):
        outcome = TaskOutcome(pid=1, status=1 << 8)
        assert outcome.exited
        assert outcome.describe() == "exited 1"
