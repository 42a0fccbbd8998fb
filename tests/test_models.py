"""Tests for lockchart value types."""

import os

import pytest

from lockchart.models import (
    AXIS,
    AXIS_INDEX,
    GRID_SIZE,
    AccessIntent,
    CellAlreadySetError,
    Combination,
    GridFrozenError,
    LockDisposition,
    LockMechanism,
    OutcomeGrid,
    Party,
)


def _filled_grid(value: bool = True) -> OutcomeGrid:
    grid = OutcomeGrid()
    for first in AXIS:
        for second in AXIS:
            grid.record(first, second, value)
    return grid


class TestEnums:
    """Enumeration order and lookup tables."""

    def test_disposition_order(self):
        assert list(LockDisposition) == [
            LockDisposition.EXCLUSIVE,
            LockDisposition.SHARED,
            LockDisposition.NONE,
        ]

    def test_intent_open_flags(self):
        assert AccessIntent.READ.open_flags == os.O_RDONLY
        assert AccessIntent.WRITE.open_flags == os.O_WRONLY
        assert AccessIntent.READ_WRITE.open_flags == os.O_RDWR

    def test_intent_labels(self):
        assert AccessIntent.READ.label == "read only"
        assert AccessIntent.READ_WRITE.short == "RW"

    def test_mechanism_option_letters(self):
        assert LockMechanism.SHAREMODE.option == "s"
        assert LockMechanism.FLOCK.option == "l"
        assert LockMechanism.FCNTL.option == "c"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("flock", LockMechanism.FLOCK),
            ("FCNTL", LockMechanism.FCNTL),
            (" c ", LockMechanism.FCNTL),
            ("s", LockMechanism.SHAREMODE),
        ],
    )
    def test_mechanism_parse(self, text, expected):
        assert LockMechanism.parse(text) is expected

    def test_mechanism_parse_rejects_unknown(self):
        with pytest.raises(ValueError):
            LockMechanism.parse("lockf")


class TestParty:
    def test_describe(self):
        party = Party(
            path="/tmp/x",
            intent=AccessIntent.WRITE,
            disposition=LockDisposition.SHARED,
            mechanism=LockMechanism.FLOCK,
        )
        assert party.describe() == "write only with shared flock"

    def test_none_disposition_reads_as_no(self):
        combo = Combination(LockDisposition.NONE, AccessIntent.READ)
        party = combo.party("/tmp/x", LockMechanism.FCNTL)
        assert party.describe() == "read only with no fcntl"
        assert party.path == "/tmp/x"


class TestAxis:
    def test_axis_has_nine_combinations(self):
        assert GRID_SIZE == 9
        assert len(set(AXIS)) == 9

    def test_axis_is_disposition_major(self):
        assert [c.disposition for c in AXIS[:3]] == [LockDisposition.EXCLUSIVE] * 3
        assert [c.disposition for c in AXIS[6:]] == [LockDisposition.NONE] * 3
        assert [c.intent for c in AXIS[3:6]] == list(AccessIntent)

    def test_axis_index_matches_position(self):
        for i, combo in enumerate(AXIS):
            assert AXIS_INDEX[combo] == i


class TestOutcomeGrid:
    """Each cell is set exactly once, then the grid is frozen."""

    def test_new_grid_is_empty(self):
        grid = OutcomeGrid()
        assert grid.filled() == 0
        assert not grid.is_complete()
        assert grid[0, 0] is None

    def test_record_and_get(self):
        grid = OutcomeGrid()
        first, second = AXIS[1], AXIS[7]
        grid.record(first, second, False)
        assert grid.get(first, second) is False
        assert grid[1, 7] is False

    def test_cell_cannot_be_set_twice(self):
        grid = OutcomeGrid()
        grid.record(AXIS[0], AXIS[0], True)
        with pytest.raises(CellAlreadySetError):
            grid.record(AXIS[0], AXIS[0], True)

    def test_freeze_requires_all_cells(self):
        grid = OutcomeGrid()
        grid.record(AXIS[0], AXIS[0], True)
        with pytest.raises(ValueError):
            grid.freeze()

    def test_frozen_grid_rejects_writes(self):
        grid = OutcomeGrid()
        for first in AXIS:
            for second in AXIS:
                if (first, second) != (AXIS[-1], AXIS[-1]):
                    grid.record(first, second, True)
        grid.record(AXIS[-1], AXIS[-1], False)
        grid.freeze()
        assert grid.frozen
        assert grid.filled() == 81
        with pytest.raises(GridFrozenError):
            grid.record(AXIS[0], AXIS[0], True)

    def test_counts(self):
        grid = _filled_grid(False)
        assert grid.counts() == {"passed": 0, "failed": 81}

    def test_equality_compares_cells(self):
        assert _filled_grid(True) == _filled_grid(True)
        assert _filled_grid(True) != _filled_grid(False)

    def test_items_follow_axis_order(self):
        grid = _filled_grid(True)
        items = list(grid.items())
        assert len(items) == 81
        assert items[0][:2] == (AXIS[0], AXIS[0])
        assert items[9][:2] == (AXIS[1], AXIS[0])
