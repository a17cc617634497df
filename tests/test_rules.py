"""Unit tests for the Binero rule predicates."""

from binero.core.model import Cell, Grid
from binero.core import rules

Z, O, E = Cell.ZERO, Cell.ONE, Cell.EMPTY


def test_partial_lane_balance_and_runs():
    assert rules.check_lane_partial((O, O, E, Z))
    assert not rules.check_lane_partial((O, O, E, O))  # three ones in a lane of four
    assert not rules.check_lane_partial((Z, Z, Z, E, E, E))
    assert rules.check_lane_partial((Z, Z, E, Z, E, E))


def test_empty_cells_break_runs():
    assert rules.check_runs((O, O, E, O, O, E))
    assert not rules.check_runs((E, O, O, O))


def test_complete_lane_requires_exact_balance():
    assert rules.check_lane_complete((O, O, Z, Z))
    assert not rules.check_lane_complete((O, Z, E, Z))
    assert not rules.check_lane_complete((O, Z, O, Z, O, O))


def test_lane_distinct_ignores_incomplete_lanes():
    lane = (O, Z, O, Z)
    assert rules.check_lane_distinct(lane, [(O, Z, E, Z), (Z, O, O, Z)])
    assert not rules.check_lane_distinct(lane, [(O, Z, O, Z)])
    # An incomplete lane is never compared, not even as a wildcard match.
    assert rules.check_lane_distinct((O, Z, E, Z), [(O, Z, O, Z)])


def test_uniqueness_rows_and_columns():
    dup_rows = Grid.from_rows([
        [0, 1, 0, 1],
        [0, 1, 0, 1],
        [None, None, None, None],
        [None, None, None, None],
    ])
    assert not rules.check_uniqueness(dup_rows)

    partial = Grid.from_rows([
        [0, 1, 0, 1],
        [0, 1, 0, None],
        [None, None, None, None],
        [None, None, None, None],
    ])
    assert rules.check_uniqueness(partial)


def test_check_grid_on_valid_solution():
    grid = Grid.from_rows([[1, 1, 0, 0], [0, 0, 1, 1], [1, 0, 0, 1], [0, 1, 1, 0]])
    assert rules.check_grid(grid)
    assert rules.find_violation(grid) is None


def test_find_violation_describes_problem():
    grid = Grid.from_rows([[1, 1, 1, 0]] + [[None] * 4] * 3)
    assert not rules.check_grid(grid)
    assert "row 0" in rules.find_violation(grid)
