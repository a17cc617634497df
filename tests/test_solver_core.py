"""Unit tests for the backtracking search and forced-move propagation."""

import inspect
import sys

import pytest

from binero.core import solver_core
from binero.core.errors import Unsolvable
from binero.core.model import Cell, Grid
from binero.core.rules import check_grid
from binero.utils.trace import Tracer

EXAMPLE = [
    [1, 1, None, 0],
    [None, 0, None, None],
    [None, None, 0, None],
    [None, 1, None, 0],
]
EXAMPLE_SOLUTION = [[1, 1, 0, 0], [0, 0, 1, 1], [1, 0, 0, 1], [0, 1, 1, 0]]


def test_first_solution_on_example_puzzle():
    grid = Grid.from_rows(EXAMPLE)
    solution = solver_core.first_solution(grid, tracer=Tracer())
    assert solution.to_rows() == EXAMPLE_SOLUTION


def test_search_does_not_mutate_input():
    grid = Grid.from_rows(EXAMPLE)
    before = grid.copy()
    solver_core.first_solution(grid, tracer=Tracer())
    assert grid == before


def test_search_order_is_zero_first_row_major():
    solution = solver_core.first_solution(Grid.empty(2), tracer=Tracer())
    assert solution.to_rows() == [[0, 1], [1, 0]]


def test_resuming_search_yields_independent_solutions():
    solutions = list(solver_core.search(Grid.empty(2), tracer=Tracer()))
    assert [s.to_rows() for s in solutions] == [[[0, 1], [1, 0]], [[1, 0], [0, 1]]]
    assert solutions[0] is not solutions[1]


def test_count_solutions_stops_at_limit():
    assert solver_core.count_solutions(Grid.empty(2), limit=5, tracer=Tracer()) == 2
    assert solver_core.count_solutions(Grid.empty(4), limit=3, tracer=Tracer()) == 3
    assert solver_core.count_solutions(Grid.from_rows(EXAMPLE), tracer=Tracer()) == 1


def test_exhausted_search_raises_unsolvable():
    # (1, 3) can take neither value: 0 unbalances row 1, 1 duplicates row 0.
    grid = Grid.from_rows([
        [0, 0, 1, 1],
        [0, 0, 1, None],
        [None, None, None, None],
        [None, None, None, None],
    ])
    with pytest.raises(Unsolvable) as exc:
        solver_core.first_solution(grid, tracer=Tracer())
    assert exc.value.reason == "exhausted"


def test_node_budget_surfaces_as_unsolvable():
    tracer = Tracer()
    with pytest.raises(Unsolvable) as exc:
        solver_core.first_solution(Grid.empty(6), tracer=tracer, max_nodes=5)
    assert exc.value.reason == "budget"
    assert tracer.summary()["action_counts"]["budget_exceeded"] == 1


def test_tracer_records_assignments_and_backtracks():
    tracer = Tracer()
    solver_core.first_solution(Grid.empty(4), tracer=tracer)
    summary = tracer.summary()
    assert summary["num_assignments"] >= 16
    assert summary["num_backtracks"] > 0
    assert summary["action_counts"]["solution_found"] == 1


def test_propagation_only_makes_forced_moves():
    grid = Grid.from_rows(EXAMPLE)
    filled = solver_core.propagate(grid, Tracer())
    assert filled > 0
    for i in range(4):
        for j in range(4):
            value = grid.get(i, j)
            if value is not Cell.EMPTY:
                assert value.to_int() == EXAMPLE_SOLUTION[i][j]


def test_propagation_fills_saturated_lane():
    grid = Grid.from_rows([
        [0, 0, None, None],
        [None] * 4,
        [None] * 4,
        [None] * 4,
    ])
    solver_core.propagate(grid, Tracer())
    assert grid.row(0) == (Cell.ZERO, Cell.ZERO, Cell.ONE, Cell.ONE)


def test_propagation_sandwich_rule():
    grid = Grid.from_rows([
        [1, None, 1, None, None, None],
    ] + [[None] * 6 for _ in range(5)])
    solver_core.propagate(grid, Tracer())
    assert grid.get(0, 1) is Cell.ZERO


def test_every_solution_of_empty_grid_is_valid():
    for solution in solver_core.search(Grid.empty(4), tracer=Tracer(enabled=False)):
        assert solution.is_complete()
        assert check_grid(solution)


def test_search_depth_does_not_grow_the_call_stack():
    # 64 empty cells, but the interpreter may only go 40 frames deeper than here.
    current_depth = len(inspect.stack(0))
    old_limit = sys.getrecursionlimit()
    sys.setrecursionlimit(current_depth + 40)
    try:
        solution = solver_core.first_solution(Grid.empty(8), tracer=Tracer(enabled=False))
    finally:
        sys.setrecursionlimit(old_limit)
    assert check_grid(solution)
