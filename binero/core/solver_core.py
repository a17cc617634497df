"""Backtracking Binero search with per-lane pruning and forced-move propagation."""

from typing import Iterator, List, Optional

from .errors import Unsolvable
from .model import Cell, Coord, Grid, Lane
from .rules import (
    check_grid,
    check_lane,
    check_lane_distinct,
    is_lane_complete,
)
from binero.utils.trace import Tracer, get_tracer


class _NodeBudget:
    """Counts tentative assignments and stops the search past `max_nodes`."""

    def __init__(self, max_nodes: Optional[int], tracer: Tracer):
        self.max_nodes = max_nodes
        self.tracer = tracer
        self.spent = 0

    def spend(self) -> None:
        self.spent += 1
        if self.max_nodes is not None and self.spent > self.max_nodes:
            self.tracer.log_budget_exceeded(self.max_nodes)
            raise Unsolvable(
                f"search budget of {self.max_nodes} nodes exhausted",
                reason="budget",
            )


def search(
    grid: Grid, *, tracer: Optional[Tracer] = None, max_nodes: Optional[int] = None
) -> Iterator[Grid]:
    """
    Yield every valid completion of `grid`, in row-major, zero-first order.
    The first item is the default answer; resuming the generator probes for more.
    The caller's grid is never mutated and each yielded grid is an independent copy.
    Raises Unsolvable(reason="budget") once more than `max_nodes` assignments are tried.
    """
    tracer = tracer or get_tracer()
    work = grid.copy()
    empties = work.empty_cells()
    budget = _NodeBudget(max_nodes, tracer)
    yield from _backtrack(work, empties, tracer, budget)


def first_solution(grid: Grid, **kwargs) -> Grid:
    for solution in search(grid, **kwargs):
        return solution
    raise Unsolvable("search space exhausted without a valid completion", reason="exhausted")


def count_solutions(grid: Grid, limit: int = 2, **kwargs) -> int:
    """Count completions of `grid`, stopping once `limit` are found."""
    found = 0
    for _ in search(grid, **kwargs):
        found += 1
        if found >= limit:
            break
    return found


def _backtrack(
    grid: Grid, empties: List[Coord], tracer: Tracer, budget: _NodeBudget
) -> Iterator[Grid]:
    """
    Depth-first search with an explicit stack: `next_choice[d]` is the index of
    the next candidate to try at `empties[d]`. The frame that assigns a cell
    restores it to EMPTY once its candidates are exhausted.
    """
    candidates = Cell.values()
    next_choice = [0] * len(empties)
    depth = 0
    while depth >= 0:
        if depth == len(empties):
            valid = check_grid(grid)
            tracer.log_constraint_check("complete grid", is_valid=valid)
            if valid:
                tracer.log_solution_found(depth=depth)
                yield grid.copy()
            depth -= 1
            continue

        row, col = empties[depth]
        choice = next_choice[depth]
        if choice == len(candidates):
            grid.set(row, col, Cell.EMPTY)
            next_choice[depth] = 0
            tracer.log_backtrack(row, col, depth=depth, reason="Candidates exhausted")
            depth -= 1
            continue

        next_choice[depth] = choice + 1
        value = candidates[choice]
        budget.spend()
        grid.set(row, col, value)
        tracer.log_assign(row, col, value, depth=depth + 1)
        if _is_assignment_consistent(grid, row, col):
            depth += 1
        else:
            tracer.log_constraint_check("row/column", is_valid=False, row=row, col=col)


def _is_assignment_consistent(grid: Grid, row: int, col: int) -> bool:
    """Re-check only the row and column touched by the last assignment."""
    row_lane = grid.row(row)
    col_lane = grid.column(col)
    if not (check_lane(row_lane) and check_lane(col_lane)):
        return False
    if is_lane_complete(row_lane):
        others = [grid.row(i) for i in range(grid.size) if i != row]
        if not check_lane_distinct(row_lane, others):
            return False
    if is_lane_complete(col_lane):
        others = [grid.column(j) for j in range(grid.size) if j != col]
        if not check_lane_distinct(col_lane, others):
            return False
    return True


def propagate(grid: Grid, tracer: Optional[Tracer] = None) -> int:
    """
    Fill cells whose value is forced by the current state, in place, until
    nothing changes. Returns the number of cells filled.
    Only deductions shared by every solution are made, so a later search
    finds the same first solution it would have found without this pass.
    """
    tracer = tracer or get_tracer()
    filled = 0
    changed = True
    while changed:
        changed = False
        for row, col in grid.empty_cells():
            value = _forced_value(grid.row(row), col)
            source = "row"
            if value is Cell.EMPTY:
                value = _forced_value(grid.column(col), row)
                source = "column"
            if value is Cell.EMPTY:
                continue
            grid.set(row, col, value)
            tracer.log_propagation(row, col, value, reason=f"forced by {source}")
            filled += 1
            changed = True
    return filled


def _forced_value(lane: Lane, k: int) -> Cell:
    """Value forced at position `k` of `lane`, or EMPTY when nothing is forced."""
    n = len(lane)
    half = n // 2

    # Lane already holds its share of one value.
    for value in Cell.values():
        if sum(1 for cell in lane if cell is value) >= half:
            return ~value

    # Two equal neighbours before, after, or around the cell.
    if k >= 2 and _same_filled(lane[k - 2], lane[k - 1]):
        return ~lane[k - 1]
    if k + 2 < n and _same_filled(lane[k + 1], lane[k + 2]):
        return ~lane[k + 1]
    if 1 <= k < n - 1 and _same_filled(lane[k - 1], lane[k + 1]):
        return ~lane[k - 1]
    return Cell.EMPTY


def _same_filled(a: Cell, b: Cell) -> bool:
    return a is not Cell.EMPTY and a is b
