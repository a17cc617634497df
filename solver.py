"""Top-level Binero solve interface.

Expose `solve(grid)` for validated Grid input and `solve_puzzle(puzzle)` that
also accepts puzzle text, a list of rows, or a loader record dictionary.
"""

from typing import Any, Optional

from binero.core import solver_core
from binero.core.errors import GridFormatError, InvalidInput, Unsolvable
from binero.core.model import Grid
from binero.core.parser import parse_grid
from binero.core.rules import find_violation
from binero.utils.trace import Tracer, get_tracer


def _validate(grid: Any) -> None:
    if not isinstance(grid, Grid):
        raise InvalidInput(f"expected a Grid, got {type(grid).__name__}")
    if grid.size <= 0 or grid.size % 2 != 0:
        raise InvalidInput(f"grid size must be even and positive, got {grid.size}")
    violation = find_violation(grid)
    if violation is not None:
        raise InvalidInput(f"starting grid breaks a rule: {violation}")


def solve(
    grid: Grid,
    *,
    propagate: bool = True,
    max_nodes: Optional[int] = None,
    tracer: Optional[Tracer] = None,
) -> Grid:
    """
    Return a completed copy of `grid` satisfying balance, run-length and
    uniqueness. Raises InvalidInput when the starting grid is unusable and
    Unsolvable when no completion exists (or the node budget runs out).
    """
    tracer = tracer or get_tracer()
    _validate(grid)

    work = grid.copy()
    if propagate and solver_core.propagate(work, tracer):
        violation = find_violation(work)
        if violation is not None:
            tracer.log_constraint_check(violation, is_valid=False)
            raise Unsolvable(f"forced moves lead to a contradiction: {violation}", reason="contradiction")

    return solver_core.first_solution(work, tracer=tracer, max_nodes=max_nodes)


def is_ambiguous(grid: Grid, **kwargs: Any) -> bool:
    """True when `grid` has more than one valid completion."""
    _validate(grid)
    return solver_core.count_solutions(grid, limit=2, **kwargs) > 1


def to_grid(puzzle: Any) -> Grid:
    """
    Build a Grid from any accepted puzzle form:
      - Grid instances (used directly)
      - puzzle text (parsed via `parse_grid`)
      - lists of rows (via `Grid.from_rows`)
      - loader record dictionaries with a "puzzle" entry
    """
    if isinstance(puzzle, Grid):
        return puzzle
    if isinstance(puzzle, dict):
        if not isinstance(puzzle.get("puzzle"), (Grid, str, list, tuple)):
            raise InvalidInput("puzzle record has no usable 'puzzle' entry")
        return to_grid(puzzle["puzzle"])
    try:
        if isinstance(puzzle, str):
            return parse_grid(puzzle)
        if isinstance(puzzle, (list, tuple)):
            return Grid.from_rows(puzzle)
    except GridFormatError as e:
        raise InvalidInput(f"malformed puzzle: {e}") from e
    raise TypeError("solve_puzzle expects a Grid, puzzle text, list of rows, or puzzle dictionary")


def solve_puzzle(puzzle: Any, **kwargs: Any) -> Grid:
    return solve(to_grid(puzzle), **kwargs)


__all__ = ["solve", "solve_puzzle", "is_ambiguous", "to_grid", "InvalidInput", "Unsolvable"]
