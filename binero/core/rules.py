"""Binero rules as pure predicates over lanes (rows/columns) and grids.

Empty cells never count toward balance or runs, and lanes that are not yet
complete are exempt from the uniqueness rule.
"""

from typing import Iterable, List, Optional, Sequence

from .model import Cell, Grid, Lane


def is_lane_complete(lane: Sequence[Cell]) -> bool:
    return all(cell is not Cell.EMPTY for cell in lane)


def check_balance(lane: Sequence[Cell]) -> bool:
    """Neither value may fill more than half of the lane."""
    half = len(lane) // 2
    zeros = sum(1 for cell in lane if cell is Cell.ZERO)
    ones = sum(1 for cell in lane if cell is Cell.ONE)
    return zeros <= half and ones <= half


def check_runs(lane: Sequence[Cell]) -> bool:
    """No window of three consecutive filled cells may be uniform."""
    for k in range(len(lane) - 2):
        first = lane[k]
        if first is not Cell.EMPTY and first is lane[k + 1] and first is lane[k + 2]:
            return False
    return True


def check_lane_partial(lane: Sequence[Cell]) -> bool:
    return check_balance(lane) and check_runs(lane)


def check_lane_complete(lane: Sequence[Cell]) -> bool:
    # With no empty cells, "at most half" of each value means exactly half.
    return is_lane_complete(lane) and len(lane) % 2 == 0 and check_lane_partial(lane)


def check_lane(lane: Sequence[Cell]) -> bool:
    if is_lane_complete(lane):
        return check_lane_complete(lane)
    return check_lane_partial(lane)


def check_lane_distinct(lane: Sequence[Cell], others: Iterable[Sequence[Cell]]) -> bool:
    """A complete lane must differ from every other complete lane."""
    if not is_lane_complete(lane):
        return True
    target = tuple(lane)
    for other in others:
        if is_lane_complete(other) and tuple(other) == target:
            return False
    return True


def _duplicate_pair(lanes: List[Lane]) -> Optional[tuple]:
    seen = {}
    for idx, lane in enumerate(lanes):
        if not is_lane_complete(lane):
            continue
        if lane in seen:
            return seen[lane], idx
        seen[lane] = idx
    return None


def check_uniqueness(grid: Grid) -> bool:
    return _duplicate_pair(grid.rows()) is None and _duplicate_pair(grid.columns()) is None


def find_violation(grid: Grid) -> Optional[str]:
    """Describe the first rule violation in `grid`, or return None if there is none."""
    for kind, lanes in (("row", grid.rows()), ("column", grid.columns())):
        for idx, lane in enumerate(lanes):
            if not check_balance(lane):
                return f"{kind} {idx} has more than {len(lane) // 2} of one value"
            if not check_runs(lane):
                return f"{kind} {idx} has three consecutive equal values"
        pair = _duplicate_pair(lanes)
        if pair is not None:
            return f"{kind}s {pair[0]} and {pair[1]} are identical"
    return None


def check_grid(grid: Grid) -> bool:
    for lane in grid.rows() + grid.columns():
        if not check_lane(lane):
            return False
    return check_uniqueness(grid)
