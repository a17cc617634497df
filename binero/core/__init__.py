"""Binero grid model, rules, parser, and search core."""

from .errors import BineroError, GridFormatError, InvalidInput, OutOfBounds, Unsolvable
from .model import Cell, Grid
from .parser import parse_grid, parse_lines
from .rules import check_grid, check_lane_complete, check_lane_partial, check_uniqueness
from .solver_core import count_solutions, first_solution, propagate, search

__all__ = [
    "BineroError",
    "GridFormatError",
    "InvalidInput",
    "OutOfBounds",
    "Unsolvable",
    "Cell",
    "Grid",
    "parse_grid",
    "parse_lines",
    "check_grid",
    "check_lane_complete",
    "check_lane_partial",
    "check_uniqueness",
    "count_solutions",
    "first_solution",
    "propagate",
    "search",
]
