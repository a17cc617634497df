"""CLI entrypoint: load Binero puzzle(s), run solver, and report results."""

import argparse
import csv
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from solver import is_ambiguous, solve_puzzle, to_grid
from binero.core.errors import BineroError, Unsolvable
from binero.core.loader import load_puzzles
from binero.core.model import Grid
from binero.utils.trace import Tracer, get_tracer, reset_tracer

PUZZLE_SUFFIXES = [".txt", ".bin", ".binero", ".json", ".jsonl", ".csv", ".parquet"]


def _default_max_nodes() -> Optional[str]:
    # Left as a string so argparse applies `type=int` and reports bad values.
    return os.environ.get("BINERO_MAX_NODES", "").strip() or None


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Solve Binero (binary grid) puzzles")
    parser.add_argument("input", type=Path, help="Path to a puzzle file or a directory of puzzles")
    parser.add_argument("--output", type=Path, default=None, help="Optional CSV path to write results")
    parser.add_argument("--trace", type=Path, default=None, help="Optional CSV path to write the solver trace")
    parser.add_argument(
        "--max-nodes",
        type=int,
        default=_default_max_nodes(),
        help="Abort a puzzle after this many search assignments (default: $BINERO_MAX_NODES or unlimited)",
    )
    parser.add_argument(
        "--no-propagate",
        action="store_true",
        help="Skip forced-move propagation and rely on search alone.",
    )
    parser.add_argument(
        "--check-unique",
        action="store_true",
        help="Also report whether the puzzle has more than one solution.",
    )
    return parser.parse_args(argv)


def format_solution(grid: Optional[Grid]) -> str:
    """Single-line rendering: rows joined by '/'."""
    if grid is None:
        return ""
    return "/".join("".join(str(cell) for cell in row) for row in grid.rows())


def write_results_csv(results: List[Dict[str, Any]], output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "status", "solution", "steps"])

        for r in results:
            writer.writerow([r["id"], r["status"], r["solution"], r["steps"]])


def _collect_puzzles(input_path: Path) -> List[Dict[str, Any]]:
    if input_path.is_file():
        return load_puzzles(str(input_path))
    if input_path.is_dir():
        puzzles = []
        for file_path in sorted(input_path.iterdir()):
            if file_path.suffix in PUZZLE_SUFFIXES:
                puzzles.extend(load_puzzles(str(file_path)))
        return puzzles
    raise ValueError(f"Input path {input_path} is neither file nor directory")


def report_uniqueness(grid: Grid, args) -> Optional[bool]:
    """Print whether `grid` has more than one solution; None when the check ran out of budget."""
    try:
        ambiguous = is_ambiguous(grid, max_nodes=args.max_nodes, tracer=Tracer(enabled=False))
    except Unsolvable as e:
        print(f"Uniqueness check inconclusive: {e}")
        return None
    print("Ambiguous: more than one solution exists" if ambiguous else "Unique solution")
    return ambiguous


def solve_one(puzzle: Dict[str, Any], args) -> Dict[str, Any]:
    reset_tracer()
    tracer = get_tracer()
    puzzle_id = puzzle.get("id", "unknown")
    status = "solved"
    solution = None

    try:
        grid = to_grid(puzzle)
        print(f"[{puzzle_id}] Input:")
        print(grid)
        solution = solve_puzzle(grid, propagate=not args.no_propagate, max_nodes=args.max_nodes)
        print("Solution:")
        print(solution)
    except Unsolvable as e:
        status = "budget" if e.reason == "budget" else "unsolvable"
        print(f"ERROR: {puzzle_id}: {e}")
    except BineroError as e:
        status = "invalid"
        print(f"ERROR: {puzzle_id}: {e}")

    if solution is not None and args.check_unique:
        report_uniqueness(grid, args)

    summary = tracer.summary()
    if args.trace:
        tracer.to_csv(args.trace)

    return {
        "id": puzzle_id,
        "status": status,
        "solution": format_solution(solution),
        "steps": summary["num_assignments"],
    }


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    puzzles = _collect_puzzles(args.input)

    results = [solve_one(puzzle, args) for puzzle in puzzles]

    if args.output:
        write_results_csv(results, args.output)
    return results


if __name__ == "__main__":
    main()
