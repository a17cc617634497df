"""Tracing module: logs Binero solver steps and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict, fields
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd


@dataclass
class TraceStep:
    """A single step in the solving process."""

    timestamp: float
    step_number: int
    action_type: str  # 'assign', 'backtrack', 'constraint_check', 'propagate', 'solution_found', ...
    row: Optional[int] = None
    col: Optional[int] = None
    value: Optional[str] = None
    depth: Optional[int] = None  # Number of search assignments on the current path
    constraint_checked: Optional[str] = None
    is_valid: Optional[bool] = None
    reason: Optional[str] = None


class Tracer:
    """Records solver steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **kwargs: Any) -> None:
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **kwargs,
        ))

    def log_assign(self, row: int, col: int, value: Any, depth: int):
        """Log a tentative cell assignment made by the search."""
        if not self.enabled:
            return
        self._record('assign', row=row, col=col, value=str(value), depth=depth)

    def log_backtrack(self, row: int, col: int, depth: int, reason: str = "No valid values"):
        """Log a backtrack event."""
        if not self.enabled:
            return
        self._record('backtrack', row=row, col=col, depth=depth, reason=reason)

    def log_constraint_check(self, constraint_desc: str, is_valid: bool,
                             row: Optional[int] = None, col: Optional[int] = None):
        """Log a rule check."""
        if not self.enabled:
            return
        self._record('constraint_check', constraint_checked=constraint_desc,
                     is_valid=is_valid, row=row, col=col)

    def log_propagation(self, row: int, col: int, value: Any, reason: str = ""):
        """Log a cell filled by a forced move."""
        if not self.enabled:
            return
        self._record('propagate', row=row, col=col, value=str(value), reason=reason)

    def log_budget_exceeded(self, max_nodes: int):
        if not self.enabled:
            return
        self._record('budget_exceeded', reason=f"Node budget of {max_nodes} exhausted")

    def log_solution_found(self, depth: int):
        """Log when a solution is found."""
        if not self.enabled:
            return
        self._record('solution_found', depth=depth)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [f.name for f in fields(TraceStep)]
        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def to_frame(self) -> pd.DataFrame:
        """Trace steps as a DataFrame, one row per step."""
        columns = [f.name for f in fields(TraceStep)]
        return pd.DataFrame([asdict(step) for step in self.steps], columns=columns)

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_assignments': action_counts.get('assign', 0),
            'num_backtracks': action_counts.get('backtrack', 0),
            'num_propagations': action_counts.get('propagate', 0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=True)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
