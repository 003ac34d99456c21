"""Tracing module: logs search steps of the logic-grid solvers and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence


@dataclass
class TraceStep:
    """A single step in the solving process."""

    timestamp: float
    step_number: int
    action_type: str  # 'column_rejected', 'row_added', 'select', 'backtrack', 'grid_check', 'solution_found'
    row: Optional[int] = None  # DLX-row id
    column: Optional[int] = None  # DLX-column id
    depth: Optional[int] = None
    branching: Optional[int] = None  # Live rows in the chosen column
    candidate: Optional[str] = None  # Candidate column, one original index per grid row
    constraint_checked: Optional[str] = None
    is_valid: Optional[bool] = None
    reason: Optional[str] = None


def _fmt_candidate(candidate: Sequence[int]) -> str:
    return " ".join(str(i) for i in candidate)


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

    def _record(self, action_type: str, **fields: Any) -> None:
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_column_rejected(self, candidate: Sequence[int], constraint_desc: str):
        """Log a candidate column dropped by a column-local rule."""
        if not self.enabled:
            return
        self._record(
            'column_rejected',
            candidate=_fmt_candidate(candidate),
            constraint_checked=constraint_desc,
            is_valid=False,
        )

    def log_row_added(self, row: int, candidate: Sequence[int]):
        """Log a candidate column that became a DLX-row."""
        if not self.enabled:
            return
        self._record('row_added', row=row, candidate=_fmt_candidate(candidate))

    def log_select(self, row: int, column: int, depth: int, branching: int):
        """Log a tentative row selection while covering `column`."""
        if not self.enabled:
            return
        self._record('select', row=row, column=column, depth=depth, branching=branching)

    def log_backtrack(self, column: Optional[int] = None, depth: Optional[int] = None,
                      reason: str = "Rows exhausted"):
        """Log a backtrack event."""
        if not self.enabled:
            return
        self._record('backtrack', column=column, depth=depth, reason=reason)

    def log_grid_check(self, is_valid: bool, constraint_desc: Optional[str] = None):
        """Log a full-grid constraint check (brute force)."""
        if not self.enabled:
            return
        self._record('grid_check', is_valid=is_valid, constraint_checked=constraint_desc)

    def log_solution_found(self, size: int):
        """Log when a solution is found."""
        if not self.enabled:
            return
        self._record('solution_found', depth=size)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'row', 'column', 'depth',
            'branching', 'candidate', 'constraint_checked', 'is_valid', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()

            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_selections': action_counts.get('select', 0),
            'num_backtracks': action_counts.get('backtrack', 0),
            'num_grid_checks': action_counts.get('grid_check', 0),
            'num_solutions': action_counts.get('solution_found', 0),
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
