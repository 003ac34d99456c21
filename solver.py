"""Top-level solve interface.

Expose `solve_puzzle(puzzle)` that accepts a pre-built `Puzzle`, raw puzzle text,
or a puzzle dictionary compatible with `src.logicgrid.parser.parse_puzzle`.
"""

from typing import Any, List, Optional

from src.logicgrid import solver_core
from src.logicgrid.model import Grid, Puzzle
from src.logicgrid.parser import parse_puzzle
from src.utils.trace import Tracer


def solve_puzzle(
    puzzle: Any,
    algorithm: str = "dlx",
    max_solutions: Optional[int] = None,
    tracer: Optional[Tracer] = None,
) -> List[Grid]:
    """
    Solve a puzzle and return every accepted grid (up to `max_solutions`).
    Accepts:
      - Puzzle instances (used directly)
      - Raw puzzle text or puzzle dictionaries (parsed via `parse_puzzle`)
    Search steps are recorded only when a `tracer` is given.
    """
    if isinstance(puzzle, Puzzle):
        parsed = puzzle
    elif isinstance(puzzle, (str, dict)):
        parsed = parse_puzzle(puzzle)
    else:
        raise TypeError("solve_puzzle expects a Puzzle, puzzle text or puzzle dictionary")

    return solver_core.solve(parsed, algorithm=algorithm, max_solutions=max_solutions, tracer=tracer)


def format_grid(puzzle: Puzzle, grid: Grid) -> List[List[str]]:
    """One list of symbol names per final column, row 0 first."""
    return [
        [puzzle.symbol_at((r, grid[r][c])) for r in range(puzzle.num_rows)]
        for c in range(puzzle.num_cols)
    ]


__all__ = ["solve_puzzle", "format_grid"]
