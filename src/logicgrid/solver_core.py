"""Search strategies: dancing-links exact cover and brute-force permutation backtracking.

Both engines take the grid dimensions, the symbol table and the compiled hints,
call `on_solution(grid)` once per accepted grid and stop as soon as the callback
returns a truthy value. They return the number of grids delivered.

Steps are only recorded into a `Tracer` passed by the caller; without one the
search keeps no log.
"""

from typing import Callable, Dict, List, Optional, Sequence

from .constraints import first_violation
from .encoder import build_exact_cover
from .model import Grid, Hint, Puzzle
from src.utils.trace import Tracer

GridCallback = Callable[[Grid], Optional[bool]]


def _check_dimensions(num_rows: int, num_cols: int, symbols: Sequence[Sequence[str]]) -> None:
    if len(symbols) != num_rows or any(len(row) != num_cols for row in symbols):
        raise ValueError(f"Symbol table must be {num_rows}x{num_cols}")


def solve_exact_cover(
    num_rows: int,
    num_cols: int,
    symbols: Sequence[Sequence[str]],
    hints: Sequence[Hint],
    on_solution: GridCallback,
    tracer: Optional[Tracer] = None,
) -> int:
    """
    Compile the puzzle into an exact-cover instance (one DLX-row per surviving
    candidate column) and enumerate every cover. Each cover picks exactly N
    candidate columns; they are placed in the grid by their row-0 position.
    """
    tracer = tracer or Tracer(enabled=False)
    _check_dimensions(num_rows, num_cols, symbols)
    encoding = build_exact_cover(num_rows, num_cols, hints, tracer, symbols)

    def _emit(rows: List[int]) -> Optional[bool]:
        grid = [[0] * num_cols for _ in range(num_rows)]
        for row_id in rows:
            column = encoding.candidates[row_id]
            for r in range(num_rows):
                grid[r][column[0]] = column[r]
        return on_solution(tuple(tuple(row) for row in grid))

    return encoding.matrix.search(_emit, tracer)


def solve_brute_force(
    num_rows: int,
    num_cols: int,
    symbols: Sequence[Sequence[str]],
    hints: Sequence[Hint],
    on_solution: GridCallback,
    tracer: Optional[Tracer] = None,
) -> int:
    """
    Generate every permutation of every row except row 0 and check all hints
    against each complete grid. No pruning happens before full depth.
    """
    tracer = tracer or Tracer(enabled=False)
    _check_dimensions(num_rows, num_cols, symbols)
    identity = tuple(range(num_cols))
    perm = [list(identity) for _ in range(num_rows - 1)]
    found = 0

    def _check_grid() -> bool:
        nonlocal found
        grid = (identity, *(tuple(p) for p in perm))
        failed = first_violation(hints, grid)
        tracer.log_grid_check(
            is_valid=failed is None,
            constraint_desc=failed.describe(symbols) if failed is not None else None,
        )
        if failed is not None:
            return False
        found += 1
        tracer.log_solution_found(size=num_cols)
        return bool(on_solution(grid))

    def _permute_row(m: int) -> bool:
        if m == num_rows - 1:
            return _check_grid()
        return _permute_slot(m, 0)

    def _permute_slot(m: int, k: int) -> bool:
        if k == num_cols:
            return _permute_row(m + 1)
        row = perm[m]
        for i in range(k, num_cols):
            row[k], row[i] = row[i], row[k]
            stop = _permute_slot(m, k + 1)
            row[k], row[i] = row[i], row[k]
            if stop:
                return True
        return False

    _permute_row(0)
    return found


ALGORITHMS: Dict[str, Callable[..., int]] = {
    "dlx": solve_exact_cover,
    "per_col_dlx": solve_exact_cover,
    "brute": solve_brute_force,
}


def solve(
    puzzle: Puzzle,
    algorithm: str = "dlx",
    max_solutions: Optional[int] = None,
    tracer: Optional[Tracer] = None,
) -> List[Grid]:
    """Collect the grids accepted by the chosen engine, up to `max_solutions`."""
    try:
        engine = ALGORITHMS[algorithm]
    except KeyError:
        raise ValueError(f"Unknown algorithm: {algorithm}") from None

    grids: List[Grid] = []

    def _collect(grid: Grid) -> bool:
        grids.append(grid)
        return max_solutions is not None and len(grids) >= max_solutions

    if max_solutions is not None and max_solutions <= 0:
        return grids
    engine(puzzle.num_rows, puzzle.num_cols, puzzle.symbols, puzzle.hints, _collect, tracer)
    return grids
