"""Logic-grid puzzle model, parsing, and the exact-cover / brute-force search engines."""

from .model import Coord, Grid, Hint, HintKind, Puzzle
from .solver_core import solve, solve_brute_force, solve_exact_cover
from .parser import PuzzleFormatError, parse_puzzle

__all__ = [
    "Coord",
    "Grid",
    "Hint",
    "HintKind",
    "Puzzle",
    "solve",
    "solve_brute_force",
    "solve_exact_cover",
    "PuzzleFormatError",
    "parse_puzzle",
]
