"""Constraint semantics shared by both search strategies.

A *candidate column* is a tuple holding one original index per row; `column[0]`
is the position of the column because row 0 is the fixed ordinal axis.
A *grid* holds, per row, the original index found in each final column.
"""

from collections import Counter
from typing import List, Sequence

from .model import Coord, Grid, Hint, HintKind

CROSS_COLUMN_KINDS = frozenset(
    {
        HintKind.LEFT_OF,
        HintKind.ADJACENT,
        HintKind.ONE_LEFT_OF,
        HintKind.AT_MOST_ONE_CLUSTER,
        HintKind.PAIR_LIMIT,
    }
)


def is_cross_column(kind: HintKind) -> bool:
    return kind in CROSS_COLUMN_KINDS


def has(column: Sequence[int], coord: Coord) -> bool:
    return column[coord.row] == coord.index


def column_matches(hint: Hint, column: Sequence[int]) -> List[bool]:
    return [has(column, c) for c in hint.coords]


def rejects_column(hint: Hint, column: Sequence[int]) -> bool:
    """Return True when `column` alone already rules out every grid containing it."""
    matches = column_matches(hint, column)
    count = sum(matches)
    kind = hint.kind

    if kind is HintKind.EQUAL:
        return 0 < count < len(matches)
    if kind in (HintKind.DISTINCT, HintKind.LEFT_OF, HintKind.ADJACENT, HintKind.ONE_LEFT_OF):
        return count > 1
    if kind is HintKind.EXACTLY_ONE:
        return matches[0] and count != 2
    if kind is HintKind.PAIRED:
        if matches[0] and matches[1]:
            return True
        if matches[2] and matches[3]:
            return True
        return count not in (0, 2)
    if kind is HintKind.PAIR_LIMIT:
        return _pairs_matched(matches) > 1
    return False


def _pairs_matched(matches: Sequence[bool]) -> int:
    return sum(1 for i in range(0, len(matches) - 1, 2) if matches[i] and matches[i + 1])


def position(grid: Grid, coord: Coord) -> int:
    """Final column holding `coord`; rows of a valid grid are permutations."""
    return grid[coord.row].index(coord.index)


def is_violated(hint: Hint, grid: Grid) -> bool:
    """Full-grid check: True when `grid` breaks `hint`."""
    cols = [position(grid, c) for c in hint.coords]
    kind = hint.kind

    if kind is HintKind.EQUAL:
        return len(set(cols)) > 1
    if kind is HintKind.DISTINCT:
        return len(set(cols)) < len(cols)
    if kind is HintKind.LEFT_OF:
        return cols[0] >= cols[1]
    if kind is HintKind.ONE_LEFT_OF:
        return cols[0] + 1 != cols[1]
    if kind is HintKind.ADJACENT:
        return abs(cols[0] - cols[1]) != 1
    if kind is HintKind.EXACTLY_ONE:
        return sum(1 for c in cols[1:] if c == cols[0]) != 1
    if kind is HintKind.AT_MOST_ONE_CLUSTER:
        crowded = [col for col, count in Counter(cols).items() if count >= 2]
        return len(crowded) > 1
    if kind is HintKind.PAIRED:
        if cols[0] == cols[1] or cols[2] == cols[3]:
            return True
        return any(count != 2 for count in Counter(cols).values())
    if kind is HintKind.PAIR_LIMIT:
        shared = sum(1 for i in range(0, len(cols) - 1, 2) if cols[i] == cols[i + 1])
        return shared > 1
    raise ValueError(f"Unsupported hint kind: {kind}")


def first_violation(hints: Sequence[Hint], grid: Grid):
    for hint in hints:
        if is_violated(hint, grid):
            return hint
    return None
