"""Column generator and exact-cover encoder.

Every candidate column (one original index per row) that survives the
column-local rules becomes a DLX-row. The first M*N DLX-columns are primary:
the symbol at row r, original index i is DLX-column N*r + i. Hints that relate
different columns get a block of secondary DLX-columns; two DLX-rows that would
jointly break such a hint are made to share a secondary slot.
"""

from dataclasses import dataclass, field
from itertools import product
from typing import Dict, List, Optional, Sequence, Tuple

from .constraints import has, is_cross_column, rejects_column
from .dlx import ExactCover
from .model import Hint, HintKind
from src.utils.trace import Tracer

Candidate = Tuple[int, ...]

_POSITIONAL_KINDS = (HintKind.LEFT_OF, HintKind.ADJACENT, HintKind.ONE_LEFT_OF)


@dataclass
class Encoding:
    matrix: ExactCover
    candidates: List[Candidate] = field(default_factory=list)  # indexed by DLX-row id
    secondary_base: Dict[int, int] = field(default_factory=dict)  # hint index -> first DLX-column


def secondary_width(hint: Hint, num_cols: int) -> int:
    """One slot per position for the relational kinds, a single slot for the counting ones."""
    if not is_cross_column(hint.kind):
        return 0
    return num_cols if hint.kind in _POSITIONAL_KINDS else 1


def secondary_layout(hints: Sequence[Hint], num_cols: int, first_column: int) -> Tuple[Dict[int, int], int]:
    """Assign each cross-column hint its base DLX-column, in hint order."""
    bases: Dict[int, int] = {}
    next_column = first_column
    for index, hint in enumerate(hints):
        width = secondary_width(hint, num_cols)
        if width:
            bases[index] = next_column
            next_column += width
    return bases, next_column - first_column


def marked_slots(hint: Hint, column: Sequence[int], num_cols: int) -> List[int]:
    """Offsets, within the hint's secondary block, that `column` must cover."""
    pos = column[0]
    kind = hint.kind
    slots: List[int] = []

    if kind is HintKind.LEFT_OF:
        if has(column, hint.coords[0]):
            slots.extend(range(0, pos + 1))
        if has(column, hint.coords[1]):
            slots.extend(range(pos, num_cols))
    elif kind is HintKind.ONE_LEFT_OF:
        if has(column, hint.coords[0]):
            slots.extend(k for k in range(num_cols) if k != pos + 1)
        if has(column, hint.coords[1]):
            slots.append(pos)
    elif kind is HintKind.ADJACENT:
        if has(column, hint.coords[0]):
            slots.extend(k for k in range(num_cols) if abs(k - pos) != 1)
        if has(column, hint.coords[1]):
            slots.append(pos)
    elif kind is HintKind.AT_MOST_ONE_CLUSTER:
        if sum(1 for c in hint.coords if has(column, c)) >= 2:
            slots.append(0)
    elif kind is HintKind.PAIR_LIMIT:
        if any(has(column, a) and has(column, b) for a, b in hint.pairs()):
            slots.append(0)
    return slots


def build_exact_cover(
    num_rows: int,
    num_cols: int,
    hints: Sequence[Hint],
    tracer: Optional[Tracer] = None,
    symbols: Optional[Sequence[Sequence[str]]] = None,
) -> Encoding:
    """Enumerate all N^M candidate columns and encode the survivors."""
    tracer = tracer or Tracer(enabled=False)
    num_primary = num_rows * num_cols
    bases, num_secondary = secondary_layout(hints, num_cols, num_primary)
    encoding = Encoding(matrix=ExactCover(num_primary, num_secondary), secondary_base=bases)

    # Lexicographic order: row 0 varies slowest.
    for column in product(range(num_cols), repeat=num_rows):
        rejected_by = next((h for h in hints if rejects_column(h, column)), None)
        if rejected_by is not None:
            tracer.log_column_rejected(column, rejected_by.describe(symbols))
            continue

        dlx_columns = [num_cols * r + column[r] for r in range(num_rows)]
        for index, base in bases.items():
            dlx_columns.extend(base + k for k in marked_slots(hints[index], column, num_cols))

        row = encoding.matrix.add_row(dlx_columns)
        encoding.candidates.append(column)
        tracer.log_row_added(row, column)

    return encoding
