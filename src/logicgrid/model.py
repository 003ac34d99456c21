"""Logic-grid core data structures: coordinates, hints, puzzles and grids."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

Grid = Tuple[Tuple[int, ...], ...]


class Coord(NamedTuple):
    """A symbol's identity in the unpermuted table."""

    row: int
    index: int


class HintKind(Enum):
    EQUAL = "="
    DISTINCT = "!"
    LEFT_OF = "<"
    ADJACENT = "A"
    ONE_LEFT_OF = "1"
    EXACTLY_ONE = "i"
    AT_MOST_ONE_CLUSTER = "^"
    PAIRED = "p"
    PAIR_LIMIT = "X"


# Fixed arity per kind; None means "two or more".
_ARITY: Dict[HintKind, Optional[int]] = {
    HintKind.EQUAL: None,
    HintKind.DISTINCT: None,
    HintKind.LEFT_OF: 2,
    HintKind.ADJACENT: 2,
    HintKind.ONE_LEFT_OF: 2,
    HintKind.EXACTLY_ONE: None,
    HintKind.AT_MOST_ONE_CLUSTER: None,
    HintKind.PAIRED: 4,
    HintKind.PAIR_LIMIT: None,
}


@dataclass(frozen=True)
class Hint:
    """
    One declared constraint: a kind plus the coordinates of the symbols it names.
    Order matters for the relational kinds (`<`, `A`, `1`), for `i` (the first
    symbol is the anchor) and for `p`/`X` (symbols are read in pairs).
    """

    kind: HintKind
    coords: Tuple[Coord, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "coords", tuple(Coord(*c) for c in self.coords))
        count = len(self.coords)
        expected = _ARITY[self.kind]
        if expected is not None and count != expected:
            raise ValueError(
                f"hint '{self.kind.value}' takes exactly {expected} symbols, got {count}"
            )
        if expected is None and count < 2:
            raise ValueError(f"hint '{self.kind.value}' needs at least 2 symbols, got {count}")
        if self.kind is HintKind.PAIR_LIMIT and count % 2:
            raise ValueError(f"hint 'X' needs an even number of symbols, got {count}")

    @classmethod
    def right_of(cls, right: Coord, left: Coord) -> "Hint":
        """`>` is never stored: it becomes `<` with its coordinates swapped."""
        return cls(HintKind.LEFT_OF, (left, right))

    def pairs(self) -> List[Tuple[Coord, Coord]]:
        return [(self.coords[i], self.coords[i + 1]) for i in range(0, len(self.coords) - 1, 2)]

    def describe(self, symbols: Optional[Sequence[Sequence[str]]] = None) -> str:
        if symbols is None:
            names = [f"{c.row}:{c.index}" for c in self.coords]
        else:
            names = [symbols[c.row][c.index] for c in self.coords]
        return " ".join([self.kind.value, *names])


@dataclass
class Puzzle:
    symbols: List[List[str]]
    hints: List[Hint] = field(default_factory=list)
    puzzle_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.symbols or not self.symbols[0]:
            raise ValueError("Puzzle needs at least one row with one symbol")
        width = len(self.symbols[0])
        for row, names in enumerate(self.symbols):
            if len(names) != width:
                raise ValueError(f"Row {row + 1} has {len(names)} symbols, expected {width}")

        self._coords: Dict[str, Coord] = {}
        for row, names in enumerate(self.symbols):
            for index, name in enumerate(names):
                if name in self._coords:
                    raise ValueError(f"Duplicate symbol: {name}")
                self._coords[name] = Coord(row, index)

        for hint in self.hints:
            for coord in hint.coords:
                if not (0 <= coord.row < self.num_rows and 0 <= coord.index < self.num_cols):
                    raise ValueError(f"Hint {hint.describe()} references {coord} outside the grid")

    @property
    def num_rows(self) -> int:
        return len(self.symbols)

    @property
    def num_cols(self) -> int:
        return len(self.symbols[0])

    def coord_of(self, name: str) -> Coord:
        try:
            return self._coords[name]
        except KeyError:
            raise KeyError(f"Unknown symbol: {name}") from None

    def has_symbol(self, name: str) -> bool:
        return name in self._coords

    def symbol_at(self, coord: Sequence[int]) -> str:
        row, index = coord
        return self.symbols[row][index]
