"""Puzzle parser: convert the textual puzzle format into a `Puzzle`.

The table comes first, one row per line with space-delimited symbols, and is
terminated by a line holding only `%%`. Row 0 is the ordinal axis. Each
following line is one hint: the kind, then the symbols it names.

|  !  | given symbols lie in distinct columns
|  =  | given symbols lie in the same column
|  <  | column of 1st symbol lies left of column of 2nd symbol
|  >  | column of 1st symbol lies right of column of 2nd symbol
|  A  | column of 1st symbol is adjacent to column of 2nd symbol
|  1  | column of 1st symbol lies one to the left of the column of 2nd symbol
|  i  | column of 1st symbol contains exactly one of the following symbols
|  ^  | at most one column contains 2 or more of the given symbols
|  p  | first 2 symbols lie in distinct columns; next 2 symbols lie in distinct
|     | columns; each column contains exactly 0 or 2 of these 4 symbols
|  X  | group symbols in pairs; at most one of these pairs lie in the same column

Blank lines and lines starting with `#` are ignored.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from .model import Hint, HintKind, Puzzle

TABLE_END = "%%"


class PuzzleFormatError(ValueError):
    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        super().__init__(f"line {line}: {message}" if line is not None else message)


def _is_skipped(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def parse_puzzle_text(text: str, puzzle_id: Optional[str] = None) -> Puzzle:
    lines = text.splitlines()
    symbols: List[List[str]] = []
    seen: Dict[str, int] = {}
    cursor = 0

    # 1) Symbol table
    while True:
        if cursor == len(lines):
            raise PuzzleFormatError(f"expected {TABLE_END}")
        line = lines[cursor]
        cursor += 1
        if _is_skipped(line):
            continue
        if line.strip() == TABLE_END:
            break
        names = line.split()
        if symbols and len(names) != len(symbols[0]):
            raise PuzzleFormatError("wrong number of fields", cursor)
        for name in names:
            if name in seen:
                raise PuzzleFormatError(f"duplicate symbol: {name}", cursor)
            seen[name] = cursor
        symbols.append(names)

    if not symbols:
        raise PuzzleFormatError("empty symbol table", cursor)

    puzzle = Puzzle(symbols=symbols, puzzle_id=puzzle_id)

    # 2) Hints
    for lineno in range(cursor + 1, len(lines) + 1):
        line = lines[lineno - 1]
        if _is_skipped(line):
            continue
        puzzle.hints.append(parse_hint(line, puzzle, lineno))

    return puzzle


def parse_hint(line: str, puzzle: Puzzle, lineno: Optional[int] = None) -> Hint:
    kind_text, *names = line.split()

    coords = []
    for name in names:
        if not puzzle.has_symbol(name):
            raise PuzzleFormatError(f"invalid symbol: {name}", lineno)
        coords.append(puzzle.coord_of(name))

    if kind_text == ">":
        if len(coords) != 2:
            raise PuzzleFormatError("inequality must have exactly 2 fields", lineno)
        return Hint.right_of(coords[0], coords[1])

    try:
        kind = HintKind(kind_text)
    except ValueError:
        raise PuzzleFormatError(f"unknown constraint type: {kind_text}", lineno) from None

    try:
        return Hint(kind, tuple(coords))
    except ValueError as e:
        raise PuzzleFormatError(str(e), lineno) from None


def parse_puzzle(puzzle: Union[str, Dict[str, Any]]) -> Puzzle:
    """Accept raw puzzle text or a record with a `puzzle` text field and optional `id`."""
    if isinstance(puzzle, str):
        return parse_puzzle_text(puzzle)
    if isinstance(puzzle, dict):
        text = str(puzzle.get("puzzle", "") or "")
        puzzle_id = puzzle.get("id")
        return parse_puzzle_text(text, None if puzzle_id is None else str(puzzle_id))
    raise TypeError("parse_puzzle expects puzzle text or a puzzle dictionary")
