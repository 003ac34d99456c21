import pytest

from src.logicgrid.model import Coord, HintKind
from src.logicgrid.parser import PuzzleFormatError, parse_puzzle, parse_puzzle_text

LUNCH = """Bob Chuck Dave
Hall King Noyes
%%
! Bob Hall
> Chuck King
i Dave Hall King
"""


def test_parses_table_and_hints():
    puzzle = parse_puzzle_text(LUNCH, puzzle_id="lunch")
    assert puzzle.puzzle_id == "lunch"
    assert puzzle.symbols == [["Bob", "Chuck", "Dave"], ["Hall", "King", "Noyes"]]
    assert [h.kind for h in puzzle.hints] == [
        HintKind.DISTINCT,
        HintKind.LEFT_OF,
        HintKind.EXACTLY_ONE,
    ]
    # `>` is stored as `<` with swapped symbols.
    assert puzzle.hints[1].coords == (Coord(1, 1), Coord(0, 1))


def test_blank_and_comment_lines_are_skipped():
    text = "# header\n\na b\n\nc d\n%%\n\n# nothing\n= a c\n"
    puzzle = parse_puzzle_text(text)
    assert puzzle.num_rows == 2
    assert len(puzzle.hints) == 1


def test_parse_puzzle_accepts_record_dict():
    puzzle = parse_puzzle({"id": 7, "puzzle": LUNCH})
    assert puzzle.puzzle_id == "7"
    assert len(puzzle.hints) == 3


def test_parse_puzzle_rejects_other_types():
    with pytest.raises(TypeError):
        parse_puzzle(42)


@pytest.mark.parametrize(
    "text, message, line",
    [
        ("a b\nc d\n", "expected %%", None),
        ("a b\nc d e\n%%\n", "wrong number of fields", 2),
        ("a b\nc a\n%%\n", "duplicate symbol: a", 2),
        ("a b\nc d\n%%\n! a z\n", "invalid symbol: z", 4),
        ("a b\nc d\n%%\n> a b c\n", "inequality must have exactly 2 fields", 4),
        ("a b\nc d\n%%\nQ a b\n", "unknown constraint type: Q", 4),
        ("a b\nc d\n%%\nA a b c\n", "exactly 2 symbols", 4),
        ("a b\nc d\n%%\nX a b c\n", "even number", 4),
    ],
)
def test_format_errors(text, message, line):
    with pytest.raises(PuzzleFormatError, match=message) as excinfo:
        parse_puzzle_text(text)
    assert excinfo.value.line == line
    assert isinstance(excinfo.value, ValueError)
