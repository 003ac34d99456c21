"""Integration-style tests for the top-level solve interface."""

from pathlib import Path

import pytest

from solver import format_grid, solve_puzzle
from src.logicgrid.parser import parse_puzzle_text
from src.utils.trace import Tracer, get_tracer

SAMPLE = Path(__file__).resolve().parent.parent / "data" / "three_houses.txt"

EXPECTED = [
    ["H1", "Alice", "dog"],
    ["H2", "Bob", "fish"],
    ["H3", "Carol", "cat"],
]


@pytest.mark.parametrize("algorithm", ["dlx", "brute"])
def test_sample_puzzle_has_unique_solution(algorithm):
    puzzle = parse_puzzle_text(SAMPLE.read_text(encoding="utf-8"))
    grids = solve_puzzle(puzzle, algorithm=algorithm)
    assert len(grids) == 1
    assert format_grid(puzzle, grids[0]) == EXPECTED


def test_solve_puzzle_accepts_text_and_records():
    text = SAMPLE.read_text(encoding="utf-8")
    assert solve_puzzle(text) == solve_puzzle({"id": "sample", "puzzle": text})


def test_solve_puzzle_rejects_unknown_input():
    with pytest.raises(TypeError):
        solve_puzzle(3.5)


def test_max_solutions_caps_enumeration():
    text = "a b c\nd e f\n%%\n"
    assert len(solve_puzzle(text)) == 6
    assert len(solve_puzzle(text, max_solutions=2)) == 2


def test_repeated_solves_do_not_grow_the_global_trace():
    text = "H1 H2 H3 H4\nA B C D\nw x y z\nP Q R S\n%%\n< A B\n"
    first = solve_puzzle(text, algorithm="brute")
    second = solve_puzzle(text, algorithm="brute")
    assert first == second
    assert len(first) == 12 * 24 * 24
    assert get_tracer().steps == []


def test_explicit_tracer_receives_the_steps():
    tracer = Tracer()
    solve_puzzle(SAMPLE.read_text(encoding="utf-8"), algorithm="brute", tracer=tracer)
    summary = tracer.summary()
    assert summary["num_grid_checks"] == 6 ** 2
    assert summary["num_solutions"] == 1
