"""CLI entrypoint: load puzzle(s), run a search engine, and report solutions."""

import argparse
import csv
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from solver import format_grid
from src.logicgrid.loader import PUZZLE_SUFFIXES, load_puzzles
from src.logicgrid.parser import parse_puzzle
from src.logicgrid.solver_core import ALGORITHMS, solve
from src.utils.io import save_json
from src.utils.trace import enable_tracing, get_tracer, reset_tracer


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Solve logic grid puzzles")
    parser.add_argument(
        "input",
        help="Puzzle file, directory of puzzles, or '-' to read one puzzle from stdin",
    )
    parser.add_argument(
        "--alg",
        choices=sorted(ALGORITHMS),
        default=os.environ.get("LOGICGRID_ALG", "dlx"),
        help="Search engine (default: dlx, or $LOGICGRID_ALG)",
    )
    parser.add_argument(
        "--max-solutions",
        type=int,
        default=None,
        help="Stop each search after this many solutions",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional .csv or .json path to write results instead of printing grids",
    )
    parser.add_argument(
        "--trace-dir",
        type=Path,
        default=None,
        help="Optional directory receiving one search trace CSV per puzzle",
    )
    parser.add_argument(
        "--no-trace",
        action="store_true",
        default=os.environ.get("LOGICGRID_TRACE", "1") == "0",
        help="Disable step tracing (also via LOGICGRID_TRACE=0)",
    )
    return parser.parse_args(argv)


def collect_puzzles(source: str) -> List[Dict[str, Any]]:
    if source == "-":
        return [{"id": "stdin", "puzzle": sys.stdin.read()}]

    path = Path(source)
    if path.is_file():
        return load_puzzles(str(path))
    if path.is_dir():
        puzzles = []
        for file_path in sorted(path.iterdir()):
            if file_path.suffix in PUZZLE_SUFFIXES:
                puzzles.extend(load_puzzles(str(file_path)))
        return puzzles
    raise FileNotFoundError(f"Input path {source} is neither file nor directory")


def trace_path(trace_dir: Path, puzzle_id: Any) -> Path:
    """Trace CSV for one puzzle; ids from JSON/parquet records may contain path separators."""
    name = Path(str(puzzle_id)).name or "unknown"
    return trace_dir / f"{name}.csv"


def print_solutions(solutions: List[List[List[str]]]) -> None:
    for rows in solutions:
        for row in rows:
            print(" ".join(row))
        print()


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "solutions", "num_solutions", "steps"])

        for r in results:
            writer.writerow([
                r["id"],
                json.dumps(r["solutions"], ensure_ascii=False, separators=(",", ":")),
                r["num_solutions"],
                r["steps"],
            ])


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    results = []

    try:
        puzzles = collect_puzzles(args.input)
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    for record in puzzles:
        reset_tracer()
        enable_tracing(not args.no_trace)
        tracer = get_tracer()
        puzzle_id = record.get("id", "unknown")

        try:
            puzzle = parse_puzzle(record)
            grids = solve(puzzle, algorithm=args.alg, max_solutions=args.max_solutions, tracer=tracer)
        except ValueError as e:
            # Input errors abort the run; nothing is recoverable past the parser.
            print(f"ERROR: {puzzle_id}: {e}", file=sys.stderr)
            return 1

        solutions = [format_grid(puzzle, grid) for grid in grids]
        summary = tracer.summary()
        steps_key = "num_grid_checks" if args.alg == "brute" else "num_selections"
        results.append({
            "id": puzzle_id,
            "solutions": solutions,
            "num_solutions": len(solutions),
            "steps": summary[steps_key],
        })

        if args.trace_dir and not args.no_trace:
            tracer.to_csv(trace_path(args.trace_dir, puzzle_id))
        if args.output is None:
            print_solutions(solutions)

    if args.output:
        if args.output.suffix == ".json":
            save_json(args.output, results)
        else:
            write_results_csv(results, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
