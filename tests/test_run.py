import csv
import io
import json
from pathlib import Path

from run import main, parse_args

SAMPLE = Path(__file__).resolve().parent.parent / "data" / "three_houses.txt"


def test_prints_solution_in_column_order(capsys):
    assert main([str(SAMPLE)]) == 0
    out = capsys.readouterr().out
    assert out == "H1 Alice dog\nH2 Bob fish\nH3 Carol cat\n\n"


def test_brute_force_prints_same_solution(capsys):
    assert main([str(SAMPLE), "--alg", "brute", "--no-trace"]) == 0
    assert "H2 Bob fish" in capsys.readouterr().out


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("a b\nc d\n%%\n= a d\n"))
    assert main(["-"]) == 0
    assert capsys.readouterr().out == "a d\nb c\n\n"


def test_directory_input_and_csv_output(tmp_path):
    puzzles = tmp_path / "puzzles"
    puzzles.mkdir()
    (puzzles / "sample.lg").write_text(SAMPLE.read_text(encoding="utf-8"), encoding="utf-8")
    (puzzles / "open.grid").write_text("a b\nc d\n%%\n", encoding="utf-8")
    (puzzles / "notes.md").write_text("ignored", encoding="utf-8")
    (puzzles / "README.txt").write_text("Puzzles for the nightly run.\n", encoding="utf-8")
    output = tmp_path / "results.csv"

    assert main([str(puzzles), "--output", str(output)]) == 0

    with open(output, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [r["id"] for r in rows] == ["open", "sample"]
    assert rows[0]["num_solutions"] == "2"
    assert json.loads(rows[1]["solutions"])[0][0] == ["H1", "Alice", "dog"]
    assert int(rows[1]["steps"]) > 0


def test_json_output_and_trace_dir(tmp_path, capsys):
    output = tmp_path / "out" / "results.json"
    traces = tmp_path / "traces"
    assert main([str(SAMPLE), "--output", str(output), "--trace-dir", str(traces), "--max-solutions", "1"]) == 0

    results = json.loads(output.read_text(encoding="utf-8"))
    assert results[0]["id"] == "three_houses"
    assert results[0]["num_solutions"] == 1
    assert (traces / "three_houses.csv").exists()
    assert "Trace written to" in capsys.readouterr().out


def test_input_error_fails_fast(tmp_path, capsys):
    bad = tmp_path / "bad.txt"
    bad.write_text("a b\nc d\n%%\n! a zz\n", encoding="utf-8")
    assert main([str(bad)]) == 1
    err = capsys.readouterr().err
    assert "ERROR: bad: line 4: invalid symbol: zz" in err


def test_missing_input_reports_error(tmp_path, capsys):
    assert main([str(tmp_path / "missing")]) == 1
    assert "ERROR:" in capsys.readouterr().err


def test_algorithm_default_from_environment(monkeypatch):
    monkeypatch.setenv("LOGICGRID_ALG", "brute")
    monkeypatch.setenv("LOGICGRID_TRACE", "0")
    args = parse_args([str(SAMPLE)])
    assert args.alg == "brute"
    assert args.no_trace


def test_trace_file_stays_inside_trace_dir(tmp_path):
    text = SAMPLE.read_text(encoding="utf-8")
    records = tmp_path / "records.json"
    records.write_text(json.dumps([{"id": "../outside", "puzzle": text}]), encoding="utf-8")
    traces = tmp_path / "traces"

    assert main([str(records), "--trace-dir", str(traces)]) == 0
    assert (traces / "outside.csv").exists()
    assert not (tmp_path / "outside.csv").exists()
