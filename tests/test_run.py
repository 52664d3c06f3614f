import csv
import sys
import json
import tempfile
from pathlib import Path

from run import check_board, main, write_results_csv
from src.bingo.board import Board
from src.utils.trace import reset_tracer

SOLUTION_ROWS = [" X XX", "XXXXX", "  X X", " X XX", "X X X"]
OTHER_SOLUTION_ROWS = [" X  X", "XXXXX", "  X X", " X  X", "X X X"]


def build_demo_solutions(find_all=False, strategy="breadth"):
    return [Board.from_rows(SOLUTION_ROWS)]


def no_solutions(find_all=False, strategy="breadth"):
    return []


def test_main_prints_solution(monkeypatch, capsys):
    monkeypatch.setattr("run.solve_puzzle", build_demo_solutions)
    monkeypatch.setattr(sys, "argv", ["run.py"])

    main()

    out = capsys.readouterr().out
    assert "\n".join(SOLUTION_ROWS) in out


def test_main_reports_no_solution(monkeypatch, capsys):
    monkeypatch.setattr("run.solve_puzzle", no_solutions)
    monkeypatch.setattr(sys, "argv", ["run.py", "--all"])

    main()

    assert "No solution found." in capsys.readouterr().out


def test_main_custom_glyphs_and_csv_output(monkeypatch):
    monkeypatch.setattr("run.solve_puzzle", build_demo_solutions)
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "out.csv"
        monkeypatch.setattr(sys, "argv", ["run.py", "--mark", "1", "--blank", "0", "--output", str(output_path)])
        main()
        content = output_path.read_text()

    assert "id,grid,status,detail" in content
    assert "solution-1" in content
    assert "01011" in content


def test_main_searches_reference_puzzle_and_writes_trace(monkeypatch, capsys):
    reset_tracer()
    try:
        with tempfile.TemporaryDirectory() as tmpdir:
            trace_path = Path(tmpdir) / "trace.csv"
            monkeypatch.setattr(sys, "argv", ["run.py", "--all", "--trace", str(trace_path)])
            main()

            with open(trace_path, newline="", encoding="utf-8") as f:
                actions = [row["action_type"] for row in csv.DictReader(f)]
    finally:
        reset_tracer()

    out = capsys.readouterr().out
    assert "\n".join(SOLUTION_ROWS) in out
    assert "\n".join(OTHER_SOLUTION_ROWS) in out
    assert "No solution found." not in out

    assert actions
    assert "prune" in actions
    assert "expand" in actions
    assert actions.count("solution_found") == 2


def test_check_board_statuses():
    glyphs = {"mark": "X", "blank": " ", "unknown": "#"}
    assert check_board({"id": "ok", "grid": SOLUTION_ROWS}, glyphs)["status"] == "valid"

    bad = check_board({"id": "b5", "grid": SOLUTION_ROWS[:4] + ["XXX X"]}, glyphs)
    assert bad["status"] == "invalid"
    assert "B5" in bad["detail"].split()

    partial = check_board({"id": "p", "grid": ["XX###"] + ["#####"] * 4}, glyphs)
    assert partial["status"] == "incomplete"

    broken = check_board({"id": "e", "grid": ["XX"]}, glyphs)
    assert broken["status"] == "error"

    missing = check_board({"id": "m", "grid": None}, glyphs)
    assert missing["status"] == "error"


def test_main_check_directory(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir_path = Path(tmpdir)
        (tmpdir_path / "a.json").write_text(json.dumps({"id": "good", "grid": SOLUTION_ROWS}))
        (tmpdir_path / "b.jsonl").write_text(json.dumps({"id": "bad", "grid": ["XXXXX"] * 5}) + "\n")
        (tmpdir_path / "notes.txt").write_text("ignored")
        output_path = tmpdir_path / "results.csv"

        monkeypatch.setattr(sys, "argv", ["run.py", "--check", str(tmpdir_path), "--output", str(output_path)])
        main()

        lines = output_path.read_text().splitlines()

    assert lines[0] == "id,grid,status,detail"
    assert lines[1].startswith("good,") and ",valid," in lines[1]
    assert lines[2].startswith("bad,") and ",invalid," in lines[2]


def test_write_results_csv():
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "r.csv"
        write_results_csv([{"id": "x", "grid": ["XXXXX"], "status": "valid"}], output_path)
        content = output_path.read_text()
    assert content.splitlines()[1] == 'x,"[""XXXXX""]",valid,'
