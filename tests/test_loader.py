"""Tests for reading stored boards."""

import csv
import json
import tempfile
from pathlib import Path

import pytest

from src.bingo.loader import load_boards

SOLUTION_ROWS = [" X XX", "XXXXX", "  X X", " X XX", "X X X"]


def test_load_json_array_of_records():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "boards.json"
        path.write_text(json.dumps([
            {"id": "a", "grid": SOLUTION_ROWS},
            {"board": "\n".join(SOLUTION_ROWS)},
            "ignored",
        ]))
        records = load_boards(str(path))

    assert [r["id"] for r in records] == ["a", "board-1"]
    assert records[0]["grid"] == SOLUTION_ROWS
    assert records[1]["grid"] == SOLUTION_ROWS


def test_load_json_bare_grid():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "board.json"
        path.write_text(json.dumps(SOLUTION_ROWS))
        records = load_boards(str(path))
    assert records == [{"id": "board-0", "grid": SOLUTION_ROWS}]


def test_load_jsonl_skips_malformed_lines():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "boards.jsonl"
        path.write_text(
            json.dumps({"id": "x", "grid": "/".join(SOLUTION_ROWS)}) + "\n"
            + "{broken\n\n"
            + json.dumps({"id": "y", "rows": SOLUTION_ROWS}) + "\n"
        )
        records = load_boards(str(path))
    assert [r["id"] for r in records] == ["x", "y"]
    assert records[0]["grid"] == SOLUTION_ROWS


def test_load_csv_keeps_blank_glyphs():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "boards.csv"
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, quoting=csv.QUOTE_ALL)
            writer.writerow(["id", "grid"])
            writer.writerow(["s1", "/".join(SOLUTION_ROWS)])
        records = load_boards(str(path))
    assert records == [{"id": "s1", "grid": SOLUTION_ROWS}]


def test_load_parquet():
    pd = pytest.importorskip("pandas")
    pytest.importorskip("pyarrow")
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "boards.parquet"
        pd.DataFrame([{"id": "p", "grid": "/".join(SOLUTION_ROWS)}]).to_parquet(path)
        records = load_boards(str(path))
    assert records == [{"id": "p", "grid": SOLUTION_ROWS}]


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        load_boards("does-not-exist.json")
