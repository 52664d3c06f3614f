"""CLI entrypoint: run the search (or check stored boards) and report results."""

import argparse
import csv
import json
import os
from pathlib import Path
from typing import Any, Dict, List

from solver import solve_puzzle
from src.bingo.board import Board
from src.bingo.loader import load_boards
from src.bingo.render import render_board, render_rows
from src.bingo.rules import REFERENCE_RULES
from src.bingo.search import STRATEGIES
from src.utils.trace import get_tracer, reset_tracer

BOARD_SUFFIXES = [".json", ".jsonl", ".parquet", ".csv"]


def parse_args():
    parser = argparse.ArgumentParser(description="Solve the self-referential bingo grid")
    parser.add_argument("--all", action="store_true", help="Enumerate every solution instead of stopping at the first")
    parser.add_argument(
        "--strategy",
        choices=STRATEGIES,
        default="breadth",
        help="Work-list order: breadth (FIFO) or depth (LIFO)",
    )
    parser.add_argument(
        "--check",
        type=Path,
        default=None,
        help="Validate stored boards (file or directory) against the rules instead of searching",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write results as CSV")
    parser.add_argument(
        "--trace",
        type=Path,
        default=os.environ.get("BINGO_TRACE_PATH"),
        help="Optional path to write the search trace CSV (default: $BINGO_TRACE_PATH)",
    )
    parser.add_argument("--mark", default="X", help="Glyph for marked cells")
    parser.add_argument("--blank", default=" ", help="Glyph for unmarked cells")
    parser.add_argument("--unknown", default="#", help="Glyph for unassigned cells")
    return parser.parse_args()


def _glyphs(args) -> Dict[str, str]:
    return {"mark": args.mark, "blank": args.blank, "unknown": args.unknown}


def write_results_csv(results: List[Dict[str, Any]], output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "grid", "status", "detail"])

        for r in results:
            writer.writerow([
                r["id"],
                json.dumps(r["grid"], ensure_ascii=False, separators=(",", ":")),
                r["status"],
                r.get("detail", ""),
            ])


def run_search(args) -> List[Dict[str, Any]]:
    reset_tracer()
    tracer = get_tracer()
    tracer.enabled = args.trace is not None

    solutions = solve_puzzle(find_all=args.all, strategy=args.strategy)
    glyphs = _glyphs(args)

    results = []
    if not solutions:
        print("No solution found.")
    for i, board in enumerate(solutions, start=1):
        print(render_board(board, **glyphs))
        print()
        results.append({
            "id": f"solution-{i}",
            "grid": render_rows(board, **glyphs),
            "status": "solved",
        })

    if args.trace is not None:
        summary = tracer.summary()
        print(
            f"Expanded {summary['num_expansions']} boards, pruned {summary['num_prunes']}, "
            f"found {summary['num_solutions']} solution(s) in {summary['elapsed_time_seconds']:.3f}s"
        )
        tracer.to_csv(args.trace)
    return results


def check_board(record: Dict[str, Any], glyphs: Dict[str, str]) -> Dict[str, Any]:
    """Validate one stored board; bad grids are reported, rule errors propagate."""
    result = {"id": record["id"], "grid": record.get("grid") or []}
    try:
        if record.get("grid") is None:
            raise ValueError("record has no grid")
        board = Board.from_rows(record["grid"], **glyphs)
    except ValueError as e:
        print(f"ERROR: Failed to read board {record['id']}: {e}")
        result.update(status="error", detail=str(e))
        return result

    validity = REFERENCE_RULES.is_valid(board)
    broken = [rule.cell.label for rule in REFERENCE_RULES.violations(board)]
    if not board.is_complete():
        status = "incomplete"
    else:
        status = "valid" if validity.truthy() else "invalid"
    result.update(status=status, detail=" ".join(broken))

    print(f"{record['id']}: {status} ({validity})")
    print(render_board(board, **glyphs))
    if broken:
        print(f"  violated: {', '.join(broken)}")
    print()
    return result


def run_check(args) -> List[Dict[str, Any]]:
    records = []
    if args.check.is_file():
        records = load_boards(str(args.check))
    elif args.check.is_dir():
        for file_path in sorted(args.check.iterdir()):
            if file_path.suffix in BOARD_SUFFIXES:
                records.extend(load_boards(str(file_path)))
    else:
        raise ValueError(f"Input path {args.check} is neither file nor directory")

    glyphs = _glyphs(args)
    return [check_board(record, glyphs) for record in records]


def main():
    args = parse_args()
    if args.check is not None:
        results = run_check(args)
    else:
        results = run_search(args)

    if args.output:
        write_results_csv(results, args.output)


if __name__ == "__main__":
    main()
