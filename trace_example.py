"""Example: How to trace the bingo search.

Runs the depth-first search to the first solution and logs every expanded and
pruned board.
"""

from pathlib import Path
from typing import Optional

from src.bingo.board import Board
from src.bingo.search import search
from src.utils.trace import get_tracer, reset_tracer


def solve_and_trace(output_trace_csv: Optional[Path] = None) -> Optional[Board]:
    """
    Solve the reference puzzle and log all steps to a trace file.

    Args:
        output_trace_csv: Path to write trace CSV (optional)

    Returns:
        The first solution, or None if there is none
    """
    # Reset tracer for this run
    reset_tracer()
    tracer = get_tracer()

    result = search(strategy="depth", tracer=tracer)

    # Print summary
    summary = tracer.summary()
    print(f"\n{'='*50}")
    print(f"Search Summary:")
    print(f"  Total steps: {summary['total_steps']}")
    print(f"  Expanded: {summary['num_expansions']}")
    print(f"  Pruned: {summary['num_prunes']}")
    print(f"  Time: {summary['elapsed_time_seconds']:.3f}s")
    print(f"  Actions: {summary['action_counts']}")
    print(f"{'='*50}\n")

    # Write trace to file if requested
    if output_trace_csv:
        tracer.to_csv(output_trace_csv)

    return result.solutions[0] if result.solutions else None


if __name__ == "__main__":
    trace_output = Path("traces/example_trace.csv")
    solution = solve_and_trace(trace_output)
    print(f"Solution:\n{solution}")
