"""Tracing module: logs search steps and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """A single step in the search."""

    timestamp: float
    step_number: int
    action_type: str  # 'expand', 'prune', 'solution_found'
    depth: Optional[int] = None  # Number of cells assigned on the board
    board: Optional[str] = None  # Rendered rows joined with '/'
    queue_size: Optional[int] = None
    is_valid: Optional[str] = None
    reason: Optional[str] = None


def _flatten(board: Any) -> str:
    return "/".join(str(board).split("\n"))


class Tracer:
    """Records search steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_expand(self, board: Any, depth: int, queue_size: int, is_valid: Any = None):
        """Log a board whose successors were queued."""
        if not self.enabled:
            return
        self._record(
            'expand',
            depth=depth,
            board=_flatten(board),
            queue_size=queue_size,
            is_valid=None if is_valid is None else str(is_valid),
        )

    def log_prune(self, board: Any, depth: int, reason: str = "Board is invalid"):
        """Log a discarded subtree."""
        if not self.enabled:
            return
        self._record('prune', depth=depth, board=_flatten(board), is_valid='FALSE', reason=reason)

    def log_solution_found(self, board: Any, depth: int):
        """Log when a solution is found."""
        if not self.enabled:
            return
        self._record('solution_found', depth=depth, board=_flatten(board), is_valid='TRUE')

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'depth', 'board',
            'queue_size', 'is_valid', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_expansions': action_counts.get('expand', 0),
            'num_prunes': action_counts.get('prune', 0),
            'num_solutions': action_counts.get('solution_found', 0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=True)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
