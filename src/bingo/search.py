"""Backtracking search over partial boards with three-valued pruning."""

import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterator, List, Optional

from .board import Board
from .rules import REFERENCE_RULES, RuleConfigurationError, RuleTable
from .tristate import TRUE
from src.utils.trace import Tracer, get_tracer

STRATEGIES = ("breadth", "depth")


@dataclass
class SearchStats:
    expanded: int = 0
    pruned: int = 0
    solutions: int = 0


@dataclass
class SearchResult:
    status: str  # 'solved' or 'unsolved'
    solutions: List[Board]
    duration_ms: int
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def solved(self) -> bool:
        return bool(self.solutions)


def iter_solutions(
    rules: RuleTable = REFERENCE_RULES,
    strategy: str = "breadth",
    tracer: Optional[Tracer] = None,
    stats: Optional[SearchStats] = None,
) -> Iterator[Board]:
    """
    Yield every complete board that satisfies `rules`.
    The work list starts with the empty board. Each popped board is dropped
    when its validity is already FALSE, yielded when complete, and otherwise
    replaced by its two successors. "breadth" pops from the front (FIFO),
    "depth" from the back; both visit the same boards.
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown search strategy {strategy!r}; expected one of {STRATEGIES}")
    tracer = tracer or get_tracer()
    stats = stats if stats is not None else SearchStats()

    queue: Deque[Board] = deque([Board.empty()])
    while queue:
        board = queue.popleft() if strategy == "breadth" else queue.pop()
        validity = rules.is_valid(board)
        if not validity.truthy():
            stats.pruned += 1
            tracer.log_prune(board, depth=board.depth)
            continue

        if board.is_complete():
            if validity is not TRUE:
                raise RuleConfigurationError(f"Complete board evaluated to {validity}:\n{board}")
            stats.solutions += 1
            tracer.log_solution_found(board, depth=board.depth)
            yield board
            continue

        children = board.successors()
        if strategy == "depth":
            # Keep the marked child on top of the stack.
            queue.extend(reversed(children))
        else:
            queue.extend(children)
        stats.expanded += 1
        tracer.log_expand(board, depth=board.depth, queue_size=len(queue), is_valid=validity)


def search(
    rules: RuleTable = REFERENCE_RULES,
    *,
    find_all: bool = False,
    strategy: str = "breadth",
    tracer: Optional[Tracer] = None,
) -> SearchResult:
    """Run the search to the first solution, or to exhaustion when `find_all` is set."""
    start = time.perf_counter()
    stats = SearchStats()
    solutions: List[Board] = []
    for board in iter_solutions(rules, strategy=strategy, tracer=tracer, stats=stats):
        solutions.append(board)
        if not find_all:
            break
    duration_ms = int((time.perf_counter() - start) * 1000)
    return SearchResult(
        status="solved" if solutions else "unsolved",
        solutions=solutions,
        duration_ms=duration_ms,
        stats=stats,
    )


def solve(
    rules: RuleTable = REFERENCE_RULES,
    *,
    find_all: bool = False,
    strategy: str = "breadth",
) -> List[Board]:
    """Solutions found; an empty list means the puzzle has none."""
    return search(rules, find_all=find_all, strategy=strategy).solutions
