"""Top-level solve interface.

Expose `solve_puzzle(rules)` that runs the search against a rule table (the
reference puzzle by default) and re-checks every reported solution from
scratch before returning it.
"""

from typing import List, Optional

from src.bingo.search import search
from src.bingo.board import Board
from src.bingo.rules import REFERENCE_RULES, RuleTable


def solve_puzzle(
    rules: Optional[RuleTable] = None,
    *,
    find_all: bool = False,
    strategy: str = "breadth",
) -> List[Board]:
    """
    Solve the puzzle and return the solution boards (empty if none exist).
    Accepts:
      - None (the reference rule table)
      - RuleTable instances (used directly)
    """
    if rules is None:
        rules = REFERENCE_RULES
    elif not isinstance(rules, RuleTable):
        raise TypeError("solve_puzzle expects a RuleTable instance or None")

    result = search(rules, find_all=find_all, strategy=strategy)
    return [rules.require_solution(board) for board in result.solutions]


__all__ = ["solve_puzzle"]
