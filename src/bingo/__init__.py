"""Three-valued rule evaluation and backtracking search for the self-referential bingo grid."""

from .tristate import TriState
from .board import Board, Cell, CellState
from .rules import REFERENCE_RULES, RuleConfigurationError, RuleTable
from .search import search, solve

__all__ = [
    "TriState",
    "Board",
    "Cell",
    "CellState",
    "REFERENCE_RULES",
    "RuleConfigurationError",
    "RuleTable",
    "search",
    "solve",
]
