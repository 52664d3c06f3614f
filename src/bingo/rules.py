"""Rule expressions, their interpreter, and the puzzle's rule table.

Every cell owns one rule. A rule's expression is a small tree of tri-state
nodes (cell references, boolean connectives, bingo predicates and count
predicates) evaluated by `evaluate`. `RuleTable.is_valid` folds the per-cell
results with tri-state AND, so a single violated rule makes a partial board
FALSE no matter how many cells are still open.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .aggregates import BingoLines
from .board import ALL_CELLS, COLS, ROWS, Board, Cell
from .counts import (
    Aggregate,
    CountTest,
    count_matches,
    even,
    greater_than,
    less_than,
    possible_counts,
    satisfies,
)
from .tristate import FALSE, TRUE, UNKNOWN, TriState, all_of, any_of


class RuleConfigurationError(RuntimeError):
    """A rule references something outside the grid or cannot be decided on a complete board."""


# --- Expression nodes ---


@dataclass(frozen=True)
class Const:
    value: TriState

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class CellRef:
    cell: Cell

    def __str__(self) -> str:
        return self.cell.label


@dataclass(frozen=True)
class Not:
    operand: "Expr"

    def __str__(self) -> str:
        return f"not {self.operand}"


@dataclass(frozen=True)
class And:
    operands: Tuple["Expr", ...]

    def __str__(self) -> str:
        return "(" + " and ".join(str(op) for op in self.operands) + ")"


@dataclass(frozen=True)
class Or:
    operands: Tuple["Expr", ...]

    def __str__(self) -> str:
        return "(" + " or ".join(str(op) for op in self.operands) + ")"


@dataclass(frozen=True)
class Matches:
    left: "Expr"
    right: "Expr"

    def __str__(self) -> str:
        return f"({self.left} matches {self.right})"


@dataclass(frozen=True)
class RowBingo:
    row: int

    def __str__(self) -> str:
        return f"row {self.row + 1} bingo"


@dataclass(frozen=True)
class ColBingo:
    col: int

    def __str__(self) -> str:
        return f"column {chr(ord('A') + self.col)} bingo"


@dataclass(frozen=True)
class DiagonalBingo:
    anti: bool

    def __str__(self) -> str:
        return "anti-diagonal bingo" if self.anti else "main diagonal bingo"


@dataclass(frozen=True)
class IsInBingo:
    cell: Cell

    def __str__(self) -> str:
        return f"{self.cell.label} in bingo"


@dataclass(frozen=True)
class CountPredicate:
    aggregate: Aggregate
    test: CountTest
    index: Optional[int] = None

    def __str__(self) -> str:
        subject = self.aggregate.value
        if self.index is not None:
            subject = f"{subject} {self.index}"
        return f"[{subject}: {self.test}]"


Expr = Union[
    Const, CellRef, Not, And, Or, Matches, RowBingo, ColBingo, DiagonalBingo, IsInBingo, CountPredicate
]


def cell(label: str) -> CellRef:
    return CellRef(Cell.parse(label))


def in_bingo(label: str) -> IsInBingo:
    return IsInBingo(Cell.parse(label))


def all_(*operands: Expr) -> And:
    return And(tuple(operands))


def any_(*operands: Expr) -> Or:
    return Or(tuple(operands))


# --- Interpreter ---


def _require_cell(target: Cell) -> Cell:
    if not target.in_bounds():
        raise RuleConfigurationError(f"Rule references cell {tuple(target)} outside the grid")
    return target


def _require_index(index: Optional[int], limit: int, what: str) -> int:
    if index is None or not 0 <= index < limit:
        raise RuleConfigurationError(f"Rule references {what} {index} outside the grid")
    return index


def evaluate(expr: Expr, board: Board, lines: Optional[BingoLines] = None) -> TriState:
    """Evaluate an expression tree against a (possibly partial) board."""
    if lines is None:
        lines = BingoLines.of(board)

    if isinstance(expr, Const):
        return expr.value
    if isinstance(expr, CellRef):
        target = _require_cell(expr.cell)
        return board.cell_value(target.row, target.col)
    if isinstance(expr, Not):
        return evaluate(expr.operand, board, lines).invert()
    if isinstance(expr, And):
        return all_of(evaluate(op, board, lines) for op in expr.operands)
    if isinstance(expr, Or):
        return any_of(evaluate(op, board, lines) for op in expr.operands)
    if isinstance(expr, Matches):
        return evaluate(expr.left, board, lines).matches(evaluate(expr.right, board, lines))
    if isinstance(expr, RowBingo):
        return lines.rows[_require_index(expr.row, ROWS, "row")]
    if isinstance(expr, ColBingo):
        return lines.cols[_require_index(expr.col, COLS, "column")]
    if isinstance(expr, DiagonalBingo):
        return lines.diagonal(expr.anti)
    if isinstance(expr, IsInBingo):
        target = _require_cell(expr.cell)
        return lines.in_bingo(target.row, target.col)
    if isinstance(expr, CountPredicate):
        index = expr.index
        if expr.aggregate is Aggregate.ROW_FILLED:
            index = _require_index(index, ROWS, "row")
        elif expr.aggregate is Aggregate.COL_FILLED:
            index = _require_index(index, COLS, "column")
        return count_matches(possible_counts(expr.aggregate, board, lines, index), expr.test)
    raise RuleConfigurationError(f"Unsupported rule expression: {expr!r}")


# --- Rules and the validator ---


class RuleKind(Enum):
    DEFINES = "defines"  # the cell must be marked exactly when the expression holds
    ASSERTS = "asserts"  # the expression must hold, whatever the cell holds
    FREE = "free"  # no constraint


@dataclass(frozen=True)
class Rule:
    cell: Cell
    kind: RuleKind
    expression: Optional[Expr] = None

    def __post_init__(self) -> None:
        if self.kind is not RuleKind.FREE and self.expression is None:
            raise ValueError(f"Rule for {self.cell.label} needs an expression")

    def contribution(self, board: Board, lines: Optional[BingoLines] = None) -> TriState:
        """This rule's share of the board's validity."""
        if self.kind is RuleKind.FREE:
            return TRUE
        outcome = evaluate(self.expression, board, lines)
        if self.kind is RuleKind.ASSERTS:
            return outcome
        return outcome.matches(board.cell_value(self.cell.row, self.cell.col))

    def __str__(self) -> str:
        if self.kind is RuleKind.FREE:
            return f"{self.cell.label}: (unconstrained)"
        if self.kind is RuleKind.ASSERTS:
            return f"{self.cell.label}: requires {self.expression}"
        return f"{self.cell.label}: marked iff {self.expression}"


def defines(label: str, expression: Expr) -> Rule:
    return Rule(Cell.parse(label), RuleKind.DEFINES, expression)


def asserts(label: str, expression: Expr) -> Rule:
    return Rule(Cell.parse(label), RuleKind.ASSERTS, expression)


def free(label: str) -> Rule:
    return Rule(Cell.parse(label), RuleKind.FREE)


class RuleTable:
    """One rule per grid cell, evaluated together as the board's validity."""

    def __init__(self, rules: Iterable[Rule]):
        self.rules: List[Rule] = list(rules)
        cells = [rule.cell for rule in self.rules]
        if len(set(cells)) != len(cells):
            raise ValueError("Each cell may only have one rule")
        outside = [tuple(c) for c in cells if not c.in_bounds()]
        if outside:
            raise ValueError(f"Rules for cells outside the grid: {outside}")
        missing = [c.label for c in ALL_CELLS if c not in cells]
        if missing:
            raise ValueError(f"Missing rules for cells: {', '.join(missing)}")
        self.by_cell: Dict[Cell, Rule] = {rule.cell: rule for rule in self.rules}

    def __len__(self) -> int:
        return len(self.rules)

    def rule_for(self, label: str) -> Rule:
        return self.by_cell[Cell.parse(label)]

    def check(self, board: Board) -> List[Tuple[Rule, TriState]]:
        """
        Evaluate every rule against the board.
        On a complete board every rule must be decided; an UNKNOWN there means
        the rule is malformed and raises RuleConfigurationError.
        """
        lines = BingoLines.of(board)
        results = [(rule, rule.contribution(board, lines)) for rule in self.rules]
        if board.is_complete():
            undecided = [rule.cell.label for rule, value in results if value is UNKNOWN]
            if undecided:
                raise RuleConfigurationError(
                    f"Rules for {', '.join(undecided)} stay undecided on a complete board"
                )
        return results

    def is_valid(self, board: Board) -> TriState:
        return all_of(value for _, value in self.check(board))

    def violations(self, board: Board) -> List[Rule]:
        return [rule for rule, value in self.check(board) if value is FALSE]

    def require_solution(self, board: Board) -> Board:
        """Return `board` if it is a complete, fully valid solution; raise otherwise."""
        if not board.is_complete():
            raise ValueError("Board is not complete")
        broken = self.violations(board)
        if broken:
            raise ValueError(
                "Board violates rules for " + ", ".join(rule.cell.label for rule in broken)
            )
        return board


# The reference puzzle. Letters are columns, numbers are rows (1-indexed);
# RowBingo/ColBingo/index arguments are 0-indexed.
REFERENCE_RULES = RuleTable([
    defines("A1", Not(DiagonalBingo(anti=True))),
    defines("B1", Not(in_bingo("B1"))),
    defines("C1", DiagonalBingo(anti=False)),
    defines("D1", cell("D4")),
    defines("E1", in_bingo("E1")),
    defines("A2", Not(cell("A4"))),
    defines("B2", all_(
        CountPredicate(Aggregate.ROW_BINGOES, greater_than(0)),
        CountPredicate(Aggregate.COL_BINGOES, greater_than(0)),
        any_(DiagonalBingo(anti=False), DiagonalBingo(anti=True)),
    )),
    defines("C2", Const(TRUE)),
    asserts("D2", CountPredicate(Aggregate.FILLED, less_than(17))),
    asserts("E2", CountPredicate(Aggregate.IN_BINGO, even())),
    defines("A3", in_bingo("A3")),
    defines("B3", CountPredicate(Aggregate.FILLED_NOT_IN_BINGO, greater_than(5))),
    defines("C3", any_(Not(cell("C3")), in_bingo("C3"))),
    defines("D3", CountPredicate(Aggregate.COL_BINGOES, greater_than(2))),
    asserts("E3", CountPredicate(
        Aggregate.IN_BINGO,
        satisfies(lambda x: ROWS * COLS - x > 10, "cells outside any bingo > 10"),
    )),
    defines("A4", Not(cell("A2"))),
    defines("B4", any_(RowBingo(1), ColBingo(3))),
    defines("C4", CountPredicate(Aggregate.COL_FILLED, less_than(3), index=2)),
    defines("D4", cell("D1")),
    defines("E4", any_(DiagonalBingo(anti=True), DiagonalBingo(anti=False))),
    defines("A5", cell("E5")),
    # Left as given: B5 is pinned to unmarked and C5 is unconstrained.
    defines("B5", Const(FALSE)),
    free("C5"),
    defines("D5", CountPredicate(Aggregate.BINGO_LINES, greater_than(3))),
    defines("E5", cell("A5")),
])
