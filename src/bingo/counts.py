"""Interval approximation of aggregate counts on partial boards.

Each aggregate is a tri-state function applied over an index set (cells,
lines, ...). The achievable count is approximated by ``[#TRUE, #TRUE +
#UNKNOWN]``, assuming every UNKNOWN index could independently turn TRUE. A
count test is then decided TRUE/FALSE only when it holds for all/none of that
range, so imprecision can only yield UNKNOWN, never a wrong answer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Optional

from .aggregates import BingoLines
from .board import ALL_CELLS, COLS, ROWS, Board
from .tristate import FALSE, TRUE, UNKNOWN, TriState


@dataclass(frozen=True)
class CountInterval:
    low: int
    high: int

    def __post_init__(self) -> None:
        if self.low > self.high:
            raise ValueError(f"Empty count interval [{self.low}, {self.high}]")

    @classmethod
    def of(cls, values: Iterable[TriState]) -> "CountInterval":
        low = 0
        high = 0
        for value in values:
            if value.truthy():
                high += 1
            if value is TRUE:
                low += 1
        return cls(low, high)

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.low, self.high + 1))

    def __contains__(self, count: object) -> bool:
        return isinstance(count, int) and self.low <= count <= self.high

    def __len__(self) -> int:
        return self.high - self.low + 1


@dataclass(frozen=True)
class CountTest:
    """A predicate over integer counts, with a readable description."""

    description: str
    check: Callable[[int], bool]

    def __call__(self, count: int) -> bool:
        return self.check(count)

    def __str__(self) -> str:
        return self.description


def greater_than(n: int) -> CountTest:
    return CountTest(f"x > {n}", lambda x: x > n)


def less_than(n: int) -> CountTest:
    return CountTest(f"x < {n}", lambda x: x < n)


def at_least(n: int) -> CountTest:
    return CountTest(f"x >= {n}", lambda x: x >= n)


def equal_to(n: int) -> CountTest:
    return CountTest(f"x == {n}", lambda x: x == n)


def even() -> CountTest:
    return CountTest("x is even", lambda x: x % 2 == 0)


def satisfies(check: Callable[[int], bool], description: str) -> CountTest:
    return CountTest(description, check)


def count_matches(interval: CountInterval, test: Callable[[int], bool]) -> TriState:
    outcomes = [bool(test(count)) for count in interval]
    if all(outcomes):
        return TRUE
    if not any(outcomes):
        return FALSE
    return UNKNOWN


class Aggregate(Enum):
    FILLED = "filled cells"
    IN_BINGO = "cells in a bingo"
    FILLED_NOT_IN_BINGO = "filled cells outside any bingo"
    BINGO_LINES = "completed lines"
    ROW_BINGOES = "completed rows"
    COL_BINGOES = "completed columns"
    ROW_FILLED = "filled cells in row"
    COL_FILLED = "filled cells in column"


# Aggregates that are parameterised by a row or column index.
LINE_AGGREGATES = (Aggregate.ROW_FILLED, Aggregate.COL_FILLED)


def aggregate_values(
    aggregate: Aggregate,
    board: Board,
    lines: Optional[BingoLines] = None,
    index: Optional[int] = None,
) -> List[TriState]:
    """The per-index tri-states an aggregate counts over."""
    if aggregate in LINE_AGGREGATES and index is None:
        raise ValueError(f"{aggregate.name} needs a row/column index")
    if lines is None:
        lines = BingoLines.of(board)

    if aggregate is Aggregate.FILLED:
        return [board.cell_value(r, c) for r, c in ALL_CELLS]
    if aggregate is Aggregate.IN_BINGO:
        return [lines.in_bingo(r, c) for r, c in ALL_CELLS]
    if aggregate is Aggregate.FILLED_NOT_IN_BINGO:
        return [
            lines.in_bingo(r, c).invert().and_(board.cell_value(r, c))
            for r, c in ALL_CELLS
        ]
    if aggregate is Aggregate.BINGO_LINES:
        return lines.all_lines()
    if aggregate is Aggregate.ROW_BINGOES:
        return list(lines.rows)
    if aggregate is Aggregate.COL_BINGOES:
        return list(lines.cols)
    if aggregate is Aggregate.ROW_FILLED:
        return [board.cell_value(index, c) for c in range(COLS)]
    if aggregate is Aggregate.COL_FILLED:
        return [board.cell_value(r, index) for r in range(ROWS)]
    raise ValueError(f"Unsupported aggregate: {aggregate}")


def possible_counts(
    aggregate: Aggregate,
    board: Board,
    lines: Optional[BingoLines] = None,
    index: Optional[int] = None,
) -> CountInterval:
    return CountInterval.of(aggregate_values(aggregate, board, lines, index))
