"""Bingo predicates over possibly incomplete boards."""

from dataclasses import dataclass
from typing import List, Tuple

from .board import COLS, ROWS, Board
from .tristate import TriState, all_of, any_of


def row_bingo(board: Board, row: int) -> TriState:
    return all_of(board.cell_value(row, col) for col in range(COLS))


def col_bingo(board: Board, col: int) -> TriState:
    return all_of(board.cell_value(row, col) for row in range(ROWS))


def diagonal_cells(anti: bool) -> List[Tuple[int, int]]:
    """Cells of the main diagonal (top-left to bottom-right) or the anti-diagonal."""
    if anti:
        return [(row, COLS - 1 - row) for row in range(ROWS)]
    return [(row, row) for row in range(ROWS)]


def diagonal_bingo(board: Board, anti: bool) -> TriState:
    return all_of(board.cell_value(row, col) for row, col in diagonal_cells(anti))


def on_main_diagonal(row: int, col: int) -> bool:
    return row == col


def on_anti_diagonal(row: int, col: int) -> bool:
    return row == ROWS - 1 - col


def is_in_bingo(board: Board, row: int, col: int) -> TriState:
    """Whether the cell belongs to any completed row, column or diagonal."""
    result = row_bingo(board, row).or_(col_bingo(board, col))
    if on_main_diagonal(row, col):
        result = result.or_(diagonal_bingo(board, anti=False))
    if on_anti_diagonal(row, col):
        result = result.or_(diagonal_bingo(board, anti=True))
    return result


@dataclass(frozen=True)
class BingoLines:
    """
    All twelve line states of one board, computed once.
    Per-cell queries answer exactly like `is_in_bingo` without rescanning lines.
    """

    rows: Tuple[TriState, ...]
    cols: Tuple[TriState, ...]
    main_diagonal: TriState
    anti_diagonal: TriState

    @classmethod
    def of(cls, board: Board) -> "BingoLines":
        return cls(
            rows=tuple(row_bingo(board, r) for r in range(ROWS)),
            cols=tuple(col_bingo(board, c) for c in range(COLS)),
            main_diagonal=diagonal_bingo(board, anti=False),
            anti_diagonal=diagonal_bingo(board, anti=True),
        )

    def diagonal(self, anti: bool) -> TriState:
        return self.anti_diagonal if anti else self.main_diagonal

    def in_bingo(self, row: int, col: int) -> TriState:
        candidates = [self.rows[row], self.cols[col]]
        if on_main_diagonal(row, col):
            candidates.append(self.main_diagonal)
        if on_anti_diagonal(row, col):
            candidates.append(self.anti_diagonal)
        return any_of(candidates)

    def all_lines(self) -> List[TriState]:
        """Columns, rows, then both diagonals."""
        return [*self.cols, *self.rows, self.main_diagonal, self.anti_diagonal]
