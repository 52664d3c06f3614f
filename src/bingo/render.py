"""Text rendering of boards."""

from typing import Dict, List

from .board import Board, CellState


def render_rows(
    board: Board,
    mark: str = CellState.MARKED.value,
    blank: str = CellState.UNMARKED.value,
    unknown: str = CellState.UNASSIGNED.value,
) -> List[str]:
    glyphs: Dict[CellState, str] = {
        CellState.MARKED: mark,
        CellState.UNMARKED: blank,
        CellState.UNASSIGNED: unknown,
    }
    return ["".join(glyphs[state] for state in row) for row in board.rows()]


def render_board(
    board: Board,
    mark: str = CellState.MARKED.value,
    blank: str = CellState.UNMARKED.value,
    unknown: str = CellState.UNASSIGNED.value,
) -> str:
    """One line per row, one glyph per cell."""
    return "\n".join(render_rows(board, mark, blank, unknown))
