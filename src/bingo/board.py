"""Immutable board snapshots and the fixed row-major fill order."""

from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Sequence, Tuple, Union

from .tristate import TriState

ROWS = 5
COLS = 5


class CellState(Enum):
    """Assigned state of a cell; the value is the default glyph."""

    MARKED = "X"
    UNMARKED = " "
    UNASSIGNED = "#"


_CELL_VALUES = {
    CellState.MARKED: TriState.TRUE,
    CellState.UNMARKED: TriState.FALSE,
    CellState.UNASSIGNED: TriState.UNKNOWN,
}


class Cell(NamedTuple):
    row: int
    col: int

    @classmethod
    def parse(cls, label: str) -> "Cell":
        """Parse a label such as ``"B4"`` (column letter, 1-indexed row)."""
        label = label.strip()
        if len(label) < 2 or not label[0].isalpha() or not label[1:].isdigit():
            raise ValueError(f"Invalid cell label: {label!r}")
        return cls(int(label[1:]) - 1, column_index(label[0]))

    @property
    def label(self) -> str:
        return f"{chr(ord('A') + self.col)}{self.row + 1}"

    def in_bounds(self) -> bool:
        return 0 <= self.row < ROWS and 0 <= self.col < COLS


ALL_CELLS: List[Cell] = [Cell(r, c) for r in range(ROWS) for c in range(COLS)]


def column_index(letter: str) -> int:
    """Map ``"A"``/``"a"`` to 0, ``"B"`` to 1, ..."""
    return ord(letter.upper()) - ord("A")


def _check_bounds(row: int, col: int) -> None:
    if not (0 <= row < ROWS and 0 <= col < COLS):
        raise IndexError(f"Cell ({row}, {col}) is outside the {ROWS}x{COLS} grid")


@dataclass(frozen=True)
class Board:
    """
    A grid snapshot plus the cursor pointing at the next cell to assign.
    Every cell before the cursor (row-major) is MARKED or UNMARKED, every cell
    at or after it is UNASSIGNED. Boards are never mutated: `successors`
    derives new ones.
    """

    cells: Tuple[CellState, ...]
    cursor_row: int = 0
    cursor_col: int = 0

    @classmethod
    def empty(cls) -> "Board":
        return cls(cells=(CellState.UNASSIGNED,) * (ROWS * COLS))

    @classmethod
    def from_rows(
        cls,
        rows: Union[str, Sequence[str]],
        mark: str = CellState.MARKED.value,
        blank: str = CellState.UNMARKED.value,
        unknown: str = CellState.UNASSIGNED.value,
    ) -> "Board":
        """
        Build a board from a text grid (one string per row, or a single
        newline-separated string). Short rows are padded with `blank`.
        Unassigned cells must form a suffix of the row-major order.
        """
        if isinstance(rows, str):
            rows = rows.split("\n")
        rows = list(rows)
        # Tolerate a trailing newline in multi-line strings.
        while len(rows) > ROWS and rows[-1] == "":
            rows.pop()
        if len(rows) != ROWS:
            raise ValueError(f"Expected {ROWS} rows, got {len(rows)}")

        glyphs = {mark: CellState.MARKED, blank: CellState.UNMARKED, unknown: CellState.UNASSIGNED}
        cells: List[CellState] = []
        for r, line in enumerate(rows):
            if len(line) > COLS:
                raise ValueError(f"Row {r + 1} has {len(line)} cells, expected {COLS}")
            for ch in line.ljust(COLS, blank):
                if ch not in glyphs:
                    raise ValueError(f"Unknown glyph {ch!r} in row {r + 1}")
                cells.append(glyphs[ch])

        if CellState.UNASSIGNED in cells:
            cursor = cells.index(CellState.UNASSIGNED)
            if any(state is not CellState.UNASSIGNED for state in cells[cursor:]):
                raise ValueError("Unassigned cells must all come after the assigned ones")
        else:
            cursor = ROWS * COLS
        return cls(cells=tuple(cells), cursor_row=cursor // COLS, cursor_col=cursor % COLS)

    @property
    def depth(self) -> int:
        """Number of cells assigned so far."""
        return self.cursor_row * COLS + self.cursor_col

    def is_complete(self) -> bool:
        return self.cursor_row == ROWS

    def state_at(self, row: int, col: int) -> CellState:
        _check_bounds(row, col)
        return self.cells[row * COLS + col]

    def cell_value(self, row: int, col: Union[int, str]) -> TriState:
        """
        TRUE if marked, FALSE if unmarked, UNKNOWN if unassigned.
        Integer coordinates are 0-indexed; a letter column switches to the
        puzzle's own addressing (``cell_value(4, "B")`` is B4).
        """
        if isinstance(col, str):
            row, col = row - 1, column_index(col)
        return _CELL_VALUES[self.state_at(row, col)]

    def value_at(self, label: str) -> TriState:
        cell = Cell.parse(label)
        return self.cell_value(cell.row, cell.col)

    def rows(self) -> List[Tuple[CellState, ...]]:
        return [self.cells[r * COLS:(r + 1) * COLS] for r in range(ROWS)]

    def assigned_count(self) -> int:
        return sum(1 for state in self.cells if state is not CellState.UNASSIGNED)

    def successors(self) -> Tuple["Board", ...]:
        """
        Boards obtained by marking / not marking the cursor cell, in that
        order. A complete board returns itself as the only element.
        """
        if self.is_complete():
            return (self,)
        return (self._fill_next(True), self._fill_next(False))

    def _fill_next(self, marked: bool) -> "Board":
        index = self.depth
        state = CellState.MARKED if marked else CellState.UNMARKED
        cells = self.cells[:index] + (state,) + self.cells[index + 1:]
        if self.cursor_col == COLS - 1:
            return Board(cells=cells, cursor_row=self.cursor_row + 1, cursor_col=0)
        return Board(cells=cells, cursor_row=self.cursor_row, cursor_col=self.cursor_col + 1)

    def __str__(self) -> str:
        from .render import render_board

        return render_board(self)
