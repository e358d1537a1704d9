"""Board - cell labels on a 3x3 grid."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from tictactoe.core.errors import (
    BoardFullError,
    InvalidIndexError,
    InvalidLabelError,
    OverwriteError,
)
from tictactoe.core.types import (
    ALL_POSITIONS,
    CELL_COUNT,
    COLUMNS,
    EMPTY,
    ROWS,
    CellPosition,
    Label,
    in_bounds,
    label_symbol,
)


class Board:
    """Mutable 3x3 grid with a running count of marked cells.

    Cells are written once: a marked cell can only go back to ``EMPTY``
    through :meth:`clear`.  Use :meth:`copy` for speculative analysis;
    copies share no state with the original.
    """

    __slots__ = ("_cells", "_filled")

    def __init__(self) -> None:
        self._cells: list[Label] = [EMPTY] * CELL_COUNT
        self._filled = 0

    @staticmethod
    def _index(row: int, col: int) -> int:
        if not in_bounds(row, col):
            raise InvalidIndexError(f"Invalid cell index [{row}, {col}]")
        return row * COLUMNS + col

    # -- Element access -----------------------------------------------------

    def get(self, row: int, col: int) -> Label:
        return self._cells[self._index(row, col)]

    def set(self, row: int, col: int, label: Label) -> None:
        """Mark an empty cell with *label*."""
        idx = self._index(row, col)
        if label == EMPTY:
            raise InvalidLabelError(f"Label cannot be {EMPTY}")
        if self._filled == CELL_COUNT:
            raise BoardFullError("All cells are marked")
        if self._cells[idx] != EMPTY:
            raise OverwriteError(f"Cell [{row}, {col}] is already marked")
        self._cells[idx] = label
        self._filled += 1

    def __getitem__(self, key: CellPosition | tuple[int, int]) -> Label:
        row, col = key
        return self.get(row, col)

    def __setitem__(self, key: CellPosition | tuple[int, int], label: Label) -> None:
        row, col = key
        self.set(row, col, label)

    def mark(self, position: CellPosition, label: Label) -> None:
        self.set(position.row, position.col, label)

    def is_empty_cell(self, position: CellPosition) -> bool:
        return self.get(position.row, position.col) == EMPTY

    # -- Query helpers ------------------------------------------------------

    @property
    def filled_count(self) -> int:
        return self._filled

    def is_full(self) -> bool:
        return self._filled == CELL_COUNT

    def is_empty(self) -> bool:
        return self._filled == 0

    def empty_positions(self) -> list[CellPosition]:
        """Unmarked cells in row-major order."""
        return [p for p, v in zip(ALL_POSITIONS, self._cells) if v == EMPTY]

    def count(self, label: Label) -> int:
        return self._cells.count(label)

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._cells = self._cells.copy()
        b._filled = self._filled
        return b

    duplicate = copy

    def clear(self) -> None:
        self._cells = [EMPTY] * CELL_COUNT
        self._filled = 0

    # -- Factory ------------------------------------------------------------

    @classmethod
    def from_rows(cls, rows: Sequence[Iterable[Label]]) -> Board:
        """Build a board from three rows of labels (``EMPTY`` for blanks)."""
        if len(rows) != ROWS:
            raise InvalidIndexError(f"Expected {ROWS} rows, got {len(rows)}")
        b = cls()
        for r, row in enumerate(rows):
            values = list(row)
            if len(values) != COLUMNS:
                raise InvalidIndexError(
                    f"Expected {COLUMNS} cells in row {r}, got {len(values)}"
                )
            for c, label in enumerate(values):
                if label != EMPTY:
                    b.set(r, c, label)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        rows: list[str] = []
        for r in range(ROWS):
            row = self._cells[r * COLUMNS : (r + 1) * COLUMNS]
            rows.append(" ".join(label_symbol(v) for v in row))
        return "\n".join(rows)
