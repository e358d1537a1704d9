"""Primitive types: cell labels and cell positions on the 3x3 grid."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

Label = int

EMPTY: Label = 0
LABEL_X: Label = ord("X")
LABEL_O: Label = ord("O")

ROWS = 3
COLUMNS = 3
CELL_COUNT = ROWS * COLUMNS


@dataclass(frozen=True, slots=True)
class CellPosition:
    """Address of a single cell as ``(row, col)``, both in ``[0, 3)``."""

    row: int
    col: int

    def __iter__(self) -> Iterator[int]:
        yield self.row
        yield self.col

    def __str__(self) -> str:
        return f"[{self.row}, {self.col}]"


ALL_POSITIONS: tuple[CellPosition, ...] = tuple(
    CellPosition(r, c) for r in range(ROWS) for c in range(COLUMNS)
)


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < ROWS and 0 <= col < COLUMNS


def label_symbol(label: Label) -> str:
    """Printable form of *label* (``.`` for an empty cell)."""
    if label == EMPTY:
        return "."
    if 32 < label < 127:
        return chr(label)
    return str(label)
