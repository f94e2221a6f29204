from __future__ import annotations

from typing import Iterable, Iterator, Tuple

import numpy as np

from .cells import CellType


def iter_cells(shape: np.ndarray, row: int, col: int) -> Iterator[Tuple[int, int, int]]:
    """Yield (board_row, board_col, value) for every non-empty shape cell."""
    h, w = shape.shape
    for dy in range(h):
        for dx in range(w):
            value = int(shape[dy, dx])
            if value != CellType.EMPTY:
                yield row + dy, col + dx, value


class GameGrid:
    """Fixed-size board of `CellType` values.

    Row 0 is the top (spawn) row. Cells above row 0 are legal for a falling
    piece but are never stored.
    """

    def __init__(self, width: int = 10, height: int = 20) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(CellType.EMPTY)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def is_occupiable(self, shape: np.ndarray, row: int, col: int) -> bool:
        for r, c, _ in iter_cells(shape, row, col):
            if r >= self.height or c < 0 or c >= self.width:
                return False
            # Above the top edge nothing can collide
            if r >= 0 and self.grid[r, c] != CellType.EMPTY:
                return False
        return True

    def place(self, shape: np.ndarray, row: int, col: int) -> int:
        """Write the shape's cells into the board and return how many landed.

        Assumes `is_occupiable` already holds for this placement.
        """
        placed = 0
        for r, c, value in iter_cells(shape, row, col):
            if self.is_inside(r, c):
                self.grid[r, c] = value
                placed += 1
        return placed

    def remove_rows(self, indices: Iterable[int]) -> int:
        rows = sorted({int(i) for i in indices if 0 <= int(i) < self.height})
        if not rows:
            return 0
        kept = np.delete(self.grid, rows, axis=0)
        new_rows = np.zeros((len(rows), self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, kept))
        return len(rows)

    def remove_columns(self, indices: Iterable[int]) -> int:
        cols = sorted({int(i) for i in indices if 0 <= int(i) < self.width})
        if not cols:
            return 0
        kept = np.delete(self.grid, cols, axis=1)
        new_cols = np.zeros((self.height, len(cols)), dtype=np.int8)
        self.grid = np.hstack((new_cols, kept))
        return len(cols)

    def overlay(self, shape: np.ndarray, row: int, col: int) -> np.ndarray:
        """Copy of the board with a shape drawn on top, clipped to the board."""
        state = self.clone_state()
        for r, c, value in iter_cells(shape, row, col):
            if self.is_inside(r, c):
                state[r, c] = value
        return state

    def is_empty(self) -> bool:
        return not np.any(self.grid != CellType.EMPTY)

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def copy(self) -> "GameGrid":
        new_grid = GameGrid(self.width, self.height)
        new_grid.grid = self.grid.copy()
        return new_grid
