from __future__ import annotations

import numpy as np

from .pieces import Piece


class GameGrid:
    """Fixed-size board of locked cells.

    The grid uses 0 for empty cells and the tetromino kind (1-7) for filled
    cells, so a single value serves both occupancy and colouring. Row 0 is the
    top of the board. Rows above it (negative y) exist only for falling pieces
    and are never stored.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.width}x{self.height}")
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def cell(self, x: int, y: int) -> int:
        return int(self.grid[y, x])

    def is_out_of_horizontal_bounds(self, x: int) -> bool:
        return x < 0 or x >= self.width

    def is_below_floor(self, y: int) -> bool:
        return y >= self.height

    def is_occupied(self, x: int, y: int) -> bool:
        if y < 0 or y >= self.height or self.is_out_of_horizontal_bounds(x):
            return False
        return bool(self.grid[y, x] != 0)

    def lock(self, piece: Piece) -> None:
        """Copy the piece's occupied cells into the board, dropping rows above it."""
        value = int(piece.kind)
        for x, y in piece.cells():
            if y >= 0:
                self.grid[y, x] = value

    def clear_full_rows(self) -> int:
        full = np.all(self.grid != 0, axis=1)
        num = int(np.count_nonzero(full))
        if num == 0:
            return 0
        # Keep surviving rows in order and pad the top with empty rows
        kept = self.grid[~full]
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, kept))
        return num

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
