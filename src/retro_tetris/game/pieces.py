from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray

SHAPE_SIZE = 4


def _template(rows: List[str], value: int) -> Shape:
    shape = np.array([[int(c) for c in row] for row in rows], dtype=np.int8) * value
    shape.setflags(write=False)
    return shape


# 4x4 bounding boxes; occupied cells carry the kind value (also the colour index)
TEMPLATES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _template(["0000", "1111", "0000", "0000"], TetrominoType.I),
    TetrominoType.O: _template(["0000", "0110", "0110", "0000"], TetrominoType.O),
    TetrominoType.T: _template(["0000", "0100", "1110", "0000"], TetrominoType.T),
    TetrominoType.S: _template(["0000", "0110", "1100", "0000"], TetrominoType.S),
    TetrominoType.Z: _template(["0000", "1100", "0110", "0000"], TetrominoType.Z),
    TetrominoType.J: _template(["0000", "1000", "1110", "0000"], TetrominoType.J),
    TetrominoType.L: _template(["0000", "0010", "1110", "0000"], TetrominoType.L),
}


def rotate_shape(shape: Shape) -> Shape:
    """Rotate a square shape 90 degrees clockwise.

    Cell (i, j) of the source lands on (j, n - 1 - i) of the result.
    """
    return np.rot90(shape, 1, axes=(1, 0)).copy()


def spawn_x(board_width: int) -> int:
    return board_width // 2 - SHAPE_SIZE // 2


@dataclass(eq=False)
class Piece:
    kind: TetrominoType
    shape: Shape = field(repr=False)
    x: int = 0
    y: int = 0

    @classmethod
    def spawn(cls, kind: TetrominoType, board_width: int = 10) -> "Piece":
        kind = TetrominoType(kind)
        return cls(kind=kind, shape=TEMPLATES[kind].copy(), x=spawn_x(board_width), y=0)

    def rotated(self) -> "Piece":
        # Anchor is kept; whether the result fits is up to the caller
        return Piece(self.kind, rotate_shape(self.shape), self.x, self.y)

    def copy(self) -> "Piece":
        return Piece(self.kind, self.shape.copy(), self.x, self.y)

    def cells(self, dx: int = 0, dy: int = 0) -> List[Tuple[int, int]]:
        """Board coordinates (x, y) of the occupied cells, displaced by (dx, dy)."""
        rows, cols = np.nonzero(self.shape)
        return [(self.x + int(c) + dx, self.y + int(r) + dy) for r, c in zip(rows, cols)]
