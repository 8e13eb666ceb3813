from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    J = 4
    L = 5
    S = 6
    Z = 7


Shape = np.ndarray


def rotate_cw(shape: Shape) -> Shape:
    """Rotate a shape matrix 90 degrees clockwise.

    For an R x C input the result is C x R with
    ``result[c, R - 1 - r] == shape[r, c]``. The input is never modified.
    """
    return np.rot90(shape, 1, axes=(1, 0)).copy()


def _shape(kind: TetrominoType, rows: List[List[int]]) -> Shape:
    return np.array(rows, dtype=np.int8) * int(kind)


BASE_SHAPES = {
    TetrominoType.I: _shape(TetrominoType.I, [[1, 1, 1, 1]]),
    TetrominoType.O: _shape(TetrominoType.O, [[1, 1], [1, 1]]),
    TetrominoType.T: _shape(TetrominoType.T, [[0, 1, 0], [1, 1, 1]]),
    TetrominoType.J: _shape(TetrominoType.J, [[1, 0, 0], [1, 1, 1]]),
    TetrominoType.L: _shape(TetrominoType.L, [[0, 0, 1], [1, 1, 1]]),
    TetrominoType.S: _shape(TetrominoType.S, [[0, 1, 1], [1, 1, 0]]),
    TetrominoType.Z: _shape(TetrominoType.Z, [[1, 1, 0], [0, 1, 1]]),
}


def to_type(value: int) -> TetrominoType:
    try:
        return TetrominoType(int(value))
    except ValueError:
        raise ValueError(f"Unknown piece type id: {value!r}") from None


@dataclass(eq=False)
class Piece:
    kind: TetrominoType
    shape: Shape
    x: int = 0
    y: int = 0
    rotation: int = 0  # 0..3

    @classmethod
    def spawn(cls, kind: int, x: int = 0, y: int = 0) -> "Piece":
        kind = to_type(kind)
        return cls(kind=kind, shape=BASE_SHAPES[kind].copy(), x=x, y=y, rotation=0)

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    def rotated(self) -> Shape:
        """Candidate shape after one clockwise turn; the piece is left untouched."""
        return rotate_cw(self.shape)

    def apply_rotation(self, shape: Shape) -> None:
        self.shape = shape
        self.rotation = (self.rotation + 1) % 4

    def move(self, dx: int, dy: int) -> None:
        self.x += dx
        self.y += dy

    def cells_at(self, origin_x: int, origin_y: int, shape: Shape | None = None) -> List[Tuple[int, int]]:
        s = self.shape if shape is None else shape
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells

    def cells(self) -> List[Tuple[int, int]]:
        return self.cells_at(self.x, self.y)

    def copy(self) -> "Piece":
        return Piece(self.kind, self.shape.copy(), self.x, self.y, self.rotation)
