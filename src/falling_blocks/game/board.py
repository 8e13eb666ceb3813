from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from .pieces import TetrominoType

if TYPE_CHECKING:
    from .pieces import Piece


MAX_CELL_VALUE = max(int(t) for t in TetrominoType)


class Board:
    """Fixed-size well of locked cells.

    The grid is indexed ``grid[y, x]`` with ``y = 0`` at the top. ``0`` is an
    empty cell and ``1..7`` is the type id of the piece that locked there.
    Rows above the top (``y < 0``) are an open spawn area and never occupied.
    """

    def __init__(self, width: int, height: int) -> None:
        if isinstance(width, bool) or isinstance(height, bool):
            raise ValueError("Board dimensions must be integers")
        if int(width) != width or int(height) != height:
            raise ValueError(f"Board dimensions must be integers, got {width!r}x{height!r}")
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        if x < 0 or x >= self.width or y >= self.height:
            return True
        if y < 0:
            return False
        return self.grid[y, x] != 0

    def merge(self, piece: "Piece") -> None:
        """Write the piece's filled cells into the grid.

        Every target is checked before anything is written, so a rejected
        merge leaves the grid untouched.
        """
        value = int(piece.kind)
        if not 1 <= value <= MAX_CELL_VALUE:
            raise ValueError(f"Cannot merge piece with type id {value}")
        targets = []
        for x, y in piece.cells():
            if y < 0:
                continue
            if self.is_occupied(x, y):
                raise ValueError(f"Cannot merge {piece.kind.name} piece: cell ({x}, {y}) is blocked")
            targets.append((x, y))
        for x, y in targets:
            self.grid[y, x] = value

    def clear_full_rows(self) -> int:
        full_rows = np.where(np.all(self.grid != 0, axis=1))[0]
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Remove full rows and add empty rows at the top
        kept = np.delete(self.grid, full_rows, axis=0)
        self.grid[:num] = 0
        self.grid[num:] = kept
        return num

    def snapshot(self) -> np.ndarray:
        return self.grid.copy()

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            seen_block = False
            for cell in self.grid[:, x]:
                if cell != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes
