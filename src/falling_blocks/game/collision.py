from __future__ import annotations

from typing import Optional

from .board import Board
from .pieces import Piece, Shape


def can_place(board: Board, piece: Piece, dx: int = 0, dy: int = 0,
              candidate_shape: Optional[Shape] = None) -> bool:
    """Return True if ``piece`` may sit at its anchor shifted by (dx, dy).

    ``candidate_shape`` replaces the piece's own shape for the check, which is
    how rotations are tested. Cells above the top row are allowed; cells left,
    right or below the well, or on a filled cell, are not. Neither the board
    nor the piece is modified.
    """
    for x, y in piece.cells_at(piece.x + dx, piece.y + dy, candidate_shape):
        if x < 0 or x >= board.width or y >= board.height:
            return False
        if y >= 0 and board.is_occupied(x, y):
            return False
    return True
