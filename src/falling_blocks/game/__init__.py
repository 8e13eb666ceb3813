"""Game module for Falling Blocks.

Exports the core engine and supporting classes:
- Board: Well representation, merging and line clearing
- Piece: Tetromino piece with clockwise rotation
- TetrominoType: Enum of available piece types
- PieceGenerator: Seeded uniform random piece source
- can_place: The single placement legality check
- ScoringRules: Flat per-line scoring
- FallingBlockGame: Gravity loop and game state machine
"""

from .board import Board
from .pieces import BASE_SHAPES, Piece, TetrominoType, rotate_cw
from .generator import PieceGenerator
from .collision import can_place
from .rules import ScoringRules
from .core import Action, FallingBlockGame, GameConfig, GameState

__all__ = [
    "Board",
    "BASE_SHAPES",
    "Piece",
    "TetrominoType",
    "rotate_cw",
    "PieceGenerator",
    "can_place",
    "ScoringRules",
    "FallingBlockGame",
    "GameConfig",
    "GameState",
    "Action",
]
