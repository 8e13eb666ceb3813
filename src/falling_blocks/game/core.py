from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Any, Callable, Dict, Optional

import numpy as np

from .board import Board
from .collision import can_place
from .generator import PieceGenerator
from .pieces import Piece, TetrominoType
from .rules import ScoringRules

logger = logging.getLogger(__name__)


class Action(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    ROTATE = 3
    SOFT_DROP = 4
    HARD_DROP = 5


class GameState(Enum):
    READY = auto()
    RUNNING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    drop_interval_ms: float = 350.0
    random_seed: Optional[int] = None
    spawn_y: int = 0

    def __post_init__(self) -> None:
        if self.drop_interval_ms <= 0:
            raise ValueError(f"drop_interval_ms must be positive, got {self.drop_interval_ms}")


class FallingBlockGame:
    """Falling-block puzzle engine driven by an external clock.

    The host calls :meth:`tick` once per frame with the elapsed milliseconds
    and forwards player input to the move methods. Every move is checked with
    :func:`can_place` first; illegal moves return False and change nothing.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 generator: Optional[PieceGenerator] = None,
                 on_game_over: Optional[Callable[[int], Any]] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.generator = generator or PieceGenerator(self.config.random_seed)
        self.on_game_over = on_game_over
        self.board = Board(self.config.width, self.config.height)
        self.state = GameState.READY
        self.current: Optional[Piece] = None
        self.next_type: Optional[TetrominoType] = None
        self._score = 0
        self._lines = 0
        self._pieces_locked = 0
        self._drop_acc = 0.0

    @classmethod
    def initialize(cls, width: int, height: int, seed: Optional[int] = None, **kwargs: Any) -> "FallingBlockGame":
        return cls(GameConfig(width=width, height=height, random_seed=seed), **kwargs)

    # ----- Lifecycle -----
    def start_game(self, seed: Optional[int] = None) -> None:
        """Start a fresh game; from any state this is a full restart."""
        if seed is not None:
            self.generator.reseed(seed)
        self.board.reset()
        self._score = 0
        self._lines = 0
        self._pieces_locked = 0
        self._drop_acc = 0.0
        self.state = GameState.RUNNING
        self.next_type = self.generator.next_type()
        logger.info("Game started on %dx%d board", self.board.width, self.board.height)
        self._spawn_next()

    def pause(self) -> bool:
        if self.state is not GameState.RUNNING:
            return False
        self.state = GameState.PAUSED
        return True

    def resume(self) -> bool:
        if self.state is not GameState.PAUSED:
            return False
        self.state = GameState.RUNNING
        return True

    def toggle_pause(self) -> bool:
        return self.pause() or self.resume()

    def spawn_position(self, piece: Piece) -> tuple[int, int]:
        x = (self.board.width - 4) // 2
        x = max(0, min(x, self.board.width - piece.width))
        return x, self.config.spawn_y

    def _spawn_next(self) -> None:
        assert self.next_type is not None
        piece = Piece.spawn(self.next_type)
        piece.x, piece.y = self.spawn_position(piece)
        self.current = piece
        self.next_type = self.generator.next_type()
        if not can_place(self.board, piece):
            logger.debug("Spawn of %s at (%d, %d) is blocked", piece.kind.name, piece.x, piece.y)
            self._end_game()

    def _end_game(self) -> None:
        self.state = GameState.GAME_OVER
        logger.info("Game over: score=%d lines=%d", self._score, self._lines)
        if self.on_game_over is not None:
            self.on_game_over(self._score)

    # ----- Update loop -----
    def tick(self, dt_ms: float) -> None:
        if dt_ms < 0:
            raise ValueError(f"dt_ms must not be negative, got {dt_ms}")
        if self.state is not GameState.RUNNING:
            return
        self._drop_acc += dt_ms
        if self._drop_acc < self.config.drop_interval_ms:
            return
        self._drop_acc = 0.0
        self._gravity_step()

    def _gravity_step(self) -> None:
        assert self.current is not None
        if can_place(self.board, self.current, 0, 1):
            self.current.move(0, 1)
        else:
            self._lock_piece()

    def _lock_piece(self) -> int:
        assert self.current is not None
        self.board.merge(self.current)
        lines = self.board.clear_full_rows()
        self._lines += lines
        self._score += self.rules.score_for_lines(lines)
        self._pieces_locked += 1
        logger.debug("Locked %s at (%d, %d), cleared %d line(s)",
                     self.current.kind.name, self.current.x, self.current.y, lines)
        self._drop_acc = 0.0
        self._spawn_next()
        return lines

    # ----- Player input -----
    def _can_act(self) -> bool:
        return self.state is GameState.RUNNING and self.current is not None

    def _shift(self, dx: int, dy: int) -> bool:
        if not self._can_act() or not can_place(self.board, self.current, dx, dy):
            return False
        self.current.move(dx, dy)
        return True

    def move_left(self) -> bool:
        return self._shift(-1, 0)

    def move_right(self) -> bool:
        return self._shift(1, 0)

    def soft_drop(self) -> bool:
        if not self._shift(0, 1):
            return False
        self._drop_acc = 0.0
        return True

    def hard_drop(self) -> bool:
        if not self._can_act():
            return False
        while can_place(self.board, self.current, 0, 1):
            self.current.move(0, 1)
        self._lock_piece()
        return True

    def rotate(self) -> bool:
        if not self._can_act():
            return False
        rotated = self.current.rotated()
        if not can_place(self.board, self.current, 0, 0, rotated):
            return False
        self.current.apply_rotation(rotated)
        return True

    def step(self, action: Action) -> bool:
        if action == Action.LEFT:
            return self.move_left()
        if action == Action.RIGHT:
            return self.move_right()
        if action == Action.ROTATE:
            return self.rotate()
        if action == Action.SOFT_DROP:
            return self.soft_drop()
        if action == Action.HARD_DROP:
            return self.hard_drop()
        return False

    # ----- Queries -----
    def board_snapshot(self) -> np.ndarray:
        return self.board.snapshot()

    def current_piece(self) -> Optional[Piece]:
        return self.current.copy() if self.current is not None else None

    def next_piece(self) -> Optional[TetrominoType]:
        return self.next_type

    def score(self) -> int:
        return self._score

    def lines_cleared(self) -> int:
        return self._lines

    def game_state(self) -> GameState:
        return self.state

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the board
        state = self.board.snapshot()
        if self.current is not None and self.state is not GameState.GAME_OVER:
            for x, y in self.current.cells():
                if self.board.is_inside(x, y):
                    # Negative marks the falling piece
                    state[y, x] = -int(self.current.kind)
        return state

    def get_game_stats(self) -> Dict[str, Any]:
        return {
            "final_score": self._score,
            "lines_cleared": self._lines,
            "pieces_locked": self._pieces_locked,
            "max_height": self.board.get_max_height(),
            "holes": self.board.count_holes(),
            "state": self.state.name,
        }
