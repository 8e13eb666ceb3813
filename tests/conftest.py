from __future__ import annotations

from typing import Iterable

import pytest

from falling_blocks.game import FallingBlockGame, GameConfig, PieceGenerator, TetrominoType


class SequenceGenerator(PieceGenerator):
    """Yields a fixed list of types, then O pieces forever."""

    def __init__(self, kinds: Iterable[TetrominoType]) -> None:
        super().__init__(seed=0)
        self._queue = list(kinds)

    def next_type(self) -> TetrominoType:
        if self._queue:
            return self._queue.pop(0)
        return TetrominoType.O


@pytest.fixture
def sequence():
    return SequenceGenerator


@pytest.fixture
def make_game():
    def _make(kinds=(), width: int = 10, height: int = 20, start: bool = True, **kwargs) -> FallingBlockGame:
        game = FallingBlockGame(GameConfig(width=width, height=height), generator=SequenceGenerator(kinds), **kwargs)
        if start:
            game.start_game()
        return game

    return _make
