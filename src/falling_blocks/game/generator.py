from __future__ import annotations

import random
from typing import Optional

from .pieces import TetrominoType


class PieceGenerator:
    """Uniform random source of piece types.

    Every pick is independent; there is no bag and no repeat protection.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self.rng = random.Random(seed)
        self._types = list(TetrominoType)

    def reseed(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self.rng.seed(seed)

    def next_type(self) -> TetrominoType:
        return self.rng.choice(self._types)
