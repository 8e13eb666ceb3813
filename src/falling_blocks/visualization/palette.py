from __future__ import annotations

from typing import Tuple

Color = Tuple[int, int, int]

BACKGROUND: Color = (17, 17, 17)
TEXT: Color = (0, 255, 0)

PALETTE = {
    0: (0, 0, 0),
    1: (0, 255, 255),  # I
    2: (255, 255, 0),  # O
    3: (255, 0, 255),  # T
    4: (0, 255, 0),    # J
    5: (255, 0, 0),    # L
    6: (0, 0, 255),    # S
    7: (255, 170, 0),  # Z
}


def color_for_value(v: int) -> Color:
    # Falling piece cells are negative in observations
    return PALETTE.get(abs(int(v)), (200, 200, 200))
