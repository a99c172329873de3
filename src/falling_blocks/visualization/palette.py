from __future__ import annotations

from typing import Optional, Tuple

from falling_blocks.game import COLORS, TetrominoType

RGB = {
    "cyan": (0, 240, 240),
    "blue": (0, 0, 240),
    "orange": (240, 160, 0),
    "yellow": (240, 240, 0),
    "green": (0, 240, 0),
    "purple": (160, 0, 240),
    "red": (240, 0, 0),
}
EMPTY_RGB = (30, 30, 36)


def rgb_for_color(color: Optional[str]) -> Tuple[int, int, int]:
    if not color:
        return EMPTY_RGB
    return RGB.get(color, (200, 200, 200))


def rgb_for_value(v: int) -> Tuple[int, int, int]:
    """Map a grid value (0 empty, +/- kind) to RGB."""
    if v == 0:
        return EMPTY_RGB
    return rgb_for_color(COLORS[TetrominoType(abs(v))])
