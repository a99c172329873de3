from __future__ import annotations

from typing import Optional

import numpy as np

from .grid import GameGrid
from .pieces import ActivePiece, Shape


def collides(shape: Shape, x: int, y: int, grid: GameGrid) -> bool:
    """True when `shape` placed with its top-left at (x, y) is illegal.

    Cells left/right of the field or below the last row are illegal. Cells
    above row 0 are allowed and never checked against the board.
    """
    rows, cols = np.nonzero(np.asarray(shape))
    for row, col in zip(rows.tolist(), cols.tolist()):
        bx = x + col
        by = y + row
        if bx < 0 or bx >= grid.width or by >= grid.height:
            return True
        if by >= 0 and grid.grid[by, bx] != 0:
            return True
    return False


def piece_collides(piece: ActivePiece, grid: GameGrid, dx: int = 0, dy: int = 0,
                   shape: Optional[Shape] = None) -> bool:
    return collides(piece.shape if shape is None else shape, piece.x + dx, piece.y + dy, grid)
