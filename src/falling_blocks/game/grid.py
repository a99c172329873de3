from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .pieces import COLORS, ActivePiece, TetrominoType


@dataclass(frozen=True)
class Cell:
    filled: bool
    color: Optional[str] = None


EMPTY_CELL = Cell(filled=False)


class GameGrid:
    """Fixed-size playfield, row 0 at the top.

    Cells hold 0 when empty, otherwise the TetrominoType value of the piece
    that filled them. Operations that change cells return a new grid.
    """

    def __init__(self, width: int = 10, height: int = 20, cells: Optional[np.ndarray] = None) -> None:
        self.width = int(width)
        self.height = int(height)
        if cells is None:
            cells = np.zeros((self.height, self.width), dtype=np.int8)
        elif cells.shape != (self.height, self.width):
            raise ValueError(f"cells shape {cells.shape} != {(self.height, self.width)}")
        self.grid = cells

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_filled(self, x: int, y: int) -> bool:
        return bool(self.grid[y, x] != 0)

    def cell(self, x: int, y: int) -> Cell:
        v = int(self.grid[y, x])
        if v == 0:
            return EMPTY_CELL
        return Cell(filled=True, color=COLORS[TetrominoType(v)])

    def rows(self) -> Tuple[Tuple[Cell, ...], ...]:
        return tuple(tuple(self.cell(x, y) for x in range(self.width)) for y in range(self.height))

    def full_rows(self) -> List[int]:
        return [int(r) for r in np.where(np.all(self.grid != 0, axis=1))[0]]

    def merged(self, piece: ActivePiece) -> "GameGrid":
        """Write the piece's cells into a copy; cells above row 0 are dropped."""
        out = self.grid.copy()
        value = int(piece.kind)
        for x, y in piece.cells():
            if y >= 0:
                out[y, x] = value
        return GameGrid(self.width, self.height, out)

    def cleared(self) -> Tuple["GameGrid", int]:
        full = self.full_rows()
        num = len(full)
        if num == 0:
            return self, 0
        kept = np.delete(self.grid, full, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        return GameGrid(self.width, self.height, np.vstack((new_rows, kept))), num

    def get_max_height(self) -> int:
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

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()


def merge_and_clear(grid: GameGrid, piece: ActivePiece) -> Tuple[GameGrid, int]:
    """Lock `piece` into `grid`, drop full rows and pad empty rows on top."""
    return grid.merged(piece).cleared()
