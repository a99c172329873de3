from __future__ import annotations

from typing import List

import numpy as np

from falling_blocks.game import ActivePiece, Cue, GameGrid, TetrominoType


def grid_with_rows(rows: dict, width: int = 10, height: int = 20, value: int = int(TetrominoType.T)) -> GameGrid:
    """Build a grid where rows[y] lists the filled columns of row y."""
    grid = GameGrid(width, height)
    for y, cols in rows.items():
        for x in cols:
            grid.grid[y, x] = value
    return grid


def same_piece(a: ActivePiece, b: ActivePiece) -> bool:
    return a.kind == b.kind and (a.x, a.y) == (b.x, b.y) and np.array_equal(a.shape, b.shape)


def all_but(*holes: int, width: int = 10) -> List[int]:
    return [x for x in range(width) if x not in holes]


class RecordingAudio:
    def __init__(self) -> None:
        self.cues: List[Cue] = []

    def play(self, cue: Cue) -> None:
        self.cues.append(cue)


class BrokenAudio:
    def play(self, cue: Cue) -> None:
        raise RuntimeError("no audio device")
