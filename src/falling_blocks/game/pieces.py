from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import IntEnum
from itertools import cycle
from typing import Iterable, Iterator, List, Optional, Protocol, Sequence, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray

SPAWN_POSITION: Tuple[int, int] = (3, 0)


BASE_SHAPES = {
    TetrominoType.I: np.array([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0], [0, 0, 0]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1], [0, 0, 0]], dtype=np.int8),
}

COLORS = {
    TetrominoType.I: "cyan",
    TetrominoType.J: "blue",
    TetrominoType.L: "orange",
    TetrominoType.O: "yellow",
    TetrominoType.S: "green",
    TetrominoType.T: "purple",
    TetrominoType.Z: "red",
}


def _frozen(shape: Shape) -> Shape:
    out = np.array(shape, dtype=np.int8, copy=True)
    out.setflags(write=False)
    return out


def base_shape(kind: TetrominoType) -> Shape:
    """Return a read-only copy of the catalog shape for `kind`."""
    return _frozen(BASE_SHAPES[kind])


def rotate_shape(shape: Shape) -> Shape:
    """Rotate 90 degrees clockwise: transpose, then reverse each row."""
    return _frozen(np.asarray(shape).T[:, ::-1])


class PieceSource(Protocol):
    def next_kind(self) -> TetrominoType: ...


class UniformPieceSource:
    """Uniform choice among the seven kinds. No bag, repeats allowed."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def next_kind(self) -> TetrominoType:
        return self.rng.choice(list(TetrominoType))


class SequencePieceSource:
    """Deterministic source that deals kinds in the given order."""

    def __init__(self, kinds: Iterable[TetrominoType], repeat: bool = True) -> None:
        items: List[TetrominoType] = [TetrominoType(k) for k in kinds]
        if not items:
            raise ValueError("SequencePieceSource needs at least one kind")
        self._it: Iterator[TetrominoType] = cycle(items) if repeat else iter(items)

    def next_kind(self) -> TetrominoType:
        try:
            return next(self._it)
        except StopIteration:
            raise ValueError("piece sequence exhausted") from None


@dataclass(frozen=True, eq=False)
class ActivePiece:
    kind: TetrominoType
    shape: Shape
    x: int = SPAWN_POSITION[0]
    y: int = SPAWN_POSITION[1]

    @classmethod
    def spawn(cls, kind: TetrominoType, position: Tuple[int, int] = SPAWN_POSITION) -> "ActivePiece":
        return cls(kind=TetrominoType(kind), shape=base_shape(kind), x=position[0], y=position[1])

    @property
    def color(self) -> str:
        return COLORS[self.kind]

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> "ActivePiece":
        return replace(self, shape=rotate_shape(self.shape))

    def cells(self) -> List[Tuple[int, int]]:
        h, w = self.shape.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if self.shape[dy, dx]:
                    cells.append((self.x + dx, self.y + dy))
        return cells


def random_piece(source: Optional[PieceSource] = None,
                 position: Tuple[int, int] = SPAWN_POSITION) -> ActivePiece:
    source = source or UniformPieceSource()
    return ActivePiece.spawn(source.next_kind(), position)


def kinds_from_names(names: Sequence[str]) -> List[TetrominoType]:
    return [TetrominoType[n.strip().upper()] for n in names]
