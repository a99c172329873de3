from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional

from .collision import piece_collides
from .grid import GameGrid, merge_and_clear
from .pieces import ActivePiece
from .rules import ScoringRules


class GameStatus(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True, eq=False)
class GameState:
    grid: GameGrid
    piece: Optional[ActivePiece] = None
    score: int = 0
    status: GameStatus = GameStatus.IDLE
    lines_cleared_total: int = 0


@dataclass(frozen=True, eq=False)
class DropResult:
    state: GameState
    moved: bool = False
    locked: bool = False
    lines_cleared: int = 0
    topped_out: bool = False


def _shift(state: GameState, dx: int) -> GameState:
    if state.piece is None or piece_collides(state.piece, state.grid, dx=dx):
        return state
    return replace(state, piece=state.piece.moved(dx, 0))


def move_left(state: GameState) -> GameState:
    return _shift(state, -1)


def move_right(state: GameState) -> GameState:
    return _shift(state, 1)


def rotate(state: GameState) -> GameState:
    """Rotate clockwise in place. There is no wall kick: a blocked rotation is rejected."""
    if state.piece is None:
        return state
    candidate = state.piece.rotated()
    if piece_collides(candidate, state.grid):
        return state
    return replace(state, piece=candidate)


def soft_drop(state: GameState, next_piece: Callable[[], ActivePiece],
              rules: Optional[ScoringRules] = None) -> DropResult:
    """Move the piece down one row, or lock it when it cannot descend.

    A piece that is blocked while still at y <= 0 tops out the game and is
    left where it is.
    """
    piece = state.piece
    if piece is None:
        return DropResult(state=state)
    if not piece_collides(piece, state.grid, dy=1):
        return DropResult(state=replace(state, piece=piece.moved(0, 1)), moved=True)

    if piece.y <= 0:
        return DropResult(state=replace(state, status=GameStatus.GAME_OVER), topped_out=True)

    rules = rules or ScoringRules()
    grid, lines = merge_and_clear(state.grid, piece)
    new_state = replace(
        state,
        grid=grid,
        piece=next_piece(),
        score=state.score + rules.score_for_lines(lines),
        lines_cleared_total=state.lines_cleared_total + lines,
    )
    return DropResult(state=new_state, locked=True, lines_cleared=lines)
