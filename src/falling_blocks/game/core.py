from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, Optional, Tuple, Union

import numpy as np

from .controller import DropResult, GameState, GameStatus, move_left, move_right, rotate, soft_drop
from .grid import Cell, GameGrid
from .pieces import ActivePiece, PieceSource, UniformPieceSource, random_piece
from .rules import ScoringRules
from .services import AudioSink, Cue, GravityClock, ManualClock, NullAudio

logger = logging.getLogger(__name__)


class Command(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    DOWN = "down"
    ROTATE = "rotate"


def parse_command(token: Union[Command, str, None]) -> Optional[Command]:
    if isinstance(token, Command):
        return token
    if not isinstance(token, str):
        return None
    try:
        return Command(token.strip().lower())
    except ValueError:
        return None


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    spawn_x: int = 3
    spawn_y: int = 0
    fall_interval_ms: int = 1000
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"board must be non-empty, got {self.width}x{self.height}")
        if self.fall_interval_ms <= 0:
            raise ValueError(f"fall_interval_ms must be positive, got {self.fall_interval_ms}")


PieceCell = Tuple[int, int, str]


@dataclass(frozen=True)
class Snapshot:
    cells: Tuple[Tuple[Cell, ...], ...]
    active_piece_cells: Tuple[PieceCell, ...]
    score: int
    status: GameStatus
    lines_cleared: int = 0


def project_active_piece(piece: Optional[ActivePiece], height: int) -> Tuple[PieceCell, ...]:
    """Visible cells of the falling piece as (x, y, color); never stored on the board."""
    if piece is None:
        return ()
    return tuple((x, y, piece.color) for x, y in piece.cells() if 0 <= y < height)


class FallingBlocksGame:
    """Owns the game state and turns ticks and commands into state changes.

    Every stimulus runs to completion before the next one is accepted; the
    gravity clock and audio sink are supplied by the host.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        piece_source: Optional[PieceSource] = None,
        clock: Optional[GravityClock] = None,
        audio: Optional[AudioSink] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.piece_source = piece_source or UniformPieceSource(self.config.random_seed)
        self.clock = clock if clock is not None else ManualClock()
        self.audio = audio or NullAudio()
        self.state = GameState(grid=GameGrid(self.config.width, self.config.height))
        self._busy = False

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def grid(self) -> GameGrid:
        return self.state.grid

    @property
    def piece(self) -> Optional[ActivePiece]:
        return self.state.piece

    @property
    def game_over(self) -> bool:
        return self.state.status is GameStatus.GAME_OVER

    @contextmanager
    def _stimulus(self) -> Iterator[None]:
        if self._busy:
            raise RuntimeError("engine re-entered while processing a previous stimulus")
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    def _next_piece(self) -> ActivePiece:
        return random_piece(self.piece_source, (self.config.spawn_x, self.config.spawn_y))

    def _cue(self, cue: Cue) -> None:
        try:
            self.audio.play(cue)
        except Exception:
            logger.warning("audio cue %s failed", cue.value, exc_info=True)

    def start(self) -> None:
        with self._stimulus():
            if self.state.status not in (GameStatus.IDLE, GameStatus.GAME_OVER):
                return
            self.state = GameState(
                grid=GameGrid(self.config.width, self.config.height),
                piece=self._next_piece(),
                status=GameStatus.PLAYING,
            )
            self.clock.start(self.config.fall_interval_ms, self.on_tick)
            logger.debug("game started with %s", self.state.piece.kind.name)

    def toggle_pause(self) -> None:
        with self._stimulus():
            if self.state.status is GameStatus.PLAYING:
                self.clock.stop()
                self.state = replace(self.state, status=GameStatus.PAUSED)
            elif self.state.status is GameStatus.PAUSED:
                self.state = replace(self.state, status=GameStatus.PLAYING)
                self.clock.start(self.config.fall_interval_ms, self.on_tick)

    def on_tick(self) -> None:
        with self._stimulus():
            if self.state.status is GameStatus.PLAYING:
                self._drop()

    def on_command(self, cmd: Union[Command, str]) -> None:
        command = parse_command(cmd)
        if command is None:
            logger.debug("ignoring unknown command %r", cmd)
            return
        with self._stimulus():
            if self.state.status is not GameStatus.PLAYING:
                return
            if command is Command.DOWN:
                self._drop()
                return
            before = self.state
            if command is Command.LEFT:
                self.state = move_left(before)
            elif command is Command.RIGHT:
                self.state = move_right(before)
            else:
                self.state = rotate(before)
            if self.state is not before:
                self._cue(Cue.ROTATE if command is Command.ROTATE else Cue.MOVE)

    def _drop(self) -> DropResult:
        result = soft_drop(self.state, self._next_piece, self.rules)
        self.state = result.state
        if result.topped_out:
            self.clock.stop()
            logger.debug("game over at score %d", self.state.score)
            self._cue(Cue.GAME_OVER)
        elif result.locked:
            if result.lines_cleared:
                logger.debug("cleared %d line(s), score %d", result.lines_cleared, self.state.score)
                self._cue(Cue.CLEAR)
            self._cue(Cue.DROP)
        return result

    def snapshot(self) -> Snapshot:
        state = self.state
        return Snapshot(
            cells=state.grid.rows(),
            active_piece_cells=project_active_piece(state.piece, state.grid.height),
            score=state.score,
            status=state.status,
            lines_cleared=state.lines_cleared_total,
        )

    def get_state(self) -> np.ndarray:
        """Board as an array with the falling piece overlaid as negative kind values."""
        state = self.state.grid.clone_state()
        piece = self.state.piece
        if piece is not None:
            for x, y in piece.cells():
                if self.state.grid.is_inside(x, y):
                    state[y, x] = -int(piece.kind)
        return state
