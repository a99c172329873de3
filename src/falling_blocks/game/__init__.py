"""Game module for falling-blocks.

Exports the engine and its building blocks:
- GameGrid / Cell: playfield representation, merge and line clearing
- ActivePiece / TetrominoType: piece catalog, rotation and piece sources
- collides: placement legality check
- move_left / move_right / rotate / soft_drop: pure state transitions
- ScoringRules: linear line-clear scoring
- FallingBlocksGame: state machine driven by ticks and commands
"""

from .grid import Cell, GameGrid, merge_and_clear
from .pieces import (
    COLORS,
    ActivePiece,
    SequencePieceSource,
    TetrominoType,
    UniformPieceSource,
    random_piece,
    rotate_shape,
)
from .collision import collides
from .controller import GameState, GameStatus, move_left, move_right, rotate, soft_drop
from .rules import ScoringRules
from .services import Cue, ManualClock, NullAudio
from .core import Command, FallingBlocksGame, GameConfig, Snapshot, project_active_piece

__all__ = [
    "Cell",
    "GameGrid",
    "merge_and_clear",
    "COLORS",
    "ActivePiece",
    "SequencePieceSource",
    "TetrominoType",
    "UniformPieceSource",
    "random_piece",
    "rotate_shape",
    "collides",
    "GameState",
    "GameStatus",
    "move_left",
    "move_right",
    "rotate",
    "soft_drop",
    "ScoringRules",
    "Cue",
    "ManualClock",
    "NullAudio",
    "Command",
    "FallingBlocksGame",
    "GameConfig",
    "Snapshot",
    "project_active_piece",
]
