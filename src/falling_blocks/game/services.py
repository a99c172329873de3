"""Interfaces for the collaborators the engine drives but does not own.

The engine never reads a wall clock or touches an audio device. Hosts plug
in a GravityClock that calls back at a fixed cadence and an AudioSink that
receives fire-and-forget cues.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional, Protocol


class Cue(str, Enum):
    MOVE = "move"
    ROTATE = "rotate"
    CLEAR = "clear"
    DROP = "drop"
    GAME_OVER = "game_over"


class GravityClock(Protocol):
    running: bool

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None: ...

    def stop(self) -> None: ...


class AudioSink(Protocol):
    def play(self, cue: Cue) -> None: ...


class NullAudio:
    def play(self, cue: Cue) -> None:
        pass


class ManualClock:
    """GravityClock driven by the host calling `advance()`.

    Simulated time only; starting again replaces the previous schedule and
    resets the elapsed counter.
    """

    def __init__(self) -> None:
        self.running = False
        self.interval_ms: Optional[int] = None
        self._callback: Optional[Callable[[], None]] = None
        self._elapsed = 0

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.interval_ms = int(interval_ms)
        self._callback = callback
        self._elapsed = 0
        self.running = True

    def stop(self) -> None:
        self.running = False
        self._elapsed = 0

    def advance(self, ms: int) -> int:
        """Advance simulated time and return how many ticks fired."""
        if not self.running:
            return 0
        fired = 0
        self._elapsed += int(ms)
        while self.running and self.interval_ms is not None and self._elapsed >= self.interval_ms:
            self._elapsed -= self.interval_ms
            fired += 1
            self._invoke()
        return fired

    def fire(self) -> bool:
        if not self.running:
            return False
        self._invoke()
        return True

    def _invoke(self) -> None:
        if self._callback is not None:
            self._callback()
