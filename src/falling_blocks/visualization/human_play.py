from __future__ import annotations

import argparse
from typing import Callable, Dict, List, Optional

import pygame

from falling_blocks.game import (
    Command,
    FallingBlocksGame,
    GameConfig,
    GameStatus,
    SequencePieceSource,
    UniformPieceSource,
)
from falling_blocks.game.pieces import kinds_from_names
from .audio import PygameAudio
from .renderer import Renderer


GRAVITY_EVENT = pygame.USEREVENT + 1

KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.LEFT,
    pygame.K_RIGHT: Command.RIGHT,
    pygame.K_DOWN: Command.DOWN,
    pygame.K_UP: Command.ROTATE,
}


class PygameClock:
    """GravityClock backed by a pygame timer event.

    The host loop must pass each GRAVITY_EVENT to `dispatch()`, which keeps
    ticks on the same thread as keyboard input.
    """

    def __init__(self, event_type: int = GRAVITY_EVENT) -> None:
        self.event_type = event_type
        self.running = False
        self._callback: Optional[Callable[[], None]] = None

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self._callback = callback
        self.running = True
        pygame.time.set_timer(self.event_type, int(interval_ms))

    def stop(self) -> None:
        self.running = False
        pygame.time.set_timer(self.event_type, 0)
        # Drop ticks queued before the timer was torn down
        pygame.event.clear(self.event_type)

    def dispatch(self) -> None:
        if self.running and self._callback is not None:
            self._callback()


def new_game(game: FallingBlocksGame, make_game: Callable[[], FallingBlocksGame]) -> FallingBlocksGame:
    """Begin a new game from the "new game" key.

    The engine only starts from idle or game over, so a game still in
    progress is abandoned and replaced by a fresh engine.
    """
    if game.status in (GameStatus.PLAYING, GameStatus.PAUSED):
        game.clock.stop()
        game = make_game()
    game.start()
    return game


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play falling-blocks with the keyboard.")
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--interval-ms", type=int, default=1000, help="Gravity interval in milliseconds")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--sequence", type=str, default=None,
                   help="Deal pieces from a fixed cycle, e.g. IOTSZJL")
    p.add_argument("--mute", action="store_true")
    return p


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    config = GameConfig(fall_interval_ms=args.interval_ms, random_seed=args.seed)
    if args.sequence:
        source = SequencePieceSource(kinds_from_names(list(args.sequence)))
    else:
        source = UniformPieceSource(args.seed)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        gravity = PygameClock()
        audio = PygameAudio(muted=args.mute)

        def make_game() -> FallingBlocksGame:
            return FallingBlocksGame(config, piece_source=source, clock=gravity, audio=audio)

        game = make_game()
        renderer = Renderer(cell_size=args.cell_size)

        screen = pygame.display.set_mode(renderer.window_size(config.width, config.height))
        pygame.display.set_caption("Falling Blocks")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == GRAVITY_EVENT:
                    gravity.dispatch()
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in (pygame.K_RETURN, pygame.K_n):
                        game = new_game(game, make_game)
                    elif event.key == pygame.K_p:
                        game.toggle_pause()
                    elif event.key == pygame.K_m:
                        audio.toggle_mute()
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            game.on_command(command)

            audio.set_theme(game.status is GameStatus.PLAYING)
            renderer.draw(screen, game.snapshot())
            clock.tick(60)

        audio.set_theme(False)
        print(f"Final score: {game.score}  lines: {game.state.lines_cleared_total}")
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
