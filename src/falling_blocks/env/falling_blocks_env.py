from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import (
    Command,
    FallingBlocksGame,
    GameConfig,
    ManualClock,
    ScoringRules,
    TetrominoType,
    UniformPieceSource,
)
from falling_blocks.visualization.palette import rgb_for_value


class FallingBlocksEnv(gym.Env):
    """
    Falling-block board with a small discrete action space.

    Actions (5 total):
      0: Move Left
      1: Move Right
      2: Rotate CW
      3: Soft Drop
      4: No-op

    Each step applies the command, then advances the gravity clock by
    `ms_per_step` of simulated time. The observation is the board with the
    falling piece overlaid as negative kind values.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    ACTIONS = (Command.LEFT, Command.RIGHT, Command.ROTATE, Command.DOWN, None)

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        ms_per_step: int = 250,
        terminal_penalty: float = 0.0,
        max_episode_steps: int = 10000,
    ) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.rules = ScoringRules()
        self.clock = ManualClock()
        self.piece_source = UniformPieceSource(self.config.random_seed)
        self.game = self._new_game()
        self.render_mode = render_mode
        self.ms_per_step = int(ms_per_step)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)

        n = len(TetrominoType)
        self.observation_space = spaces.Box(
            low=-n, high=n, shape=(self.config.height, self.config.width), dtype=np.int8
        )
        self.action_space = spaces.Discrete(len(self.ACTIONS))
        self._steps = 0

    def _new_game(self) -> FallingBlocksGame:
        return FallingBlocksGame(self.config, rules=self.rules, piece_source=self.piece_source, clock=self.clock)

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        grid = self.game.grid
        return {
            "score": self.game.score,
            "lines_cleared_total": self.game.state.lines_cleared_total,
            "max_height": grid.get_max_height(),
            "holes": grid.count_holes(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.piece_source = UniformPieceSource(seed)
        # A fresh engine each episode; start() only leaves idle or game over
        self.clock.stop()
        self.game = self._new_game()
        self.game.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        command = self.ACTIONS[int(action)]
        score_before = self.game.score

        if command is not None:
            self.game.on_command(command)
        if not self.game.game_over:
            self.clock.advance(self.ms_per_step)

        self._steps += 1
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps
        reward = float(self.game.score - score_before) / float(self.rules.points_per_line)
        if terminated:
            reward += self.terminal_penalty

        info = self._get_info()
        info["engine_score_delta"] = self.game.score - score_before
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.game.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = rgb_for_value(int(state[y, x]))
        return img

    def close(self) -> None:
        self.clock.stop()
