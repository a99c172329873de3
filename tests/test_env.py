import unittest

import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401
from falling_blocks.env.falling_blocks_env import FallingBlocksEnv
from falling_blocks.game import GameStatus


NOOP = 4
LEFT = 0


class FallingBlocksEnvTests(unittest.TestCase):
    def test_reset_observation(self):
        env = FallingBlocksEnv()
        obs, info = env.reset(seed=3)
        self.assertEqual(obs.shape, (20, 10))
        self.assertEqual(obs.dtype, np.int8)
        self.assertTrue(env.observation_space.contains(obs))
        self.assertEqual(info["score"], 0)
        self.assertTrue((obs < 0).any())
        self.assertEqual(env.game.status, GameStatus.PLAYING)

    def test_gravity_follows_simulated_time(self):
        env = FallingBlocksEnv(ms_per_step=250)
        env.reset(seed=0)
        y0 = env.game.piece.y
        for _ in range(4):
            env.step(NOOP)
        self.assertEqual(env.game.piece.y, y0 + 1)

    def test_commands_move_piece(self):
        env = FallingBlocksEnv()
        env.reset(seed=0)
        x0 = env.game.piece.x
        env.step(LEFT)
        self.assertEqual(env.game.piece.x, x0 - 1)

    def test_noop_play_terminates(self):
        env = FallingBlocksEnv(ms_per_step=1000)
        env.reset(seed=5)
        terminated = False
        total = 0.0
        for _ in range(5000):
            _, reward, terminated, truncated, info = env.step(NOOP)
            total += reward
            if terminated or truncated:
                break
        self.assertTrue(terminated)
        # Pieces stacked at the spawn column never complete a row
        self.assertEqual(total, 0.0)
        self.assertEqual(info["engine_score_delta"], 0)

    def test_reset_mid_episode_starts_fresh(self):
        env = FallingBlocksEnv(ms_per_step=1000)
        env.reset(seed=4)
        for _ in range(5):
            env.step(NOOP)
        first_game = env.game
        obs, info = env.reset()
        self.assertIsNot(env.game, first_game)
        self.assertEqual(env.game.status, GameStatus.PLAYING)
        self.assertEqual(env.game.piece.y, 0)
        self.assertEqual(info["steps"], 0)
        self.assertTrue(env.clock.running)

    def test_render_rgb_array(self):
        env = FallingBlocksEnv(render_mode="rgb_array")
        env.reset(seed=1)
        img = env.render()
        self.assertEqual(img.shape, (240, 120, 3))
        self.assertEqual(img.dtype, np.uint8)

    def test_registered(self):
        env = gym.make("FallingBlocks-10x20-v0")
        obs, _ = env.reset(seed=2)
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        self.assertIn("lines_cleared_total", info)
        env.close()


if __name__ == "__main__":
    unittest.main()
