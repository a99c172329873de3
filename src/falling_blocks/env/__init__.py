"""Gymnasium environments for falling-blocks."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Single-player board driven by discrete commands and simulated gravity
register(
    id="FallingBlocks-10x20-v0",
    entry_point="falling_blocks.env.falling_blocks_env:FallingBlocksEnv",
)

__all__ = ["FallingBlocks-10x20-v0"]
