"""Gymnasium environments for the falling-block rules engine."""

from __future__ import annotations

from gymnasium.envs.registration import register

from falling_blocks.game import GameConfig

# Flat 10x20 board with hold and wall kicks
register(
    id="FallingBlocks-10x20-v0",
    entry_point="falling_blocks.env.falling_blocks_env:FallingBlocksEnv",
    kwargs={"config": GameConfig.canvas()},
)

# Volumetric 10x20x10 board
register(
    id="FallingBlocksVolumetric-10x20x10-v0",
    entry_point="falling_blocks.env.falling_blocks_env:FallingBlocksEnv",
    kwargs={"config": GameConfig.volumetric()},
)

__all__ = ["FallingBlocks-10x20-v0", "FallingBlocksVolumetric-10x20x10-v0"]
