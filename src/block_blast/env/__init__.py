"""Gymnasium environments for Block Blast."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="BlockBlast-10x10-v0",
    entry_point="block_blast.env.block_blast_env:BlockBlastEnv",
)

register(
    id="BlockBlast-8x8-v0",
    entry_point="block_blast.env.block_blast_env:BlockBlastEnv",
    kwargs={"board_size": 8},
)

__all__ = ["BlockBlast-10x10-v0", "BlockBlast-8x8-v0"]
