"""Gymnasium environments for Block Puzzle rules."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="BlockPuzzleRules-10x10-v0",
    entry_point="block_puzzle_rules.env.block_puzzle_env:BlockPuzzleRulesEnv",
)

__all__ = ["BlockPuzzleRules-10x10-v0"]
