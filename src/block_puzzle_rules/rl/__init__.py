"""Agents that play the Block Puzzle rules environment."""
