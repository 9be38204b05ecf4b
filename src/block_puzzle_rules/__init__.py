"""Block Puzzle rules engine.

Pieces are dealt three at a time onto a 10x10 board; full rows and columns
clear for score, bomb pieces and bomb items blast a square area, and rainbow
pieces add a five-cell line to the mix.
"""

__version__ = "0.1.0"
