from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .grid import GameGrid, Position


@dataclass(frozen=True)
class BombResult:
    destroyed: List[Position]
    grid: GameGrid


def cells_in_square(
    center_row: int,
    center_col: int,
    size: int,
    board_size: int,
    grid: Optional[GameGrid] = None,
    only_filled: bool = False,
) -> List[Position]:
    """On-board cells of the ``size`` x ``size`` square centred on a cell.

    With ``only_filled`` set, cells that are empty in ``grid`` are dropped.
    """
    if size <= 0 or size % 2 == 0:
        raise ValueError(f"Square size must be a positive odd integer, got {size}")
    if only_filled and grid is None:
        raise ValueError("A grid is required when only_filled is set")
    half = size // 2
    cells: List[Position] = []
    for row in range(center_row - half, center_row + half + 1):
        for col in range(center_col - half, center_col + half + 1):
            if row < 0 or row >= board_size or col < 0 or col >= board_size:
                continue
            if only_filled and not grid.is_filled(row, col):
                continue
            cells.append(Position(row, col))
    return cells


def clear_square(grid: GameGrid, center_row: int, center_col: int, size: int) -> GameGrid:
    return grid.clear_cells(cells_in_square(center_row, center_col, size, grid.size))


def apply_bomb_item(
    grid: GameGrid,
    center_row: int,
    center_col: int,
    size: int,
    board_size: Optional[int] = None,
) -> BombResult:
    """Clear the square and report which cells were filled before the blast."""
    if board_size is None:
        board_size = grid.size
    destroyed = cells_in_square(center_row, center_col, size, board_size, grid, only_filled=True)
    cleared = grid.clear_cells(cells_in_square(center_row, center_col, size, board_size))
    return BombResult(destroyed=destroyed, grid=cleared)
