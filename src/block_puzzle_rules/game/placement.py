from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .grid import GameGrid, Position
from .pieces import _is_placed
from .rotation import as_shape


@dataclass(frozen=True)
class Placement:
    """Outcome of a placement check.

    Rejected placements carry no cells; callers that need the attempted
    footprint for an invalid preview recompute it with ``affected_cells``.
    """
    valid: bool
    affected_cells: Tuple[Position, ...] = ()

    def __bool__(self) -> bool:
        return self.valid


REJECTED = Placement(valid=False)


def affected_cells(piece: object, origin_row: int, origin_col: int) -> List[Position]:
    """Board cells the piece covers with its top-left corner at the origin.

    Cells come back in row-major order of the piece shape.
    """
    return [
        Position(origin_row + dr, origin_col + dc)
        for dr, dc in as_shape(piece).cells()
    ]


def can_place(
    piece: object,
    origin_row: int,
    origin_col: int,
    grid: GameGrid,
    board_size: Optional[int] = None,
) -> Placement:
    if board_size is None:
        board_size = grid.size
    cells = affected_cells(piece, origin_row, origin_col)
    for row, col in cells:
        if not (0 <= row < board_size and 0 <= col < board_size):
            return REJECTED
    for row, col in cells:
        if grid.is_filled(row, col):
            return REJECTED
    return Placement(valid=True, affected_cells=tuple(cells))


def can_place_anywhere(piece: object, grid: GameGrid, board_size: Optional[int] = None) -> bool:
    """Whether at least one origin on the board accepts the piece."""
    if board_size is None:
        board_size = grid.size
    shape = as_shape(piece)
    for row in range(board_size):
        for col in range(board_size):
            if can_place(shape, row, col, grid, board_size).valid:
                return True
    return False


def valid_origins(piece: object, grid: GameGrid, board_size: Optional[int] = None) -> List[Position]:
    """Every origin at which the piece can be placed, row-major."""
    if board_size is None:
        board_size = grid.size
    shape = as_shape(piece)
    return [
        Position(row, col)
        for row in range(board_size)
        for col in range(board_size)
        if can_place(shape, row, col, grid, board_size).valid
    ]


def is_game_over(pieces: Iterable[object], grid: GameGrid, board_size: Optional[int] = None) -> bool:
    """True when no unplaced piece fits anywhere on the grid."""
    active = [p for p in pieces if not _is_placed(p)]
    return not any(can_place_anywhere(p, grid, board_size) for p in active)
