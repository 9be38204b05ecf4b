from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Optional, Sequence

import numpy as np


class Position(NamedTuple):
    row: int
    col: int


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    filled: bool = False
    color: Optional[str] = None


class GameGrid:
    """Square board of cells, copy-on-write.

    Filled state lives in a boolean array and cell appearance in a parallel
    object array. Operations that change cells return a new grid and leave
    the receiver untouched; a cleared cell always has ``color`` reset too.
    """

    def __init__(self, size: int = 10) -> None:
        self.size = int(size)
        self._filled = np.zeros((self.size, self.size), dtype=np.bool_)
        self._colors = np.full((self.size, self.size), None, dtype=object)

    @classmethod
    def from_array(cls, filled: Sequence[Sequence[int]] | np.ndarray, color: Optional[str] = None) -> "GameGrid":
        """Build a grid from a square 0/1 matrix, stamping ``color`` on filled cells."""
        array = np.asarray(filled, dtype=np.bool_)
        if array.ndim != 2 or array.shape[0] != array.shape[1]:
            raise ValueError(f"Grid must be square, got shape {array.shape}")
        grid = cls(array.shape[0])
        grid._filled = array.copy()
        grid._colors[array] = color
        return grid

    def copy(self) -> "GameGrid":
        new_grid = GameGrid.__new__(GameGrid)
        new_grid.size = self.size
        new_grid._filled = self._filled.copy()
        new_grid._colors = self._colors.copy()
        return new_grid

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def _check_inside(self, row: int, col: int) -> None:
        if not self.is_inside(row, col):
            raise ValueError(f"Cell ({row}, {col}) is outside the {self.size}x{self.size} grid")

    def is_filled(self, row: int, col: int) -> bool:
        self._check_inside(row, col)
        return bool(self._filled[row, col])

    def cell(self, row: int, col: int) -> Cell:
        return Cell(row=row, col=col, filled=bool(self._filled[row, col]), color=self._colors[row, col])

    def rows(self) -> List[List[Cell]]:
        return [[self.cell(r, c) for c in range(self.size)] for r in range(self.size)]

    def fill_cells(self, cells: Iterable[Position], colors: Optional[Sequence[Optional[str]]] = None) -> "GameGrid":
        """Return a grid with ``cells`` filled; ``colors`` pairs with ``cells`` by position."""
        cells = list(cells)
        if colors is not None and len(colors) != len(cells):
            raise ValueError(f"Expected {len(cells)} colors, got {len(colors)}")
        new_grid = self.copy()
        for i, (row, col) in enumerate(cells):
            self._check_inside(row, col)
            new_grid._filled[row, col] = True
            new_grid._colors[row, col] = colors[i] if colors is not None else None
        return new_grid

    def clear_cells(self, cells: Iterable[Position]) -> "GameGrid":
        cells = list(cells)
        for row, col in cells:
            self._check_inside(row, col)
        new_grid = self.copy()
        for row, col in cells:
            new_grid._filled[row, col] = False
            new_grid._colors[row, col] = None
        return new_grid

    def filled_rows(self) -> List[int]:
        return [int(r) for r in np.flatnonzero(np.all(self._filled, axis=1))]

    def filled_columns(self) -> List[int]:
        return [int(c) for c in np.flatnonzero(np.all(self._filled, axis=0))]

    def clear_lines(self, rows: Iterable[int], columns: Iterable[int]) -> "GameGrid":
        """Return a grid with every cell of the listed rows and columns emptied."""
        new_grid = self.copy()
        rows = list(rows)
        columns = list(columns)
        if rows:
            new_grid._filled[rows, :] = False
            new_grid._colors[rows, :] = None
        if columns:
            new_grid._filled[:, columns] = False
            new_grid._colors[:, columns] = None
        return new_grid

    def filled_count(self) -> int:
        return int(self._filled.sum())

    def get_filled_ratio(self) -> float:
        return float(self._filled.sum()) / float(self.size * self.size)

    def to_array(self) -> np.ndarray:
        return self._filled.astype(np.int8)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameGrid):
            return NotImplemented
        return (
            self.size == other.size
            and np.array_equal(self._filled, other._filled)
            and bool(np.all(self._colors == other._colors))
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = "\n".join("".join("█" if cell else "·" for cell in row) for row in self._filled)
        return f"GameGrid(size={self.size})\n{body}"
