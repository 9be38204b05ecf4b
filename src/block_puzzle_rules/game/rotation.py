from __future__ import annotations

from typing import Iterator, List, Mapping, Sequence, Tuple, Union

import numpy as np

from .exceptions import MalformedShapeError


MatrixLike = Union["Shape", np.ndarray, Sequence[Sequence[int]]]


def _validated(rows: MatrixLike) -> np.ndarray:
    """Return a read-only int8 copy of a rectangular 0/1 matrix."""
    if isinstance(rows, Shape):
        return rows.array
    if isinstance(rows, np.ndarray):
        array = rows
    else:
        try:
            rows = [list(row) for row in rows]
        except TypeError as exc:
            raise MalformedShapeError("Shape rows must be sequences") from exc
        if not rows:
            raise MalformedShapeError("Shape must have at least one row")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise MalformedShapeError("Shape rows must all have the same length")
        array = np.array(rows)
    if array.ndim != 2 or array.size == 0:
        raise MalformedShapeError(f"Shape must be a non-empty 2D matrix, got shape {array.shape}")
    if not np.isin(array, (0, 1)).all():
        raise MalformedShapeError("Shape cells must be 0 or 1")
    out = array.astype(np.int8, copy=True)
    out.setflags(write=False)
    return out


def rotate_clockwise_90(matrix: MatrixLike) -> np.ndarray:
    """Rotate a matrix 90 degrees clockwise: transpose, then reverse each row."""
    array = _validated(matrix)
    return array.T[:, ::-1].copy()


def rotate(matrix: MatrixLike, degrees: int) -> np.ndarray:
    """Rotate a matrix clockwise by a multiple of 90 degrees."""
    if degrees % 90 != 0:
        raise MalformedShapeError(f"Rotation must be a multiple of 90 degrees, got {degrees}")
    result = np.array(_validated(matrix))
    for _ in range((degrees % 360) // 90):
        result = rotate_clockwise_90(result)
    return result


class Shape:
    """Immutable rectangular 0/1 matrix describing a piece footprint.

    Input is validated on construction; jagged, empty or non-binary matrices
    raise ``MalformedShapeError``. The backing array is read-only, so rotations
    and other transforms always produce new shapes.
    """

    __slots__ = ("_cells",)

    def __init__(self, rows: MatrixLike) -> None:
        self._cells = _validated(rows)

    @property
    def array(self) -> np.ndarray:
        return self._cells

    @property
    def height(self) -> int:
        return int(self._cells.shape[0])

    @property
    def width(self) -> int:
        return int(self._cells.shape[1])

    @property
    def cell_count(self) -> int:
        return int(self._cells.sum())

    def cells(self) -> List[Tuple[int, int]]:
        """Row-major (row, col) offsets of the filled cells."""
        return [(int(r), int(c)) for r, c in np.argwhere(self._cells)]

    def rotated(self, degrees: int) -> "Shape":
        return Shape(rotate(self._cells, degrees))

    def to_list(self) -> List[List[int]]:
        return self._cells.tolist()

    def __getitem__(self, index):
        return self._cells[index]

    def __iter__(self) -> Iterator[List[int]]:
        return iter(self.to_list())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Shape):
            return np.array_equal(self._cells, other._cells)
        if isinstance(other, (np.ndarray, list, tuple)):
            try:
                return np.array_equal(self._cells, _validated(other))
            except MalformedShapeError:
                return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._cells.shape, self._cells.tobytes()))

    def __repr__(self) -> str:
        return f"Shape({self.to_list()})"


def as_shape(obj: object) -> Shape:
    """The shape of a piece, or the argument itself coerced to a ``Shape``."""
    if isinstance(obj, Shape):
        return obj
    if isinstance(obj, (np.ndarray, list, tuple)):
        return Shape(obj)
    shape = obj["shape"] if isinstance(obj, Mapping) else getattr(obj, "shape")
    return shape if isinstance(shape, Shape) else Shape(shape)
