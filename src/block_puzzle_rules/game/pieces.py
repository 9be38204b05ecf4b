from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, TypeVar

from .exceptions import EmptyCollectionError
from .rotation import Shape


T = TypeVar("T")

ROTATIONS = (0, 90, 180, 270)


class PieceType(str, Enum):
    NORMAL = "normal"
    BOMB = "bomb"
    RAINBOW = "rainbow"


BASE_SHAPES: Dict[str, Shape] = {
    "SQUARE_2X2": Shape([[1, 1], [1, 1]]),
    "L_SHAPE_2X2": Shape([[1, 0], [0, 1]]),
    "SQUARE_3X3": Shape([[1, 1, 1], [1, 1, 1], [1, 1, 1]]),
    "RECT_3X2": Shape([[1, 1], [1, 1], [1, 1]]),
    "LINE_5": Shape([[1, 1, 1, 1, 1]]),
    "LINE_4": Shape([[1, 1, 1, 1]]),
    "LINE_2": Shape([[1, 1]]),
    "SINGLE": Shape([[1]]),
    "Z_LEFT": Shape([[1, 0], [1, 1], [0, 1]]),
    "Z_RIGHT": Shape([[0, 1], [1, 1], [1, 0]]),
    "T_SHAPE": Shape([[0, 1, 0], [1, 1, 1]]),
    "L_LEFT": Shape([[1, 0, 0], [1, 1, 1]]),
    "L_RIGHT": Shape([[0, 0, 1], [1, 1, 1]]),
}

BOMB_SHAPE = Shape([[1]])
RAINBOW_SHAPE = Shape([[1, 1, 1, 1, 1]])


@dataclass(frozen=True)
class CatalogPiece:
    """One rotation of a named base shape."""
    id: str
    shape_name: str
    shape: Shape
    rotation: int = 0
    rotation_index: int = 0


@dataclass(frozen=True)
class RuntimePiece:
    """A dealt piece: a catalog entry with identity and appearance.

    ``svg_refs`` holds one appearance identifier per filled cell, in the
    row-major order of the shape. Placing a piece only flips ``is_placed``.
    """
    id: str
    shape_name: str
    shape: Shape
    runtime_id: int
    svg_refs: Tuple[str, ...]
    type: PieceType = PieceType.NORMAL
    rotation: int = 0
    rotation_index: int = 0
    is_placed: bool = False

    @property
    def color(self) -> Optional[str]:
        return self.svg_refs[0] if self.svg_refs else None

    def placed(self) -> "RuntimePiece":
        return replace(self, is_placed=True)


def generate_rotations(shape_name: str, shape: Shape) -> List[CatalogPiece]:
    """All four clockwise rotations of a base shape."""
    shape = Shape(shape)
    return [
        CatalogPiece(
            id=f"{shape_name}_{degrees}",
            shape_name=shape_name,
            shape=shape.rotated(degrees),
            rotation=degrees,
            rotation_index=index,
        )
        for index, degrees in enumerate(ROTATIONS)
    ]


def build_catalog(shapes: Optional[Mapping[str, Shape]] = None) -> Tuple[CatalogPiece, ...]:
    """Every base shape in every rotation, ordered by shape name then angle."""
    if shapes is None:
        shapes = BASE_SHAPES
    catalog: List[CatalogPiece] = []
    for name, shape in shapes.items():
        catalog.extend(generate_rotations(name, shape))
    catalog.sort(key=lambda piece: (piece.shape_name, piece.rotation))
    return tuple(catalog)


def random_element(rng: random.Random, items: Sequence[T]) -> T:
    if not items:
        raise EmptyCollectionError("Cannot get random element from empty collection")
    return items[rng.randrange(len(items))]


def svg_refs_for_shape(shape: Shape, svg_id: str) -> Tuple[str, ...]:
    return (svg_id,) * shape.cell_count


def _is_placed(piece: object) -> bool:
    if isinstance(piece, Mapping):
        return bool(piece.get("is_placed", False))
    return bool(getattr(piece, "is_placed", False))


def all_placed(pieces: Iterable[object]) -> bool:
    """True when every piece is placed; pieces without the flag count as unplaced."""
    return all(_is_placed(piece) for piece in pieces)
