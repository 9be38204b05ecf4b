from __future__ import annotations

import itertools
import random
from typing import Iterator, List, Mapping, Optional, Sequence, Tuple

from .config import GameConfig, RAINBOW_SVG_SEQUENCE, SOLID_GREY, SVG_ID_POOL
from .exceptions import EmptyCollectionError
from .pieces import (
    BASE_SHAPES,
    BOMB_SHAPE,
    RAINBOW_SHAPE,
    CatalogPiece,
    PieceType,
    RuntimePiece,
    build_catalog,
    random_element,
    svg_refs_for_shape,
)
from .rotation import Shape


class RulesEngine:
    """Owns the per-game state behind piece dealing.

    Holds the random generator, the lazily built piece catalog and the
    runtime id counter, so independent games (and tests) never share them.
    The counter is not thread safe; share an engine across threads only
    behind a lock.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        shapes: Optional[Mapping[str, Shape]] = None,
        palette: Sequence[str] = SVG_ID_POOL,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.random_seed)
        self.palette = tuple(palette)
        self._shapes = BASE_SHAPES if shapes is None else dict(shapes)
        self._catalog: Optional[Tuple[CatalogPiece, ...]] = None
        self._ids: Iterator[int] = itertools.count()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)

    @property
    def catalog(self) -> Tuple[CatalogPiece, ...]:
        if self._catalog is None:
            self._catalog = build_catalog(self._shapes)
        return self._catalog

    def get_catalog(self) -> Tuple[CatalogPiece, ...]:
        return self.catalog

    def next_runtime_id(self) -> int:
        return next(self._ids)

    def _mint(self, entry: CatalogPiece) -> RuntimePiece:
        svg_id = random_element(self.rng, self.palette)
        return RuntimePiece(
            id=entry.id,
            shape_name=entry.shape_name,
            shape=Shape(entry.shape.to_list()),
            runtime_id=self.next_runtime_id(),
            svg_refs=svg_refs_for_shape(entry.shape, svg_id),
            type=PieceType.NORMAL,
            rotation=entry.rotation,
            rotation_index=entry.rotation_index,
        )

    def sample_normal_piece(self) -> RuntimePiece:
        return self._mint(random_element(self.rng, self.catalog))

    def sample_normal_pieces(self, n: int, shuffle: Optional[bool] = None) -> List[RuntimePiece]:
        """Deal ``n`` normal pieces.

        By default every slot is an independent uniform draw. In shuffle mode
        the catalog is shuffled once and dealt in order, wrapping around when
        ``n`` exceeds its size.
        """
        if shuffle is None:
            shuffle = self.config.shuffle_catalog
        if not shuffle:
            return [self.sample_normal_piece() for _ in range(n)]
        if n <= 0:
            return []
        deck = list(self.catalog)
        if not deck:
            raise EmptyCollectionError("Cannot deal pieces from an empty catalog")
        self.rng.shuffle(deck)
        return [self._mint(deck[i % len(deck)]) for i in range(n)]

    def create_bomb_piece(self) -> RuntimePiece:
        return RuntimePiece(
            id="BOMB_1X1_0",
            shape_name="BOMB",
            shape=BOMB_SHAPE,
            runtime_id=self.next_runtime_id(),
            svg_refs=(SOLID_GREY,),
            type=PieceType.BOMB,
        )

    def create_rainbow_piece(self) -> RuntimePiece:
        return RuntimePiece(
            id="RAINBOW_5X1_0",
            shape_name="RAINBOW",
            shape=RAINBOW_SHAPE,
            runtime_id=self.next_runtime_id(),
            svg_refs=tuple(RAINBOW_SVG_SEQUENCE),
            type=PieceType.RAINBOW,
        )

    def initialize_turn_pieces(
        self,
        count: Optional[int] = None,
        rainbow_probability: Optional[float] = None,
    ) -> List[RuntimePiece]:
        """Deal a fresh, unplaced set of pieces for a turn."""
        if count is None:
            count = self.config.max_pieces_per_turn
        if rainbow_probability is None:
            rainbow_probability = self.config.rainbow_probability
        pieces: List[RuntimePiece] = []
        for _ in range(count):
            if self.rng.random() < rainbow_probability:
                pieces.append(self.create_rainbow_piece())
            else:
                pieces.append(self.sample_normal_piece())
        return pieces
