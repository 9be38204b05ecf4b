from __future__ import annotations

import math
from dataclasses import dataclass

from .config import GameConfig
from .rotation import as_shape


@dataclass
class ScoringRules:
    line_clear_base_points: int = 1000
    placement_points_per_block: int = 10
    # Multipliers for 1, 2, 3 and 4+ lines cleared in a single direction
    line_multipliers: tuple[float, float, float, float] = (1.0, 1.5, 2.0, 4.0)
    # Rows and columns cleared together; takes precedence over the line count
    cross_clear_multiplier: float = 2.0

    @classmethod
    def from_config(cls, config: GameConfig) -> "ScoringRules":
        return cls(
            line_clear_base_points=config.line_clear_base_points,
            placement_points_per_block=config.placement_points_per_block,
        )

    def multiplier_for(self, row_count: int, column_count: int) -> float:
        total = row_count + column_count
        if total <= 0:
            return 0.0
        if row_count > 0 and column_count > 0:
            return self.cross_clear_multiplier
        return self.line_multipliers[min(total, len(self.line_multipliers)) - 1]

    def clear_score(self, row_count: int, column_count: int) -> int:
        total = row_count + column_count
        if total <= 0:
            return 0
        return math.floor(self.line_clear_base_points * total * self.multiplier_for(row_count, column_count))

    def placement_score(self, piece: object) -> int:
        return as_shape(piece).cell_count * self.placement_points_per_block

    def bomb_destruction_score(self, destroyed_cell_count: int) -> int:
        return destroyed_cell_count * self.placement_points_per_block
