from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# Appearance identifiers stamped on filled cells
SOLID_RED = "solid-red"
SOLID_BLUE = "solid-blue"
SOLID_GREEN = "solid-green"
SOLID_YELLOW = "solid-yellow"
SOLID_PURPLE = "solid-purple"
SOLID_PINK = "solid-pink"
SOLID_GREY = "solid-grey"

SVG_ID_POOL = (
    SOLID_RED,
    SOLID_BLUE,
    SOLID_GREEN,
    SOLID_YELLOW,
    SOLID_PURPLE,
    SOLID_PINK,
)

RAINBOW_SVG_SEQUENCE = (
    "rainbow-red",
    "rainbow-orange",
    "rainbow-yellow",
    "rainbow-green",
    "rainbow-blue",
)

ITEM_BOMB = "bomb"


@dataclass
class GameConfig:
    """Configuration for the block puzzle rules"""
    board_size: int = 10
    placement_points_per_block: int = 10
    line_clear_base_points: int = 1000
    bomb_size: int = 5
    rainbow_probability: float = 0.05
    red_pieces_for_bomb: int = 3
    max_pieces_per_turn: int = 3
    shuffle_catalog: bool = False
    random_seed: Optional[int] = None
    max_episode_steps: int = 10000
