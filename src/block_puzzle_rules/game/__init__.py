"""Game module for Block Puzzle rules.

Exports the rules engine and supporting classes:
- Shape / rotate: Validated piece matrices and clockwise rotation
- RulesEngine: Piece catalog, runtime ids and piece dealing
- GameGrid: Copy-on-write board with line detection and clearing
- can_place / can_place_anywhere: Placement legality and feasibility search
- ScoringRules: Placement, line clear and bomb scoring
- BlockPuzzleGame: Turn loop and game state management
"""

from .bomb import BombResult, apply_bomb_item, cells_in_square, clear_square
from .config import GameConfig, ITEM_BOMB
from .core import BlockPuzzleGame, TurnResult
from .engine import RulesEngine
from .exceptions import EmptyCollectionError, InvalidMoveError, MalformedShapeError, RulesError
from .grid import Cell, GameGrid, Position
from .inventory import NOT_AVAILABLE, add_item, has_item, is_red_piece, remove_item
from .pieces import CatalogPiece, PieceType, RuntimePiece, all_placed, build_catalog
from .placement import Placement, affected_cells, can_place, can_place_anywhere, is_game_over
from .rotation import Shape, rotate, rotate_clockwise_90
from .rules import ScoringRules

__all__ = [
    "BombResult",
    "apply_bomb_item",
    "cells_in_square",
    "clear_square",
    "GameConfig",
    "ITEM_BOMB",
    "BlockPuzzleGame",
    "TurnResult",
    "RulesEngine",
    "EmptyCollectionError",
    "InvalidMoveError",
    "MalformedShapeError",
    "RulesError",
    "Cell",
    "GameGrid",
    "Position",
    "NOT_AVAILABLE",
    "add_item",
    "has_item",
    "is_red_piece",
    "remove_item",
    "CatalogPiece",
    "PieceType",
    "RuntimePiece",
    "all_placed",
    "build_catalog",
    "Placement",
    "affected_cells",
    "can_place",
    "can_place_anywhere",
    "is_game_over",
    "Shape",
    "rotate",
    "rotate_clockwise_90",
    "ScoringRules",
]
