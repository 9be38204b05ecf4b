from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .bomb import BombResult, apply_bomb_item
from .config import GameConfig, ITEM_BOMB
from .engine import RulesEngine
from .exceptions import InvalidMoveError
from .grid import GameGrid, Position
from .inventory import Inventory, NOT_AVAILABLE, add_item, is_red_piece, item_count, remove_item
from .pieces import PieceType, RuntimePiece, all_placed
from .placement import Placement, can_place, is_game_over
from .rules import ScoringRules


logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    placed: bool
    score_gained: int = 0
    rows_cleared: List[int] = field(default_factory=list)
    columns_cleared: List[int] = field(default_factory=list)
    destroyed: List[Position] = field(default_factory=list)
    bomb_awarded: bool = False
    refilled: bool = False
    game_over: bool = False


class BlockPuzzleGame:
    """Turn loop over the rules engine.

    Deals a set of pieces, commits placements, clears full lines, tracks red
    placements towards bomb items, refills once the whole set is placed and
    ends the game when no remaining piece fits anywhere.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        engine: Optional[RulesEngine] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules.from_config(self.config)
        self.engine = engine or RulesEngine(self.config)

        self.grid = GameGrid(self.config.board_size)
        self.pieces: List[RuntimePiece] = []
        self.inventory: Inventory = {}
        self.score = 0
        self.red_pieces_placed = 0
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self.step_count = 0
        self.game_over = False

        self.generate_new_piece_set()

    def reset(self, seed: Optional[int] = None) -> None:
        self.engine.reset(seed)
        self.grid = GameGrid(self.config.board_size)
        self.inventory = {}
        self.score = 0
        self.red_pieces_placed = 0
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self.step_count = 0
        self.game_over = False
        self.generate_new_piece_set()

    def generate_new_piece_set(self) -> None:
        self.pieces = self.engine.initialize_turn_pieces(self.config.max_pieces_per_turn)
        logger.debug("Dealt pieces %s", [p.id for p in self.pieces])

    def add_bomb_piece(self) -> RuntimePiece:
        """Append a bomb piece to the current set."""
        piece = self.engine.create_bomb_piece()
        self.pieces.append(piece)
        self.game_over = is_game_over(self.pieces, self.grid)
        return piece

    def active_pieces(self) -> List[RuntimePiece]:
        return [p for p in self.pieces if not p.is_placed]

    def bombs_available(self) -> int:
        return item_count(self.inventory, ITEM_BOMB)

    def _piece_at(self, piece_idx: int) -> RuntimePiece:
        if piece_idx < 0 or piece_idx >= len(self.pieces):
            raise InvalidMoveError(f"No piece at index {piece_idx}")
        return self.pieces[piece_idx]

    def preview(self, piece_idx: int, row: int, col: int) -> Placement:
        return can_place(self._piece_at(piece_idx), row, col, self.grid)

    def place_piece(self, piece_idx: int, row: int, col: int) -> TurnResult:
        if self.game_over:
            return TurnResult(placed=False, game_over=True)
        piece = self._piece_at(piece_idx)
        if piece.is_placed:
            raise InvalidMoveError(f"Piece {piece.runtime_id} is already placed")
        placement = can_place(piece, row, col, self.grid)
        if not placement.valid:
            return TurnResult(placed=False)

        self.grid = self.grid.fill_cells(placement.affected_cells, piece.svg_refs)
        self.pieces[piece_idx] = piece.placed()
        result = TurnResult(placed=True, score_gained=self.rules.placement_score(piece))

        if piece.type == PieceType.BOMB:
            blast = apply_bomb_item(self.grid, row, col, self.config.bomb_size)
            result.destroyed = [cell for cell in blast.destroyed if cell != (row, col)]
            result.score_gained += self.rules.bomb_destruction_score(len(result.destroyed))
            self.grid = blast.grid
        else:
            rows = self.grid.filled_rows()
            columns = self.grid.filled_columns()
            if rows or columns:
                self.grid = self.grid.clear_lines(rows, columns)
                result.rows_cleared = rows
                result.columns_cleared = columns
                result.score_gained += self.rules.clear_score(len(rows), len(columns))
                self.total_lines_cleared += len(rows) + len(columns)

        if is_red_piece(piece):
            self.red_pieces_placed += 1
            if self.red_pieces_placed >= self.config.red_pieces_for_bomb:
                self.red_pieces_placed = 0
                self.inventory = add_item(self.inventory, ITEM_BOMB, 1)
                result.bomb_awarded = True
                logger.debug("Bomb awarded, inventory now %s", self.inventory)

        self.score += result.score_gained
        self.total_pieces_placed += 1
        self.step_count += 1

        if all_placed(self.pieces):
            self.generate_new_piece_set()
            result.refilled = True

        self.game_over = is_game_over(self.pieces, self.grid)
        if self.game_over:
            logger.debug("Game over with score %d after %d steps", self.score, self.step_count)
        result.game_over = self.game_over
        return result

    def use_bomb(self, row: int, col: int) -> Optional[BombResult]:
        """Spend one bomb item on the square centred at (row, col).

        Returns ``None`` when no bomb is available or the game is over.
        """
        if self.game_over:
            return None
        if not self.grid.is_inside(row, col):
            raise InvalidMoveError(f"Bomb target ({row}, {col}) is off the board")
        remaining = remove_item(self.inventory, ITEM_BOMB)
        if remaining is NOT_AVAILABLE:
            return None
        self.inventory = remaining
        blast = apply_bomb_item(self.grid, row, col, self.config.bomb_size)
        self.grid = blast.grid
        self.score += self.rules.bomb_destruction_score(len(blast.destroyed))
        self.step_count += 1
        self.game_over = is_game_over(self.pieces, self.grid)
        return blast

    def get_state(self) -> dict:
        return {
            "grid": self.grid.to_array(),
            "current_pieces": [p.id for p in self.pieces],
            "pieces_remaining": len(self.active_pieces()),
            "inventory": dict(self.inventory),
            "score": self.score,
            "total_lines_cleared": self.total_lines_cleared,
            "total_pieces_placed": self.total_pieces_placed,
            "step_count": self.step_count,
            "game_over": self.game_over,
            "filled_ratio": self.grid.get_filled_ratio(),
        }

    def get_game_stats(self) -> dict:
        return {
            "final_score": self.score,
            "pieces_placed": self.total_pieces_placed,
            "lines_cleared": self.total_lines_cleared,
            "steps_taken": self.step_count,
            "final_fill_ratio": self.grid.get_filled_ratio(),
            "avg_score_per_piece": self.score / max(1, self.total_pieces_placed),
        }
