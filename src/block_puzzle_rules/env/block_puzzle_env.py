from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_puzzle_rules.game import BlockPuzzleGame, GameConfig, PieceType
from block_puzzle_rules.game.exceptions import InvalidMoveError
from block_puzzle_rules.game.placement import valid_origins


logger = logging.getLogger(__name__)


def _compute_action_mask(game: BlockPuzzleGame) -> np.ndarray:
    size = game.config.board_size
    k = game.config.max_pieces_per_turn
    mask = np.zeros((k, size, size), dtype=np.bool_)
    for piece_idx, piece in enumerate(game.pieces[:k]):
        if piece.is_placed:
            continue
        for row, col in valid_origins(piece, game.grid):
            mask[piece_idx, row, col] = True
    return mask


class BlockPuzzleRulesEnv(gym.Env):
    """Place-anywhere environment: one action is (piece_idx, row, col).

    Piece codes in the observation are catalog indices; rainbow and bomb
    pieces use the two codes after the catalog, and -1 marks a placed slot.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 invalid_action_penalty: float = -0.1,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.game = BlockPuzzleGame(config)
        self.render_mode = render_mode

        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            "score": 0.001,  # per engine point
            "lines": 1.0,    # per line cleared
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        size = self.game.config.board_size
        k = self.game.config.max_pieces_per_turn
        catalog = self.game.engine.catalog
        self._catalog_index = {entry.id: i for i, entry in enumerate(catalog)}
        self._rainbow_code = len(catalog)
        self._bomb_code = len(catalog) + 1

        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "pieces": spaces.Box(low=-1, high=self._bomb_code, shape=(k,), dtype=np.int16),
                "pieces_remaining": spaces.Discrete(k + 1),
                "bombs": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(1,), dtype=np.int32),
            }
        )
        self.action_space = spaces.MultiDiscrete((k, size, size))

        self._last_obs: Optional[Dict[str, Any]] = None
        # Counts every step, rejected actions included
        self._steps = 0

    def _piece_code(self, idx: int) -> int:
        piece = self.game.pieces[idx]
        if piece.is_placed:
            return -1
        if piece.type == PieceType.RAINBOW:
            return self._rainbow_code
        if piece.type == PieceType.BOMB:
            return self._bomb_code
        return self._catalog_index[piece.id]

    def _get_obs(self) -> Dict[str, Any]:
        k = self.game.config.max_pieces_per_turn
        pieces = np.full((k,), -1, dtype=np.int16)
        for i in range(min(k, len(self.game.pieces))):
            pieces[i] = self._piece_code(i)
        return {
            "grid": self.game.grid.to_array(),
            "pieces": pieces,
            "pieces_remaining": len(self.game.active_pieces()),
            "bombs": np.array([self.game.bombs_available()], dtype=np.int32),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.score,
            "steps": self.game.step_count,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: np.ndarray | Tuple[int, int, int]):
        piece_idx, row, col = map(int, action)
        self._steps += 1

        reward_components: Dict[str, float] = {}
        try:
            result = self.game.place_piece(piece_idx, row, col)
        except InvalidMoveError as exc:
            logger.debug("Invalid action %s: %s", (piece_idx, row, col), exc)
            result = None

        if result is not None and result.placed:
            lines = len(result.rows_cleared) + len(result.columns_cleared)
            reward_components["score"] = self.reward_weights["score"] * float(result.score_gained)
            reward_components["lines"] = self.reward_weights["lines"] * float(lines)
        else:
            reward_components["invalid"] = self.invalid_action_penalty

        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.game.config.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = float(result.score_gained if result is not None else 0)
        self._last_obs = obs
        return obs, float(sum(reward_components.values())), terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self._last_obs["grid"] if self._last_obs is not None else self.game.grid.to_array()
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                color = (70, 200, 120) if grid[y, x] else (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
