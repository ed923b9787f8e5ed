from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_rl.game import Action, GameConfig, ScoringRules, TetrisGame
from tetris_rl.game.grid import bumpiness, count_holes, get_max_height


_PALETTE = {
    0: (30, 30, 36),
    1: (0, 240, 240),  # I
    2: (0, 0, 240),    # J
    3: (240, 160, 0),  # L
    4: (240, 240, 0),  # O
    5: (0, 240, 0),    # S
    6: (160, 0, 240),  # T
    7: (240, 0, 0),    # Z
}


def _compute_action_mask(game: TetrisGame) -> np.ndarray:
    mask = np.ones((len(Action),), dtype=np.bool_)
    if game.game_over:
        mask[:] = False
        return mask
    mask[Action.HOLD] = game.hold_slot.can_hold
    return mask


class TetrisEnv(gym.Env):
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 rules: Optional[ScoringRules] = None,
                 reward_scale: float = 1.0,
                 terminal_penalty: float = 0.0,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = TetrisGame(config, rules)
        self.render_mode = render_mode
        self.reward_scale = float(reward_scale)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)

        cfg = self.game.config
        rows, cols = cfg.visible_height, cfg.width
        depth = cfg.preview_depth

        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=7, shape=(rows, cols), dtype=np.int8),
                "active": spaces.Box(low=0, high=1, shape=(rows, cols), dtype=np.int8),
                "next_pieces": spaces.Box(low=1, high=7, shape=(depth,), dtype=np.int8),
                "hold": spaces.Discrete(8),
                "can_hold": spaces.Discrete(2),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

    def _get_obs(self) -> Dict[str, Any]:
        board = self.game.board
        hidden = self.game.config.hidden_rows
        grid = board.visible_matrix().astype(np.int8)
        active = np.zeros_like(grid)
        if not self.game.game_over:
            for x, y in board.active.cells():
                if y >= hidden:
                    active[y - hidden, x] = 1
        next_pieces = np.array([int(t) for t in board.supply.upcoming()], dtype=np.int8)
        held = self.game.hold_slot.piece
        return {
            "grid": grid,
            "active": active,
            "next_pieces": next_pieces,
            "hold": int(held) if held is not None else 0,
            "can_hold": int(self.game.hold_slot.can_hold),
        }

    def _get_info(self) -> Dict[str, Any]:
        grid = self.game.board.get_board_matrix()
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.score,
            "level": self.game.level,
            "lines": self.game.total_lines,
            "steps": self.game.step_count,
            "holes": count_holes(grid),
            "bumpiness": bumpiness(grid),
            "max_height": get_max_height(grid),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.board.reseed(seed)
        self.game.reset()
        return self._get_obs(), self._get_info()

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def step(self, action: int):
        _, gained, done, step_info = self.game.step(Action(int(action)))

        reward = self.reward_scale * float(gained)
        terminated = bool(done)
        truncated = self.game.step_count >= self.max_episode_steps and not terminated
        if terminated:
            reward += self.terminal_penalty

        obs = self._get_obs()
        info = self._get_info()
        info["lines_cleared"] = step_info.get("lines_cleared", 0)
        info["engine_score_delta"] = int(gained)
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            hidden = self.game.config.hidden_rows
            state = self.game.get_state()[hidden:]
            cell = 12
            h, w = state.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = _PALETTE.get(abs(int(state[y, x])), (200, 200, 200))
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        # human rendering lives in tetris_rl.visualization
        return None

    def close(self) -> None:
        pass
