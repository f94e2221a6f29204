from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from fry_stack.game import CellType, Command, GameConfig, GameScheduler, GameSession, GameState
from fry_stack.game.controller import can_move, find_rotation
from fry_stack.visualization.palette import THEMES, color_for_value


# Action index -> engine command; the last index lets time pass without input
ACTIONS: Tuple[Optional[Command], ...] = (
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.ROTATE,
    Command.SOFT_DROP,
    Command.HARD_DROP,
    None,
)
NOOP = len(ACTIONS) - 1


class FryStackEnv(gym.Env):
    """One engine command per step, followed by `step_ms` of game time.

    Observation:
      board   locked board cells (CellType values)
      active  1 where the falling piece is, else 0
      next    CellType kind of the buffered next piece
    Reward is the score gained during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        step_ms: int = 100,
        max_episode_steps: int = 10000,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.step_ms = int(step_ms)
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)

        h, w = self.config.height, self.config.width
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=int(max(CellType)), shape=(h, w), dtype=np.int8),
                "active": spaces.Box(low=0, high=1, shape=(h, w), dtype=np.int8),
                "next": spaces.Discrete(len(CellType)),
            }
        )
        self.action_space = spaces.Discrete(len(ACTIONS))

        self.session = GameSession(self.config)
        self.scheduler = GameScheduler(self.session)
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        session = self.session
        active = np.zeros((session.grid.height, session.grid.width), dtype=np.int8)
        piece = session.active
        if piece is not None:
            for r, c in piece.cells():
                if session.grid.is_inside(r, c):
                    active[r, c] = 1
        next_kind = int(session.next_piece.kind) if session.next_piece is not None else 0
        return {
            "board": session.grid.clone_state(),
            "active": active,
            "next": next_kind,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": self.get_action_mask(),
            "score": self.session.score,
            "level": self.session.level,
            "lines_cleared_total": self.session.lines_cleared_total,
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        mask = np.ones((len(ACTIONS),), dtype=np.bool_)
        session = self.session
        piece = session.active
        if session.state is not GameState.PLAYING or piece is None:
            mask[:] = False
            mask[NOOP] = True
            return mask
        mask[0] = can_move(session.grid, piece, 0, -1)
        mask[1] = can_move(session.grid, piece, 0, 1)
        mask[2] = find_rotation(session.grid, piece) is not None
        return mask

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        # Piece draws follow the env seed
        rng = random.Random(int(self.np_random.integers(0, 2**31 - 1)))
        self.session = GameSession(self.config, rng=rng)
        self.scheduler = GameScheduler(self.session)
        self.session.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        score_before = self.session.score
        command = ACTIONS[int(action)]
        if command is not None:
            self.session.on_input(command)
        self.scheduler.advance(self.step_ms)
        self.session.pop_events()
        self._steps += 1

        terminated = self.session.state is GameState.GAME_OVER
        truncated = self._steps >= self.max_episode_steps
        reward = float(self.session.score - score_before)
        if terminated:
            reward += self.terminal_penalty
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        board = self.session.render_board()
        theme = THEMES["dark"]
        cell = 12
        h, w = board.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(board[y, x]), theme)
        return img

    def close(self) -> None:
        pass
