from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from pente.core import (
    BOARD_SIZE,
    CENTER_INDEX,
    TOTAL_INTERSECTIONS,
    Board,
    Stone,
    format_position,
    index_to_cell,
)
from pente.orchestration import RoundConfig, opening_bounds

BOARD_CHANNELS = 3

_ROWS, _COLS = np.indices((BOARD_SIZE, BOARD_SIZE))
_DISTANCE = np.maximum(np.abs(_ROWS - CENTER_INDEX), np.abs(_COLS - CENTER_INDEX)).ravel()


class PenteEnv(gym.Env):
    """Two-player Pente with White moving first; observations are relative to the side to move."""

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        capture_goal: int = RoundConfig.capture_goal,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._capture_goal = capture_goal
        self.render_mode = render_mode

        board_shape = (BOARD_CHANNELS, BOARD_SIZE, BOARD_SIZE)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0.0, high=1.0, shape=board_shape, dtype=np.float32),
                "captures": spaces.Box(low=0.0, high=np.inf, shape=(2,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(TOTAL_INTERSECTIONS)

        self._reset_state()

    @property
    def board(self) -> Board:
        return self._board

    @property
    def current_color(self) -> Stone:
        return self._to_move

    @property
    def ply(self) -> int:
        return self._ply

    @property
    def winner(self) -> Optional[Stone]:
        return self._winner

    @property
    def captures(self) -> Dict[Stone, int]:
        return dict(self._captures)

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        self._reset_state()
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")
        if self._done:
            raise ValueError("The game is over, call reset() first.")
        if not self.legal_action_mask()[action_index]:
            raise ValueError("Illegal action provided.")

        mover = self._to_move
        row, col = index_to_cell(int(action_index))
        status = self._board.place_stone(mover, format_position(row, col))
        if not status.ok:
            raise ValueError(status.message)
        self._captures[mover] += self._board.captured_pairs

        reward = 0.0
        if self._board.has_winner or self._captures[mover] >= self._capture_goal:
            self._winner = mover
            reward = 1.0
        self._done = self._winner is not None or self._board.is_game_over

        if not self._done:
            self._ply += 1
            self._board.set_bounds(*opening_bounds(self._ply))
            self._to_move = mover.opponent()

        return self._build_observation(), reward, self._done, False, self._build_info()

    def legal_action_mask(self) -> np.ndarray:
        if self._done:
            return np.zeros(self.action_space.n, dtype=np.int8)
        inner, outer = self._board.inner_bound, self._board.outer_bound
        empty = self._board.grid.ravel() == Stone.EMPTY
        allowed = (_DISTANCE >= inner) & (_DISTANCE <= outer)
        return (empty & allowed).astype(np.int8)

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return self._board.render()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _reset_state(self) -> None:
        self._board = Board()
        self._ply = 0
        self._board.set_bounds(*opening_bounds(self._ply))
        self._to_move = Stone.WHITE
        self._captures = {Stone.WHITE: 0, Stone.BLACK: 0}
        self._winner: Optional[Stone] = None
        self._done = False

    def _build_observation(self) -> Dict[str, np.ndarray]:
        grid = self._board.grid
        mover = self._to_move
        board = np.stack(
            [
                grid == mover,
                grid == mover.opponent(),
                grid == Stone.EMPTY,
            ]
        ).astype(np.float32)
        captures = np.array(
            [self._captures[mover], self._captures[mover.opponent()]],
            dtype=np.float32,
        )
        return {"board": board, "captures": captures}

    def _build_info(self) -> Dict[str, object]:
        return {"legal_action_mask": self.legal_action_mask(), "ply": self._ply}
