from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from othello.core import (
    BOARD_SIZE,
    GameState,
    GameStatus,
    IllegalMoveError,
    Side,
    advance_turn,
    initialize_game_state,
)
from othello.features import (
    AUX_VECTOR_SIZE,
    BOARD_CHANNELS,
    build_aux_vector,
    build_board_tensor,
    legal_action_mask,
)


class OthelloEnv(gym.Env):
    """Two-player environment; each step plays for the side to move.

    Actions are flat cell indices ``row * 8 + col``. Forced passes are
    resolved by the turn engine, so ``info["current_side"]`` may repeat.
    Rewards are from BLACK's point of view.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(self, *, render_mode: Optional[str] = None) -> None:
        super().__init__()
        self.render_mode = render_mode

        board_shape = (BOARD_CHANNELS, BOARD_SIZE, BOARD_SIZE)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0.0, high=1.0, shape=board_shape, dtype=np.float32),
                "aux": spaces.Box(low=0.0, high=1.0, shape=(AUX_VECTOR_SIZE,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(BOARD_SIZE * BOARD_SIZE)

        self._state: GameState = initialize_game_state()

    @property
    def state(self) -> GameState:
        return self._state

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        self._state = initialize_game_state()
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")
        if self._state.is_terminal:
            raise RuntimeError("Episode has finished; call reset().")

        row, col = divmod(int(action_index), BOARD_SIZE)
        if self._state.find_legal_move(row, col) is None:
            raise IllegalMoveError(row, col, self._state.current_side, "not a legal move for the side to move")
        self._state = advance_turn(self._state, row, col)

        reward = self._compute_reward(self._state)
        terminated = self._state.is_terminal
        truncated = False
        return self._build_observation(), reward, terminated, truncated, self._build_info()

    def legal_action_mask(self) -> np.ndarray:
        return legal_action_mask(self._state)

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return self._state.board.pretty()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_observation(self) -> Dict[str, np.ndarray]:
        board = build_board_tensor(self._state.board, self._state.current_side)
        aux = build_aux_vector(self._state.current_side)
        return {"board": board, "aux": aux}

    def _build_info(self) -> Dict[str, object]:
        return {
            "legal_action_mask": self.legal_action_mask(),
            "current_side": self._state.current_side,
        }

    def _compute_reward(self, state: GameState) -> float:
        if state.status != GameStatus.WON:
            return 0.0
        return 1.0 if state.winner == Side.BLACK else -1.0
