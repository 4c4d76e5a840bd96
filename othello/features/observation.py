from __future__ import annotations

from typing import Tuple

import numpy as np

from othello.core import GameState, Side, enumerate_legal_moves
from othello.core.state import Board

BOARD_CHANNELS = 3  # black discs, white discs, legal moves for the side to move
AUX_VECTOR_SIZE = 2  # side-to-move one-hot


def build_board_tensor(board: Board, side: Side) -> np.ndarray:
    """Return a channel-first float32 tensor of shape (3, size, size)."""
    grid = board.to_numpy()
    tensor = np.zeros((BOARD_CHANNELS, board.size, board.size), dtype=np.float32)
    tensor[0] = grid == int(Side.BLACK)
    tensor[1] = grid == int(Side.WHITE)
    for move in enumerate_legal_moves(board, side):
        tensor[2, move.row, move.col] = 1.0
    return tensor


def build_aux_vector(side: Side) -> np.ndarray:
    aux = np.zeros((AUX_VECTOR_SIZE,), dtype=np.float32)
    aux[int(side) - 1] = 1.0
    return aux


def legal_action_mask(state: GameState) -> np.ndarray:
    """Flat int8 mask over ``size * size`` cells; all zeros once the game is over."""
    size = state.board.size
    mask = np.zeros(size * size, dtype=np.int8)
    for move in state.legal_moves:
        mask[move.row * size + move.col] = 1
    return mask


def state_to_numpy(state: GameState) -> Tuple[np.ndarray, np.ndarray]:
    return build_board_tensor(state.board, state.current_side), build_aux_vector(state.current_side)
