"""Core game logic for Othello."""

from .errors import ConfigurationError, IllegalMoveError, NoLegalMovesError, OthelloError
from .geometry import BOARD_SIZE, C_SQUARES, CORNERS, DIRECTIONS, EDGE_CELLS, X_SQUARES, Coord
from .state import EMPTY, Board, Difficulty, GameState, GameStatus, Move, MoveRecord, Side
from .rules import (
    advance_turn,
    apply_move,
    count_discs,
    count_legal_moves,
    determine_winner,
    enumerate_legal_moves,
    has_legal_move,
    initial_board,
    initialize_game_state,
    is_game_over,
    is_legal_move,
    legal_moves,
    next_side,
    play_move,
    replay_moves,
    resolve_flips,
    undo_moves,
)

__all__ = [
    "BOARD_SIZE",
    "CORNERS",
    "C_SQUARES",
    "DIRECTIONS",
    "EDGE_CELLS",
    "EMPTY",
    "X_SQUARES",
    "Board",
    "Coord",
    "Difficulty",
    "GameState",
    "GameStatus",
    "Move",
    "MoveRecord",
    "Side",
    "OthelloError",
    "IllegalMoveError",
    "NoLegalMovesError",
    "ConfigurationError",
    "advance_turn",
    "apply_move",
    "count_discs",
    "count_legal_moves",
    "determine_winner",
    "enumerate_legal_moves",
    "has_legal_move",
    "initial_board",
    "initialize_game_state",
    "is_game_over",
    "is_legal_move",
    "legal_moves",
    "next_side",
    "play_move",
    "replay_moves",
    "resolve_flips",
    "undo_moves",
]
