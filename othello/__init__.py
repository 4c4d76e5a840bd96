"""Othello rules engine and computer opponent."""

from . import core, env, evaluation, features, policies, search
from .config import EngineConfig, config_from_dict, load_config
from .core import (
    BOARD_SIZE,
    Board,
    ConfigurationError,
    Difficulty,
    GameState,
    GameStatus,
    IllegalMoveError,
    Move,
    MoveRecord,
    NoLegalMovesError,
    OthelloError,
    Side,
    advance_turn,
    apply_move,
    enumerate_legal_moves,
    initial_board,
    initialize_game_state,
    legal_moves,
    undo_moves,
)
from .env import OthelloEnv
from .evaluation import EvaluationResult, evaluate_policies
from .policies import GreedyPolicy, MinimaxPolicy, Policy, RandomPolicy, choose_move, make_policy
from .search import EvaluatorWeights, MinimaxConfig, MinimaxSearch, OrderingPriorities, evaluate_board

__all__ = [
    "core",
    "env",
    "evaluation",
    "features",
    "policies",
    "search",
    "BOARD_SIZE",
    "Board",
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
    "enumerate_legal_moves",
    "initial_board",
    "initialize_game_state",
    "legal_moves",
    "undo_moves",
    "OthelloEnv",
    "EvaluationResult",
    "evaluate_policies",
    "Policy",
    "RandomPolicy",
    "GreedyPolicy",
    "MinimaxPolicy",
    "choose_move",
    "make_policy",
    "EvaluatorWeights",
    "MinimaxConfig",
    "MinimaxSearch",
    "OrderingPriorities",
    "evaluate_board",
    "EngineConfig",
    "config_from_dict",
    "load_config",
]
