"""Policy-vs-policy matches."""

from .match import CLOSE_GAME_MARGIN, EvaluationResult, evaluate_policies, play_game

__all__ = ["CLOSE_GAME_MARGIN", "EvaluationResult", "evaluate_policies", "play_game"]
