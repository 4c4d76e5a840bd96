"""Static evaluation and adversarial search."""

from .evaluator import DEFAULT_WEIGHTS, EvaluatorWeights, evaluate_board, evaluation_breakdown, evaluation_terms
from .ordering import DEFAULT_PRIORITIES, OrderingPriorities, move_priority, order_moves
from .minimax import MinimaxConfig, MinimaxSearch, SearchResult

__all__ = [
    "DEFAULT_WEIGHTS",
    "EvaluatorWeights",
    "evaluate_board",
    "evaluation_breakdown",
    "evaluation_terms",
    "DEFAULT_PRIORITIES",
    "OrderingPriorities",
    "move_priority",
    "order_moves",
    "MinimaxConfig",
    "MinimaxSearch",
    "SearchResult",
]
