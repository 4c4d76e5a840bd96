"""Move-selection policies for the computer opponent."""

from .policy import GreedyPolicy, MinimaxPolicy, Policy, RandomPolicy, choose_move, make_policy

__all__ = [
    "Policy",
    "RandomPolicy",
    "GreedyPolicy",
    "MinimaxPolicy",
    "make_policy",
    "choose_move",
]
