import numpy as np

from othello.core import GameStatus
from othello.evaluation import evaluate_policies, play_game
from othello.policies import GreedyPolicy, RandomPolicy


def test_evaluate_random_vs_random_small():
    policy_a = RandomPolicy(np.random.default_rng(0))
    policy_b = RandomPolicy(np.random.default_rng(1))
    result = evaluate_policies(policy_a, policy_b, episodes=2, seed=0)
    assert result.games_played == 2
    assert result.black_wins + result.white_wins + result.draws == 2
    assert result.average_length > 0
    assert 0.0 <= result.winrate_black() <= 1.0


def test_seeded_evaluation_is_reproducible():
    first = evaluate_policies(RandomPolicy(), RandomPolicy(), episodes=3, seed=42)
    second = evaluate_policies(RandomPolicy(), RandomPolicy(), episodes=3, seed=42)
    assert first == second


def test_play_game_reaches_terminal_state():
    final = play_game(GreedyPolicy(), RandomPolicy(np.random.default_rng(3)))
    assert final.is_terminal
    assert final.status in (GameStatus.WON, GameStatus.DRAW)
    assert final.black_count + final.white_count == final.board.disc_count
