from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from othello.core import BOARD_SIZE, GameState, GameStatus, Side
from othello.env import OthelloEnv
from othello.policies import Policy

logger = logging.getLogger(__name__)

CLOSE_GAME_MARGIN = 3


@dataclass
class EvaluationResult:
    games_played: int
    black_wins: int
    white_wins: int
    draws: int
    average_length: float
    average_margin: float
    close_games: int

    def winrate_black(self) -> float:
        return self.black_wins / max(1, self.games_played)

    def winrate_white(self) -> float:
        return self.white_wins / max(1, self.games_played)


def play_game(
    policy_black: Policy,
    policy_white: Policy,
    *,
    env_factory: Optional[Callable[[], OthelloEnv]] = None,
) -> GameState:
    """Play one full game and return the terminal state."""
    env = (env_factory or OthelloEnv)()
    env.reset()
    terminated = False
    while not terminated:
        state = env.state
        policy = policy_black if state.current_side == Side.BLACK else policy_white
        move = policy.select(state.board, state.current_side)
        _, _, terminated, truncated, _ = env.step(move.row * BOARD_SIZE + move.col)
        if truncated:
            terminated = True
    return env.state


def evaluate_policies(
    policy_black: Policy,
    policy_white: Policy,
    *,
    episodes: int,
    seed: Optional[int] = None,
    env_factory: Optional[Callable[[], OthelloEnv]] = None,
) -> EvaluationResult:
    """Play ``episodes`` games between two policies with fixed colours."""
    seeds = np.random.SeedSequence(seed).generate_state(max(episodes, 1) * 2)

    black_wins = 0
    white_wins = 0
    draws = 0
    close_games = 0
    total_ply = 0
    total_margin = 0

    for episode in range(episodes):
        black = policy_black.spawn(int(seeds[2 * episode]))
        white = policy_white.spawn(int(seeds[2 * episode + 1]))
        final = play_game(black, white, env_factory=env_factory)

        margin = abs(final.black_count - final.white_count)
        total_ply += len(final.history)
        total_margin += margin
        if margin <= CLOSE_GAME_MARGIN:
            close_games += 1

        if final.status == GameStatus.DRAW:
            draws += 1
        elif final.winner == Side.BLACK:
            black_wins += 1
        else:
            white_wins += 1
        logger.info(
            "game %d/%d: %s (black %d, white %d, %d plies)",
            episode + 1,
            episodes,
            final.winner.name if final.winner else "draw",
            final.black_count,
            final.white_count,
            len(final.history),
        )

    return EvaluationResult(
        games_played=episodes,
        black_wins=black_wins,
        white_wins=white_wins,
        draws=draws,
        average_length=total_ply / max(1, episodes),
        average_margin=total_margin / max(1, episodes),
        close_games=close_games,
    )
