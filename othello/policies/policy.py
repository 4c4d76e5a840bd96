from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from othello.core.errors import NoLegalMovesError
from othello.core.geometry import Coord, corners, is_edge, x_squares
from othello.core.rules import enumerate_legal_moves
from othello.core.state import EMPTY, Board, Difficulty, Move, Side
from othello.search import MinimaxConfig, MinimaxSearch


class Policy:
    """Policy interface choosing one legal move for a side."""

    def select(self, board: Board, side: Side) -> Move:
        moves = enumerate_legal_moves(board, side)
        if not moves:
            raise NoLegalMovesError(side)
        return self._select(board, side, moves)

    def _select(self, board: Board, side: Side, moves: List[Move]) -> Move:
        raise NotImplementedError

    def spawn(self, seed: Optional[int] = None) -> "Policy":
        """Return a copy of this policy for an independent game."""
        return self


class RandomPolicy(Policy):
    """Uniform choice over the legal moves."""

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng or np.random.default_rng()

    def _select(self, board: Board, side: Side, moves: List[Move]) -> Move:
        return moves[int(self.rng.integers(len(moves)))]

    def spawn(self, seed: Optional[int] = None) -> "RandomPolicy":
        return RandomPolicy(np.random.default_rng(seed))


class GreedyPolicy(Policy):
    """Deterministic priority cascade.

    1. First legal corner, in corner order.
    2. Drop X-squares next to an empty corner, unless nothing would remain.
    3. Best-flipping edge move (corners excluded).
    4. Best-flipping move overall.

    Flip-count ties keep enumeration order.
    """

    def _select(self, board: Board, side: Side, moves: List[Move]) -> Move:
        size = board.size
        by_coord = {move.coord: move for move in moves}
        corner_cells = corners(size)
        for corner in corner_cells:
            if corner in by_coord:
                return by_coord[corner]

        exposed = {x for x, corner in x_squares(size).items() if board.at(*corner) == EMPTY}
        candidates = [move for move in moves if move.coord not in exposed] or moves

        edges = [
            move
            for move in candidates
            if is_edge(move.row, move.col, size) and move.coord not in corner_cells
        ]
        if edges:
            return _most_flips(edges)
        return _most_flips(candidates)


class MinimaxPolicy(Policy):
    """Alpha-beta minimax over the static evaluator."""

    def __init__(self, config: Optional[MinimaxConfig] = None) -> None:
        self.search = MinimaxSearch(config)

    @property
    def config(self) -> MinimaxConfig:
        return self.search.config

    def _select(self, board: Board, side: Side, moves: List[Move]) -> Move:
        return self.search.run(board, side).move

    def spawn(self, seed: Optional[int] = None) -> "MinimaxPolicy":
        return MinimaxPolicy(self.search.config)


def _most_flips(moves: Sequence[Move]) -> Move:
    # max() keeps the first of equal keys.
    return max(moves, key=lambda move: move.flip_count)


def make_policy(
    difficulty: "Difficulty | str",
    *,
    rng: Optional[np.random.Generator] = None,
    config: Optional[MinimaxConfig] = None,
) -> Policy:
    difficulty = Difficulty.parse(difficulty)
    if difficulty is Difficulty.EASY:
        return RandomPolicy(rng)
    if difficulty is Difficulty.MEDIUM:
        return GreedyPolicy()
    return MinimaxPolicy(config)


def choose_move(
    board: Board,
    side: Side,
    difficulty: "Difficulty | str",
    *,
    rng: Optional[np.random.Generator] = None,
    config: Optional[MinimaxConfig] = None,
) -> Coord:
    """Pick a move for ``side``; raises :class:`NoLegalMovesError` if it must pass."""
    move = make_policy(difficulty, rng=rng, config=config).select(board, Side(side))
    return move.coord
