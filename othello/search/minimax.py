from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Optional

from othello.core.errors import NoLegalMovesError
from othello.core.rules import enumerate_legal_moves
from othello.core.state import Board, Move, Side
from othello.search.bitboard import BitboardTables, bitboard_tables, flips_for, iter_bits, legal_mask, to_bitboards
from othello.search.evaluator import DEFAULT_WEIGHTS, EvaluatorWeights, evaluation_terms
from othello.search.ordering import DEFAULT_PRIORITIES, OrderingPriorities, order_indices, order_moves

logger = logging.getLogger(__name__)


@dataclass
class MinimaxConfig:
    depth: int = 6
    win_score: float = 10_000.0
    weights: EvaluatorWeights = field(default_factory=lambda: DEFAULT_WEIGHTS)
    priorities: OrderingPriorities = field(default_factory=lambda: DEFAULT_PRIORITIES)


@dataclass
class SearchResult:
    move: Move
    score: float
    nodes: int
    elapsed: float


class MinimaxSearch:
    """Depth-limited minimax with alpha-beta pruning for one acting side.

    Nodes work on bitboards: ``own`` holds the acting side's discs and
    ``other`` its opponent's, whoever is to move.
    """

    def __init__(self, config: Optional[MinimaxConfig] = None) -> None:
        self.config = config or MinimaxConfig()
        if self.config.depth < 1:
            raise ValueError("Search depth must be at least 1.")
        self._nodes = 0
        self._tables: Optional[BitboardTables] = None

    # ------------------------------------------------------------------
    def run(self, board: Board, side: Side) -> SearchResult:
        side = Side(side)
        moves = enumerate_legal_moves(board, side)
        if not moves:
            raise NoLegalMovesError(side)

        started = time.perf_counter()
        self._nodes = 0
        self._tables = tables = bitboard_tables(board.size)
        own, other = to_bitboards(board, side)
        depth = self.config.depth
        best_move: Optional[Move] = None
        best_score = -math.inf

        for move in order_moves(moves, board, self.config.priorities):
            index = move.row * board.size + move.col
            flips = flips_for(index, own, other, tables)
            # Passing the running best as alpha only prunes moves that
            # cannot beat it, so the chosen move is the same.
            score = self._minimax(own | (1 << index) | flips, other & ~flips, depth - 1, best_score, math.inf, False)
            if score > best_score:
                best_score = score
                best_move = move

        elapsed = time.perf_counter() - started
        assert best_move is not None
        logger.debug(
            "minimax side=%s depth=%d move=(%d,%d) score=%.1f nodes=%d elapsed=%.3fs",
            side.name,
            depth,
            best_move.row,
            best_move.col,
            best_score,
            self._nodes,
            elapsed,
        )
        return SearchResult(move=best_move, score=best_score, nodes=self._nodes, elapsed=elapsed)

    # ------------------------------------------------------------------
    def _minimax(self, own: int, other: int, depth: int, alpha: float, beta: float, maximizing: bool) -> float:
        self._nodes += 1
        tables = self._tables
        mover, waiting = (own, other) if maximizing else (other, own)
        moves = legal_mask(mover, waiting, tables)

        if depth == 0 or not moves:
            replies = legal_mask(waiting, mover, tables)
            if not moves and not replies:
                return self._terminal_score(own, other, depth)
            if depth == 0:
                own_moves, other_moves = (moves, replies) if maximizing else (replies, moves)
                terms = evaluation_terms(
                    own,
                    other,
                    own_moves.bit_count(),
                    other_moves.bit_count(),
                    tables.size,
                    self.config.weights,
                )
                return sum(terms)
            # Forced pass: the other side moves, one ply deeper.
            return self._minimax(own, other, depth - 1, alpha, beta, not maximizing)

        ordered = order_indices(iter_bits(moves), own | other, tables.size, self.config.priorities)
        if maximizing:
            best = -math.inf
            for index in ordered:
                flips = flips_for(index, own, other, tables)
                score = self._minimax(own | (1 << index) | flips, other & ~flips, depth - 1, alpha, beta, False)
                best = max(best, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break
            return best

        best = math.inf
        for index in ordered:
            flips = flips_for(index, other, own, tables)
            score = self._minimax(own & ~flips, other | (1 << index) | flips, depth - 1, alpha, beta, True)
            best = min(best, score)
            beta = min(beta, score)
            if beta <= alpha:
                break
        return best

    def _terminal_score(self, own: int, other: int, depth: int) -> float:
        own_count, other_count = own.bit_count(), other.bit_count()
        if own_count == other_count:
            return 0.0
        # Remaining depth rewards faster wins and delays losses.
        if own_count > other_count:
            return self.config.win_score + depth
        return -self.config.win_score - depth
