"""Static position evaluator used at minimax cutoffs.

Scores are from the point of view of ``side``: positive favours ``side``.
The weights are tunable, but their ordering is part of the engine's
behaviour (corner-seeking, avoiding cells next to empty corners, keeping
mobility) and is checked by :meth:`EvaluatorWeights.validate`:

* corner > X-square penalty > C-square penalty > edge bonus > 0
* mobility weight > disc weight > 0
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Dict, Tuple

from othello.core.errors import ConfigurationError
from othello.core.geometry import c_squares, corners, edge_cells, x_squares
from othello.core.state import Board, Side
from othello.search.bitboard import bitboard_tables, legal_mask, to_bitboards


@dataclass(frozen=True)
class EvaluatorWeights:
    corner: float = 100.0
    x_square_penalty: float = 25.0
    c_square_penalty: float = 20.0
    edge: float = 5.0
    mobility: float = 2.0
    disc: float = 1.0

    def validate(self) -> "EvaluatorWeights":
        if not self.corner > self.x_square_penalty > self.c_square_penalty > self.edge > 0:
            raise ConfigurationError(
                "Evaluator weights must satisfy corner > x_square_penalty > c_square_penalty > edge > 0, "
                f"got {asdict(self)}."
            )
        if not self.mobility > self.disc > 0:
            raise ConfigurationError(
                f"Evaluator weights must satisfy mobility > disc > 0, got {asdict(self)}."
            )
        return self

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


DEFAULT_WEIGHTS = EvaluatorWeights()

TERM_NAMES = ("corners", "x_squares", "c_squares", "edges", "mobility", "discs")


@lru_cache(maxsize=None)
def _masks(size: int) -> Tuple[int, int, Tuple[Tuple[int, int, int], ...]]:
    """Corner mask, edge mask and per corner (corner bit, X-square bit, C-square bits)."""

    def bit(coord) -> int:
        return 1 << (coord[0] * size + coord[1])

    corner_mask = sum(bit(c) for c in corners(size))
    edge_mask = sum(bit(e) for e in edge_cells(size))
    x_by_corner = {c: bit(x) for x, c in x_squares(size).items()}
    c_by_corner: Dict[Tuple[int, int], int] = {}
    for square, c in c_squares(size).items():
        c_by_corner[c] = c_by_corner.get(c, 0) | bit(square)
    neighbours = tuple((bit(c), x_by_corner[c], c_by_corner[c]) for c in corners(size))
    return corner_mask, edge_mask, neighbours


def evaluation_terms(
    me: int,
    opp: int,
    my_mobility: int,
    opp_mobility: int,
    size: int,
    weights: EvaluatorWeights = DEFAULT_WEIGHTS,
) -> Tuple[float, float, float, float, float, float]:
    """Corner, X-square, C-square, edge, mobility and disc terms over bitboards."""
    corner_mask, edge_mask, neighbours = _masks(size)
    occupied = me | opp
    exposed_x = exposed_c = 0
    for corner, x_bit, c_bits in neighbours:
        if not occupied & corner:
            exposed_x |= x_bit
            exposed_c |= c_bits

    return (
        weights.corner * ((me & corner_mask).bit_count() - (opp & corner_mask).bit_count()),
        -weights.x_square_penalty * ((me & exposed_x).bit_count() - (opp & exposed_x).bit_count()),
        -weights.c_square_penalty * ((me & exposed_c).bit_count() - (opp & exposed_c).bit_count()),
        weights.edge * ((me & edge_mask).bit_count() - (opp & edge_mask).bit_count()),
        weights.mobility * (my_mobility - opp_mobility),
        weights.disc * (me.bit_count() - opp.bit_count()),
    )


def evaluation_breakdown(board: Board, side: Side, weights: EvaluatorWeights = DEFAULT_WEIGHTS) -> Dict[str, float]:
    """Per-term contributions to :func:`evaluate_board`, plus ``total``."""
    tables = bitboard_tables(board.size)
    me, opp = to_bitboards(board, side)
    terms = evaluation_terms(
        me,
        opp,
        legal_mask(me, opp, tables).bit_count(),
        legal_mask(opp, me, tables).bit_count(),
        board.size,
        weights,
    )
    breakdown = dict(zip(TERM_NAMES, terms))
    breakdown["total"] = sum(terms)
    return breakdown


def evaluate_board(board: Board, side: Side, weights: EvaluatorWeights = DEFAULT_WEIGHTS) -> float:
    return evaluation_breakdown(board, side, weights)["total"]
