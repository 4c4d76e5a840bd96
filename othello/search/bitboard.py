"""Bitboard kernels for the search.

A position is one int per side, with bit ``row * size + col`` set when
that side owns the cell. Results agree with :mod:`othello.core.rules`.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator, Tuple

from othello.core.geometry import DIRECTIONS, build_rays
from othello.core.state import Board, Side


@dataclass(frozen=True)
class BitboardTables:
    size: int
    full: int
    # (shift, wrap mask) pairs split by shift direction.
    left_shifts: Tuple[Tuple[int, int], ...]
    right_shifts: Tuple[Tuple[int, int], ...]
    # rays[index][d] lists single-bit masks walked from ``index``, nearest first.
    rays: Tuple[Tuple[Tuple[int, ...], ...], ...]


@lru_cache(maxsize=None)
def bitboard_tables(size: int) -> BitboardTables:
    full = (1 << (size * size)) - 1
    first_col = sum(1 << (r * size) for r in range(size))
    last_col = first_col << (size - 1)

    left, right = [], []
    for dr, dc in DIRECTIONS:
        wrap = full
        if dc == 1:
            wrap &= ~first_col
        elif dc == -1:
            wrap &= ~last_col
        shift = dr * size + dc
        if shift > 0:
            left.append((shift, wrap))
        else:
            right.append((-shift, wrap))

    rays = tuple(
        tuple(tuple(1 << i for i in walk) for walk in per_direction)
        for per_direction in build_rays(size)
    )
    return BitboardTables(size, full, tuple(left), tuple(right), rays)


def to_bitboards(board: Board, side: Side) -> Tuple[int, int]:
    """Return (discs of ``side``, discs of its opponent)."""
    side = Side(side)
    mine, theirs = int(side), int(side.opponent)
    me = opp = 0
    for index, value in enumerate(board.cells):
        if value == mine:
            me |= 1 << index
        elif value == theirs:
            opp |= 1 << index
    return me, opp


def legal_mask(me: int, opp: int, tables: BitboardTables) -> int:
    """Mask of empty cells where ``me`` would flip at least one disc."""
    empty = tables.full & ~(me | opp)
    moves = 0
    for shift, wrap in tables.left_shifts:
        run_mask = wrap & opp
        x = (me << shift) & run_mask
        run = 0
        while x:
            run |= x
            x = (x << shift) & run_mask
        moves |= (run << shift) & wrap & empty
    for shift, wrap in tables.right_shifts:
        run_mask = wrap & opp
        x = (me >> shift) & run_mask
        run = 0
        while x:
            run |= x
            x = (x >> shift) & run_mask
        moves |= (run >> shift) & wrap & empty
    return moves


def flips_for(index: int, me: int, opp: int, tables: BitboardTables) -> int:
    """Mask of ``opp`` discs flipped when ``me`` plays at ``index``."""
    flips = 0
    for ray in tables.rays[index]:
        run = 0
        for bit in ray:
            if opp & bit:
                run |= bit
                continue
            if run and me & bit:
                flips |= run
            break
    return flips


def iter_bits(mask: int) -> Iterator[int]:
    """Set bit indices, lowest (row-major first) to highest."""
    while mask:
        low = mask & -mask
        yield low.bit_length() - 1
        mask ^= low
