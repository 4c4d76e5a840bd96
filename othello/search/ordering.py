"""Move ordering for alpha-beta search.

Strong candidates are searched first so cutoffs happen earlier. Ordering
only changes traversal order: ties at the root still go to the first move
in the ordered sequence.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, List, Mapping, Sequence, Tuple

from othello.core.errors import ConfigurationError
from othello.core.geometry import Coord, centre, corners, is_edge, x_squares
from othello.core.state import EMPTY, Board, Move


@dataclass(frozen=True)
class OrderingPriorities:
    corner: float = 1000.0
    edge: float = 500.0
    centre_base: float = 100.0
    centre_distance_step: float = 10.0
    x_square: float = -100.0

    def validate(self, size: int = 8) -> "OrderingPriorities":
        # The farthest interior cell must still outrank an exposed X-square.
        worst_centre = self.centre_base - self.centre_distance_step * 2 * centre(size)
        if not self.corner > self.edge > self.centre_base >= worst_centre > self.x_square:
            raise ConfigurationError(
                "Ordering priorities must satisfy corner > edge > centre > x_square, "
                f"got {asdict(self)}."
            )
        if self.centre_distance_step <= 0:
            raise ConfigurationError("centre_distance_step must be positive.")
        return self

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


DEFAULT_PRIORITIES = OrderingPriorities()


@lru_cache(maxsize=None)
def _geometry(size: int) -> Tuple[FrozenSet[Coord], Mapping[Coord, Coord], float]:
    return frozenset(corners(size)), x_squares(size), centre(size)


def _cell_priority(row: int, col: int, size: int, corner_empty: bool, priorities: OrderingPriorities) -> float:
    corner_set, x_map, mid = _geometry(size)
    if (row, col) in corner_set:
        return priorities.corner
    if is_edge(row, col, size):
        return priorities.edge
    if corner_empty and (row, col) in x_map:
        return priorities.x_square
    distance = abs(row - mid) + abs(col - mid)
    return priorities.centre_base - distance * priorities.centre_distance_step


def move_priority(move: Move, board: Board, priorities: OrderingPriorities = DEFAULT_PRIORITIES) -> float:
    corner = _geometry(board.size)[1].get(move.coord)
    corner_empty = corner is not None and board.at(*corner) == EMPTY
    return _cell_priority(move.row, move.col, board.size, corner_empty, priorities)


def order_moves(
    moves: Sequence[Move],
    board: Board,
    priorities: OrderingPriorities = DEFAULT_PRIORITIES,
) -> List[Move]:
    """Stable sort, highest priority first."""
    return sorted(moves, key=lambda move: move_priority(move, board, priorities), reverse=True)


@lru_cache(maxsize=None)
def priority_table(priorities: OrderingPriorities, size: int) -> Tuple[Tuple[float, float, int], ...]:
    """Per flat cell index: (priority, priority once its corner is taken, corner bit or 0)."""
    x_map = _geometry(size)[1]
    table = []
    for row in range(size):
        for col in range(size):
            corner = x_map.get((row, col))
            corner_bit = 1 << (corner[0] * size + corner[1]) if corner else 0
            table.append(
                (
                    _cell_priority(row, col, size, True, priorities),
                    _cell_priority(row, col, size, False, priorities),
                    corner_bit,
                )
            )
    return tuple(table)


def order_indices(
    indices: Iterable[int],
    occupied: int,
    size: int,
    priorities: OrderingPriorities = DEFAULT_PRIORITIES,
) -> List[int]:
    """Bitboard counterpart of :func:`order_moves` over flat cell indices."""
    table = priority_table(priorities, size)

    def key(index: int) -> float:
        priority, once_taken, corner_bit = table[index]
        return once_taken if occupied & corner_bit else priority

    return sorted(indices, key=key, reverse=True)
