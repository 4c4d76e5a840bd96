"""Board geometry tables.

Every table here is a pure function of the board size; the module-level
constants bind them for the standard 8x8 board.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

Coord = Tuple[int, int]

BOARD_SIZE = 8

# NW, N, NE, W, E, SW, S, SE
DIRECTIONS: Tuple[Coord, ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)


def corners(size: int = BOARD_SIZE) -> Tuple[Coord, ...]:
    last = size - 1
    return ((0, 0), (0, last), (last, 0), (last, last))


def x_squares(size: int = BOARD_SIZE) -> Dict[Coord, Coord]:
    """Map each X-square (diagonal corner neighbour) to its corner."""
    mapping: Dict[Coord, Coord] = {}
    for corner in corners(size):
        dr = 1 if corner[0] == 0 else -1
        dc = 1 if corner[1] == 0 else -1
        mapping[(corner[0] + dr, corner[1] + dc)] = corner
    return mapping


def c_squares(size: int = BOARD_SIZE) -> Dict[Coord, Coord]:
    """Map each C-square (orthogonal corner neighbour) to its corner."""
    mapping: Dict[Coord, Coord] = {}
    for corner in corners(size):
        dr = 1 if corner[0] == 0 else -1
        dc = 1 if corner[1] == 0 else -1
        mapping[(corner[0], corner[1] + dc)] = corner
        mapping[(corner[0] + dr, corner[1])] = corner
    return mapping


def is_edge(row: int, col: int, size: int = BOARD_SIZE) -> bool:
    last = size - 1
    return row == 0 or col == 0 or row == last or col == last


def edge_cells(size: int = BOARD_SIZE) -> Tuple[Coord, ...]:
    """Edge cells that are neither corners nor C-squares, row-major."""
    excluded = set(corners(size)) | set(c_squares(size))
    cells: List[Coord] = []
    for row in range(size):
        for col in range(size):
            if is_edge(row, col, size) and (row, col) not in excluded:
                cells.append((row, col))
    return tuple(cells)


def centre(size: int = BOARD_SIZE) -> float:
    return (size - 1) / 2.0


def build_rays(size: int = BOARD_SIZE) -> Tuple[Tuple[Tuple[int, ...], ...], ...]:
    """Precompute, per flat cell index, the flat indices along each direction.

    ``rays[index][d]`` lists the cells walked from ``index`` in direction
    ``DIRECTIONS[d]``, nearest first, stopping at the edge.
    """
    rays = []
    for row in range(size):
        for col in range(size):
            per_direction = []
            for dr, dc in DIRECTIONS:
                walk = []
                r, c = row + dr, col + dc
                while 0 <= r < size and 0 <= c < size:
                    walk.append(r * size + c)
                    r += dr
                    c += dc
                per_direction.append(tuple(walk))
            rays.append(tuple(per_direction))
    return tuple(rays)


CORNERS = corners()
X_SQUARES = x_squares()
C_SQUARES = c_squares()
EDGE_CELLS = edge_cells()
