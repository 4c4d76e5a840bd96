from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .geometry import BOARD_SIZE, Coord

BoardArray = NDArray[np.int8]

EMPTY = 0


class Side(IntEnum):
    BLACK = 1
    WHITE = 2

    @property
    def opponent(self) -> "Side":
        return Side.WHITE if self is Side.BLACK else Side.BLACK

    @property
    def symbol(self) -> str:
        return "B" if self is Side.BLACK else "W"


_CELL_VALUES = frozenset((EMPTY, int(Side.BLACK), int(Side.WHITE)))


class GameStatus(Enum):
    PLAYING = "playing"
    WON = "won"
    DRAW = "draw"


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: "Difficulty | str") -> "Difficulty":
        if isinstance(value, Difficulty):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown difficulty {value!r}; expected easy, medium or hard.") from None


@dataclass(frozen=True)
class Board:
    """Immutable square board; ``cells`` is row-major with values 0, 1 or 2."""

    size: int
    cells: Tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.cells) != self.size * self.size:
            raise ValueError(f"Board of size {self.size} needs {self.size * self.size} cells, got {len(self.cells)}.")
        stray = set(self.cells) - _CELL_VALUES
        if stray:
            raise ValueError(f"Board cells must be 0 (empty), 1 (BLACK) or 2 (WHITE), got {sorted(stray)}.")

    @classmethod
    def empty(cls, size: int = BOARD_SIZE) -> "Board":
        return cls(size, (EMPTY,) * (size * size))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Board":
        size = len(rows)
        cells = []
        for row in rows:
            if len(row) != size:
                raise ValueError("Board rows must form a square grid.")
            cells.extend(int(value) for value in row)
        return cls(size, tuple(cells))

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> "Board":
        return cls.from_rows(array.tolist())

    def index(self, row: int, col: int) -> int:
        return row * self.size + col

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def at(self, row: int, col: int) -> int:
        return self.cells[row * self.size + col]

    def count(self, side: Side) -> int:
        return self.cells.count(int(side))

    @property
    def empty_count(self) -> int:
        return self.cells.count(EMPTY)

    @property
    def disc_count(self) -> int:
        return len(self.cells) - self.empty_count

    def is_full(self) -> bool:
        return EMPTY not in self.cells

    def rows(self) -> Tuple[Tuple[int, ...], ...]:
        n = self.size
        return tuple(self.cells[r * n:(r + 1) * n] for r in range(n))

    def to_numpy(self) -> BoardArray:
        return np.array(self.cells, dtype=np.int8).reshape(self.size, self.size)

    def with_cells(self, updates: Iterable[Tuple[Coord, int]]) -> "Board":
        cells = list(self.cells)
        for (r, c), value in updates:
            cells[r * self.size + c] = int(value)
        return Board(self.size, tuple(cells))

    def pretty(self) -> str:
        header = "  " + " ".join(str(c) for c in range(self.size))
        lines = [header]
        for r, row in enumerate(self.rows()):
            lines.append(f"{r} " + " ".join(Side(value).symbol if value else "." for value in row))
        return "\n".join(lines)


@dataclass(frozen=True)
class Move:
    row: int
    col: int
    flipped: Tuple[Coord, ...]

    @property
    def flip_count(self) -> int:
        return len(self.flipped)

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)


@dataclass(frozen=True)
class MoveRecord:
    row: int
    col: int
    side: Side
    flipped: Tuple[Coord, ...] = field(default_factory=tuple)

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)


@dataclass(frozen=True)
class GameState:
    board: Board
    current_side: Side
    status: GameStatus = GameStatus.PLAYING
    winner: Optional[Side] = None
    history: Tuple[MoveRecord, ...] = field(default_factory=tuple)
    legal_moves: Tuple[Move, ...] = field(default_factory=tuple)
    last_move: Optional[MoveRecord] = None
    # Position the history is replayed from when undoing.
    start_board: Optional[Board] = None
    start_side: Side = Side.BLACK

    @property
    def is_terminal(self) -> bool:
        return self.status != GameStatus.PLAYING

    @property
    def black_count(self) -> int:
        return self.board.count(Side.BLACK)

    @property
    def white_count(self) -> int:
        return self.board.count(Side.WHITE)

    def find_legal_move(self, row: int, col: int) -> Optional[Move]:
        for move in self.legal_moves:
            if move.row == row and move.col == col:
                return move
        return None

    def __repr__(self) -> str:
        return (
            f"GameState(side={self.current_side.name}, status={self.status.value}, "
            f"winner={self.winner.name if self.winner else None}, ply={len(self.history)})\n"
            f"{self.board.pretty()}"
        )
