from __future__ import annotations

from typing import Optional


class OthelloError(Exception):
    """Base class for errors raised by the engine."""


class IllegalMoveError(OthelloError, ValueError):
    """A move targets an occupied or off-board cell, or flips nothing."""

    def __init__(self, row: int, col: int, side: Optional[int], reason: str) -> None:
        self.row = row
        self.col = col
        self.side = side
        self.reason = reason
        super().__init__(f"Illegal move at ({row}, {col}): {reason}.")


class NoLegalMovesError(OthelloError, RuntimeError):
    """A policy was asked to move for a side that has no legal move."""

    def __init__(self, side: int) -> None:
        self.side = side
        super().__init__(f"No legal moves available for side {int(side)}.")


class ConfigurationError(OthelloError, ValueError):
    pass
