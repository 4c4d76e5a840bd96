from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from .errors import IllegalMoveError
from .geometry import BOARD_SIZE, Coord, build_rays
from .state import EMPTY, Board, GameState, GameStatus, Move, MoveRecord, Side

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _rays(size: int) -> Tuple[Tuple[Tuple[int, ...], ...], ...]:
    return build_rays(size)


def initial_board(size: int = BOARD_SIZE) -> Board:
    """Standard opening: WHITE on the main diagonal of the centre, BLACK on the other."""
    mid = size // 2
    return Board.empty(size).with_cells(
        [
            ((mid - 1, mid - 1), Side.WHITE),
            ((mid - 1, mid), Side.BLACK),
            ((mid, mid - 1), Side.BLACK),
            ((mid, mid), Side.WHITE),
        ]
    )


def _flip_indices(cells: Sequence[int], index: int, me: int, opp: int, rays) -> List[int]:
    flips: List[int] = []
    for ray in rays[index]:
        run: List[int] = []
        for step in ray:
            value = cells[step]
            if value == opp:
                run.append(step)
                continue
            if value == me and run:
                flips.extend(run)
            # empty cell, own disc or edge ends the walk
            break
    return flips


def _has_flip(cells: Sequence[int], index: int, me: int, opp: int, rays) -> bool:
    for ray in rays[index]:
        seen_opp = False
        for step in ray:
            value = cells[step]
            if value == opp:
                seen_opp = True
                continue
            if value == me and seen_opp:
                return True
            break
    return False


def resolve_flips(board: Board, row: int, col: int, side: Side) -> Tuple[Coord, ...]:
    """Return the opposing discs a disc of ``side`` placed at (row, col) would flip."""
    if not board.in_bounds(row, col) or board.at(row, col) != EMPTY:
        return ()
    side = Side(side)
    size = board.size
    flips = _flip_indices(board.cells, row * size + col, int(side), int(side.opponent), _rays(size))
    return tuple(divmod(index, size) for index in flips)


def is_legal_move(board: Board, row: int, col: int, side: Side) -> bool:
    if not board.in_bounds(row, col) or board.at(row, col) != EMPTY:
        return False
    side = Side(side)
    return _has_flip(board.cells, board.index(row, col), int(side), int(side.opponent), _rays(board.size))


def enumerate_legal_moves(board: Board, side: Side) -> List[Move]:
    """All legal moves for ``side`` in row-major order; empty means a forced pass."""
    side = Side(side)
    me, opp = int(side), int(side.opponent)
    size = board.size
    cells = board.cells
    rays = _rays(size)
    moves: List[Move] = []
    for index, value in enumerate(cells):
        if value != EMPTY:
            continue
        flips = _flip_indices(cells, index, me, opp, rays)
        if flips:
            row, col = divmod(index, size)
            moves.append(Move(row, col, tuple(divmod(i, size) for i in flips)))
    return moves


legal_moves = enumerate_legal_moves


def has_legal_move(board: Board, side: Side) -> bool:
    side = Side(side)
    me, opp = int(side), int(side.opponent)
    cells = board.cells
    rays = _rays(board.size)
    for index, value in enumerate(cells):
        if value == EMPTY and _has_flip(cells, index, me, opp, rays):
            return True
    return False


def count_legal_moves(board: Board, side: Side) -> int:
    side = Side(side)
    me, opp = int(side), int(side.opponent)
    cells = board.cells
    rays = _rays(board.size)
    return sum(1 for index, value in enumerate(cells) if value == EMPTY and _has_flip(cells, index, me, opp, rays))


def play_move(board: Board, move: Move, side: Side) -> Board:
    """Apply an already-resolved legal move without re-checking it."""
    cells = list(board.cells)
    size = board.size
    value = int(side)
    cells[move.row * size + move.col] = value
    for r, c in move.flipped:
        cells[r * size + c] = value
    return Board(size, tuple(cells))


def apply_move(board: Board, row: int, col: int, side: Side) -> Board:
    """Place a disc for ``side`` and flip the sandwiched discs.

    Raises :class:`IllegalMoveError` for off-board, occupied or non-flipping
    targets; the input board is never modified.
    """
    side = Side(side)
    if not board.in_bounds(row, col):
        raise IllegalMoveError(row, col, side, "cell is off the board")
    if board.at(row, col) != EMPTY:
        raise IllegalMoveError(row, col, side, "cell is occupied")
    flipped = resolve_flips(board, row, col, side)
    if not flipped:
        raise IllegalMoveError(row, col, side, "move flips no discs")
    return play_move(board, Move(row, col, flipped), side)


def count_discs(board: Board) -> Tuple[int, int]:
    """Return (black, white) disc counts."""
    return board.count(Side.BLACK), board.count(Side.WHITE)


def is_game_over(board: Board) -> bool:
    if board.is_full():
        return True
    return not has_legal_move(board, Side.BLACK) and not has_legal_move(board, Side.WHITE)


def determine_winner(board: Board) -> Optional[Side]:
    black, white = count_discs(board)
    if black > white:
        return Side.BLACK
    if white > black:
        return Side.WHITE
    return None


def next_side(board: Board, mover: Side) -> Side:
    """Side to move after ``mover`` played on ``board``.

    The opponent moves if it can; otherwise the mover keeps the turn if it
    can. When neither can move the game is over and the opponent is returned.
    """
    mover = Side(mover)
    opponent = mover.opponent
    if has_legal_move(board, opponent):
        return opponent
    if has_legal_move(board, mover):
        return mover
    return opponent


def _status_for(board: Board) -> Tuple[GameStatus, Optional[Side]]:
    if not is_game_over(board):
        return GameStatus.PLAYING, None
    winner = determine_winner(board)
    return (GameStatus.DRAW, None) if winner is None else (GameStatus.WON, winner)


def initialize_game_state(board: Optional[Board] = None, side: Side = Side.BLACK) -> GameState:
    board = board if board is not None else initial_board()
    side = Side(side)
    status, winner = _status_for(board)
    if status == GameStatus.PLAYING and not has_legal_move(board, side):
        # The side asked to start has to pass straight away.
        side = side.opponent
    moves = tuple(enumerate_legal_moves(board, side)) if status == GameStatus.PLAYING else ()
    return GameState(
        board=board,
        current_side=side,
        status=status,
        winner=winner,
        legal_moves=moves,
        start_board=board,
        start_side=side,
    )


def advance_turn(state: GameState, row: int, col: int) -> GameState:
    """Play (row, col) for the side to move and resolve pass/terminal/winner."""
    mover = state.current_side
    if state.is_terminal:
        raise IllegalMoveError(row, col, mover, "the game is already over")
    new_board = apply_move(state.board, row, col, mover)
    record = MoveRecord(row, col, mover, resolve_flips(state.board, row, col, mover))

    status, winner = _status_for(new_board)
    side = next_side(new_board, mover)
    if status == GameStatus.PLAYING and side == mover:
        logger.debug("%s has no legal move and passes", mover.opponent.name)
    moves = tuple(enumerate_legal_moves(new_board, side)) if status == GameStatus.PLAYING else ()

    return GameState(
        board=new_board,
        current_side=side,
        status=status,
        winner=winner,
        history=state.history + (record,),
        legal_moves=moves,
        last_move=record,
        start_board=state.start_board,
        start_side=state.start_side,
    )


def replay_moves(records: Sequence[MoveRecord], board: Optional[Board] = None, side: Side = Side.BLACK) -> GameState:
    """Rebuild a game state by replaying ``records`` from ``board``."""
    state = initialize_game_state(board, side)
    for record in records:
        if record.side != state.current_side:
            raise IllegalMoveError(record.row, record.col, record.side, "move played out of turn")
        state = advance_turn(state, record.row, record.col)
    return state


def undo_moves(state: GameState, plies: int = 1) -> GameState:
    """Drop the last ``plies`` moves by replaying the rest of the history."""
    if plies < 0:
        raise ValueError("plies must be non-negative.")
    if plies > len(state.history):
        raise ValueError(f"Cannot undo {plies} plies; only {len(state.history)} played.")
    if plies == 0:
        return state
    kept = state.history[: len(state.history) - plies]
    return replay_moves(kept, state.start_board, state.start_side)
