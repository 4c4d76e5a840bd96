import math

import numpy as np
import pytest

from othello.core import (
    Board,
    ConfigurationError,
    Move,
    NoLegalMovesError,
    Side,
    count_legal_moves,
    determine_winner,
    enumerate_legal_moves,
    initial_board,
    is_game_over,
    play_move,
    resolve_flips,
)
from othello.policies import RandomPolicy
from othello.search import (
    DEFAULT_WEIGHTS,
    EvaluatorWeights,
    MinimaxConfig,
    MinimaxSearch,
    OrderingPriorities,
    evaluate_board,
    evaluation_breakdown,
    move_priority,
    order_moves,
)
from othello.search.bitboard import bitboard_tables, flips_for, iter_bits, legal_mask, to_bitboards
from othello.search.ordering import order_indices


def board_with(cells) -> Board:
    return Board.empty().with_cells(cells.items())


def one_move_from_full(black_rest: int) -> Board:
    fixed = {(0, 1): Side.WHITE, (0, 2): Side.BLACK, (1, 0): Side.BLACK, (1, 1): Side.BLACK}
    cells = []
    placed = 0
    for r in range(8):
        for c in range(8):
            if (r, c) == (0, 0):
                cells.append(0)
            elif (r, c) in fixed:
                cells.append(int(fixed[(r, c)]))
            elif placed < black_rest:
                cells.append(int(Side.BLACK))
                placed += 1
            else:
                cells.append(int(Side.WHITE))
    return Board(8, tuple(cells))


def plain_minimax(board: Board, depth: int, maximizing: bool, ai_side: Side, config: MinimaxConfig) -> float:
    """Exhaustive minimax with the same node rules, no pruning."""
    if is_game_over(board):
        winner = determine_winner(board)
        if winner is None:
            return 0.0
        return config.win_score + depth if winner == ai_side else -config.win_score - depth
    if depth == 0:
        return evaluate_board(board, ai_side, config.weights)
    to_move = ai_side if maximizing else ai_side.opponent
    moves = enumerate_legal_moves(board, to_move)
    if not moves:
        return plain_minimax(board, depth - 1, not maximizing, ai_side, config)
    scores = [plain_minimax(play_move(board, m, to_move), depth - 1, not maximizing, ai_side, config) for m in moves]
    return max(scores) if maximizing else min(scores)



def random_position(seed: int, plies: int):
    """Board and side to move after ``plies`` random plies, passing when stuck."""
    policy = RandomPolicy(np.random.default_rng(seed))
    board = initial_board()
    side = Side.BLACK
    for _ in range(plies):
        if is_game_over(board):
            break
        if enumerate_legal_moves(board, side):
            board = play_move(board, policy.select(board, side), side)
        side = side.opponent
    if not enumerate_legal_moves(board, side):
        side = side.opponent
    return board, side

# ----------------------------------------------------------------------
# Evaluator
# ----------------------------------------------------------------------
def test_initial_position_is_balanced() -> None:
    assert evaluate_board(initial_board(), Side.BLACK) == 0


def test_owned_corner_term() -> None:
    breakdown = evaluation_breakdown(board_with({(0, 0): Side.BLACK}), Side.BLACK)

    assert breakdown["corners"] == 100
    assert breakdown["discs"] == 1
    assert breakdown["mobility"] == 0
    assert breakdown["total"] == 101


def test_x_square_next_to_empty_corner_is_penalised() -> None:
    assert evaluate_board(board_with({(1, 1): Side.BLACK}), Side.BLACK) == -24

    breakdown = evaluation_breakdown(board_with({(1, 1): Side.BLACK, (0, 0): Side.BLACK}), Side.BLACK)
    assert breakdown["x_squares"] == 0


def test_c_square_and_edge_terms() -> None:
    c_square = evaluation_breakdown(board_with({(0, 1): Side.BLACK}), Side.BLACK)
    edge = evaluation_breakdown(board_with({(0, 3): Side.BLACK}), Side.BLACK)

    assert c_square["c_squares"] == -20
    assert c_square["edges"] == 0
    assert edge["edges"] == 5
    assert edge["total"] == 6


def test_evaluation_is_zero_sum() -> None:
    rng = np.random.default_rng(5)
    policy = RandomPolicy(rng)
    board = initial_board()
    side = Side.BLACK
    for _ in range(20):
        if not enumerate_legal_moves(board, side):
            break
        board = play_move(board, policy.select(board, side), side)
        side = side.opponent
        assert evaluate_board(board, Side.BLACK) == -evaluate_board(board, Side.WHITE)


def test_weights_validation() -> None:
    assert DEFAULT_WEIGHTS.validate() is DEFAULT_WEIGHTS
    EvaluatorWeights(corner=80, x_square_penalty=30, c_square_penalty=10, edge=3).validate()

    with pytest.raises(ConfigurationError):
        EvaluatorWeights(edge=50).validate()
    with pytest.raises(ConfigurationError):
        EvaluatorWeights(mobility=1, disc=2).validate()


# ----------------------------------------------------------------------
# Move ordering
# ----------------------------------------------------------------------
def test_move_priorities() -> None:
    board = Board.empty()

    assert move_priority(Move(0, 0, ()), board) == 1000
    assert move_priority(Move(0, 3, ()), board) == 500
    assert move_priority(Move(3, 3, ()), board) == 90
    assert move_priority(Move(2, 5, ()), board) == 70
    assert move_priority(Move(1, 1, ()), board) == -100

    taken = board_with({(0, 0): Side.WHITE})
    assert move_priority(Move(1, 1, ()), taken) == 50


def test_order_moves_is_stable_and_descending() -> None:
    moves = [Move(1, 1, ()), Move(3, 3, ()), Move(0, 3, ()), Move(2, 5, ()), Move(7, 4, ()), Move(7, 7, ())]

    ordered = order_moves(moves, Board.empty())

    assert [m.coord for m in ordered] == [(7, 7), (0, 3), (7, 4), (3, 3), (2, 5), (1, 1)]


def test_ordering_priorities_validation() -> None:
    OrderingPriorities().validate()

    with pytest.raises(ConfigurationError):
        OrderingPriorities(edge=2000).validate()
    with pytest.raises(ConfigurationError):
        OrderingPriorities(x_square=50).validate()


# ----------------------------------------------------------------------
# Minimax
# ----------------------------------------------------------------------
def test_search_requires_positive_depth() -> None:
    with pytest.raises(ValueError):
        MinimaxSearch(MinimaxConfig(depth=0))


def test_search_without_moves_raises() -> None:
    with pytest.raises(NoLegalMovesError):
        MinimaxSearch().run(board_with({(0, 0): Side.BLACK}), Side.BLACK)


def test_immediate_win_scores_with_remaining_depth() -> None:
    result = MinimaxSearch().run(one_move_from_full(black_rest=28), Side.BLACK)

    assert result.move.coord == (0, 0)
    assert result.score == 10_000 + 5
    assert result.nodes == 1


def test_drawn_finish_scores_zero() -> None:
    result = MinimaxSearch().run(one_move_from_full(black_rest=27), Side.BLACK)

    assert result.score == 0


def test_forced_pass_consumes_a_ply() -> None:
    board = board_with({(0, 0): Side.BLACK, (0, 1): Side.WHITE, (0, 6): Side.WHITE, (0, 7): Side.BLACK})

    result = MinimaxSearch().run(board, Side.BLACK)

    # BLACK moves, WHITE passes, BLACK finishes: terminal with three plies left.
    assert result.move.coord == (0, 2)
    assert result.score == 10_000 + 3


@pytest.mark.parametrize("plies", [0, 6, 14])
def test_pruning_matches_exhaustive_minimax(plies: int) -> None:
    config = MinimaxConfig(depth=3)
    policy = RandomPolicy(np.random.default_rng(plies))
    board = initial_board()
    side = Side.BLACK
    for _ in range(plies):
        moves = enumerate_legal_moves(board, side)
        if moves:
            board = play_move(board, policy.select(board, side), side)
        side = side.opponent
    if not enumerate_legal_moves(board, side):
        side = side.opponent

    best_score = -math.inf
    best_move = None
    for move in order_moves(enumerate_legal_moves(board, side), board, config.priorities):
        score = plain_minimax(play_move(board, move, side), config.depth - 1, False, side, config)
        if score > best_score:
            best_score, best_move = score, move

    result = MinimaxSearch(config).run(board, side)

    assert result.move == best_move
    assert result.score == best_score


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4, 5])
def test_midgame_search_stays_fast(seed: int) -> None:
    board, side = random_position(seed, plies=20)

    result = MinimaxSearch().run(board, side)

    assert result.move in enumerate_legal_moves(board, side)
    assert result.elapsed < 0.5


# ----------------------------------------------------------------------
# Bitboards
# ----------------------------------------------------------------------
@pytest.mark.parametrize("seed", [0, 3, 8])
def test_bitboards_agree_with_rules(seed: int) -> None:
    tables = bitboard_tables(8)
    for plies in (0, 10, 25, 40):
        board, _ = random_position(seed, plies)
        for side in (Side.BLACK, Side.WHITE):
            me, opp = to_bitboards(board, side)
            moves = legal_mask(me, opp, tables)

            assert list(iter_bits(moves)) == [m.row * 8 + m.col for m in enumerate_legal_moves(board, side)]
            assert moves.bit_count() == count_legal_moves(board, side)
            for move in enumerate_legal_moves(board, side):
                flips = flips_for(move.row * 8 + move.col, me, opp, tables)
                expected = sum(1 << (r * 8 + c) for r, c in resolve_flips(board, move.row, move.col, side))
                assert flips == expected


def test_bitboard_moves_do_not_wrap_rows() -> None:
    # Bit 8 follows bit 7 but (1, 0) is not east of (0, 7).
    board = board_with({(0, 5): Side.BLACK, (0, 6): Side.WHITE, (0, 7): Side.WHITE})
    me, opp = to_bitboards(board, Side.BLACK)

    assert legal_mask(me, opp, bitboard_tables(8)) == 0


def test_order_indices_matches_order_moves() -> None:
    for seed in (1, 4):
        board, side = random_position(seed, plies=12)
        moves = enumerate_legal_moves(board, side)
        me, opp = to_bitboards(board, side)

        ordered = order_indices([m.row * 8 + m.col for m in moves], me | opp, 8)

        assert ordered == [m.row * 8 + m.col for m in order_moves(moves, board)]
