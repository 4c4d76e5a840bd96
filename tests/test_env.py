import numpy as np
import pytest

from othello import OthelloEnv
from othello.core import IllegalMoveError, Side, enumerate_legal_moves


def test_reset_returns_valid_observation():
    env = OthelloEnv()
    obs, info = env.reset()

    assert obs["board"].shape == (3, 8, 8)
    assert obs["aux"].shape == (2,)
    assert env.observation_space.contains(obs)
    assert info["legal_action_mask"].shape == (64,)
    assert info["current_side"] == Side.BLACK


def test_legal_mask_matches_enumeration():
    env = OthelloEnv()
    env.reset()
    mask = env.legal_action_mask()
    legal = enumerate_legal_moves(env.state.board, env.state.current_side)

    assert np.count_nonzero(mask) == len(legal) == 4
    for move in legal:
        assert mask[move.row * 8 + move.col] == 1


def test_step_advances_state_and_returns_reward():
    env = OthelloEnv()
    obs, info = env.reset()
    action = int(np.flatnonzero(info["legal_action_mask"])[0])

    next_obs, reward, terminated, truncated, next_info = env.step(action)

    assert action == 2 * 8 + 3
    assert reward == 0.0
    assert not terminated
    assert not truncated
    assert np.any(next_obs["board"] != obs["board"])
    assert next_info["current_side"] == Side.WHITE


def test_step_rejects_bad_actions():
    env = OthelloEnv()
    env.reset()

    with pytest.raises(ValueError):
        env.step(64)
    with pytest.raises(IllegalMoveError):
        env.step(0)


def test_render_ansi():
    env = OthelloEnv(render_mode="ansi")
    env.reset()

    text = env.render()

    assert text.splitlines()[0] == "  0 1 2 3 4 5 6 7"
    assert text.splitlines()[4] == "3 . . . W B . . ."
