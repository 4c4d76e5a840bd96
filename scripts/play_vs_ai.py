#!/usr/bin/env python3
"""Play Othello against the computer in the console, with optional logging & replay."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np

from othello import (
    Difficulty,
    EngineConfig,
    GameState,
    GameStatus,
    IllegalMoveError,
    Side,
    advance_turn,
    initialize_game_state,
    load_config,
    make_policy,
    undo_moves,
)
from othello.search import evaluation_breakdown


def format_board(state: GameState) -> str:
    return state.board.pretty() + f"\nB: {state.black_count}  W: {state.white_count}"


def parse_move(raw: str) -> Optional[Tuple[int, int]]:
    """Accept ``"r c"``, ``"r,c"`` or algebraic ``"d3"`` (column letter, 1-based row)."""
    text = raw.strip().lower().replace(",", " ")
    parts = text.split()
    if len(parts) == 2 and all(p.isdigit() for p in parts):
        return int(parts[0]), int(parts[1])
    if len(text) == 2 and text[0].isalpha() and text[1].isdigit():
        return int(text[1]) - 1, ord(text[0]) - ord("a")
    return None


def prompt_human_move(state: GameState) -> Optional[Tuple[int, int]]:
    """Return a legal (row, col), or None when the player asks to undo."""
    print("Legal moves: " + ", ".join(f"({m.row},{m.col})x{m.flip_count}" for m in state.legal_moves))
    while True:
        raw = input("Your move as 'row col' (u to undo, q to quit): ").strip()
        if raw.lower() in {"q", "quit", "exit"}:
            print("Quitting.")
            sys.exit(0)
        if raw.lower() in {"u", "undo"}:
            return None
        coord = parse_move(raw)
        if coord is None:
            print("Could not read that move.")
            continue
        if state.find_legal_move(*coord) is None:
            print("That is not a legal move. Try again.")
            continue
        return coord


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, indent=2))
    print(f"Saved game log to {path}.")


def replay_logged_game(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text())
    moves = data.get("moves", [])
    state = initialize_game_state()
    if verbose:
        print("Replaying game.")
        print(format_board(state))
    for entry in moves:
        side = Side[entry["side"]]
        if side != state.current_side:
            raise IllegalMoveError(entry["row"], entry["col"], side, "move recorded out of turn")
        state = advance_turn(state, entry["row"], entry["col"])
        if verbose:
            actor = entry.get("actor", "unknown")
            print(f"{actor} ({side.name}) plays ({entry['row']},{entry['col']})")
            print(format_board(state))
    summary = {
        "result": state.status.value,
        "winner": state.winner.name if state.winner else None,
        "moves": len(moves),
        "black": state.black_count,
        "white": state.white_count,
        "board": [list(row) for row in state.board.rows()],
    }
    if verbose:
        print("Replay finished.")
        print(f"Result: {summary['result']} ({summary['winner'] or 'no winner'})")
    return summary


def announce_result(state: GameState, human_side: Side) -> str:
    if state.status == GameStatus.DRAW:
        return "Draw."
    if state.winner == human_side:
        return f"You win {state.board.count(human_side)}-{state.board.count(human_side.opponent)}!"
    return f"The computer wins {state.board.count(human_side.opponent)}-{state.board.count(human_side)}."


def play_interactive(args: argparse.Namespace, config: EngineConfig) -> None:
    human_side = Side.BLACK if args.human_side == "B" else Side.WHITE
    difficulty = Difficulty.parse(args.difficulty)
    policy = make_policy(difficulty, rng=np.random.default_rng(args.seed), config=config.search)
    print(f"Playing {human_side.name} against the {difficulty.value} computer.")

    state = initialize_game_state()
    log_records: List[Dict] = []
    actors: List[str] = []

    while not state.is_terminal:
        print("\nCurrent board:")
        print(format_board(state))
        side = state.current_side
        print(f"To move: {side.name}")

        if side == human_side:
            coord = prompt_human_move(state)
            if coord is None:
                # Take back our last move and every computer reply after it.
                if "human" not in actors:
                    print("Nothing to undo.")
                    continue
                last_human = len(actors) - 1 - actors[::-1].index("human")
                plies = len(actors) - last_human
                state = undo_moves(state, plies)
                del actors[-plies:]
                del log_records[-plies:]
                continue
            actor = "human"
        else:
            move = policy.select(state.board, side)
            coord = move.coord
            actor = "ai"
            print(f"Computer ({side.name}) plays ({coord[0]},{coord[1]}), flipping {move.flip_count}.")
            if args.explain:
                print(json.dumps(evaluation_breakdown(state.board, side, config.search.weights), indent=2))

        state = advance_turn(state, *coord)
        record = state.last_move
        log_records.append(
            {
                "move_index": len(log_records),
                "actor": actor,
                "side": side.name,
                "row": coord[0],
                "col": coord[1],
                "flips": len(record.flipped) if record else 0,
            }
        )
        actors.append(actor)

    print("\nFinal board:")
    print(format_board(state))
    print(announce_result(state, human_side))

    if args.log_file:
        metadata = {
            "human_side": human_side.name,
            "difficulty": difficulty.value,
            "seed": args.seed,
            "result": state.status.value,
            "winner": state.winner.name if state.winner else None,
        }
        save_log({"metadata": metadata, "moves": log_records}, Path(args.log_file))


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Othello in the console against the computer.")
    parser.add_argument("--human-side", choices=["B", "W"], default="B")
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty], default="medium")
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--explain", action="store_true", help="Print the evaluator breakdown for AI moves")
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    if args.replay_log:
        replay_logged_game(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    config = load_config(args.config) if Path(args.config).exists() else EngineConfig.default()
    play_interactive(args, config)


if __name__ == "__main__":
    main()
