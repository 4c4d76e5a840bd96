#!/usr/bin/env python3
"""Play two difficulty levels against each other and report the results."""

import argparse
import json
import logging
from pathlib import Path

import numpy as np

from othello import Difficulty, EngineConfig, load_config, make_policy
from othello.evaluation import evaluate_policies


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--black", choices=[d.value for d in Difficulty], default="medium")
    parser.add_argument("--white", choices=[d.value for d in Difficulty], default="easy")
    parser.add_argument("--episodes", type=int, default=10)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--depth", type=int, help="Override search.depth from the config")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    config = load_config(args.config) if Path(args.config).exists() else EngineConfig.default()
    if args.depth is not None:
        config.search.depth = args.depth
    config.validate()

    rng = np.random.default_rng(args.seed)
    policy_black = make_policy(args.black, rng=rng, config=config.search)
    policy_white = make_policy(args.white, rng=rng, config=config.search)

    result = evaluate_policies(policy_black, policy_white, episodes=args.episodes, seed=args.seed)

    output = {
        "black": args.black,
        "white": args.white,
        "games": result.games_played,
        "black_wins": result.black_wins,
        "white_wins": result.white_wins,
        "draws": result.draws,
        "average_length": result.average_length,
        "average_margin": result.average_margin,
        "close_games": result.close_games,
        "black_winrate": result.winrate_black(),
        "white_winrate": result.winrate_white(),
    }
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
