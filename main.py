#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--rows R] [--cols C] [--mines M] [--seed S]
    python main.py simulate [--games N] [--rows R] [--cols C] [--mines M]
"""
import argparse
import logging
import sys

import numpy as np

from minesweeper import (
    BoardConfig,
    MinesweeperEnv,
    MinesweeperError,
    TerminalGame,
)


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Board configuration from command line flags."""
    return BoardConfig(rows=args.rows, cols=args.cols, num_mines=args.mines)


def play(args: argparse.Namespace) -> None:
    """Play interactively in the terminal."""
    game = TerminalGame(build_config(args), seed=args.seed)
    game.run()


def simulate(args: argparse.Namespace) -> None:
    """Play games by revealing random hidden cells and report the win rate."""
    config = build_config(args)
    env = MinesweeperEnv(config=config)
    rng = np.random.default_rng(args.seed)

    wins = 0
    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        env.reset(seed=seed)
        done = False
        while not done:
            mask = env.get_action_mask()[: config.total_cells]
            action = int(rng.choice(np.flatnonzero(mask)))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
        if info["game_state"] == "WON":
            wins += 1

    print(f"Board: {config.rows}x{config.cols} with {config.num_mines} mines")
    print(f"Random play: {wins}/{args.games} wins ({wins / args.games:.1%})")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Minesweeper")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    def add_board_args(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument("--rows", type=int, default=10, help="Board rows")
        subparser.add_argument("--cols", type=int, default=10, help="Board columns")
        subparser.add_argument("--mines", type=int, default=10, help="Number of mines")
        subparser.add_argument("--seed", type=int, default=None, help="Random seed")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_args(play_parser)

    sim_parser = subparsers.add_parser("simulate", help="Run random games")
    add_board_args(sim_parser)
    sim_parser.add_argument(
        "--games", type=int, default=100, help="Number of games"
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return
    if args.command == "simulate" and args.games < 1:
        parser.error("--games must be at least 1")

    try:
        if args.command == "play":
            play(args)
        elif args.command == "simulate":
            simulate(args)
    except MinesweeperError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
