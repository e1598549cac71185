"""
DrawPoker command line.

Usage:
    drawpoker play [--seed SEED] [--coins N] [--auto] [--log-level LEVEL]
    drawpoker serve [--host HOST] [--port PORT] [--log-level LEVEL]
"""

import argparse
import logging
import sys
from typing import List, Optional

from drawpoker.config import GameConfig, LOG_LEVELS
from drawpoker.core.game import DrawPokerGame
from drawpoker.agents import HumanAgent, RandomAgent


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="drawpoker", description="Five-card draw coin game")
    subparsers = parser.add_subparsers(dest="command", required=True)

    play = subparsers.add_parser("play", help="Play in the terminal")
    play.add_argument("--seed", type=int, default=None, help="Shuffle seed")
    play.add_argument("--coins", type=int, default=None, help="Starting coins")
    play.add_argument("--auto", action="store_true", help="Let a random agent play")
    play.add_argument("--agent-seed", type=int, default=None, help="Seed for --auto answers")
    play.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None, help="Log level (stderr)")

    serve = subparsers.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", default=None, help="Host to bind to")
    serve.add_argument("--port", type=int, default=None, help="Port to bind to")
    serve.add_argument("--seed", type=int, default=None, help="Default shuffle seed")
    serve.add_argument("--coins", type=int, default=None, help="Default starting coins")
    serve.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None, help="Log level")

    return parser


def play(config: GameConfig, auto: bool = False, agent_seed: Optional[int] = None) -> int:
    """Run a terminal session until coins or cards run out."""
    logging.basicConfig(
        level=getattr(logging, (config.log_level or "WARNING").upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    agent = RandomAgent(seed=agent_seed) if auto else HumanAgent()
    game = DrawPokerGame(agent=agent, starting_coins=config.starting_coins, seed=config.seed)

    try:
        game.play()
    except (EOFError, KeyboardInterrupt):
        print()
        logger.info("Input closed, leaving the table")
    return 0


def serve(config: GameConfig) -> int:
    from drawpoker.server.app import main as run_server

    run_server(config)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = GameConfig.from_env().override(
            seed=args.seed,
            starting_coins=args.coins,
            log_level=args.log_level,
            host=getattr(args, "host", None),
            port=getattr(args, "port", None),
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.command == "play":
        return play(config, auto=args.auto, agent_seed=args.agent_seed)
    return serve(config)


if __name__ == "__main__":
    sys.exit(main())
