"""Console entry point for Twenty-One."""

import argparse
import logging
import sys
from random import Random

from config import config
from core.exceptions import EmptyDeckError
from core.game import TwentyOneGame
from cli.console import Console
from logging_utils import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play Twenty-One against the dealer")
    parser.add_argument("--name", default=config.game.player_name, help="Default player name")
    parser.add_argument("--seed", type=int, default=config.game.seed, help="Seed for reproducible shuffles")
    parser.add_argument(
        "--no-clear",
        dest="clear_screen",
        action="store_false",
        default=config.ui.clear_screen,
        help="Do not clear the screen between prompts",
    )
    parser.add_argument(
        "--log-level",
        default="DEBUG" if config.debug else config.logging.level,
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    game = TwentyOneGame(
        player_name=args.name,
        rng=Random(args.seed),
        dealer_threshold=config.game.dealer_threshold,
    )
    console = Console(game, clear_screen=args.clear_screen)

    try:
        rounds = console.run(default_name=args.name)
    except (EOFError, KeyboardInterrupt):
        console.say("")
        logger.info("Input closed, leaving after %d round(s)", game.rounds_played)
        return 0
    except EmptyDeckError:
        logger.exception("Deck exhausted mid-round")
        return 1

    logger.info("Session finished after %d round(s)", rounds)
    return 0


if __name__ == "__main__":
    sys.exit(main())
