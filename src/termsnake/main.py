# main.py
from __future__ import annotations
import argparse
import logging
import sys
from typing import Optional

from blessed import Terminal  # type: ignore

from . import __version__
from .config import Config, DEFAULT_FPS, STATE_FILE, GRID_W, GRID_H
from .storage import load_state, new_game, save_state

logger = logging.getLogger(__name__)

DESCRIPTION = (
    "Almost a classic snake game for your terminal. Eat the black squares and you "
    "will reveal something. The game saves its state on exit and loads it on start "
    "(unless --new is given). You can't die: the game goes on with a shorter snake. "
    "Use --speed to change the number of frames per second, or --reveal to see the "
    "message without playing."
)


def positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"speed must be positive, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="termsnake", description=DESCRIPTION)
    parser.add_argument("-r", "--reveal", action="store_true", help="reveal the message without game")
    parser.add_argument("-n", "--new", action="store_true", help="start a new game")
    parser.add_argument(
        "-s", "--speed",
        type=positive_float,
        default=DEFAULT_FPS,
        help="the speed of the game in fps (default: %(default)s)",
    )
    parser.add_argument(
        "--state-file",
        type=str,
        default=STATE_FILE,
        help="where the game is saved on exit (default: %(default)s)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="write log messages to this file instead of stderr",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if verbose else (logging.INFO if log_file else logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    cfg = Config.from_args(args)

    game = None if cfg.new else load_state(cfg.state_file)
    if game is None:
        game = new_game(cfg.reveal)

    term = Terminal()
    if term.width < 2 * GRID_W or term.height < GRID_H:
        logger.warning(
            f"Terminal is {term.width}x{term.height}, the board needs {2 * GRID_W}x{GRID_H}"
        )

    game.run(term, cfg.target_fps)
    if not save_state(game, cfg.state_file):
        print(f"\nCan't save the state to {cfg.state_file}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
