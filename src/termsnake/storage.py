# storage.py
"""Best-effort load/save of the game session as a single JSON snapshot."""
from __future__ import annotations
from pathlib import Path
from typing import Optional, Union
import json
import logging

from .config import GRID_W, GRID_H
from .game import SnakeGame
from .screen_buffer import ScreenBuffer, EMPTY

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def new_game(reveal: bool, width: int = GRID_W, height: int = GRID_H) -> SnakeGame:
    return SnakeGame(reveal, ScreenBuffer(width, height, EMPTY))


def load_state(path: PathLike) -> Optional[SnakeGame]:
    """Return the saved session, or None when there is nothing usable at `path`."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        game = SnakeGame.from_dict(data)
        if (game.width, game.height) != (GRID_W, GRID_H):
            raise ValueError(f"board is {game.width}x{game.height}, expected {GRID_W}x{GRID_H}")
    except FileNotFoundError:
        logger.info(f"No saved game at {path}")
        return None
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.warning(f"Ignoring unreadable saved game {path}: {e}")
        return None

    logger.info(f"Loaded saved game from {path} (score {game.score})")
    return game


def save_state(game: SnakeGame, path: PathLike) -> bool:
    """Write the session to `path`. Failures are logged, never raised."""
    path = Path(path)
    try:
        path.write_text(json.dumps(game.to_dict()), encoding="utf-8")
    except OSError as e:
        logger.warning(f"Can't save the state to {path}: {e}")
        return False

    logger.info(f"Saved game to {path}")
    return True
