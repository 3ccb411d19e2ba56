"""Tests for saving and loading the game snapshot."""

import json
import logging

from termsnake.game import SnakeGame
from termsnake.screen_buffer import Cell, CellKind, ScreenBuffer, SNAKE_HEAD, SNAKE_BODY, FOOD, BORDER, EMPTY
from termsnake.storage import load_state, new_game, save_state


def sample_game():
    buf = ScreenBuffer(40, 40, FOOD)
    cells = [
        SNAKE_HEAD, Cell(CellKind.SNAKE_HEAD_CHAR, "h"),
        SNAKE_BODY, Cell(CellKind.SNAKE_BODY_CHAR, "b"),
        FOOD, BORDER, Cell(CellKind.BORDER_CHAR, "S"),
        EMPTY, Cell(CellKind.PLAIN_CHAR, "!"),
    ]
    for col, cell in enumerate(cells):
        buf.set_at(2, col, cell)
    return SnakeGame(reveal=True, screen_buffer=buf, is_new=False, score=42)


def test_new_game_defaults():
    game = new_game(reveal=False)
    assert game.is_new is True
    assert game.score == 0
    assert (game.width, game.height) == (40, 40)
    assert game.screen_buffer.get_at(20, 20) == EMPTY


def test_save_then_load_round_trip(tmp_path):
    path = tmp_path / "state.dump"
    game = sample_game()
    assert save_state(game, path) is True

    loaded = load_state(path)
    assert loaded is not None
    assert loaded.to_dict() == game.to_dict()
    assert loaded.is_new is False
    assert loaded.reveal is True
    assert loaded.score == 42


def test_snapshot_format(tmp_path):
    path = tmp_path / "state.dump"
    save_state(sample_game(), path)
    data = json.loads(path.read_text())
    assert set(data) == {"reveal", "is_new", "score", "screen_buffer"}
    assert data["screen_buffer"]["cells"][2 * 40 + 8] == {"PlainChar": "!"}
    assert data["screen_buffer"]["cells"][0] == "Food"


def test_missing_file_loads_nothing(tmp_path):
    assert load_state(tmp_path / "nope.dump") is None


def test_corrupt_file_loads_nothing(tmp_path, caplog):
    path = tmp_path / "state.dump"
    path.write_text("{not json")
    with caplog.at_level(logging.WARNING):
        assert load_state(path) is None
    assert "Ignoring unreadable saved game" in caplog.text


def test_schema_mismatch_loads_nothing(tmp_path):
    path = tmp_path / "state.dump"
    for payload in (
        [],
        {"reveal": False, "is_new": False, "score": 1},
        {"reveal": False, "is_new": False, "score": 1,
         "screen_buffer": {"width": 2, "height": 2, "cells": ["Empty"] * 3}},
        {"reveal": False, "is_new": False, "score": 1,
         "screen_buffer": {"width": 1, "height": 1, "cells": ["Apple"]}},
        {"reveal": False, "is_new": False, "score": 1,
         "screen_buffer": {"width": 1, "height": 1, "cells": [{"PlainChar": "ab"}]}},
        {"reveal": False, "is_new": False, "score": 1,
         "screen_buffer": ScreenBuffer(10, 10).to_dict()},
    ):
        path.write_text(json.dumps(payload))
        assert load_state(path) is None


def test_save_failure_is_reported_not_raised(tmp_path, caplog):
    path = tmp_path / "missing-dir" / "state.dump"
    with caplog.at_level(logging.WARNING):
        assert save_state(sample_game(), path) is False
    assert "Can't save the state" in caplog.text


def test_board_of_another_size_loads_nothing(tmp_path, caplog):
    path = tmp_path / "state.dump"
    save_state(SnakeGame(False, ScreenBuffer(10, 10, EMPTY), is_new=False), path)
    with caplog.at_level(logging.WARNING):
        assert load_state(path) is None
    assert "expected 40x40" in caplog.text
