import io

import pytest
from blessed import Terminal

import termsnake.game


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def term(stream):
    """A terminal that emits no escape sequences, so output is plain glyphs."""
    return Terminal(force_styling=None, stream=stream)


@pytest.fixture
def no_text(monkeypatch):
    """Keep the flavor text off the board so cells are easy to assert on."""
    monkeypatch.setattr(termsnake.game, "TEXT", "")


@pytest.fixture
def no_sleep(monkeypatch):
    calls = []
    monkeypatch.setattr(termsnake.game.time, "sleep", lambda s: calls.append(s))
    return calls
