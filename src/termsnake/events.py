# events.py
"""
Keyboard input for the game loop.

A daemon thread blocks on the terminal and pushes every keystroke into a
KeyEventQueue; the game loop drains the queue once per tick.
"""
from __future__ import annotations
import logging
import threading
from typing import List, Sequence, TypeVar

from .config import POLL_TIMEOUT

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KeyEventQueue:
    """Order-preserving, lock-guarded list of key names."""

    def __init__(self):
        self._events: List[str] = []
        self._lock = threading.Lock()

    def push(self, key: str) -> None:
        with self._lock:
            self._events.append(key)

    def get_all_events(self) -> List[str]:
        """Remove and return everything queued since the last call."""
        with self._lock:
            events, self._events = self._events, []
        return events


def key_name(keystroke) -> str:
    """'KEY_LEFT' style name for special keys, the character itself otherwise."""
    if keystroke.is_sequence and keystroke.name:
        return keystroke.name
    return str(keystroke)


def send_events(term, queue: KeyEventQueue, poll_timeout: float = POLL_TIMEOUT) -> None:
    """Poll the terminal forever, forwarding every keystroke to `queue`."""
    while True:
        keystroke = term.inkey(timeout=poll_timeout)
        if keystroke:
            queue.push(key_name(keystroke))


def start_input_thread(term, queue: KeyEventQueue) -> threading.Thread:
    # never joined: the thread dies with the process
    thread = threading.Thread(target=send_events, args=(term, queue), name="key-events", daemon=True)
    thread.start()
    logger.debug("Input thread started")
    return thread


def find_matches(look_in: Sequence[T], look_for: Sequence[T]) -> List[T]:
    """Every item of `look_in` equal to one of `look_for`, in `look_in` order."""
    return [b for b in look_in if any(a == b for a in look_for)]
