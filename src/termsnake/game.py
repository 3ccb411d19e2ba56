# game.py
from __future__ import annotations
from typing import List, Optional, TextIO
import logging
import sys
import time

from .config import INTRO_SECONDS, PADDING, QUIT_KEYS, TEXT
from .events import KeyEventQueue, find_matches, start_input_thread
from .screen_buffer import ScreenBuffer, BORDER, EMPTY, FOOD, CellKind
from .snake import (
    Player, Snake,
    move_snake, check_border_and_ego_collision,
    add_snake_to_buffer, clear_snake_from_buffer,
)

logger = logging.getLogger(__name__)


def remaining_cycle_time(runtime: float, cycle_time: float) -> float:
    """How long to sleep so a tick that took `runtime` lasts `cycle_time`."""
    return max(0.0, cycle_time - runtime)


class SnakeGame:
    """
    One game session: the board, the score and whether the intro already ran.
    The snake itself is not part of the session; it lives only while `run`
    is executing and is cleared off the board before `run` returns.
    """

    def __init__(self, reveal: bool, screen_buffer: ScreenBuffer, is_new: bool = True, score: int = 0):
        self.reveal = reveal
        self.is_new = is_new
        self.score = score
        self.screen_buffer = screen_buffer

    @property
    def width(self) -> int:
        return self.screen_buffer.width

    @property
    def height(self) -> int:
        return self.screen_buffer.height

    # ---------- Intro ----------
    def play_intro(self, term, stream: TextIO) -> None:
        buf = self.screen_buffer
        buf.set_all(EMPTY)
        buf.set_centered_text_at_row(self.height // 2 - 6, "SNAKE")
        buf.set_centered_text_at_row(self.height // 2 - 4, "ESC to stop")
        buf.set_centered_text_at_row(self.height // 2 + 2, "~ CONTROLS IT by ARROWS ~")

        for n in reversed(range(INTRO_SECONDS)):
            buf.set_centered_text_at_row(self.height - 2, f"Starting in {n}")
            buf.render(term, stream)
            time.sleep(1)

        buf.set_all(EMPTY if self.reveal else FOOD)
        self.is_new = False
        logger.info(f"Intro finished, board seeded with {'nothing' if self.reveal else 'food'}")

    # ---------- Per-tick steps ----------
    def handle_events(self, player: Player, events: List[str]) -> bool:
        """Apply drained key events. Returns False when a quit key was pressed."""
        if not events:
            return True
        if find_matches(events, QUIT_KEYS):
            return False

        matches = find_matches(events, player.keys.all())
        if matches:
            player.update_snake_direction(matches[-1], four_key_steering=True)
        return True

    def tick(self, player: Player) -> None:
        """Advance the board by one step; the steps below run in this order."""
        self._clear_transient(player)
        self._update_state(player)
        self._paint_entities(player)
        self._paint_chrome()

    def _clear_transient(self, player: Player) -> None:
        removed_tail = move_snake(player.snake.body, player.snake.direction)
        self.screen_buffer.set_at(removed_tail.row, removed_tail.col, EMPTY)

    def _update_state(self, player: Player) -> None:
        snake = player.snake
        head = snake.head
        # must read before the snake is painted over the cell
        if self.screen_buffer.get_at(head.row, head.col).kind == CellKind.FOOD:
            self.score += 1
            snake.grow()
            logger.debug(f"Food eaten at {head}, score {self.score}")

        if check_border_and_ego_collision(snake.body, self.width, self.height):
            clear_snake_from_buffer(self.screen_buffer, snake.body)
            player.snake = Snake.new_random(self.height, self.width)
            logger.debug(f"Collision at {head}, respawned at {player.snake.head}")

    def _paint_entities(self, player: Player) -> None:
        add_snake_to_buffer(self.screen_buffer, player.snake.body)

    def _paint_chrome(self) -> None:
        buf = self.screen_buffer
        buf.add_border(BORDER)
        buf.set_centered_text_at_row(0, f"Score: {self.score}")
        buf.fill_with_text(TEXT, PADDING)

    # ---------- Main loop ----------
    def run(
        self,
        term,
        target_fps: float,
        stream: Optional[TextIO] = None,
        queue: Optional[KeyEventQueue] = None,
    ) -> None:
        """
        Play until ESC/q (or Ctrl-C). Without an explicit `queue` a background
        thread feeds one from the terminal.
        """
        stream = stream or sys.stdout
        player = Player()
        cycle_time = 1.0 / target_fps

        with term.cbreak(), term.hidden_cursor():
            if queue is None:
                queue = KeyEventQueue()
                start_input_thread(term, queue)

            stream.write(term.home + term.clear)
            stream.flush()
            try:
                if self.is_new:
                    self.play_intro(term, stream)

                logger.info(f"Running at {target_fps} fps, score {self.score}")
                loop_begin = loop_end = time.perf_counter()
                while True:
                    # constant cycle time of the loop, i.e. constant snake speed
                    delay = remaining_cycle_time(loop_end - loop_begin, cycle_time)
                    if delay > 0:
                        time.sleep(delay)

                    loop_begin = time.perf_counter()
                    if not self.handle_events(player, queue.get_all_events()):
                        break
                    self.tick(player)
                    self.screen_buffer.render(term, stream)
                    loop_end = time.perf_counter()
            except KeyboardInterrupt:
                logger.info("Interrupted, stopping the game")
            finally:
                # a saved board never shows a live snake
                clear_snake_from_buffer(self.screen_buffer, player.snake.body)
            stream.write(term.normal + term.move_xy(0, self.height) + "\n")
            stream.flush()
        logger.info(f"Game stopped with score {self.score}")

    # ---------- Serialization ----------
    def to_dict(self) -> dict:
        return {
            "reveal": self.reveal,
            "is_new": self.is_new,
            "score": self.score,
            "screen_buffer": self.screen_buffer.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SnakeGame":
        reveal, is_new, score = data["reveal"], data["is_new"], data["score"]
        if not isinstance(reveal, bool) or not isinstance(is_new, bool):
            raise ValueError("'reveal' and 'is_new' must be booleans")
        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            raise ValueError(f"Invalid score: {score!r}")
        return cls(
            reveal=reveal,
            screen_buffer=ScreenBuffer.from_dict(data["screen_buffer"]),
            is_new=is_new,
            score=score,
        )
