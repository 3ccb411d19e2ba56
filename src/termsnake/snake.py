# snake.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence
import random

from .config import KEY_LEFT, KEY_RIGHT, KEY_UP, KEY_DOWN
from .screen_buffer import Coordinate, ScreenBuffer, SNAKE_HEAD, SNAKE_BODY, EMPTY


# ----- Directions (d_row, d_col) -----
class Direction(Enum):
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)


# clockwise, used by two-key steering
DIRECTIONS_ORDERED = [Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT]


# ---------- Movement / collisions ----------
def move_snake(body: List[Coordinate], direction: Direction) -> Coordinate:
    """Push a new head one cell in `direction`, pop and return the old tail."""
    d_row, d_col = direction.value
    head = body[0]
    row, col = head.row + d_row, head.col + d_col
    if row < 0 or col < 0:
        raise ValueError(f"Snake at {head} cannot move {direction.name}: off the grid")

    body.insert(0, Coordinate(row, col))
    return body.pop()


def snake_item_collision(body: Sequence[Coordinate], item: Coordinate) -> bool:
    return item in body


def check_border_and_ego_collision(body: Sequence[Coordinate], width: int, height: int) -> bool:
    head = body[0]
    return (
        head.row == 0
        or head.row == height - 1
        or head.col == 0
        or head.col == width - 1
        or snake_item_collision(body[1:], head)
    )


# ---------- Entities ----------
@dataclass
class Snake:
    body: List[Coordinate]  # head at index 0
    direction: Direction = Direction.UP

    @property
    def head(self) -> Coordinate:
        return self.body[0]

    def grow(self) -> None:
        """Duplicate the tail; the next move's pop consumes the copy."""
        self.body.append(self.body[-1])

    @classmethod
    def new(cls) -> "Snake":
        return cls([Coordinate(18, 10), Coordinate(19, 10), Coordinate(20, 10)])

    @classmethod
    def new_random(cls, height: int, width: int, rng: Optional[random.Random] = None) -> "Snake":
        rng = rng or random
        row = rng.randrange(1, height - 4)
        col = rng.randrange(1, width - 1)
        return cls([Coordinate(row, col), Coordinate(row + 1, col), Coordinate(row + 2, col)])


@dataclass(frozen=True)
class KeyBindings:
    left: str = KEY_LEFT
    right: str = KEY_RIGHT
    up: str = KEY_UP
    down: str = KEY_DOWN

    def all(self) -> List[str]:
        return [self.left, self.right, self.up, self.down]


@dataclass
class Player:
    keys: KeyBindings = field(default_factory=KeyBindings)
    snake: Snake = field(default_factory=Snake.new)

    def update_snake_direction(self, key: str, four_key_steering: bool = True) -> None:
        if four_key_steering:
            self._update_direction_four_keys(key)
        else:
            self._update_direction_two_keys(key)

    def _update_direction_four_keys(self, key: str) -> None:
        """Arrow keys pick a direction; turns along the current axis are ignored."""
        vertical = self.snake.direction.is_vertical
        if key == self.keys.up and not vertical:
            self.snake.direction = Direction.UP
        elif key == self.keys.down and not vertical:
            self.snake.direction = Direction.DOWN
        elif key == self.keys.left and vertical:
            self.snake.direction = Direction.LEFT
        elif key == self.keys.right and vertical:
            self.snake.direction = Direction.RIGHT

    def _update_direction_two_keys(self, key: str) -> None:
        """Left/right rotate the heading a quarter turn."""
        idx = DIRECTIONS_ORDERED.index(self.snake.direction)
        if key == self.keys.left:
            idx -= 1
        elif key == self.keys.right:
            idx += 1
        self.snake.direction = DIRECTIONS_ORDERED[idx % 4]


# ---------- Buffer helpers ----------
def add_snake_to_buffer(buffer: ScreenBuffer, body: Sequence[Coordinate]) -> None:
    buffer.set_at(body[0].row, body[0].col, SNAKE_HEAD)
    for coord in body[1:]:
        buffer.set_at(coord.row, coord.col, SNAKE_BODY)


def clear_snake_from_buffer(buffer: ScreenBuffer, body: Sequence[Coordinate]) -> None:
    for coord in body:
        buffer.set_at(coord.row, coord.col, EMPTY)
