# screen_buffer.py
"""
Character-cell grid the game draws into, and its terminal renderer.

Cells are stored row-major (index = col + row * width) in two flat numpy
arrays: one holding the CellKind code, one holding the overlay character
(empty string when the kind carries none).
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional, TextIO, Tuple

import numpy as np  # type: ignore

from .config import BLOCK


# ---------- Cell content ----------
class CellKind(IntEnum):
    SNAKE_HEAD = 0
    SNAKE_HEAD_CHAR = 1
    SNAKE_BODY = 2
    SNAKE_BODY_CHAR = 3
    FOOD = 4
    BORDER = 5
    BORDER_CHAR = 6
    EMPTY = 7
    PLAIN_CHAR = 8

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def has_char(self) -> bool:
        return self in _CHAR_KINDS


_LABELS = {
    CellKind.SNAKE_HEAD: "SnakeHead",
    CellKind.SNAKE_HEAD_CHAR: "SnakeHeadChar",
    CellKind.SNAKE_BODY: "SnakeBody",
    CellKind.SNAKE_BODY_CHAR: "SnakeBodyChar",
    CellKind.FOOD: "Food",
    CellKind.BORDER: "Border",
    CellKind.BORDER_CHAR: "BorderChar",
    CellKind.EMPTY: "Empty",
    CellKind.PLAIN_CHAR: "PlainChar",
}
_KINDS_BY_LABEL = {label: kind for kind, label in _LABELS.items()}

_CHAR_KINDS = frozenset({
    CellKind.SNAKE_HEAD_CHAR,
    CellKind.SNAKE_BODY_CHAR,
    CellKind.BORDER_CHAR,
    CellKind.PLAIN_CHAR,
})

# Base kind -> overlay kind used when text is written onto the cell.
# Food is absent: text drawn onto food stays hidden until the food is eaten.
_OVERLAY = {
    CellKind.SNAKE_HEAD: CellKind.SNAKE_HEAD_CHAR,
    CellKind.SNAKE_HEAD_CHAR: CellKind.SNAKE_HEAD_CHAR,
    CellKind.SNAKE_BODY: CellKind.SNAKE_BODY_CHAR,
    CellKind.SNAKE_BODY_CHAR: CellKind.SNAKE_BODY_CHAR,
    CellKind.BORDER: CellKind.BORDER_CHAR,
    CellKind.BORDER_CHAR: CellKind.BORDER_CHAR,
    CellKind.EMPTY: CellKind.PLAIN_CHAR,
    CellKind.PLAIN_CHAR: CellKind.PLAIN_CHAR,
}


@dataclass(frozen=True)
class Cell:
    kind: CellKind
    char: Optional[str] = None

    def __post_init__(self):
        if self.kind.has_char:
            if not isinstance(self.char, str) or len(self.char) != 1:
                raise ValueError(f"{self.kind.label} needs exactly one character, got {self.char!r}")
        elif self.char is not None:
            raise ValueError(f"{self.kind.label} does not carry a character")

    def with_char(self, char: str) -> "Cell":
        """Return the overlay variant of this cell showing `char`."""
        overlay = _OVERLAY.get(self.kind)
        if overlay is None:
            return self
        return Cell(overlay, char)

    def encode(self):
        if self.char is None:
            return self.kind.label
        return {self.kind.label: self.char}

    @classmethod
    def decode(cls, raw) -> "Cell":
        if isinstance(raw, str):
            return cls(_KINDS_BY_LABEL[raw])
        if isinstance(raw, dict) and len(raw) == 1:
            ((label, char),) = raw.items()
            return cls(_KINDS_BY_LABEL[label], char)
        raise ValueError(f"Malformed cell: {raw!r}")


SNAKE_HEAD = Cell(CellKind.SNAKE_HEAD)
SNAKE_BODY = Cell(CellKind.SNAKE_BODY)
FOOD = Cell(CellKind.FOOD)
BORDER = Cell(CellKind.BORDER)
EMPTY = Cell(CellKind.EMPTY)


@dataclass(frozen=True)
class Coordinate:
    row: int
    col: int


# ---------- Colors ----------
def style_cell(term, cell: Cell, is_padded_char: bool) -> str:
    """
    Styled text for one output column of a cell.
    The padding column always shows the base block; the other one shows the
    overlay character when the cell has one.
    """
    kind = cell.kind
    if kind in (CellKind.SNAKE_HEAD, CellKind.SNAKE_HEAD_CHAR):
        if kind == CellKind.SNAKE_HEAD or is_padded_char:
            return term.bright_green(BLOCK)
        return term.black_on_bright_green(cell.char)
    if kind in (CellKind.SNAKE_BODY, CellKind.SNAKE_BODY_CHAR):
        if kind == CellKind.SNAKE_BODY or is_padded_char:
            return term.green(BLOCK)
        return term.black_on_green(cell.char)
    if kind == CellKind.FOOD:
        return term.black(BLOCK)
    if kind in (CellKind.BORDER, CellKind.BORDER_CHAR):
        if kind == CellKind.BORDER or is_padded_char:
            return term.blue(BLOCK)
        return term.white_on_blue(cell.char)
    if kind == CellKind.EMPTY or is_padded_char:
        return term.white(BLOCK)
    return term.black_on_white(cell.char)


# ---------- Text layout ----------
def wrap_text(text: str, allowed_width: int) -> List[str]:
    """
    Greedy word wrap. Words are appended with a leading space while the line
    stays shorter than `allowed_width`; every newline forces a break.
    """
    rows: List[str] = []
    row = ""

    def push_word(word: str) -> None:
        nonlocal row
        if len(row) + len(word) + 1 < allowed_width:
            row += " " + word
        else:
            rows.append(row)
            row = word

    for word in text.split(" "):
        if "\n" in word:
            for part in word.split("\n"):
                if part:
                    push_word(part)
                rows.append(row)
                row = ""
            # the last part keeps collecting words
            row = rows.pop()
            continue
        if word:
            push_word(word)

    if row:
        rows.append(row)
    return rows


# ---------- Buffer ----------
class ScreenBuffer:
    def __init__(self, width: int, height: int, initial: Cell = EMPTY):
        self.width = width
        self.height = height
        self.kinds = np.full(width * height, int(initial.kind), dtype=np.int8)
        self.chars = np.full(width * height, initial.char or "", dtype="<U1")

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Cell ({row}, {col}) outside {self.width}x{self.height} buffer")
        return col + row * self.width

    def get_at(self, row: int, col: int) -> Cell:
        i = self._index(row, col)
        kind = CellKind(int(self.kinds[i]))
        return Cell(kind, str(self.chars[i]) if kind.has_char else None)

    def set_at(self, row: int, col: int, cell: Cell) -> None:
        i = self._index(row, col)
        self.kinds[i] = int(cell.kind)
        self.chars[i] = cell.char or ""

    def set_all(self, cell: Cell) -> None:
        self.kinds.fill(int(cell.kind))
        self.chars.fill(cell.char or "")

    def add_border(self, cell: Cell) -> None:
        kinds = self.kinds.reshape(self.height, self.width)
        chars = self.chars.reshape(self.height, self.width)
        for grid, value in ((kinds, int(cell.kind)), (chars, cell.char or "")):
            grid[0, :] = value
            grid[-1, :] = value
            grid[:, 0] = value
            grid[:, -1] = value

    def set_centered_text_at_row(self, row: int, text: str) -> None:
        start_col = max(0, (self.width - len(text)) // 2)
        for offset, sym in enumerate(text):
            col = start_col + offset
            self.set_at(row, col, self.get_at(row, col).with_char(sym))

    def fill_with_text(self, text: str, padding: int) -> None:
        allowed_width = self.width - 2 * padding
        allowed_height = self.height - 2 * padding
        rows = wrap_text(text, allowed_width)
        assert len(rows) <= allowed_height, (
            f"{len(rows)} lines of text do not fit into {allowed_height} rows"
        )

        top = padding + (allowed_height - len(rows)) // 2
        for i, line in enumerate(rows):
            self.set_centered_text_at_row(top + i, line)

    # ---------- Output ----------
    def render(self, term, stream: TextIO) -> None:
        """
        Paint the whole buffer. Every cell takes two terminal columns so the
        pixels come out roughly square; the frame is written and flushed once.
        """
        styled: Dict[Tuple[int, str], str] = {}
        kinds = self.kinds.tolist()
        chars = self.chars.tolist()
        out = []
        for row in range(self.height):
            out.append(term.move_xy(0, row))
            for i in range(row * self.width, (row + 1) * self.width):
                key = (kinds[i], chars[i])
                pair = styled.get(key)
                if pair is None:
                    kind = CellKind(kinds[i])
                    cell = Cell(kind, chars[i] if kind.has_char else None)
                    pair = style_cell(term, cell, True) + style_cell(term, cell, False)
                    styled[key] = pair
                out.append(pair)
        stream.write("".join(out))
        stream.flush()

    # ---------- Serialization ----------
    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "cells": [
                self.get_at(row, col).encode()
                for row in range(self.height)
                for col in range(self.width)
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScreenBuffer":
        width, height = int(data["width"]), int(data["height"])
        cells = data["cells"]
        if width <= 0 or height <= 0 or len(cells) != width * height:
            raise ValueError(f"Expected {width}x{height} cells, got {len(cells)}")

        buffer = cls(width, height)
        for i, raw in enumerate(cells):
            cell = Cell.decode(raw)
            buffer.kinds[i] = int(cell.kind)
            buffer.chars[i] = cell.char or ""
        return buffer
