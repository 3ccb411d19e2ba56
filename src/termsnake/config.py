# config.py
from __future__ import annotations
from dataclasses import dataclass

# ----- Board -----
GRID_W, GRID_H = 40, 40
PADDING = 4                     # text inset (cells) on every side of the board

# ----- Timing -----
DEFAULT_FPS = 30.0
INTRO_SECONDS = 5
POLL_TIMEOUT = 0.05             # seconds the input thread blocks per inkey()

# ----- Persistence -----
STATE_FILE = "state.dump"

# ----- Keys (blessed keystroke names, or the literal character) -----
KEY_LEFT, KEY_RIGHT, KEY_UP, KEY_DOWN = "KEY_LEFT", "KEY_RIGHT", "KEY_UP", "KEY_DOWN"
QUIT_KEYS = ("KEY_ESCAPE", "q")

# ----- Glyphs -----
BLOCK = "█"

# ----- The message hidden under the food -----
TEXT = """Hello, stranger. You found the message under the food.

Every black square you eat uncovers a few more letters. Take your time, the snake cannot die here, it only gets shorter.

Be kind to the people around you. Write code you would like to read in a year. Sleep enough.

Press ESC when you are done. The board is saved, so you can come back later and keep digging.
"""


# ----- Runtime configuration -----
@dataclass
class Config:
    reveal: bool = False
    new: bool = False
    target_fps: float = DEFAULT_FPS
    state_file: str = STATE_FILE

    @classmethod
    def from_args(cls, args) -> "Config":
        return cls(
            reveal=args.reveal,
            new=args.new,
            target_fps=args.speed,
            state_file=args.state_file,
        )
