"""Snake for the terminal: eat the food, uncover the message underneath."""

__version__ = "0.1.0"
