"""
Format conversion utilities for Reversi AI.

Moves are (x, y) pairs internally. For people they are written in algebraic
notation: a column letter taken from ``y`` followed by a row number taken from
``x + 1``, so (2, 3) is "d3".
"""

import re
import string
from typing import List, Sequence

from reversi_ai.config import BOARD_SIZE
from reversi_ai.inference.game_engine import Move

LETTERS = string.ascii_lowercase

_NOTATION_RE = re.compile(r"^([a-z])(\d{1,2})$")


def move_to_notation(move: Sequence[int]) -> str:
    x, y = move
    if x < 0 or not 0 <= y < len(LETTERS):
        raise ValueError(f"Move {tuple(move)} cannot be written in algebraic notation")
    return f"{LETTERS[y]}{x + 1}"


def notation_to_move(text: str, board_size: int = BOARD_SIZE) -> Move:
    """
    Parse algebraic notation ("d3", case-insensitive) into a Move.

    Raises:
        ValueError: If the text is malformed or off the board
    """
    match = _NOTATION_RE.match(text.strip().lower())
    if not match:
        raise ValueError(f"Invalid move notation: {text!r}")
    letter, number = match.group(1), int(match.group(2))
    y = LETTERS.index(letter)
    x = number - 1
    if not (0 <= x < board_size and 0 <= y < board_size):
        raise ValueError(f"Move {text!r} is off a {board_size}x{board_size} board")
    return Move(x, y)


def moves_to_notation(moves: Sequence[Sequence[int]]) -> List[str]:
    return [move_to_notation(m) for m in moves]
