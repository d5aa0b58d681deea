"""
Centralized enum definitions for Reversi AI semantic types.

This module is the single source of truth for representing colors, pieces and
game phases. Other modules should import these Enums rather than duplicating
constants.
"""

from enum import Enum
from typing import Optional


class StrictEnum(Enum):
    """Base class for enums that prevent cross-type comparisons."""
    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            raise TypeError(f"Cannot compare {self.__class__.__name__} with {type(other).__name__}")
        return super().__eq__(other)

    def __hash__(self):
        """Make enums hashable so they can be used as dictionary keys."""
        return hash(self.value)


class Color(StrictEnum):
    """Disc colors. Values match the occupied Piece values on the board array."""
    BLACK = 1
    WHITE = 2

    def opposite(self) -> "Color":
        return Color.WHITE if self is Color.BLACK else Color.BLACK


class Piece(StrictEnum):
    """Cell contents for the board array (int8 encoding)."""
    EMPTY = 0
    BLACK = 1
    WHITE = 2


class PhaseKind(StrictEnum):
    TURN = "turn"
    WON = "won"
    TIE = "tie"


# ============================================================================
# Helper Functions for Enum-Primitive Conversion
# ============================================================================

def color_to_piece(color: Color) -> Piece:
    """Convert Color enum to the Piece occupying a cell of that color."""
    return Piece(color.value)


def piece_to_color(piece: Piece) -> Optional[Color]:
    """Convert Piece enum to its Color, or None for an empty cell."""
    if piece is Piece.EMPTY:
        return None
    return Color(piece.value)


def int_to_piece(value: int) -> Piece:
    """Convert a raw board value to Piece enum."""
    if value not in (Piece.EMPTY.value, Piece.BLACK.value, Piece.WHITE.value):
        raise ValueError(f"Invalid piece value: {value}")
    return Piece(value)


def color_from_name(name: str) -> Color:
    """Parse 'black'/'white' (case-insensitive) into a Color."""
    mapping = {"black": Color.BLACK, "b": Color.BLACK, "white": Color.WHITE, "w": Color.WHITE}
    key = name.strip().lower()
    if key not in mapping:
        raise ValueError(f"Invalid color name: {name!r}")
    return mapping[key]


# ============================================================================
# Display Helpers
# ============================================================================

def get_piece_display_symbol(piece: Piece) -> str:
    """Get the ASCII display symbol for a piece."""
    symbols = {
        Piece.EMPTY: ".",
        Piece.BLACK: "X",
        Piece.WHITE: "O",
    }
    return symbols[piece]


def get_piece_unicode_symbol(piece: Piece) -> str:
    """Get the unicode symbol for a piece."""
    symbols = {
        Piece.EMPTY: "·",
        Piece.BLACK: "●",
        Piece.WHITE: "○",
    }
    return symbols[piece]
