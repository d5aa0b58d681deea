"""
Board storage for Reversi.

The board is a square N×N numpy int8 array indexed ``[x, y]`` holding Piece
values (0 empty, 1 black, 2 white). It knows nothing about turns or legality;
those live in the game engine.
"""

from typing import Iterator, List, Optional, Tuple

import numpy as np

from reversi_ai.config import BOARD_SIZE, MIN_BOARD_SIZE
from reversi_ai.enums import Color, Piece, color_to_piece, get_piece_display_symbol, int_to_piece


class ReversiBoard:
    """Fixed-size square grid of pieces with O(1) lookup and mutation."""

    __slots__ = ("size", "cells")

    def __init__(self, size: int = BOARD_SIZE, cells: Optional[np.ndarray] = None):
        if cells is not None:
            if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
                raise ValueError(f"Board array must be square, got shape {cells.shape}")
            size = int(cells.shape[0])
        if size < MIN_BOARD_SIZE:
            raise ValueError(f"Board size must be at least {MIN_BOARD_SIZE}, got {size}")
        self.size = size
        self.cells = cells if cells is not None else np.zeros((size, size), dtype=np.int8)

    @property
    def width(self) -> int:
        return self.size

    @property
    def height(self) -> int:
        return self.size

    def is_valid_coordinate(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def piece_at(self, x: int, y: int) -> Piece:
        """
        Get the piece at a specific position.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not self.is_valid_coordinate(x, y):
            raise IndexError(f"Position ({x}, {y}) is out of bounds for size {self.size}")
        return int_to_piece(int(self.cells[x, y]))

    def set_piece(self, x: int, y: int, piece: Piece) -> None:
        """
        Place a piece (or Piece.EMPTY) at the specified position.

        Raises:
            IndexError: If coordinates are out of bounds
            ValueError: If the board has been frozen
        """
        if not self.is_valid_coordinate(x, y):
            raise IndexError(f"Position ({x}, {y}) is out of bounds for size {self.size}")
        self.cells[x, y] = piece.value

    def is_empty_at(self, x: int, y: int) -> bool:
        return self.is_valid_coordinate(x, y) and self.cells[x, y] == Piece.EMPTY.value

    def number_of_pieces(self, color: Color) -> int:
        return int(np.count_nonzero(self.cells == color_to_piece(color).value))

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    @property
    def is_full(self) -> bool:
        return self.occupied_count() == self.size * self.size

    def corners(self) -> List[Tuple[int, int]]:
        last = self.size - 1
        return [(0, 0), (0, last), (last, 0), (last, last)]

    def iter_coordinates(self) -> Iterator[Tuple[int, int]]:
        """Yield every coordinate in row-major order (x outer, y inner)."""
        for x in range(self.size):
            for y in range(self.size):
                yield x, y

    def copy(self) -> "ReversiBoard":
        """Return a writable copy of this board."""
        return ReversiBoard(cells=self.cells.copy())

    def freeze(self) -> "ReversiBoard":
        """Make the underlying array read-only; used for boards owned by a game state."""
        self.cells.flags.writeable = False
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, ReversiBoard):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.cells, other.cells)

    def __hash__(self) -> int:
        return hash((self.size, self.cells.tobytes()))

    def __repr__(self) -> str:
        return f"ReversiBoard(size={self.size}, black={self.number_of_pieces(Color.BLACK)}, white={self.number_of_pieces(Color.WHITE)})"

    def __str__(self) -> str:
        rows = []
        for x in range(self.size):
            rows.append(" ".join(get_piece_display_symbol(int_to_piece(int(v))) for v in self.cells[x]))
        return "\n".join(rows)
