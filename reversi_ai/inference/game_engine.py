"""
Game engine for Reversi AI.

This module provides the core game logic for Reversi: move legality, piece
flipping, turn arbitration (including the must-pass rule) and termination.

Game states are immutable values. Applying a move returns a new
ReversiGameState and never touches the original, so search trees can share
states freely without copying or synchronization.

Legality checking and flipping are both driven by a single line-walking
routine, ``process_lines_for_move``, so the two can never disagree about which
discs a move captures.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from reversi_ai.config import BOARD_SIZE, DIRECTIONS, FIRST_MOVER
from reversi_ai.enums import Color, Piece, PhaseKind
from reversi_ai.inference.board import ReversiBoard

logger = logging.getLogger(__name__)

Grid = List[List[int]]
LineProcessor = Callable[[List[Tuple[int, int]]], None]


class Move(NamedTuple):
    """A board coordinate; compares equal to a plain (x, y) tuple."""
    x: int
    y: int


@dataclass(frozen=True)
class Phase:
    """Turn(color), Won(color) or Tie."""
    kind: PhaseKind
    color: Optional[Color] = None

    @classmethod
    def turn(cls, color: Color) -> "Phase":
        return cls(PhaseKind.TURN, color)

    @classmethod
    def won(cls, color: Color) -> "Phase":
        return cls(PhaseKind.WON, color)

    @classmethod
    def tie(cls) -> "Phase":
        return cls(PhaseKind.TIE, None)

    @property
    def is_terminal(self) -> bool:
        return self.kind is not PhaseKind.TURN

    def __str__(self) -> str:
        if self.kind is PhaseKind.TIE:
            return "tie"
        return f"{self.kind.value}({self.color.name.lower()})"


# ---------------------------------------------------------------------------
# Line walking
# ---------------------------------------------------------------------------

def process_lines_for_move(grid: Grid, size: int, x: int, y: int, color_value: int,
                           line_processor: Optional[LineProcessor] = None) -> bool:
    """
    Walk the eight compass lines out of (x, y) looking for captures.

    A line captures when it crosses at least one opponent disc and then reaches
    a disc of ``color_value``. Without a ``line_processor`` the walk stops at the
    first capturing line and returns True. With one, every direction is walked
    and the processor is called with the opponent cells of each capturing line.

    Args:
        grid: Board contents as nested lists indexed [x][y]
        size: Board size
        x, y: Target cell
        color_value: Piece value of the mover
        line_processor: Optional callback receiving the cells to flip per line

    Returns:
        True if at least one line captures (the move is legal)
    """
    if not (0 <= x < size and 0 <= y < size):
        return False
    if grid[x][y] != Piece.EMPTY.value:
        return False

    captured_any = False
    for dx, dy in DIRECTIONS:
        cx, cy = x + dx, y + dy
        crossed = []
        while 0 <= cx < size and 0 <= cy < size:
            value = grid[cx][cy]
            if value == Piece.EMPTY.value:
                break
            if value == color_value:
                if crossed:
                    if line_processor is None:
                        return True
                    captured_any = True
                    line_processor(crossed)
                break
            crossed.append((cx, cy))
            cx += dx
            cy += dy
    return captured_any


def has_moves(grid: Grid, size: int, color: Color) -> bool:
    for x in range(size):
        for y in range(size):
            if process_lines_for_move(grid, size, x, y, color.value):
                return True
    return False


def resolve_phase(grid: Grid, size: int, mover: Color) -> Phase:
    """
    Decide the phase that follows a move by ``mover``.

    1. Board full: compare disc counts.
    2. Opponent has a move: opponent's turn.
    3. Mover still has a move: mover plays again (opponent must pass).
    4. Neither side can move: compare disc counts.
    """
    board_full = all(value != Piece.EMPTY.value for row in grid for value in row)
    if not board_full:
        opponent = mover.opposite()
        if has_moves(grid, size, opponent):
            return Phase.turn(opponent)
        if has_moves(grid, size, mover):
            return Phase.turn(mover)
    return final_phase(grid)


def final_phase(grid: Grid) -> Phase:
    black = sum(row.count(Color.BLACK.value) for row in grid)
    white = sum(row.count(Color.WHITE.value) for row in grid)
    if black > white:
        return Phase.won(Color.BLACK)
    if white > black:
        return Phase.won(Color.WHITE)
    return Phase.tie()


# ---------------------------------------------------------------------------
# Game state
# ---------------------------------------------------------------------------

class ReversiGameState:
    """
    Immutable Reversi position: a frozen board plus the game phase.

    Equality compares board contents and phase; the hash uses board contents
    only, so equal states always hash equal.
    """

    __slots__ = ("_board", "_phase", "_grid")

    def __init__(self, board: ReversiBoard, phase: Phase, _grid: Optional[Grid] = None):
        # Takes ownership of ``board`` and freezes it.
        if not isinstance(phase, Phase):
            raise TypeError(f"phase must be Phase, got {type(phase)}")
        self._board = board.freeze()
        self._phase = phase
        self._grid = _grid if _grid is not None else board.cells.tolist()

    @classmethod
    def new_game(cls, size: int = BOARD_SIZE, first_mover: Color = FIRST_MOVER) -> "ReversiGameState":
        """
        Create the opening position: two discs per color on the center cells,
        white on the main diagonal, and ``first_mover`` to play.
        """
        board = ReversiBoard(size)
        mid = size // 2
        board.set_piece(mid - 1, mid - 1, Piece.WHITE)
        board.set_piece(mid, mid, Piece.WHITE)
        board.set_piece(mid - 1, mid, Piece.BLACK)
        board.set_piece(mid, mid - 1, Piece.BLACK)
        return cls(board, Phase.turn(first_mover))

    @classmethod
    def from_board(cls, board: ReversiBoard, to_move: Color) -> "ReversiGameState":
        """
        Build a state from an arbitrary board with ``to_move`` nominally next.

        The phase is resolved with the same rules used after a move: if
        ``to_move`` cannot move the turn passes, and if nobody can move (or the
        board is full) the game is over.
        """
        board = board.copy()
        grid = board.cells.tolist()
        if has_moves(grid, board.size, to_move) and not board.is_full:
            phase = Phase.turn(to_move)
        else:
            phase = resolve_phase(grid, board.size, to_move.opposite())
        return cls(board, phase, _grid=grid)

    # ---------- Accessors ----------

    @property
    def board(self) -> ReversiBoard:
        """The (read-only) board of this state."""
        return self._board

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def size(self) -> int:
        return self._board.size

    @property
    def is_terminal(self) -> bool:
        return self._phase.is_terminal

    @property
    def winner(self) -> Optional[Color]:
        if self._phase.kind is PhaseKind.WON:
            return self._phase.color
        return None

    def current_color(self) -> Optional[Color]:
        """Color to move, or None once the game is over."""
        if self._phase.kind is PhaseKind.TURN:
            return self._phase.color
        return None

    def is_turn_of(self, color: Color) -> bool:
        return self._phase.kind is PhaseKind.TURN and self._phase.color is color

    def number_of_pieces(self, color: Color) -> int:
        return sum(row.count(color.value) for row in self._grid)

    def occupied_count(self) -> int:
        return sum(1 for row in self._grid for value in row if value != Piece.EMPTY.value)

    # ---------- Rules ----------

    def is_valid_move(self, move: Sequence[int], color: Color) -> bool:
        """True if placing ``color`` at ``move`` captures at least one disc."""
        x, y = move
        return process_lines_for_move(self._grid, self.size, x, y, color.value)

    def all_moves(self, color: Color) -> List[Move]:
        """All legal moves for ``color`` in row-major order (x outer, y inner)."""
        size = self.size
        grid = self._grid
        value = color.value
        return [Move(x, y) for x in range(size) for y in range(size)
                if process_lines_for_move(grid, size, x, y, value)]

    def legal_moves(self) -> List[Move]:
        """Legal moves for the side to move; empty once the game is over."""
        color = self.current_color()
        return self.all_moves(color) if color is not None else []

    def has_moves(self, color: Color) -> bool:
        return has_moves(self._grid, self.size, color)

    def apply_move(self, move: Sequence[int], color: Color) -> "ReversiGameState":
        """
        Play ``move`` for ``color`` and return the resulting state.

        If it is not ``color``'s turn, or the move captures nothing (including
        off-board coordinates), the move is rejected and ``self`` is returned
        unchanged.
        """
        if not self.is_turn_of(color):
            logger.debug(f"Rejected move {tuple(move)}: not {color.name.lower()}'s turn ({self._phase})")
            return self
        x, y = move
        flips: List[Tuple[int, int]] = []
        if not process_lines_for_move(self._grid, self.size, x, y, color.value, flips.extend):
            logger.debug(f"Rejected move {tuple(move)} for {color.name.lower()}: no capture")
            return self

        cells = self._board.cells.copy()
        cells[x, y] = color.value
        for fx, fy in flips:
            cells[fx, fy] = color.value
        grid = cells.tolist()
        phase = resolve_phase(grid, self.size, color)
        return ReversiGameState(ReversiBoard(cells=cells), phase, _grid=grid)

    # ---------- Value semantics ----------

    def __eq__(self, other) -> bool:
        if not isinstance(other, ReversiGameState):
            return NotImplemented
        return self._phase == other._phase and self._board == other._board

    def __hash__(self) -> int:
        return hash(self._board)

    def __repr__(self) -> str:
        return (f"ReversiGameState(size={self.size}, phase={self._phase}, "
                f"black={self.number_of_pieces(Color.BLACK)}, white={self.number_of_pieces(Color.WHITE)})")


def new_game(size: int = BOARD_SIZE, first_mover: Color = FIRST_MOVER) -> ReversiGameState:
    return ReversiGameState.new_game(size, first_mover)


def apply_move(state: ReversiGameState, move: Sequence[int], color: Color) -> ReversiGameState:
    """Functional form of ReversiGameState.apply_move."""
    return state.apply_move(move, color)


def board_from_rows(rows: Sequence[str]) -> ReversiBoard:
    """
    Build a board from text rows, one row per x index.

    'X'/'B' are black, 'O'/'W' are white, '.' is empty; spaces are ignored.
    Mostly useful for setting up positions in tests and scripts.
    """
    symbols = {".": Piece.EMPTY.value, "X": Piece.BLACK.value, "B": Piece.BLACK.value,
               "O": Piece.WHITE.value, "W": Piece.WHITE.value}
    parsed = []
    for row in rows:
        cells = [c for c in row.upper() if not c.isspace()]
        try:
            parsed.append([symbols[c] for c in cells])
        except KeyError as e:
            raise ValueError(f"Invalid board symbol {e.args[0]!r} in row {row!r}") from None
    if any(len(r) != len(parsed) for r in parsed):
        raise ValueError(f"Board rows must form a square, got {[len(r) for r in parsed]}")
    return ReversiBoard(cells=np.array(parsed, dtype=np.int8))
