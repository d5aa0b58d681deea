import numpy as np
import pytest

from reversi_ai.enums import Color, Piece
from reversi_ai.inference.board import ReversiBoard


@pytest.fixture
def empty_board():
    return ReversiBoard(8)


def test_empty_board(empty_board):
    assert empty_board.size == 8
    assert empty_board.width == empty_board.height == 8
    assert empty_board.cells.shape == (8, 8)
    assert empty_board.cells.dtype == np.int8
    assert empty_board.occupied_count() == 0
    assert not empty_board.is_full


def test_board_too_small():
    with pytest.raises(ValueError, match="at least 4"):
        ReversiBoard(3)


def test_board_must_be_square():
    with pytest.raises(ValueError, match="square"):
        ReversiBoard(cells=np.zeros((4, 5), dtype=np.int8))


def test_set_and_get_piece(empty_board):
    empty_board.set_piece(2, 5, Piece.BLACK)
    assert empty_board.piece_at(2, 5) is Piece.BLACK
    assert empty_board.cells[2, 5] == Piece.BLACK.value
    assert empty_board.piece_at(5, 2) is Piece.EMPTY
    assert not empty_board.is_empty_at(2, 5)
    assert empty_board.is_empty_at(5, 2)


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (8, 0), (0, 8)])
def test_out_of_bounds(empty_board, x, y):
    assert not empty_board.is_valid_coordinate(x, y)
    assert not empty_board.is_empty_at(x, y)
    with pytest.raises(IndexError):
        empty_board.piece_at(x, y)
    with pytest.raises(IndexError):
        empty_board.set_piece(x, y, Piece.WHITE)


def test_piece_counts(empty_board):
    empty_board.set_piece(0, 0, Piece.BLACK)
    empty_board.set_piece(0, 1, Piece.BLACK)
    empty_board.set_piece(7, 7, Piece.WHITE)
    assert empty_board.number_of_pieces(Color.BLACK) == 2
    assert empty_board.number_of_pieces(Color.WHITE) == 1
    assert empty_board.occupied_count() == 3


def test_is_full():
    board = ReversiBoard(4)
    for x, y in board.iter_coordinates():
        board.set_piece(x, y, Piece.WHITE)
    assert board.is_full


def test_corners():
    assert ReversiBoard(6).corners() == [(0, 0), (0, 5), (5, 0), (5, 5)]


def test_iter_coordinates_row_major():
    coords = list(ReversiBoard(4).iter_coordinates())
    assert len(coords) == 16
    assert coords[:5] == [(0, 0), (0, 1), (0, 2), (0, 3), (1, 0)]


def test_copy_is_independent(empty_board):
    empty_board.set_piece(1, 1, Piece.BLACK)
    clone = empty_board.copy()
    clone.set_piece(1, 1, Piece.WHITE)
    assert empty_board.piece_at(1, 1) is Piece.BLACK
    assert clone.piece_at(1, 1) is Piece.WHITE


def test_frozen_board_rejects_writes(empty_board):
    empty_board.freeze()
    with pytest.raises(ValueError):
        empty_board.set_piece(0, 0, Piece.BLACK)
    # Copies of a frozen board are writable again
    clone = empty_board.copy()
    clone.set_piece(0, 0, Piece.BLACK)


def test_equality_and_hash():
    a = ReversiBoard(4)
    b = ReversiBoard(4)
    assert a == b
    assert hash(a) == hash(b)
    b.set_piece(0, 0, Piece.BLACK)
    assert a != b
    assert ReversiBoard(4) != ReversiBoard(6)


def test_str_rendering():
    board = ReversiBoard(4)
    board.set_piece(0, 0, Piece.BLACK)
    board.set_piece(3, 3, Piece.WHITE)
    assert str(board).splitlines() == ["X . . .", ". . . .", ". . . .", ". . . O"]
