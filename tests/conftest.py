import random

import pytest

from reversi_ai.enums import Color
from reversi_ai.inference.game_engine import ReversiGameState, board_from_rows


@pytest.fixture
def initial_state():
    return ReversiGameState.new_game(8)


@pytest.fixture
def small_state():
    return ReversiGameState.new_game(6)


@pytest.fixture
def must_pass_state():
    """
    Black to move with two captures available. Either one leaves White with
    no move, so Black plays again and the game ends after both.
    """
    board = board_from_rows([
        "XO..",
        "....",
        "XO..",
        "....",
    ])
    return ReversiGameState.from_board(board, Color.BLACK)


@pytest.fixture
def rng():
    return random.Random(1234)
