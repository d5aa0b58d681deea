"""
Static position evaluators for Reversi search.

Evaluators score a game state from the point of view of a given color:
positive values favor that color. They are pure and deterministic, so the
alpha-beta search can call them on any node without side effects.
"""

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Dict, Type

import numpy as np

from reversi_ai.config import (
    ADJACENT_TO_CORNER_WEIGHT,
    CENTER_WEIGHT,
    CORNER_WEIGHT,
    EDGE_WEIGHT,
)
from reversi_ai.enums import Color
from reversi_ai.inference.game_engine import ReversiGameState


@lru_cache(maxsize=None)
def generate_square_weights(size: int) -> np.ndarray:
    """
    Build the per-cell weight table for a board of the given size.

    Corners are strongly positive, the rest of the edge mildly positive, and
    the cells touching a corner (orthogonally or diagonally) are negative,
    since occupying them tends to hand the corner to the opponent. The table
    is computed once per size and returned read-only.
    """
    last = size - 1
    weights = np.full((size, size), CENTER_WEIGHT, dtype=np.int32)
    weights[0, :] = EDGE_WEIGHT
    weights[last, :] = EDGE_WEIGHT
    weights[:, 0] = EDGE_WEIGHT
    weights[:, last] = EDGE_WEIGHT

    for cx, cy in ((0, 0), (0, last), (last, 0), (last, last)):
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                x, y = cx + dx, cy + dy
                if (dx or dy) and 0 <= x < size and 0 <= y < size:
                    weights[x, y] = ADJACENT_TO_CORNER_WEIGHT
        weights[cx, cy] = CORNER_WEIGHT

    weights.flags.writeable = False
    return weights


class Evaluator(ABC):
    """Abstract base class for static evaluators."""

    name: str = ""

    @abstractmethod
    def evaluate(self, state: ReversiGameState, color: Color) -> float:
        """Score ``state`` for ``color``; positive favors ``color``."""
        pass

    def __call__(self, state: ReversiGameState, color: Color) -> float:
        return self.evaluate(state, color)


class WeightedSquareEvaluator(Evaluator):
    """Sum of square weights, positive for own discs and negative for the opponent's."""

    name = "weighted_square"

    def evaluate(self, state: ReversiGameState, color: Color) -> float:
        cells = state.board.cells
        weights = generate_square_weights(state.size)
        own = int(weights[cells == color.value].sum())
        opp = int(weights[cells == color.opposite().value].sum())
        return float(own - opp)


class CompositeEvaluator(Evaluator):
    """
    Disc difference plus corner control plus mobility.

    score = (own - opp) / total_cells + (own_corners - opp_corners) / 4 + mobility

    Each of the first two terms is bounded in [-1, 1].
    """

    name = "composite"

    def evaluate(self, state: ReversiGameState, color: Color) -> float:
        board = state.board
        opponent = color.opposite()
        total_cells = board.size * board.size

        disc_term = (state.number_of_pieces(color) - state.number_of_pieces(opponent)) / total_cells

        own_corners = 0
        opp_corners = 0
        for x, y in board.corners():
            value = int(board.cells[x, y])
            if value == color.value:
                own_corners += 1
            elif value == opponent.value:
                opp_corners += 1
        corner_term = (own_corners - opp_corners) / 4

        return disc_term + corner_term + self._mobility_term(state, color)

    def _mobility_term(self, state: ReversiGameState, color: Color) -> float:
        # Placeholder: mobility is not weighted yet.
        return 0.0


EVALUATORS: Dict[str, Type[Evaluator]] = {
    WeightedSquareEvaluator.name: WeightedSquareEvaluator,
    CompositeEvaluator.name: CompositeEvaluator,
}


def get_evaluator(name: str) -> Evaluator:
    """Get an evaluator instance by name."""
    if name not in EVALUATORS:
        raise ValueError(f"Unknown evaluator: {name}. Available: {list(EVALUATORS.keys())}")
    return EVALUATORS[name]()


def list_available_evaluators() -> list:
    return list(EVALUATORS.keys())
