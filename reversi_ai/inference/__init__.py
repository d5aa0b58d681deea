"""
Game engine and search module for Reversi AI.

This module provides the game state machine, static evaluators, and the
alpha-beta and Monte Carlo tree search engines.
"""

from .game_engine import Move, Phase, ReversiGameState, apply_move, new_game
from .alpha_beta import AlphaBetaSearch
from .mcts import MonteCarloTreeSearch

__all__ = [
    'Move',
    'Phase',
    'ReversiGameState',
    'apply_move',
    'new_game',
    'AlphaBetaSearch',
    'MonteCarloTreeSearch',
]
