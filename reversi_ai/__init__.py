"""
Reversi AI

Reversi (Othello) rules engine with two automated opponents: a depth-limited
alpha-beta searcher with pluggable static evaluators, and an anytime Monte
Carlo Tree Search that reuses its tree across turns.
"""

# Version info
__version__ = "2025.1.0"
__author__ = "Reversi AI Team"

# Core modules that should be available
__all__ = [
    "enums",
    "config",
    "error_handling",
    "inference",
    "utils",
]
