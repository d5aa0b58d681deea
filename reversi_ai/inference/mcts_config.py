"""
Configuration objects for MCTS search.

Centralizes the knobs for exploration, time budgeting and tree reuse so
callers can tune strength vs latency without editing core MCTS logic.
"""

from dataclasses import dataclass

from reversi_ai.config import (
    DEFAULT_EXPLORATION_CONSTANT,
    DEFAULT_INTERIM_INTERVAL_S,
    DEFAULT_REROOT_SEARCH_DEPTH,
    DEFAULT_THINK_TIME_S,
)


@dataclass
class MCTSConfig:
    """
    Core MCTS parameters.

    - exploration_constant: C in UCB1 = wins/plays + C * sqrt(ln(parent plays) / plays)
    - think_time_s: default wall-clock budget per move for timed searches
    - interim_interval_s: minimum gap between interim result callbacks
    - reroot_search_depth: how many plies below the root to look for the new
      real position when reusing the tree across turns
    """

    exploration_constant: float = DEFAULT_EXPLORATION_CONSTANT
    think_time_s: float = DEFAULT_THINK_TIME_S
    interim_interval_s: float = DEFAULT_INTERIM_INTERVAL_S
    reroot_search_depth: int = DEFAULT_REROOT_SEARCH_DEPTH

    def __post_init__(self):
        if self.exploration_constant <= 0:
            raise ValueError(f"exploration_constant must be positive, got {self.exploration_constant}")
        if self.think_time_s <= 0:
            raise ValueError(f"think_time_s must be positive, got {self.think_time_s}")
        if self.interim_interval_s < 0:
            raise ValueError(f"interim_interval_s must be non-negative, got {self.interim_interval_s}")
        if self.reroot_search_depth < 0:
            raise ValueError(f"reroot_search_depth must be non-negative, got {self.reroot_search_depth}")
