"""
Move selection strategies for CLI and tournament play.

This module provides a uniform ``select_move(state)`` interface over the
alpha-beta searcher, the MCTS engine and a random baseline, so drivers can
pit any of them against each other.

Strategies may keep state between moves (the MCTS strategy keeps its search
tree and re-roots it every turn), so use one strategy instance per player.
"""

import logging
import random
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Dict, Optional, Type

from reversi_ai.config import DEFAULT_EVALUATOR, DEFAULT_SEARCH_DEPTH
from reversi_ai.error_handling import NoLegalMoveError
from reversi_ai.inference.alpha_beta import AlphaBetaConfig, AlphaBetaSearch
from reversi_ai.inference.game_engine import Move, ReversiGameState
from reversi_ai.inference.mcts import MCTSResult, MonteCarloTreeSearch, run_timed_search
from reversi_ai.inference.mcts_config import MCTSConfig

logger = logging.getLogger(__name__)


class MoveSelectionStrategy(ABC):
    """Abstract base class for move selection strategies."""

    @abstractmethod
    def select_move(self, state: ReversiGameState, verbose: int = 0) -> Move:
        """Select a move for the side to move in ``state``."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Return a human-readable name for this strategy."""
        pass

    @abstractmethod
    def get_config_summary(self) -> str:
        """Return a summary of the configuration for this strategy."""
        pass

    def reset(self) -> None:
        """Forget any state carried over from a previous game."""
        pass


def _side_to_move(state: ReversiGameState):
    color = state.current_color()
    if color is None:
        raise NoLegalMoveError(None, f"Game is over ({state.phase}); no move to select")
    return color


class AlphaBetaStrategy(MoveSelectionStrategy):
    """Move selection using depth-limited alpha-beta search."""

    def __init__(self, depth: int = DEFAULT_SEARCH_DEPTH, evaluator: str = DEFAULT_EVALUATOR):
        self.config = AlphaBetaConfig(max_depth=depth, evaluator=evaluator)
        self.search = AlphaBetaSearch.from_config(self.config)

    def select_move(self, state: ReversiGameState, verbose: int = 0) -> Move:
        color = _side_to_move(state)
        self.search.verbose = verbose
        result = self.search.search(state, color)
        if verbose >= 2:
            logger.info(f"alpha_beta: {tuple(result.best_move)} score={result.score:.2f} "
                        f"nodes={result.nodes_searched} ({result.elapsed_ms:.0f}ms)")
        return result.best_move

    def get_name(self) -> str:
        return "alpha_beta"

    def get_config_summary(self) -> str:
        return f"alpha_beta(depth={self.config.max_depth}, eval={self.config.evaluator})"


class MCTSStrategy(MoveSelectionStrategy):
    """Move selection using a long-lived MCTS engine that is re-rooted every turn."""

    def __init__(self, time_limit_s: Optional[float] = None, config: Optional[MCTSConfig] = None,
                 rng: Optional[random.Random] = None, max_iterations: Optional[int] = None,
                 on_interim: Optional[Callable[[MCTSResult], None]] = None):
        self.config = config if config is not None else MCTSConfig()
        self.time_limit_s = time_limit_s if time_limit_s is not None else self.config.think_time_s
        if self.time_limit_s <= 0:
            raise ValueError(f"time_limit_s must be positive, got {self.time_limit_s}")
        if max_iterations is not None and max_iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {max_iterations}")
        self.rng = rng if rng is not None else random.Random()
        self.max_iterations = max_iterations
        self.on_interim = on_interim
        self.engine: Optional[MonteCarloTreeSearch] = None
        self.last_result: Optional[MCTSResult] = None

    def select_move(self, state: ReversiGameState, verbose: int = 0) -> Move:
        color = _side_to_move(state)
        if self.engine is None or self.engine.color is not color:
            self.engine = MonteCarloTreeSearch(state, color, self.config, self.rng, verbose=verbose)
        else:
            self.engine.verbose = verbose
            self.engine.update_starting_state(state)

        result = run_timed_search(self.engine, self.time_limit_s, self.on_interim, self.max_iterations)
        self.last_result = result
        if result.best_move is None:
            raise NoLegalMoveError(color, "MCTS search finished without expanding any move")
        return result.best_move

    def reset(self) -> None:
        self.engine = None
        self.last_result = None

    def get_name(self) -> str:
        return "mcts"

    def get_config_summary(self) -> str:
        iter_info = f", max_iter={self.max_iterations}" if self.max_iterations is not None else ""
        return f"mcts(t={self.time_limit_s}s, c={self.config.exploration_constant:.3f}{iter_info})"


class RandomStrategy(MoveSelectionStrategy):
    """Uniformly random legal move; a baseline opponent."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def select_move(self, state: ReversiGameState, verbose: int = 0) -> Move:
        _side_to_move(state)
        return self.rng.choice(state.legal_moves())

    def get_name(self) -> str:
        return "random"

    def get_config_summary(self) -> str:
        return "random"


class BackgroundSearch:
    """
    Run MCTS turns on a single background worker.

    The search is only ever touched from the worker thread; callers receive
    a Future and immutable MCTSResult snapshots.
    """

    def __init__(self, search: MonteCarloTreeSearch):
        self.search = search
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="mcts")

    def submit(self, state: ReversiGameState, time_limit_s: Optional[float] = None,
               on_interim: Optional[Callable[[MCTSResult], None]] = None) -> "Future[MCTSResult]":
        return self._executor.submit(self._run_turn, state, time_limit_s, on_interim)

    def _run_turn(self, state: ReversiGameState, time_limit_s: Optional[float],
                  on_interim: Optional[Callable[[MCTSResult], None]]) -> MCTSResult:
        self.search.update_starting_state(state)
        return run_timed_search(self.search, time_limit_s, on_interim)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "BackgroundSearch":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()


# Strategy registry
STRATEGY_REGISTRY: Dict[str, Type[MoveSelectionStrategy]] = {
    "alpha_beta": AlphaBetaStrategy,
    "mcts": MCTSStrategy,
    "random": RandomStrategy,
}


def get_strategy(strategy_name: str, **kwargs) -> MoveSelectionStrategy:
    """Create a fresh move selection strategy by name."""
    if strategy_name not in STRATEGY_REGISTRY:
        raise ValueError(f"Unknown strategy: {strategy_name}. Available: {list(STRATEGY_REGISTRY.keys())}")
    return STRATEGY_REGISTRY[strategy_name](**kwargs)


def list_available_strategies() -> list:
    """List all available move selection strategies."""
    return list(STRATEGY_REGISTRY.keys())
