"""
Depth-limited alpha-beta minimax search for Reversi.

Each root move is applied and then searched ``depth`` further plies, so a
search at depth d looks at most d + 1 plies ahead. Leaves (depth exhausted or
game over) are scored by a static evaluator from the root color's point of
view. The side to move at every node is read from the game phase, which means
a forced pass simply gives the same color another ply.

No state survives between searches apart from the node counter, which is
reset on every call.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Union

from reversi_ai.config import DEFAULT_EVALUATOR, DEFAULT_SEARCH_DEPTH, SCORE_INF
from reversi_ai.enums import Color
from reversi_ai.error_handling import NoLegalMoveError
from reversi_ai.inference.evaluation import EVALUATORS, Evaluator, get_evaluator
from reversi_ai.inference.game_engine import Move, ReversiGameState

logger = logging.getLogger(__name__)


@dataclass
class AlphaBetaConfig:
    """Alpha-beta search parameters."""
    max_depth: int = DEFAULT_SEARCH_DEPTH
    evaluator: str = DEFAULT_EVALUATOR

    def __post_init__(self):
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.evaluator not in EVALUATORS:
            raise ValueError(f"Unknown evaluator: {self.evaluator}. Available: {list(EVALUATORS.keys())}")


@dataclass(frozen=True)
class AlphaBetaResult:
    """Outcome of a single root search."""
    best_move: Move
    score: float
    depth: int
    nodes_searched: int
    elapsed_ms: float


class AlphaBetaSearch:
    """Minimax search with alpha-beta pruning over immutable game states."""

    def __init__(self, max_depth: int = DEFAULT_SEARCH_DEPTH,
                 evaluator: Union[str, Evaluator] = DEFAULT_EVALUATOR, verbose: int = 0):
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")
        self.max_depth = max_depth
        self.evaluator = get_evaluator(evaluator) if isinstance(evaluator, str) else evaluator
        self.verbose = verbose
        self.nodes_searched = 0

    @classmethod
    def from_config(cls, cfg: AlphaBetaConfig, verbose: int = 0) -> "AlphaBetaSearch":
        return cls(max_depth=cfg.max_depth, evaluator=cfg.evaluator, verbose=verbose)

    def best_move(self, state: ReversiGameState, color: Color, depth: Optional[int] = None) -> Move:
        """Return the best move for ``color``; see ``search`` for details."""
        return self.search(state, color, depth).best_move

    def search(self, state: ReversiGameState, color: Color, depth: Optional[int] = None) -> AlphaBetaResult:
        """
        Search every root move for ``color`` and pick the highest scoring one.

        Root moves are tried in scan order and a later move only replaces the
        current best if it scores strictly higher, so ties keep the earliest.

        Args:
            state: Position to search from; ``color`` must be to move
            color: Color to find a move for (the maximizing side)
            depth: Plies searched below each root move (defaults to max_depth)

        Returns:
            AlphaBetaResult with the chosen move and search statistics

        Raises:
            NoLegalMoveError: If ``color`` is not to move or has no legal move
        """
        depth = self.max_depth if depth is None else depth
        if depth < 0:
            raise ValueError(f"depth must be non-negative, got {depth}")
        if not state.is_turn_of(color):
            raise NoLegalMoveError(color, f"{color.name.lower()} is not to move ({state.phase})")
        moves = state.all_moves(color)
        if not moves:
            raise NoLegalMoveError(color)

        start = time.perf_counter()
        self.nodes_searched = 0
        best_move = None
        best_score = -SCORE_INF
        alpha = -SCORE_INF
        for move in moves:
            child = state.apply_move(move, color)
            score = self.alpha_beta(child, depth, alpha, SCORE_INF, color)
            if self.verbose >= 3:
                logger.debug(f"root move {tuple(move)}: {score:.3f}")
            if best_move is None or score > best_score:
                best_move = move
                best_score = score
            alpha = max(alpha, best_score)

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        logger.debug(
            f"Alpha-beta {color.name.lower()} depth={depth}: best={tuple(best_move)} "
            f"score={best_score:.3f} nodes={self.nodes_searched} time={elapsed_ms:.1f}ms"
        )
        return AlphaBetaResult(best_move=best_move, score=best_score, depth=depth,
                               nodes_searched=self.nodes_searched, elapsed_ms=elapsed_ms)

    def alpha_beta(self, state: ReversiGameState, depth: int, alpha: float, beta: float,
                   root_color: Color) -> float:
        """
        Minimax value of ``state`` for ``root_color`` within [alpha, beta].

        The node maximizes when ``root_color`` is to move and minimizes
        otherwise. Branches stop as soon as beta <= alpha.
        """
        self.nodes_searched += 1
        if depth == 0 or state.is_terminal:
            return self.evaluator.evaluate(state, root_color)

        mover = state.current_color()
        moves = state.all_moves(mover)
        if not moves:
            # Unreachable for states built by the engine, which always pass the turn.
            return self.evaluator.evaluate(state, root_color)

        if mover is root_color:
            value = -SCORE_INF
            for move in moves:
                child = state.apply_move(move, mover)
                value = max(value, self.alpha_beta(child, depth - 1, alpha, beta, root_color))
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return value

        value = SCORE_INF
        for move in moves:
            child = state.apply_move(move, mover)
            value = min(value, self.alpha_beta(child, depth - 1, alpha, beta, root_color))
            beta = min(beta, value)
            if beta <= alpha:
                break
        return value
