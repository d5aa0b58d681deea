# mcts.py
# Single-threaded UCB1 Monte Carlo Tree Search for Reversi with uniform random
# rollouts and cross-turn tree reuse.
#
# WIN ACCOUNTING:
# Every node records the color that made the move into it (``mover``). A
# rollout that ends in a win for color c adds one win to each node on the path
# whose mover is c. The root has no incoming move, so it is credited to its
# own side to move. Ties add plays but no wins. With this convention the UCB1
# score of a child, wins/plays + C*sqrt(ln(N_parent)/plays), is always the
# win rate of the player choosing among those children.
#
# TREE OWNERSHIP:
# Parents own their children through ``children``; the back-reference from a
# child to its parent is a weakref. Re-rooting keeps only the subtree under
# the new root and the rest is released with the old root.

from __future__ import annotations

import logging
import math
import random
import time
import weakref
from collections import deque
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from reversi_ai.enums import Color
from reversi_ai.inference.game_engine import Move, ReversiGameState
from reversi_ai.inference.mcts_config import MCTSConfig
from reversi_ai.inference.mcts_utils import (
    calculate_tree_statistics,
    extract_principal_variation,
    format_tree_summary,
)

logger = logging.getLogger(__name__)


# ------------------ Results ------------------

@dataclass(frozen=True)
class ChildStats:
    """Statistics for one explored root move."""
    move: Move
    plays: int
    wins: int
    win_rate: float


@dataclass(frozen=True)
class MCTSResult:
    """Immutable snapshot of the search: robust-child move plus per-move stats."""
    best_move: Optional[Move]  # None until the root has at least one child
    simulations: int           # root plays
    confidence: float          # win rate of best_move
    moves: Tuple[ChildStats, ...]


# ------------------ Data structures ------------------

class MCTSNode:
    __slots__ = (
        "state", "move", "mover", "children", "plays", "wins",
        "fully_expanded", "_parent", "_legal_moves", "_exhausted", "__weakref__",
    )

    def __init__(self, state: ReversiGameState, move: Optional[Move] = None,
                 mover: Optional[Color] = None):
        if state is None:
            raise ValueError("State cannot be None")
        self.state: ReversiGameState = state
        self.move: Optional[Move] = move
        # Root: credited to its own side to move (None once the game is over)
        self.mover: Optional[Color] = mover if mover is not None else state.current_color()
        self.children: List[MCTSNode] = []
        self.plays: int = 0
        self.wins: int = 0
        self.fully_expanded: bool = False
        self._parent: Optional[weakref.ReferenceType] = None
        self._legal_moves: Optional[List[Move]] = None
        self._exhausted: bool = False

    @property
    def parent(self) -> Optional["MCTSNode"]:
        return self._parent() if self._parent is not None else None

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    @property
    def legal_moves(self) -> List[Move]:
        if self._legal_moves is None:
            self._legal_moves = self.state.legal_moves()
        return self._legal_moves

    def win_rate(self) -> float:
        return self.wins / self.plays if self.plays else 0.0

    def ucb1(self, exploration_constant: float) -> float:
        """UCB1 score of this node as seen from its parent."""
        parent = self.parent
        if self.plays == 0 or parent is None or parent.plays == 0:
            return math.inf
        return self.wins / self.plays + exploration_constant * math.sqrt(math.log(parent.plays) / self.plays)

    def has_visited_move(self, move: Move) -> bool:
        return any(child.move == move for child in self.children)

    def untried_moves(self) -> List[Move]:
        visited = {child.move for child in self.children}
        return [m for m in self.legal_moves if m not in visited]

    def add_child(self, child: "MCTSNode") -> None:
        child._parent = weakref.ref(self)
        self.children.append(child)

    def detach(self) -> None:
        """Drop the back-reference so this node can serve as a root."""
        self._parent = None

    def is_exhausted(self) -> bool:
        """
        True when nothing under this node is left to simulate: the node is
        terminal, or fully expanded with every child exhausted.
        """
        if self._exhausted:
            return True
        if self.is_terminal:
            self._exhausted = True
        elif not self.fully_expanded or not self.children:
            return False
        else:
            self._exhausted = all(child.is_exhausted() for child in self.children)
        return self._exhausted

    def __repr__(self) -> str:
        return f"MCTSNode(move={self.move}, plays={self.plays}, wins={self.wins}, children={len(self.children)})"


# ------------------ Core MCTS ------------------

class MonteCarloTreeSearch:
    """
    Anytime MCTS engine for one color.

    Call ``iterate_search`` repeatedly (or use ``run_timed_search``), poll
    ``results`` at any point, and call ``update_starting_state`` with the new
    real position before searching for the next move.
    """

    def __init__(self, starting_state: ReversiGameState, color: Color,
                 cfg: Optional[MCTSConfig] = None, rng: Optional[random.Random] = None,
                 verbose: int = 0):
        if starting_state is None:
            raise ValueError("Starting state cannot be None")
        self.color = color
        self.cfg = cfg if cfg is not None else MCTSConfig()
        self.rng = rng if rng is not None else random.Random()
        self.verbose = verbose
        self.root = MCTSNode(starting_state)

    # ---------- Public API ----------

    @property
    def starting_state(self) -> ReversiGameState:
        return self.root.state

    def iterate_search(self) -> None:
        """Run one select / expand / simulate / backpropagate cycle."""
        leaf = self._select(self.root)
        node = self._expand(leaf)
        winner = self._simulate(node.state)
        self._backpropagate(node, winner)

    def is_exhausted(self) -> bool:
        return self.root.is_exhausted()

    def has_unsimulated_plays(self) -> bool:
        return not self.root.is_exhausted()

    def results(self) -> MCTSResult:
        """
        Snapshot the current root statistics.

        The best move is the most-played child (first in expansion order on
        ties) and the confidence is that child's win rate.
        """
        root = self.root
        if not root.children:
            return MCTSResult(best_move=None, simulations=root.plays, confidence=0.0, moves=())
        best = max(root.children, key=lambda child: child.plays)
        stats = tuple(
            ChildStats(move=child.move, plays=child.plays, wins=child.wins, win_rate=child.win_rate())
            for child in root.children
        )
        return MCTSResult(best_move=best.move, simulations=root.plays,
                          confidence=best.win_rate(), moves=stats)

    def update_starting_state(self, state: ReversiGameState) -> bool:
        """
        Re-root the tree at the node whose state equals ``state``.

        Descendants are searched breadth-first up to ``cfg.reroot_search_depth``
        plies below the current root. On a miss the tree is rebuilt from
        ``state``.

        Returns:
            True if an existing subtree was reused
        """
        if self.root.state == state:
            return True

        queue = deque((child, 1) for child in self.root.children)
        while queue:
            node, depth = queue.popleft()
            if node.state == state:
                node.detach()
                self.root = node
                logger.debug(f"Re-rooted MCTS tree at depth {depth} with {node.plays} plays retained")
                return True
            if depth < self.cfg.reroot_search_depth:
                queue.extend((child, depth + 1) for child in node.children)

        logger.info("MCTS tree reuse missed the new position; rebuilding from scratch")
        self.root = MCTSNode(state)
        return False

    def get_principal_variation(self, max_length: int = 10) -> List[Move]:
        return extract_principal_variation(self.root, max_length)

    def get_tree_statistics(self) -> Tuple[int, int]:
        return calculate_tree_statistics(self.root)

    def get_tree_summary(self) -> dict:
        return format_tree_summary(self.root)

    # ---------- Search phases ----------

    def _select(self, node: MCTSNode) -> MCTSNode:
        c = self.cfg.exploration_constant
        while node.fully_expanded and not node.is_terminal:
            node = max(node.children, key=lambda child: child.ucb1(c))
        return node

    def _expand(self, node: MCTSNode) -> MCTSNode:
        if node.is_terminal:
            return node
        untried = node.untried_moves()
        if not untried:
            node.fully_expanded = True
            return node
        move = self.rng.choice(untried)
        mover = node.state.current_color()
        child = MCTSNode(node.state.apply_move(move, mover), move=move, mover=mover)
        node.add_child(child)
        if len(untried) == 1:
            node.fully_expanded = True
        return child

    def _simulate(self, state: ReversiGameState) -> Optional[Color]:
        """Play uniformly random moves to the end; return the winner (None for a tie)."""
        while not state.is_terminal:
            color = state.current_color()
            state = state.apply_move(self.rng.choice(state.all_moves(color)), color)
        return state.winner

    def _backpropagate(self, node: Optional[MCTSNode], winner: Optional[Color]) -> None:
        while node is not None:
            node.plays += 1
            if winner is not None and node.mover is winner:
                node.wins += 1
            node = node.parent


def run_timed_search(search: MonteCarloTreeSearch, time_limit_s: Optional[float] = None,
                     on_interim: Optional[Callable[[MCTSResult], None]] = None,
                     max_iterations: Optional[int] = None) -> MCTSResult:
    """
    Iterate ``search`` until the time limit passes or the tree is exhausted.

    Args:
        search: Engine to drive (already re-rooted at the real position)
        time_limit_s: Wall-clock budget (defaults to the engine's think time)
        on_interim: Called with a result snapshot at most once per
            ``cfg.interim_interval_s``
        max_iterations: Optional cap on iterations

    Returns:
        Final MCTSResult
    """
    time_limit_s = search.cfg.think_time_s if time_limit_s is None else time_limit_s
    interval = search.cfg.interim_interval_s
    start = time.perf_counter()
    last_update = start
    iterations = 0
    while time.perf_counter() - start < time_limit_s:
        if search.is_exhausted():
            break
        search.iterate_search()
        iterations += 1
        if max_iterations is not None and iterations >= max_iterations:
            break
        if on_interim is not None:
            now = time.perf_counter()
            if now - last_update > interval:
                last_update = now
                on_interim(search.results())

    result = search.results()
    elapsed = time.perf_counter() - start
    if search.verbose >= 1:
        logger.info(
            f"MCTS {search.color.name.lower()}: {iterations} iterations in {elapsed:.2f}s, "
            f"{result.simulations} total simulations, best={result.best_move} conf={result.confidence:.0%}"
        )
    return result
