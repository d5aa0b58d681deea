"""
MCTS-specific utility functions for tree analysis and data formatting.

These work on any node exposing ``children``, ``move``, ``plays`` and
``wins``, so they stay independent of the search engine itself.
"""

from typing import Any, Dict, List, Tuple

# =============================
# MCTS Tree Analysis Utilities
# =============================

PRINCIPAL_VARIATION_MAX_LENGTH = 10


def extract_principal_variation(root_node, max_length: int = PRINCIPAL_VARIATION_MAX_LENGTH) -> List[Tuple[int, int]]:
    """
    Extract the principal variation (most-played line) from the MCTS tree.

    Args:
        root_node: Root node of the MCTS tree
        max_length: Maximum length of principal variation to extract

    Returns:
        List of moves, starting with the root's most-played child
    """
    if root_node is None:
        raise ValueError("Root node cannot be None")
    if max_length <= 0:
        raise ValueError(f"max_length must be positive, got {max_length}")

    pv = []
    current_node = root_node
    for _ in range(max_length):
        if not current_node.children:
            break
        current_node = max(current_node.children, key=lambda child: child.plays)
        pv.append(current_node.move)
    return pv


def calculate_tree_statistics(root_node) -> Tuple[int, int]:
    """
    Calculate tree traversal statistics.

    Args:
        root_node: Root node of the tree

    Returns:
        Tuple of (total_nodes, max_depth)
    """
    if root_node is None:
        return 0, 0

    total_nodes = 0
    max_depth = 0
    stack = [(root_node, 0)]
    while stack:
        node, depth = stack.pop()
        total_nodes += 1
        max_depth = max(max_depth, depth)
        stack.extend((child, depth + 1) for child in node.children)
    return total_nodes, max_depth


def format_tree_summary(root_node, top_k: int = 0) -> Dict[str, Any]:
    """
    Summarize the tree for display or logging.

    Args:
        root_node: Root node of the tree
        top_k: Only include the k most-played root moves (0 for all)

    Returns:
        Dictionary with simulation count, tree size, principal variation and
        per-move statistics sorted by plays
    """
    from reversi_ai.utils.format_conversion import move_to_notation

    total_nodes, max_depth = calculate_tree_statistics(root_node)
    children = sorted(root_node.children, key=lambda child: child.plays, reverse=True)
    if top_k > 0:
        children = children[:top_k]

    return {
        "simulations": root_node.plays,
        "total_nodes": total_nodes,
        "max_depth": max_depth,
        "principal_variation": [move_to_notation(m) for m in extract_principal_variation(root_node)],
        "moves": [
            {
                "move": move_to_notation(child.move),
                "plays": child.plays,
                "wins": child.wins,
                "win_rate": child.wins / child.plays if child.plays else 0.0,
            }
            for child in children
        ],
    }
