"""
Run a round-robin tournament between Reversi engines.

Each pair plays N games, alternating colors. Results can be appended to a CSV
log, and win rates are printed at the end.

Strategies are given as name[:param], where param is the search depth for
alpha_beta and the think time in seconds for mcts.

Examples:

1. Alpha-beta at two depths against a random baseline:
   PYTHONPATH=. python scripts/run_tournament.py \
     --strategies="alpha_beta:2,alpha_beta:4,random" \
     --games-per-pair=10

2. MCTS against alpha-beta with a CSV log:
   PYTHONPATH=. python scripts/run_tournament.py \
     --strategies="mcts:0.5,alpha_beta:3" \
     --games-per-pair=4 \
     --csv=logs/tournaments/mcts_vs_ab.csv
"""
import argparse
import logging
import sys
from typing import Dict

from reversi_ai.config import BOARD_SIZE, CSV_EXTENSION, DEFAULT_EVALUATOR, TOURNAMENT_LOG_DIR
from reversi_ai.inference.mcts_config import MCTSConfig
from reversi_ai.inference.move_selection import (
    AlphaBetaStrategy,
    MCTSStrategy,
    MoveSelectionStrategy,
    RandomStrategy,
    list_available_strategies,
)
from reversi_ai.inference.tournament import run_round_robin
from reversi_ai.utils.random_utils import make_rng, set_deterministic_seeds


def parse_strategy(entry: str, seed, evaluator: str) -> MoveSelectionStrategy:
    name, _, param = entry.strip().partition(":")
    if name == "alpha_beta":
        return AlphaBetaStrategy(depth=int(param), evaluator=evaluator) if param else AlphaBetaStrategy(evaluator=evaluator)
    if name == "mcts":
        think_time = float(param) if param else None
        cfg = MCTSConfig(think_time_s=think_time) if think_time is not None else MCTSConfig()
        return MCTSStrategy(time_limit_s=think_time, config=cfg, rng=make_rng(seed))
    if name == "random":
        return RandomStrategy(rng=make_rng(seed))
    raise ValueError(f"Unknown strategy: {name}. Available: {list_available_strategies()}")


def build_strategies(entries: str, seed, evaluator: str) -> Dict[str, MoveSelectionStrategy]:
    strategies = {}
    for i, entry in enumerate(s for s in entries.split(",") if s.strip()):
        label = entry.strip()
        if label in strategies:
            label = f"{label}#{i + 1}"
        player_seed = seed + i if seed is not None else None
        strategies[label] = parse_strategy(entry, player_seed, evaluator)
    return strategies


def main():
    parser = argparse.ArgumentParser(description="Run a round-robin tournament between Reversi engines.")
    parser.add_argument('--strategies', type=str, required=True,
                        help='Comma-separated list of name[:param] (e.g., "alpha_beta:3,mcts:1.0,random")')
    parser.add_argument('--games-per-pair', type=int, default=2, help='Games per pair of strategies')
    parser.add_argument('--board-size', type=int, default=BOARD_SIZE, help=f'Board size (default: {BOARD_SIZE})')
    parser.add_argument('--evaluator', type=str, default=DEFAULT_EVALUATOR, help='Evaluator for alpha_beta strategies')
    parser.add_argument('--csv', type=str, default=None,
                        help=f'CSV file to log games to (e.g., {TOURNAMENT_LOG_DIR}/run{CSV_EXTENSION})')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible tournaments')
    parser.add_argument('--verbose', type=int, default=1, help='Verbosity level (0-3)')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose >= 3 else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')
    if args.seed is not None:
        set_deterministic_seeds(args.seed)

    try:
        strategies = build_strategies(args.strategies, args.seed, args.evaluator)
        for label, strategy in strategies.items():
            print(f"  {label}: {strategy.get_config_summary()}")
        result, csv_file = run_round_robin(strategies, games_per_pair=args.games_per_pair,
                                           board_size=args.board_size, verbose=args.verbose,
                                           csv_file=args.csv)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    result.print_summary()
    if csv_file:
        print(f"\nGame log written to {csv_file}")


if __name__ == "__main__":
    main()
