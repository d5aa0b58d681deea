#!/usr/bin/env python3
"""
Play Reversi against one of the engines from the terminal.

Examples:
   PYTHONPATH=. python scripts/play_vs_engine_cli.py --engine mcts --think-time 2
   PYTHONPATH=. python scripts/play_vs_engine_cli.py --engine alpha_beta --depth 4 --human-color white
"""
import argparse
import logging
import sys

from reversi_ai.config import BOARD_SIZE, DEFAULT_EVALUATOR, DEFAULT_SEARCH_DEPTH, DEFAULT_THINK_TIME_S
from reversi_ai.enums import color_from_name
from reversi_ai.error_handling import GracefulShutdownRequested
from reversi_ai.inference.board_display import ansi_colored, display_board, score_line
from reversi_ai.inference.evaluation import list_available_evaluators
from reversi_ai.inference.game_engine import ReversiGameState
from reversi_ai.inference.mcts_config import MCTSConfig
from reversi_ai.inference.move_selection import AlphaBetaStrategy, MCTSStrategy
from reversi_ai.utils.format_conversion import move_to_notation, moves_to_notation, notation_to_move
from reversi_ai.utils.random_utils import make_rng, set_deterministic_seeds


def get_human_move(state: ReversiGameState, color):
    legal = state.all_moves(color)
    while True:
        try:
            text = input("Enter your move (e.g., 'd3', or 'q' to quit): ").strip().lower()
        except EOFError:
            raise GracefulShutdownRequested("End of input")
        if text in ('q', 'quit', 'exit'):
            raise GracefulShutdownRequested("Quit by user request")
        if text in ('?', 'moves'):
            print(f"Legal moves: {' '.join(moves_to_notation(legal))}")
            continue
        try:
            move = notation_to_move(text, board_size=state.size)
        except ValueError as e:
            print(f"Invalid input: {e}")
            continue
        if state.is_valid_move(move, color):
            return move
        print(f"Illegal move: {text} captures nothing. Type '?' to list legal moves.")


def make_engine(args):
    if args.engine == "alpha_beta":
        return AlphaBetaStrategy(depth=args.depth, evaluator=args.evaluator)

    def show_interim(result):
        if args.verbose >= 2 and result.best_move is not None:
            print(f"  ...{result.simulations} simulations, leaning {move_to_notation(result.best_move)} "
                  f"({result.confidence:.0%})")

    cfg = MCTSConfig(think_time_s=args.think_time)
    return MCTSStrategy(time_limit_s=args.think_time, config=cfg, rng=make_rng(args.seed), on_interim=show_interim)


def play(args):
    human = color_from_name(args.human_color)
    engine = make_engine(args)
    state = ReversiGameState.new_game(args.board_size)
    move_num = 0

    print(f"\nWelcome to Reversi! Board size: {args.board_size}x{args.board_size}")
    print(f"You play {human.name.lower()}; the engine is {engine.get_config_summary()}.")
    print("Enter moves as column letter + row number (e.g., 'd3'). Legal moves are marked '*'.")

    while not state.is_terminal:
        color = state.current_color()
        print(f"\nMove {move_num + 1} - {score_line(state)}")
        display_board(state, highlight_moves=state.all_moves(color) if color is human else None)
        if color is human:
            move = get_human_move(state, color)
        else:
            print("Engine is thinking...")
            move = engine.select_move(state, verbose=args.verbose)
            notation = move_to_notation(move)
            print(f"Engine plays: {ansi_colored(notation, 'yellow') if sys.stdout.isatty() else notation}")
            if isinstance(engine, MCTSStrategy) and engine.last_result is not None:
                result = engine.last_result
                print(f"    Simulated {result.simulations} games, conf: {result.confidence:.0%}")
        next_state = state.apply_move(move, color)
        if not next_state.is_terminal and next_state.is_turn_of(color):
            print(f"{color.opposite().name.capitalize()} has no legal move and must pass.")
        state = next_state
        move_num += 1

    print("\nFinal board:")
    display_board(state)
    print(score_line(state))


def main():
    parser = argparse.ArgumentParser(description="Play Reversi against an engine (CLI)")
    parser.add_argument('--engine', choices=['mcts', 'alpha_beta'], default='mcts', help='Engine to play against')
    parser.add_argument('--depth', type=int, default=DEFAULT_SEARCH_DEPTH,
                        help=f'Alpha-beta search depth (default: {DEFAULT_SEARCH_DEPTH})')
    parser.add_argument('--evaluator', choices=list_available_evaluators(), default=DEFAULT_EVALUATOR,
                        help='Alpha-beta static evaluator')
    parser.add_argument('--think-time', type=float, default=DEFAULT_THINK_TIME_S,
                        help=f'MCTS thinking time per move in seconds (default: {DEFAULT_THINK_TIME_S})')
    parser.add_argument('--human-color', choices=['black', 'white'], default='black', help='Your color (black moves first)')
    parser.add_argument('--board-size', type=int, default=BOARD_SIZE, help=f'Board size (default: {BOARD_SIZE})')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible engine play')
    parser.add_argument('--verbose', type=int, default=1, help='Verbosity level (0-3)')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose >= 3 else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')
    if args.seed is not None:
        set_deterministic_seeds(args.seed)

    try:
        play(args)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except (GracefulShutdownRequested, KeyboardInterrupt):
        print("\nQuitting game.")
        sys.exit(0)


if __name__ == "__main__":
    main()
