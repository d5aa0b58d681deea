import itertools
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from reversi_ai.config import BOARD_SIZE, FIRST_MOVER
from reversi_ai.enums import Color
from reversi_ai.error_handling import IllegalMoveError
from reversi_ai.inference.game_engine import Move, ReversiGameState
from reversi_ai.inference.move_selection import MoveSelectionStrategy
from reversi_ai.utils.format_conversion import moves_to_notation
from reversi_ai.utils.tournament_logging import find_available_filename, log_game_csv

logger = logging.getLogger(__name__)

# TODO: Add Elo ratings once round-robins get large enough to need them


@dataclass
class GameResult:
    """Result of a single game."""
    winner: Optional[Color]  # None for a tie
    black_count: int
    white_count: int
    moves: List[Move] = field(default_factory=list)
    passes: int = 0  # turns skipped under the must-pass rule

    @property
    def winner_name(self) -> str:
        return self.winner.name.lower() if self.winner is not None else "tie"


class TournamentResult:
    def __init__(self, participants: List[str]):
        self.participants = participants
        self.results = {
            name: {opponent: {'wins': 0, 'losses': 0, 'draws': 0, 'games': 0}
                   for opponent in participants if opponent != name}
            for name in participants
        }
        self.total_games = 0

    def record_game(self, winner: str, loser: str):
        self.results[winner][loser]['wins'] += 1
        self.results[winner][loser]['games'] += 1
        self.results[loser][winner]['losses'] += 1
        self.results[loser][winner]['games'] += 1
        self.total_games += 1

    def record_draw(self, player_a: str, player_b: str):
        self.results[player_a][player_b]['draws'] += 1
        self.results[player_a][player_b]['games'] += 1
        self.results[player_b][player_a]['draws'] += 1
        self.results[player_b][player_a]['games'] += 1
        self.total_games += 1

    def win_rates(self) -> Dict[str, float]:
        win_rates = {}
        for name in self.participants:
            wins = sum(self.results[name][op]['wins'] for op in self.results[name])
            games = sum(self.results[name][op]['games'] for op in self.results[name])
            win_rates[name] = wins / games if games > 0 else 0.0
        return win_rates

    def print_summary(self):
        print(f"\nTournament results ({self.total_games} games):")
        for name, rate in sorted(self.win_rates().items(), key=lambda kv: kv[1], reverse=True):
            record = self.results[name]
            wins = sum(r['wins'] for r in record.values())
            losses = sum(r['losses'] for r in record.values())
            draws = sum(r['draws'] for r in record.values())
            print(f"  {name}: {wins}W {losses}L {draws}D  win rate {rate:.1%}")


def play_single_game(black: MoveSelectionStrategy,
                     white: MoveSelectionStrategy,
                     board_size: int = BOARD_SIZE,
                     first_mover: Color = FIRST_MOVER,
                     verbose: int = 0) -> GameResult:
    """
    Play one game to completion and return its result.

    Each strategy is asked for a move only when its color is to move; passes
    are handled by the game state, so a strategy may be asked twice in a row.

    Raises:
        IllegalMoveError: If a strategy returns a move the game rejects
    """
    players = {Color.BLACK: black, Color.WHITE: white}
    for strategy in players.values():
        strategy.reset()

    state = ReversiGameState.new_game(board_size, first_mover)
    moves: List[Move] = []
    passes = 0
    while not state.is_terminal:
        color = state.current_color()
        move = players[color].select_move(state, verbose=verbose)
        next_state = state.apply_move(move, color)
        if next_state is state:
            raise IllegalMoveError(move, color, f"{players[color].get_name()} played illegal move {tuple(move)} "
                                                f"for {color.name.lower()}")
        moves.append(Move(*move))
        if not next_state.is_terminal and next_state.is_turn_of(color):
            passes += 1
            if verbose >= 2:
                logger.info(f"{color.opposite().name.lower()} has no move and passes")
        state = next_state

    result = GameResult(
        winner=state.winner,
        black_count=state.number_of_pieces(Color.BLACK),
        white_count=state.number_of_pieces(Color.WHITE),
        moves=moves,
        passes=passes,
    )
    if verbose >= 2:
        logger.info(f"Game over after {len(moves)} moves: {result.winner_name} "
                    f"(black {result.black_count}, white {result.white_count})")
    return result


def log_game_result(result: GameResult, black_label: str, white_label: str,
                    black: MoveSelectionStrategy, white: MoveSelectionStrategy,
                    board_size: int, csv_file: str) -> None:
    """Append one game as a CSV row."""
    row = {
        "timestamp": datetime.now().strftime('%Y-%m-%d %H:%M'),
        "black": black_label,
        "white": white_label,
        "black_config": black.get_config_summary(),
        "white_config": white.get_config_summary(),
        "board_size": board_size,
        "winner": result.winner_name,
        "black_count": result.black_count,
        "white_count": result.white_count,
        "num_moves": len(result.moves),
        "passes": result.passes,
        "moves": " ".join(moves_to_notation(result.moves)),
    }
    log_game_csv(row, csv_file)


def run_round_robin(strategies: Dict[str, MoveSelectionStrategy],
                    games_per_pair: int = 2,
                    board_size: int = BOARD_SIZE,
                    first_mover: Color = FIRST_MOVER,
                    verbose: int = 1,
                    csv_file: Optional[str] = None) -> Tuple[TournamentResult, Optional[str]]:
    """
    Play ``games_per_pair`` games between every pair of strategies.

    Colors alternate within each pairing: the first-listed strategy plays
    black in even-numbered games and white in odd-numbered ones.

    Returns:
        (TournamentResult, path of the CSV log actually written or None)
    """
    if len(strategies) < 2:
        raise ValueError(f"Round robin needs at least 2 strategies, got {len(strategies)}")
    if games_per_pair <= 0:
        raise ValueError(f"games_per_pair must be positive, got {games_per_pair}")

    actual_csv_file = find_available_filename(csv_file) if csv_file else None
    labels = list(strategies.keys())
    result = TournamentResult(labels)

    for label_a, label_b in itertools.combinations(labels, 2):
        if verbose >= 1:
            print(f"\nPlaying {games_per_pair} games: {label_a} vs {label_b}")
        for game_idx in range(games_per_pair):
            black_label, white_label = (label_a, label_b) if game_idx % 2 == 0 else (label_b, label_a)
            black, white = strategies[black_label], strategies[white_label]
            game = play_single_game(black, white, board_size, first_mover, verbose=verbose)

            if game.winner is Color.BLACK:
                result.record_game(black_label, white_label)
            elif game.winner is Color.WHITE:
                result.record_game(white_label, black_label)
            else:
                result.record_draw(black_label, white_label)

            if actual_csv_file:
                log_game_result(game, black_label, white_label, black, white, board_size, actual_csv_file)
            if verbose >= 2:
                print(f"  Game {game_idx + 1}: {black_label} (black) vs {white_label} (white) -> "
                      f"{game.winner_name} {game.black_count}-{game.white_count}")
            elif verbose >= 1:
                print(f"{game_idx + 1},", end="", flush=True)
        if verbose >= 1:
            print()

    return result, actual_csv_file
