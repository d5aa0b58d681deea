import csv
import random

import pytest

from reversi_ai.enums import Color
from reversi_ai.error_handling import IllegalMoveError
from reversi_ai.inference.game_engine import ReversiGameState
from reversi_ai.inference.move_selection import MoveSelectionStrategy, RandomStrategy
from reversi_ai.inference.tournament import (
    GameResult,
    TournamentResult,
    play_single_game,
    run_round_robin,
)

SLOW = pytest.mark.slow


class CornerGrabber(MoveSelectionStrategy):
    """Always plays (0, 0), which is never legal from the opening."""

    def select_move(self, state, verbose=0):
        return (0, 0)

    def get_name(self):
        return "corner_grabber"

    def get_config_summary(self):
        return "corner_grabber"


class TestPlaySingleGame:
    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_random_game_invariants(self, seed):
        size = 6
        game = play_single_game(RandomStrategy(random.Random(seed)), RandomStrategy(random.Random(seed + 100)),
                                board_size=size)
        assert isinstance(game, GameResult)
        assert game.black_count + game.white_count == 4 + len(game.moves)
        assert game.black_count + game.white_count <= size * size
        assert len(set(game.moves)) == len(game.moves)
        if game.black_count > game.white_count:
            assert game.winner is Color.BLACK
        elif game.white_count > game.black_count:
            assert game.winner is Color.WHITE
        else:
            assert game.winner is None
            assert game.winner_name == "tie"

    def test_replayed_moves_reach_same_result(self):
        game = play_single_game(RandomStrategy(random.Random(11)), RandomStrategy(random.Random(12)), board_size=6)
        state = ReversiGameState.new_game(6)
        for move in game.moves:
            state = state.apply_move(move, state.current_color())
        assert state.is_terminal
        assert state.winner is game.winner
        assert state.number_of_pieces(Color.BLACK) == game.black_count

    def test_illegal_move_raises(self):
        with pytest.raises(IllegalMoveError):
            play_single_game(CornerGrabber(), RandomStrategy(random.Random(0)), board_size=6)

    def test_white_first(self):
        game = play_single_game(RandomStrategy(random.Random(0)), RandomStrategy(random.Random(1)),
                                board_size=6, first_mover=Color.WHITE)
        first = ReversiGameState.new_game(6, Color.WHITE)
        assert game.moves[0] in first.all_moves(Color.WHITE)


class TestTournamentResult:
    def test_record_and_win_rates(self):
        result = TournamentResult(["a", "b", "c"])
        result.record_game("a", "b")
        result.record_game("a", "c")
        result.record_draw("b", "c")
        assert result.total_games == 3
        rates = result.win_rates()
        assert rates["a"] == 1.0
        assert rates["b"] == 0.0
        assert rates["c"] == 0.0
        assert result.results["b"]["c"]["draws"] == 1
        assert result.results["c"]["b"]["games"] == 1

    def test_print_summary(self, capsys):
        result = TournamentResult(["a", "b"])
        result.record_game("b", "a")
        result.print_summary()
        out = capsys.readouterr().out
        assert "1 games" in out
        assert "b: 1W 0L 0D" in out


class TestRoundRobin:
    def make_strategies(self):
        return {
            "random_a": RandomStrategy(random.Random(1)),
            "random_b": RandomStrategy(random.Random(2)),
            "random_c": RandomStrategy(random.Random(3)),
        }

    @SLOW
    def test_round_robin_counts(self):
        result, csv_file = run_round_robin(self.make_strategies(), games_per_pair=2, board_size=6, verbose=0)
        assert csv_file is None
        assert result.total_games == 6
        for name, opponents in result.results.items():
            for record in opponents.values():
                assert record['games'] == 2
                assert record['wins'] + record['losses'] + record['draws'] == 2

    @SLOW
    def test_round_robin_csv(self, tmp_path):
        csv_path = tmp_path / "tournament.csv"
        _, first = run_round_robin(self.make_strategies(), games_per_pair=2, board_size=4, verbose=0,
                                   csv_file=str(csv_path))
        assert first == str(csv_path)
        with open(first, newline='') as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 6
        # Colors alternate within a pairing
        assert (rows[0]["black"], rows[0]["white"]) == ("random_a", "random_b")
        assert (rows[1]["black"], rows[1]["white"]) == ("random_b", "random_a")
        for row in rows:
            assert row["winner"] in ("black", "white", "tie")
            assert int(row["black_count"]) + int(row["white_count"]) == 4 + int(row["num_moves"])
            assert len(row["moves"].split()) == int(row["num_moves"])

        _, second = run_round_robin(self.make_strategies(), games_per_pair=1, board_size=4, verbose=0,
                                    csv_file=str(csv_path))
        assert second == str(tmp_path / "tournament_2.csv")

    def test_round_robin_validation(self):
        with pytest.raises(ValueError):
            run_round_robin({"only": RandomStrategy()}, verbose=0)
        with pytest.raises(ValueError):
            run_round_robin(self.make_strategies(), games_per_pair=0, verbose=0)
