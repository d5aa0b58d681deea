import random

import pandas as pd
import pytest

from reversi_ai.inference.move_selection import RandomStrategy
from reversi_ai.inference.tournament import run_round_robin
from reversi_ai.utils.tournament_analysis import (
    color_advantage,
    load_tournament_csv,
    pairwise_win_rates,
    per_player_games,
    summarize_players,
)


@pytest.fixture
def games():
    return pd.DataFrame([
        {"black": "ab", "white": "rnd", "winner": "black", "black_count": 40, "white_count": 24},
        {"black": "rnd", "white": "ab", "winner": "white", "black_count": 20, "white_count": 44},
        {"black": "ab", "white": "mcts", "winner": "tie", "black_count": 32, "white_count": 32},
        {"black": "mcts", "white": "ab", "winner": "black", "black_count": 35, "white_count": 29},
    ])


def test_per_player_games(games):
    rows = per_player_games(games)
    assert len(rows) == 2 * len(games)
    ab = rows[rows["player"] == "ab"]
    assert sorted(ab["result"]) == ["draw", "loss", "win", "win"]
    assert rows["margin"].sum() == 0


def test_summarize_players(games):
    summary = summarize_players(games)
    assert summary.index[0] == "ab"
    ab = summary.loc["ab"]
    assert ab["games"] == 4
    assert ab["wins"] == 2
    assert ab["losses"] == 1
    assert ab["draws"] == 1
    assert ab["win_rate"] == pytest.approx(0.5)
    assert ab["avg_margin"] == pytest.approx((16 + 24 + 0 - 6) / 4)
    assert summary.loc["rnd", "wins"] == 0


def test_pairwise_win_rates(games):
    matrix = pairwise_win_rates(games)
    assert matrix.loc["ab", "rnd"] == 1.0
    assert matrix.loc["rnd", "ab"] == 0.0
    assert matrix.loc["ab", "mcts"] == pytest.approx(0.25)
    assert matrix.loc["mcts", "ab"] == pytest.approx(0.75)


def test_color_advantage(games):
    shares = color_advantage(games)
    assert list(shares.index) == ["black", "white", "tie"]
    assert shares["black"] == pytest.approx(0.5)
    assert shares["tie"] == pytest.approx(0.25)


def test_load_round_robin_log(tmp_path):
    csv_path = tmp_path / "run.csv"
    strategies = {"a": RandomStrategy(random.Random(1)), "b": RandomStrategy(random.Random(2))}
    run_round_robin(strategies, games_per_pair=4, board_size=4, verbose=0, csv_file=str(csv_path))
    df = load_tournament_csv(csv_path)
    assert len(df) == 4
    assert summarize_players(df)["games"].sum() == 8


def test_load_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_tournament_csv(tmp_path / "missing.csv")
    bad = tmp_path / "bad.csv"
    bad.write_text("black,white\na,b\n")
    with pytest.raises(ValueError, match="missing columns"):
        load_tournament_csv(bad)
