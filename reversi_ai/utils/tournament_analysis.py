"""
Analysis of tournament CSV logs written by ``run_round_robin``.

Each row of a log is one game, seen from both sides. The helpers here turn
those rows into per-player and per-pairing tables.
"""

from pathlib import Path
from typing import List, Union

import pandas as pd

REQUIRED_COLUMNS = ["black", "white", "winner", "black_count", "white_count"]


def load_tournament_csv(paths: Union[str, Path, List[Union[str, Path]]]) -> pd.DataFrame:
    """
    Load one or more tournament logs into a single DataFrame.

    Raises:
        FileNotFoundError: If a log does not exist
        ValueError: If a log is missing a required column
    """
    if isinstance(paths, (str, Path)):
        paths = [paths]
    frames = []
    for path in paths:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Tournament log not found: {path}")
        df = pd.read_csv(path)
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"{path} is missing columns: {missing}")
        frames.append(df)
    return pd.concat(frames, ignore_index=True)


def per_player_games(df: pd.DataFrame) -> pd.DataFrame:
    """One row per (game, player): player, opponent, color, result and disc margin."""
    black = pd.DataFrame({
        "player": df["black"],
        "opponent": df["white"],
        "color": "black",
        "result": df["winner"].map({"black": "win", "white": "loss", "tie": "draw"}),
        "margin": df["black_count"] - df["white_count"],
    })
    white = pd.DataFrame({
        "player": df["white"],
        "opponent": df["black"],
        "color": "white",
        "result": df["winner"].map({"white": "win", "black": "loss", "tie": "draw"}),
        "margin": df["white_count"] - df["black_count"],
    })
    return pd.concat([black, white], ignore_index=True)


def summarize_players(df: pd.DataFrame) -> pd.DataFrame:
    """
    Per-player totals, sorted by win rate.

    Columns: games, wins, losses, draws, win_rate, avg_margin.
    """
    games = per_player_games(df)
    counts = pd.crosstab(games["player"], games["result"])
    for column in ("win", "loss", "draw"):
        if column not in counts.columns:
            counts[column] = 0
    summary = pd.DataFrame({
        "games": counts[["win", "loss", "draw"]].sum(axis=1),
        "wins": counts["win"],
        "losses": counts["loss"],
        "draws": counts["draw"],
    })
    summary["win_rate"] = summary["wins"] / summary["games"]
    summary["avg_margin"] = games.groupby("player")["margin"].mean()
    summary.index.name = "player"
    return summary.sort_values("win_rate", ascending=False, kind="mergesort")


def pairwise_win_rates(df: pd.DataFrame) -> pd.DataFrame:
    """Matrix of row-player win rates against each column opponent (draws count as half)."""
    games = per_player_games(df)
    games["score"] = games["result"].map({"win": 1.0, "draw": 0.5, "loss": 0.0})
    return games.pivot_table(index="player", columns="opponent", values="score", aggfunc="mean")


def color_advantage(df: pd.DataFrame) -> pd.Series:
    """Share of games won by each color, plus ties."""
    return df["winner"].value_counts(normalize=True).reindex(["black", "white", "tie"], fill_value=0.0)
