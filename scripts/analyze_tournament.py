#!/usr/bin/env python3
"""
Analyze round-robin tournament logs.
- Per-player record and average disc margin
- Pairwise win-rate matrix
- Black/white advantage
- Optional bar chart of win rates

Example:
   PYTHONPATH=. python scripts/analyze_tournament.py logs/tournaments/run.csv --plot win_rates.png
"""

import argparse
import sys

import matplotlib.pyplot as plt
import pandas as pd

from reversi_ai.utils.tournament_analysis import (
    color_advantage,
    load_tournament_csv,
    pairwise_win_rates,
    summarize_players,
)


def plot_win_rates(summary: pd.DataFrame, save_path: str = None):
    """Bar chart of per-player win rates."""
    fig, ax = plt.subplots(figsize=(max(6, len(summary) * 1.2), 4))
    ax.bar(summary.index, summary["win_rate"], color="steelblue")
    ax.set_ylim(0, 1)
    ax.set_ylabel("Win rate")
    ax.set_title(f"Tournament win rates ({int(summary['games'].sum() // 2)} games)")
    ax.grid(True, axis="y", alpha=0.3)
    plt.tight_layout()
    if save_path:
        plt.savefig(save_path, dpi=150)
        print(f"Plot saved to {save_path}")
    else:
        plt.show()
    plt.close(fig)


def main():
    parser = argparse.ArgumentParser(description="Analyze Reversi tournament CSV logs")
    parser.add_argument('csv_files', nargs='+', help='Tournament CSV logs to combine')
    parser.add_argument('--plot', type=str, default=None, help='Save a win-rate bar chart to this path')
    args = parser.parse_args()

    try:
        df = load_tournament_csv(args.csv_files)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    pd.set_option("display.precision", 3)
    print(f"Loaded {len(df)} games from {len(args.csv_files)} file(s)\n")
    summary = summarize_players(df)
    print("Per-player summary:")
    print(summary.to_string())
    print("\nPairwise win rates (row vs column, draws count half):")
    print(pairwise_win_rates(df).to_string())
    print("\nResults by color:")
    print(color_advantage(df).to_string())

    if args.plot:
        plot_win_rates(summary, args.plot)


if __name__ == "__main__":
    main()
