import csv
import os
from pathlib import Path
from typing import List, Optional


def find_available_filename(base_path: str) -> str:
    """
    Find an available filename by appending an index if the base path exists.

    Args:
        base_path: The base file path to check

    Returns:
        An available file path (either the original or with an index appended)

    Example:
        If "tournament.csv" exists, returns "tournament_2.csv"
        If "tournament_2.csv" also exists, returns "tournament_3.csv"
        And so on...
    """
    if not os.path.exists(base_path):
        return base_path

    path_obj = Path(base_path)
    directory = path_obj.parent
    stem = path_obj.stem
    suffix = path_obj.suffix

    index = 2
    while True:
        new_path = directory / f"{stem}_{index}{suffix}"
        if not new_path.exists():
            return str(new_path)
        index += 1


def log_game_csv(row: dict, csv_file: str, headers: Optional[List[str]] = None) -> None:
    """
    Log a game result as a row in a CSV file. If the file does not exist, write headers first.

    Args:
        row: dict of game info (players, winner, disc counts, moves, ...)
        csv_file: path to CSV file
        headers: optional list of headers (if not provided, use row.keys())
    """
    csv_path = Path(csv_file)
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    write_header = not csv_path.exists()
    if headers is None:
        headers = list(row.keys())
    with open(csv_path, 'a', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=headers)
        if write_header:
            writer.writeheader()
        writer.writerow(row)
