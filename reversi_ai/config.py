"""
Configuration constants and settings for the Reversi AI project.

This module contains the configuration constants used throughout the project,
including board geometry, search defaults and evaluation weights.
"""

import math
from pathlib import Path

from reversi_ai.enums import Color

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
LOG_DIR = PROJECT_ROOT / "logs"
TOURNAMENT_LOG_DIR = LOG_DIR / "tournaments"

# Verbose logging levels:
# 0: Critical issues and errors
# 1: Important info and warnings
# 2: Detailed info (default for development)
# 3: Very detailed debug info
VERBOSE_LEVEL = 2

# Board configuration
BOARD_SIZE = 8
MIN_BOARD_SIZE = 4
FIRST_MOVER = Color.BLACK

# Compass directions as (dx, dy), walked from a target cell
DIRECTIONS = ((-1, -1), (-1, 0), (-1, 1), (0, 1), (1, 1), (1, 0), (1, -1), (0, -1))

# Weighted-square evaluation
CORNER_WEIGHT = 20
EDGE_WEIGHT = 5
ADJACENT_TO_CORNER_WEIGHT = -5
CENTER_WEIGHT = 0

# Alpha-beta defaults
DEFAULT_SEARCH_DEPTH = 5
DEFAULT_EVALUATOR = "weighted_square"
SCORE_INF = 1_000_000_000.0  # finite sentinel for alpha/beta bounds

# MCTS defaults
DEFAULT_EXPLORATION_CONSTANT = math.sqrt(2)
DEFAULT_THINK_TIME_S = 2.0
DEFAULT_INTERIM_INTERVAL_S = 0.1
DEFAULT_REROOT_SEARCH_DEPTH = 2

# File extensions
CSV_EXTENSION = ".csv"
