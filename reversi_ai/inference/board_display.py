import sys
from typing import Iterable, Optional, Sequence

from reversi_ai.enums import Color, PhaseKind, Piece, get_piece_unicode_symbol
from reversi_ai.inference.game_engine import ReversiGameState
from reversi_ai.utils.format_conversion import LETTERS


def ansi_colored(text, color):
    colors = {
        'black': '\033[1;30m',
        'white': '\033[1;37m',
        'yellow': '\033[33m',
        'reset': '\033[0m',
    }
    return f"{colors.get(color, '')}{text}{colors['reset']}"


def display_board(state: ReversiGameState, file=None,
                  highlight_moves: Optional[Iterable[Sequence[int]]] = None) -> None:
    """
    Display a Reversi board as text, with optional move highlighting.

    Rows are labelled 1..N (x + 1) and columns a.. (y), matching the
    algebraic notation accepted by the CLI.

    Args:
        state: Game state to draw
        file: file-like object to write to (default: stdout)
        highlight_moves: cells to mark with '*', e.g. the legal moves
    """
    size = state.size
    highlights = {tuple(m) for m in highlight_moves} if highlight_moves is not None else set()
    highlight_symbol = '*'
    use_color = file is None and sys.stdout.isatty()

    lines = ['   ' + ' '.join(LETTERS[y] for y in range(size))]
    for x in range(size):
        row_str = f"{x + 1:2d} "
        for y in range(size):
            piece = state.board.piece_at(x, y)
            if piece is Piece.EMPTY and (x, y) in highlights:
                symbol = ansi_colored(highlight_symbol, 'yellow') if use_color else highlight_symbol
            else:
                symbol = get_piece_unicode_symbol(piece)
                if use_color and piece is not Piece.EMPTY:
                    symbol = ansi_colored(symbol, piece.name.lower())
            row_str += symbol + ' '
        lines.append(row_str.rstrip())

    output = '\n'.join(lines)
    if file is not None:
        print(output, file=file)
    else:
        print(output)


def score_line(state: ReversiGameState) -> str:
    """One-line disc count and game status, e.g. 'Black 2 - White 2 | black to move'."""
    black = state.number_of_pieces(Color.BLACK)
    white = state.number_of_pieces(Color.WHITE)
    phase = state.phase
    if phase.kind is PhaseKind.TURN:
        status = f"{phase.color.name.lower()} to move"
    elif phase.kind is PhaseKind.WON:
        status = f"game over: {phase.color.name.lower()} wins"
    else:
        status = "game over: tie"
    return f"Black {black} - White {white} | {status}"
