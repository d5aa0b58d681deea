"""
Error types for Reversi AI.

All rule violations inside the game engine are recoverable and are reported by
return value (an illegal move is a no-op). The exceptions here cover the cases
that must reach the caller: a search asked to move where no move exists, a
driver handed an illegal move by a strategy, and a user-requested shutdown.
"""


class ReversiError(Exception):
    """Base class for Reversi AI errors."""
    pass


class NoLegalMoveError(ReversiError):
    """Raised when a search is asked for a move in a position with none."""

    def __init__(self, color=None, message: str = ""):
        self.color = color
        if not message:
            message = f"No legal move available for {color.name.lower()}" if color is not None else "No legal move available"
        super().__init__(message)


class IllegalMoveError(ReversiError):
    """Raised by drivers when a strategy returns a move the game engine rejects."""

    def __init__(self, move, color, message: str = ""):
        self.move = move
        self.color = color
        super().__init__(message or f"Illegal move {tuple(move)} for {color.name.lower()}")


class GracefulShutdownRequested(Exception):
    """Raised to indicate a graceful shutdown was requested."""
    pass
