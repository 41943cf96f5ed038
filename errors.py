class DraughtsError(Exception):
    """Base class for every error raised by the draughts engine."""


class InvalidNotationError(DraughtsError, ValueError):
    """A position-notation string could not be parsed."""


class InvalidMoveError(DraughtsError, ValueError):
    """A move is malformed (start square off the board) or not legal here."""


class SearchError(DraughtsError, RuntimeError):
    """
    An unexpected failure inside the search loop.

    The original exception is chained as ``__cause__``. The current search
    run is over, but the caller is free to build a new one.
    """
