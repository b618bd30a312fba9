"""Custom exceptions. Everything the application raises on purpose derives from GameError."""


class GameError(Exception):
    """Top-level exception: catch this one in outer layers."""


class GameStateError(GameError):
    """The game is not in a state that allows the requested action (ex. it already ended)."""


class IllegalMoveError(GameError):
    """The requested move is not in the set of legal moves."""


class InvalidFENError(GameError):
    """Supplied string cannot be interpreted as a FEN position."""


class InvalidRequestError(GameError):
    """Request data could not be validated."""
