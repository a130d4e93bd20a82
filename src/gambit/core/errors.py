"""Exception taxonomy shared by the notation, rules and engine layers."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for every error raised by :mod:`gambit`."""


class NotationError(ChessError, ValueError):
    """Malformed external text (position string, move token, SAN)."""


class FenError(NotationError):
    """Invalid position text."""


class MoveTokenError(NotationError):
    """Invalid compact move token such as ``e7e8q``."""


class SanError(NotationError):
    """SAN text that is malformed, illegal or ambiguous in the position."""


class IllegalMoveError(ChessError, ValueError):
    """A well-formed move that is not legal in the given position."""


class NoLegalMovesError(ChessError):
    """A move was requested from a position without legal moves."""


class SearchAborted(ChessError):
    """The caller cancelled a running search before it produced a move."""
