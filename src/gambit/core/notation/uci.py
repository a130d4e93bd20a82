"""Compact coordinate move tokens (``e2e4``, ``e7e8q``)."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import PieceType
from gambit.core.errors import IllegalMoveError, MoveTokenError
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.piece import piece_type_from_letter
from gambit.core.position import Position
from gambit.core.types import Square, parse_square

_PROMOTION_LETTERS = frozenset("qrbn")


@dataclass(frozen=True, slots=True)
class UciMove:
    """A parsed token; not yet checked against any position."""

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None

    def to_move(self) -> Move:
        """Bare move carrying only geometry; flags are derived on application."""
        return Move(self.from_sq, self.to_sq, promotion=self.promotion)


def move_to_uci(move: Move) -> str:
    return move.uci


def parse_uci(token: str) -> UciMove:
    """Parse a 4-5 character move token.

    Surrounding whitespace and letter case are ignored.  Raises
    :class:`MoveTokenError` for anything else.
    """
    text = token.strip().lower()
    if len(text) not in (4, 5):
        raise MoveTokenError(f"Move token must be 4 or 5 characters: {token!r}")
    try:
        from_sq = parse_square(text[0:2])
        to_sq = parse_square(text[2:4])
    except ValueError:
        raise MoveTokenError(f"Invalid squares in move token: {token!r}") from None

    promotion: PieceType | None = None
    if len(text) == 5:
        if text[4] not in _PROMOTION_LETTERS:
            raise MoveTokenError(f"Invalid promotion piece in move token: {token!r}")
        promotion = piece_type_from_letter(text[4])
    return UciMove(from_sq, to_sq, promotion)


def move_from_uci(position: Position, token: str) -> Move:
    """Resolve *token* to the matching legal move in *position*."""
    parsed = parse_uci(token)
    for move in MoveGenerator(position).generate_legal_moves(parsed.from_sq):
        if move.to_sq == parsed.to_sq and move.promotion == parsed.promotion:
            return move
    raise IllegalMoveError(f"Illegal move in this position: {token!r}")
