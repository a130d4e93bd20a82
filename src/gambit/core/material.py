"""Captured-material bookkeeping derived from a position's move history."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from gambit.core.enums import Color, PieceType
from gambit.core.position import Position

PIECE_POINTS: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 0,
}

# Display order: heaviest first, pawns last.
_DISPLAY_ORDER: dict[PieceType, int] = {
    PieceType.QUEEN: 0,
    PieceType.ROOK: 1,
    PieceType.BISHOP: 2,
    PieceType.KNIGHT: 3,
    PieceType.PAWN: 4,
    PieceType.KING: 5,
}


@dataclass(frozen=True, slots=True)
class CapturedPieces:
    """Piece types each side has taken, in display order."""

    by_white: tuple[PieceType, ...] = ()
    by_black: tuple[PieceType, ...] = ()

    def by_color(self, color: Color) -> tuple[PieceType, ...]:
        return self.by_white if color == Color.WHITE else self.by_black


def sort_captured(pieces: Iterable[PieceType]) -> tuple[PieceType, ...]:
    return tuple(sorted(pieces, key=_DISPLAY_ORDER.__getitem__))


def captured_pieces(position: Position, start_side: Color = Color.WHITE) -> CapturedPieces:
    """Collect captures from ``position.history``.

    Movers alternate starting with *start_side*, which must be the side to
    move in the position the history was played from.
    """
    taken: tuple[list[PieceType], list[PieceType]] = ([], [])
    mover = start_side
    for move in position.history:
        if move.captured is not None:
            taken[mover].append(move.captured.piece_type)
        mover = mover.opposite
    return CapturedPieces(sort_captured(taken[Color.WHITE]), sort_captured(taken[Color.BLACK]))


def capture_material_delta(captured: CapturedPieces) -> int:
    """Point balance of captures; positive means White has taken more."""
    white = sum(PIECE_POINTS[pt] for pt in captured.by_white)
    black = sum(PIECE_POINTS[pt] for pt in captured.by_black)
    return white - black
