"""High-level chess rules: checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core import attacks
from gambit.core.board import iter_bits
from gambit.core.enums import Color, PieceType
from gambit.core.move_generator import MoveGenerator
from gambit.core.status import GameStatus
from gambit.core.types import square_parity

if TYPE_CHECKING:
    from gambit.core.position import Position

_MINORS = (PieceType.KNIGHT, PieceType.BISHOP)
_MAJORS_AND_PAWNS = (PieceType.PAWN, PieceType.ROOK, PieceType.QUEEN)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Draws by rule count (fifty moves, repetition) are left to the host;
    # only dead positions end the game automatically.

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return attacks.is_in_check(position.board, position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        return not MoveGenerator(position).has_legal_moves()

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        return not MoveGenerator(position).has_legal_moves()

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-colour bishops)."""
        board = position.board
        for color in Color:
            if any(board.has_piece(color, pt) for pt in _MAJORS_AND_PAWNS):
                return False

        minors = [
            (color, pt, sq)
            for color in Color
            for pt in _MINORS
            for sq in iter_bits(board.pieces_bitboard(color, pt))
        ]

        # K vs K, or a lone minor piece
        if len(minors) <= 1:
            return True

        # K+B vs K+B with both bishops on the same square colour
        if len(minors) == 2:
            (c1, pt1, sq1), (c2, pt2, sq2) = minors
            return (
                pt1 == pt2 == PieceType.BISHOP
                and c1 != c2
                and square_parity(sq1) == square_parity(sq2)
            )

        return False

    @staticmethod
    def game_status(position: Position) -> GameStatus:
        """Determine the current game status.

        An externally forced outcome always wins; dead positions come next,
        then mate and stalemate.
        """
        if position.forced_status is not None:
            return position.forced_status

        if Rules.is_insufficient_material(position):
            return GameStatus.insufficient_material()

        if MoveGenerator(position).has_legal_moves():
            return GameStatus.in_progress()

        if Rules.is_in_check(position):
            return GameStatus.checkmate(position.side_to_move.opposite)
        return GameStatus.stalemate()
