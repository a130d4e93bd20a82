"""Legal and pseudo-legal move generation."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from gambit.core import attacks
from gambit.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
)
from gambit.core.board import iter_bits
from gambit.core.enums import CastleSide, CastlingRights, Color, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.piece import PROMOTION_TYPES
from gambit.core.transition import play_on_board
from gambit.core.types import Square, make_square, rank_of

if TYPE_CHECKING:
    from gambit.core.position import Position


_KING_HOME_FILE = 4
# Castle flag -> (rook home file, files that must be empty, files the king crosses).
_CASTLE_LAYOUT: dict[MoveFlag, tuple[int, tuple[int, ...], tuple[int, ...]]] = {
    MoveFlag.CASTLE_KINGSIDE: (7, (5, 6), (5, 6)),
    MoveFlag.CASTLE_QUEENSIDE: (0, (1, 2, 3), (3, 2)),
}
_CASTLE_SIDES: dict[MoveFlag, CastleSide] = {
    MoveFlag.CASTLE_KINGSIDE: CastleSide.KING,
    MoveFlag.CASTLE_QUEENSIDE: CastleSide.QUEEN,
}


class MoveGenerator:
    """Generates moves for a given :class:`Position`.

    The position is never touched: legality is decided by replaying each
    candidate on a scratch copy of the board.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self, from_sq: Square | None = None) -> list[Move]:
        """All strictly legal moves for the side to move (optionally from one square)."""
        return list(self._iter_legal(from_sq))

    def has_legal_moves(self) -> bool:
        """Whether the side to move has at least one legal move."""
        return next(self._iter_legal(None), None) is not None

    def generate_pseudo_legal_moves(self, from_sq: Square | None = None) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        color = self._pos.side_to_move
        board = self._board

        if from_sq is not None:
            piece = board[from_sq]
            if piece is None or piece.color != color:
                return moves
            self._gen_piece(from_sq, piece.piece_type, color, moves)
            return moves

        for piece_type in PieceType:
            for sq in iter_bits(board.pieces_bitboard(color, piece_type)):
                self._gen_piece(sq, piece_type, color, moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return attacks.is_in_check(self._board, color)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return attacks.is_square_attacked(self._board, sq, by_color)

    # -- Legality filter (private) -----------------------------------------

    def _iter_legal(self, from_sq: Square | None) -> Iterator[Move]:
        color = self._pos.side_to_move
        in_check: bool | None = None

        for move in self.generate_pseudo_legal_moves(from_sq):
            if move.is_castle:
                if in_check is None:
                    in_check = self.is_in_check(color)
                if in_check or not self._castle_path_safe(move, color):
                    continue
            if self._leaves_king_safe(move, color):
                yield move

    def _castle_path_safe(self, move: Move, color: Color) -> bool:
        _, _, crossed = _CASTLE_LAYOUT[move.flag]
        rank = rank_of(move.from_sq)
        opponent = color.opposite
        return not any(
            self.is_square_attacked(make_square(file, rank), opponent) for file in crossed
        )

    def _leaves_king_safe(self, move: Move, color: Color) -> bool:
        scratch = self._board.copy()
        play_on_board(scratch, move)
        return not attacks.is_in_check(scratch, color)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_piece(
        self, sq: Square, piece_type: PieceType, color: Color, moves: list[Move]
    ) -> None:
        if piece_type == PieceType.PAWN:
            self._gen_pawn(sq, color, moves)
        elif piece_type == PieceType.KNIGHT:
            self._gen_leaper(sq, color, KNIGHT_TARGETS[sq], moves)
        elif piece_type == PieceType.BISHOP:
            self._gen_sliding(sq, color, BISHOP_RAYS[sq], moves)
        elif piece_type == PieceType.ROOK:
            self._gen_sliding(sq, color, ROOK_RAYS[sq], moves)
        elif piece_type == PieceType.QUEEN:
            self._gen_sliding(sq, color, QUEEN_RAYS[sq], moves)
        else:
            self._gen_leaper(sq, color, KING_TARGETS[sq], moves)
            self._gen_castling(sq, color, moves)

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        step = 8 * color.pawn_direction
        rank_idx = rank_of(sq)
        start_rank = 1 if color == Color.WHITE else 6
        last_rank = color.opposite.home_rank

        one_step = sq + step
        if 0 <= one_step < 64 and board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, last_rank, moves)
            two_step = one_step + step
            if rank_idx == start_rank and board.is_empty(two_step):
                moves.append(Move(sq, two_step, MoveFlag.DOUBLE_PAWN))

        file_idx = sq & 7
        for df in (-1, 1):
            if not 0 <= file_idx + df < 8:
                continue
            cap_sq = one_step + df
            if not 0 <= cap_sq < 64:
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(sq, cap_sq, last_rank, moves)
            elif cap_sq == self._pos.en_passant:
                moves.append(Move(sq, cap_sq, MoveFlag.EN_PASSANT))

    @staticmethod
    def _add_pawn_move(
        from_sq: Square, to_sq: Square, last_rank: int, moves: list[Move]
    ) -> None:
        if rank_of(to_sq) == last_rank:
            for pt in PROMOTION_TYPES:
                moves.append(Move(from_sq, to_sq, MoveFlag.PROMOTION, pt))
        else:
            moves.append(Move(from_sq, to_sq))

    def _gen_leaper(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        rank = color.home_rank
        if king_sq != make_square(_KING_HOME_FILE, rank):
            return

        board = self._board
        for flag, (rook_file, between, _) in _CASTLE_LAYOUT.items():
            if not self._pos.castling & CastlingRights.for_side(color, _CASTLE_SIDES[flag]):
                continue
            rook = board[make_square(rook_file, rank)]
            if rook is None or rook.color != color or rook.piece_type != PieceType.ROOK:
                continue
            if all(board.is_empty(make_square(file, rank)) for file in between):
                king_to = king_sq + (2 if flag == MoveFlag.CASTLE_KINGSIDE else -2)
                moves.append(Move(king_sq, king_to, flag))
