"""State transition: apply a move and produce the next position."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import ClassVar, TypeAlias

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, MoveFlag, PieceType
from gambit.core.errors import IllegalMoveError
from gambit.core.move import Move
from gambit.core.piece import PROMOTION_TYPES, Piece
from gambit.core.position import Position
from gambit.core.types import (
    A1, A8, H1, H8, Square, file_of, make_square, rank_of, square_name,
)

# Rook home corner -> (owner, right lost when the rook leaves or is taken there).
_ROOK_HOMES: dict[Square, tuple[Color, CastlingRights]] = {
    A1: (Color.WHITE, CastlingRights.WHITE_QUEENSIDE),
    H1: (Color.WHITE, CastlingRights.WHITE_KINGSIDE),
    A8: (Color.BLACK, CastlingRights.BLACK_QUEENSIDE),
    H8: (Color.BLACK, CastlingRights.BLACK_KINGSIDE),
}

# Castle flag -> (rook origin file, rook destination file).
_CASTLE_ROOK_FILES: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.CASTLE_KINGSIDE: (7, 5),
    MoveFlag.CASTLE_QUEENSIDE: (0, 3),
}


class RejectReason(StrEnum):
    """Why :func:`apply_move` refused a move."""

    GAME_OVER = "game_over"
    EMPTY_SQUARE = "empty_square"
    WRONG_SIDE = "wrong_side"
    MISSING_PROMOTION = "missing_promotion"
    INVALID_PROMOTION = "invalid_promotion"


@dataclass(frozen=True, slots=True)
class Applied:
    """The move was applied; ``move`` is the normalized history entry."""

    ok: ClassVar[bool] = True

    position: Position
    move: Move


@dataclass(frozen=True, slots=True)
class Rejected:
    """The move was refused; ``position`` is the untouched input."""

    ok: ClassVar[bool] = False

    position: Position
    reason: RejectReason


MoveOutcome: TypeAlias = Applied | Rejected


# ── Normalization ────────────────────────────────────────────────────────────


def normalize_move(board: Board, en_passant: Square | None, move: Move) -> Move:
    """Derive the move flag from board geometry.

    This is the one place castling, en passant, double pushes and promotions
    are recognised, so callers may pass plain ``Move(from_sq, to_sq)``
    objects.  Any flag already on *move* is ignored, and a promotion piece is
    kept only for moves that actually promote.
    """
    piece = board[move.from_sq]
    if piece is None:
        return move

    file_delta = file_of(move.to_sq) - file_of(move.from_sq)
    rank_delta = rank_of(move.to_sq) - rank_of(move.from_sq)
    flag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    if piece.piece_type == PieceType.KING:
        if abs(file_delta) == 2 and rank_delta == 0:
            flag = MoveFlag.CASTLE_KINGSIDE if file_delta > 0 else MoveFlag.CASTLE_QUEENSIDE
    elif piece.piece_type == PieceType.PAWN:
        if rank_of(move.to_sq) == piece.color.opposite.home_rank:
            flag = MoveFlag.PROMOTION
            promotion = move.promotion
        elif file_delta == 0 and abs(rank_delta) == 2:
            flag = MoveFlag.DOUBLE_PAWN
        elif (
            abs(file_delta) == 1
            and rank_delta == piece.color.pawn_direction
            and move.to_sq == en_passant
            and board.is_empty(move.to_sq)
        ):
            flag = MoveFlag.EN_PASSANT

    if flag == move.flag and promotion == move.promotion:
        return move
    return replace(move, flag=flag, promotion=promotion)


# ── Board-level placement ────────────────────────────────────────────────────


def play_on_board(board: Board, move: Move) -> Piece | None:
    """Play a normalized *move* on *board* in place and return the captured piece.

    Shared by :func:`apply_move` and the legal-move filter so both agree on
    what a move does to the board.
    """
    piece = board[move.from_sq]
    if piece is None:
        raise IllegalMoveError(f"No piece on {square_name(move.from_sq)}")
    captured = board[move.to_sq]
    board[move.from_sq] = None

    if move.flag == MoveFlag.EN_PASSANT:
        # The captured pawn sits behind the destination square.
        capture_sq = move.to_sq - 8 * piece.color.pawn_direction
        captured = board[capture_sq]
        board[capture_sq] = None
    elif move.flag in _CASTLE_ROOK_FILES:
        rook_file, rook_to_file = _CASTLE_ROOK_FILES[move.flag]
        rank = rank_of(move.from_sq)
        rook_from = make_square(rook_file, rank)
        rook = board[rook_from]
        if rook is not None:
            board[rook_from] = None
            board[make_square(rook_to_file, rank)] = rook

    if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
        board[move.to_sq] = Piece(piece.color, move.promotion)
    else:
        board[move.to_sq] = piece
    return captured


# ── Position-level transition ────────────────────────────────────────────────


def _next_castling(
    castling: CastlingRights, piece: Piece, move: Move, captured: Piece | None
) -> CastlingRights:
    if piece.piece_type == PieceType.KING:
        castling &= ~CastlingRights.for_color(piece.color)
    elif piece.piece_type == PieceType.ROOK and move.from_sq in _ROOK_HOMES:
        owner, right = _ROOK_HOMES[move.from_sq]
        if owner == piece.color:
            castling &= ~right

    if (
        captured is not None
        and captured.piece_type == PieceType.ROOK
        and move.to_sq in _ROOK_HOMES
    ):
        owner, right = _ROOK_HOMES[move.to_sq]
        if owner == captured.color:
            castling &= ~right
    return castling


def advance(position: Position, move: Move, *, record_history: bool = True) -> Position:
    """Apply a normalized move without the input checks of :func:`apply_move`.

    Intended for moves produced by the move generator.  With
    ``record_history=False`` the child shares its parent's history, which
    keeps deep searches from copying the game record at every node.
    An empty origin square raises :class:`~gambit.core.errors.IllegalMoveError`.
    """
    piece = position.board[move.from_sq]
    if piece is None:
        raise IllegalMoveError(f"No piece on {square_name(move.from_sq)}")
    board = position.board.copy()
    captured = play_on_board(board, move)

    en_passant: Square | None = None
    if move.flag == MoveFlag.DOUBLE_PAWN:
        en_passant = (move.from_sq + move.to_sq) // 2

    if captured is not None or piece.piece_type == PieceType.PAWN:
        halfmove_clock = 0
    else:
        halfmove_clock = position.halfmove_clock + 1

    fullmove_number = position.fullmove_number
    if position.side_to_move == Color.BLACK:
        fullmove_number += 1

    history = position.history
    if record_history:
        history = (*history, move.with_captured(captured))

    return Position(
        board=board,
        side_to_move=position.side_to_move.opposite,
        castling=_next_castling(position.castling, piece, move, captured),
        en_passant=en_passant,
        halfmove_clock=halfmove_clock,
        fullmove_number=fullmove_number,
        history=history,
        forced_status=position.forced_status,
    )


def apply_move(position: Position, move: Move) -> MoveOutcome:
    """Apply *move* to *position*.

    Legality is not re-checked here (use the move generator for that), but
    moves that cannot be applied at all are refused with a :class:`Rejected`
    outcome instead of raising.
    """
    if position.forced_status is not None:
        return Rejected(position, RejectReason.GAME_OVER)

    piece = position.board[move.from_sq]
    if piece is None:
        return Rejected(position, RejectReason.EMPTY_SQUARE)
    if piece.color != position.side_to_move:
        return Rejected(position, RejectReason.WRONG_SIDE)

    move = normalize_move(position.board, position.en_passant, move)
    if move.flag == MoveFlag.PROMOTION:
        if move.promotion is None:
            return Rejected(position, RejectReason.MISSING_PROMOTION)
        if move.promotion not in PROMOTION_TYPES:
            return Rejected(position, RejectReason.INVALID_PROMOTION)

    child = advance(position, move)
    return Applied(child, child.history[-1])


def apply_moves(position: Position, moves: Iterable[Move]) -> MoveOutcome:
    """Apply *moves* in order, stopping at the first rejection.

    Rejections come back as a :class:`Rejected` outcome.  An empty sequence
    has no outcome to report and raises :class:`ValueError`.
    """
    outcome: MoveOutcome | None = None
    for move in moves:
        outcome = apply_move(position, move)
        if not outcome.ok:
            return outcome
        position = outcome.position
    if outcome is None:
        raise ValueError("apply_moves() needs at least one move")
    return outcome
