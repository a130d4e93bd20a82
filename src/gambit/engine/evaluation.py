"""Static evaluation and move ordering for the alpha-beta search."""

from __future__ import annotations

from collections.abc import Iterable

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.position import Position
from gambit.core.types import Square, mirror_rank

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 0,
}

_MOBILITY_CAP = 30
_MOBILITY_WEIGHT = 2
_PROMOTION_ORDER_BONUS = 9_000
_CASTLE_ORDER_BONUS = 500

# Piece-square tables in centipawns, indexed by square from White's side
# (a1 first).  Black looks them up on the mirrored square.
# fmt: off
_PST_PAWN = (
     0,  0,  0,   0,   0,  0,  0,  0,
    10, 10, 10, -10, -10, 10, 10, 10,
     6,  6,  8,  12,  12,  8,  6,  6,
     4,  4,  6,  10,  10,  6,  4,  4,
     2,  2,  4,   8,   8,  4,  2,  2,
     1,  1,  2,   4,   4,  2,  1,  1,
     0,  0,  0,   0,   0,  0,  0,  0,
     0,  0,  0,   0,   0,  0,  0,  0,
)

_PST_KNIGHT = (
    -50, -40, -30, -30, -30, -30, -40, -50,
    -40, -20,   0,   0,   0,   0, -20, -40,
    -30,   0,  10,  15,  15,  10,   0, -30,
    -30,   5,  15,  20,  20,  15,   5, -30,
    -30,   0,  15,  20,  20,  15,   0, -30,
    -30,   5,  10,  15,  15,  10,   5, -30,
    -40, -20,   0,   5,   5,   0, -20, -40,
    -50, -40, -30, -30, -30, -30, -40, -50,
)

_PST_BISHOP = (
    -20, -10, -10, -10, -10, -10, -10, -20,
    -10,   0,   0,   0,   0,   0,   0, -10,
    -10,   0,   5,  10,  10,   5,   0, -10,
    -10,   5,   5,  10,  10,   5,   5, -10,
    -10,   0,  10,  10,  10,  10,   0, -10,
    -10,  10,  10,  10,  10,  10,  10, -10,
    -10,   5,   0,   0,   0,   0,   5, -10,
    -20, -10, -10, -10, -10, -10, -10, -20,
)

_PST_ROOK = (
     0,  0,  0,  0,  0,  0,  0,  0,
     5, 10, 10, 10, 10, 10, 10,  5,
    -5,  0,  0,  0,  0,  0,  0, -5,
    -5,  0,  0,  0,  0,  0,  0, -5,
    -5,  0,  0,  0,  0,  0,  0, -5,
    -5,  0,  0,  0,  0,  0,  0, -5,
    -5,  0,  0,  0,  0,  0,  0, -5,
     0,  0,  0,  5,  5,  0,  0,  0,
)

_PST_QUEEN = (
    -20, -10, -10, -5, -5, -10, -10, -20,
    -10,   0,   0,  0,  0,   0,   0, -10,
    -10,   0,   5,  5,  5,   5,   0, -10,
     -5,   0,   5,  5,  5,   5,   0,  -5,
      0,   0,   5,  5,  5,   5,   0,  -5,
    -10,   5,   5,  5,  5,   5,   0, -10,
    -10,   0,   5,  0,  0,   0,   0, -10,
    -20, -10, -10, -5, -5, -10, -10, -20,
)

_PST_KING = (
    -30, -40, -40, -50, -50, -40, -40, -30,
    -30, -40, -40, -50, -50, -40, -40, -30,
    -30, -40, -40, -50, -50, -40, -40, -30,
    -30, -40, -40, -50, -50, -40, -40, -30,
    -20, -30, -30, -40, -40, -30, -30, -20,
    -10, -20, -20, -20, -20, -20, -20, -10,
     20,  20,   0,   0,   0,   0,  20,  20,
     20,  30,  10,   0,   0,  10,  30,  20,
)
# fmt: on

_PST: dict[PieceType, tuple[int, ...]] = {
    PieceType.PAWN: _PST_PAWN,
    PieceType.KNIGHT: _PST_KNIGHT,
    PieceType.BISHOP: _PST_BISHOP,
    PieceType.ROOK: _PST_ROOK,
    PieceType.QUEEN: _PST_QUEEN,
    PieceType.KING: _PST_KING,
}


def piece_square_value(piece_type: PieceType, color: Color, sq: Square) -> int:
    idx = sq if color == Color.WHITE else mirror_rank(sq)
    return _PST[piece_type][idx]


def evaluate(position: Position, perspective: Color) -> int:
    """Static score in centipawns, positive when *perspective* is better.

    Material plus piece-square bonuses, plus a capped mobility term counting
    the legal moves of the side to move.
    """
    cp = 0
    for sq, piece in position.board.items():
        value = PIECE_VALUES[piece.piece_type] + piece_square_value(
            piece.piece_type, piece.color, sq
        )
        cp += value if piece.color == perspective else -value

    mobility = min(_MOBILITY_CAP, len(MoveGenerator(position).generate_legal_moves()))
    mobility *= _MOBILITY_WEIGHT
    cp += mobility if position.side_to_move == perspective else -mobility
    return cp


def move_order_score(board: Board, move: Move) -> int:
    """Cheap most-valuable-victim / least-valuable-attacker ordering key."""
    score = 0
    victim = board[move.to_sq]
    if victim is not None:
        attacker = board[move.from_sq]
        score += PIECE_VALUES[victim.piece_type] * 10
        if attacker is not None:
            score -= PIECE_VALUES[attacker.piece_type]
    if move.promotion is not None:
        score += _PROMOTION_ORDER_BONUS
    if move.is_castle:
        score += _CASTLE_ORDER_BONUS
    return score


def order_moves(board: Board, moves: Iterable[Move]) -> list[Move]:
    """Moves sorted best-first by :func:`move_order_score` (stable)."""
    return sorted(moves, key=lambda move: move_order_score(board, move), reverse=True)
