"""Attack detection and the precomputed geometry shared with move generation."""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.types import Square, make_square

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


# -- Precomputed lookup tables ---------------------------------------------


def _on_board(file: int, rank: int) -> bool:
    return 0 <= file < 8 and 0 <= rank < 8


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    return tuple(
        tuple(
            make_square((sq & 7) + df, (sq >> 3) + dr)
            for df, dr in offsets
            if _on_board((sq & 7) + df, (sq >> 3) + dr)
        )
        for sq in range(64)
    )


def _build_masks(targets: tuple[tuple[Square, ...], ...]) -> tuple[int, ...]:
    masks: list[int] = []
    for squares in targets:
        mask = 0
        for to_sq in squares:
            mask |= 1 << to_sq
        masks.append(mask)
    return tuple(masks)


def _build_pawn_attackers(color: Color) -> tuple[int, ...]:
    """Per target square: bitboard of squares a *color* pawn attacks it from."""
    back = -color.pawn_direction
    return _build_masks(_build_targets(((-1, back), (1, back))))


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            file, rank = (sq & 7) + df, (sq >> 3) + dr
            ray: list[Square] = []
            while _on_board(file, rank):
                ray.append(make_square(file, rank))
                file += df
                rank += dr
            rays.append(tuple(ray))
        per_square.append(tuple(rays))
    return tuple(per_square)


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_KNIGHT_MASKS = _build_masks(KNIGHT_TARGETS)
_KING_MASKS = _build_masks(KING_TARGETS)
_PAWN_ATTACKER_MASKS = (
    _build_pawn_attackers(Color.WHITE),
    _build_pawn_attackers(Color.BLACK),
)


# -- Queries ----------------------------------------------------------------


def _ray_hits(
    board: Board,
    rays: tuple[tuple[Square, ...], ...],
    by_color: Color,
    sliders: tuple[PieceType, PieceType],
) -> bool:
    for ray in rays:
        for sq in ray:
            piece = board[sq]
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in sliders:
                return True
            break
    return False


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Purely geometric: pins, en passant and the side to move play no part.
    """
    if board.pieces_bitboard(by_color, PieceType.PAWN) & _PAWN_ATTACKER_MASKS[by_color][sq]:
        return True
    if board.pieces_bitboard(by_color, PieceType.KNIGHT) & _KNIGHT_MASKS[sq]:
        return True
    if board.pieces_bitboard(by_color, PieceType.KING) & _KING_MASKS[sq]:
        return True

    has_queen = board.has_piece(by_color, PieceType.QUEEN)
    if (has_queen or board.has_piece(by_color, PieceType.BISHOP)) and _ray_hits(
        board, BISHOP_RAYS[sq], by_color, (PieceType.BISHOP, PieceType.QUEEN)
    ):
        return True
    if (has_queen or board.has_piece(by_color, PieceType.ROOK)) and _ray_hits(
        board, ROOK_RAYS[sq], by_color, (PieceType.ROOK, PieceType.QUEEN)
    ):
        return True
    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?

    A board without a king of *color* is never in check.
    """
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)
