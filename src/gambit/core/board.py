"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator

from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def iter_bits(bitboard: int) -> Iterator[Square]:
    """Yield the set squares of *bitboard*, lowest first."""
    while bitboard:
        lsb = bitboard & -bitboard
        yield lsb.bit_length() - 1
        bitboard ^= lsb


class Board:
    """64-square board with incremental piece indexes.

    A board is mutated only while a transition builds the next position;
    once it belongs to a published :class:`~gambit.core.position.Position`
    it is treated as read-only.
    """

    __slots__ = ("_squares", "_by_type", "_by_color", "_kings")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color][piece_type-1] -> bitboard of occupied squares.
        self._by_type: list[list[int]] = [[0] * 6, [0] * 6]
        # [color] -> bitboard of all occupied squares for that color.
        self._by_color: list[int] = [0, 0]
        # [color] -> king square cache (None if king missing).
        self._kings: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old = self._squares[sq]
        if old == piece:
            return

        mask = 1 << sq
        if old is not None:
            self._by_type[old.color][old.piece_type - 1] &= ~mask
            self._by_color[old.color] &= ~mask
            if old.piece_type == PieceType.KING and self._kings[old.color] == sq:
                self._kings[old.color] = None

        self._squares[sq] = piece
        if piece is None:
            return

        self._by_type[piece.color][piece.piece_type - 1] |= mask
        self._by_color[piece.color] |= mask
        if piece.piece_type == PieceType.KING:
            self._kings[piece.color] = sq

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    def items(self) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares with their pieces, a1 first."""
        for sq, piece in enumerate(self._squares):
            if piece is not None:
                yield sq, piece

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return list(iter_bits(self._by_type[color][piece_type - 1]))

    def pieces_bitboard(self, color: Color, piece_type: PieceType) -> int:
        """Bitboard of squares occupied by *color*'s *piece_type*."""
        return self._by_type[color][piece_type - 1]

    def has_piece(self, color: Color, piece_type: PieceType) -> bool:
        """Whether *color* has at least one piece of *piece_type*."""
        return bool(self._by_type[color][piece_type - 1])

    def all_pieces_bitboard(self, color: Color) -> int:
        """Bitboard of all squares occupied by *color*."""
        return self._by_color[color]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return list(iter_bits(self._by_color[color]))

    def occupied_count(self) -> int:
        return (self._by_color[0] | self._by_color[1]).bit_count()

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` when it is missing."""
        return self._kings[color]

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._by_type = [self._by_type[0].copy(), self._by_type[1].copy()]
        b._by_color = self._by_color.copy()
        b._kings = self._kings.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for file, piece_type in enumerate(_BACK_RANK):
            b[make_square(file, 0)] = Piece(Color.WHITE, piece_type)
            b[make_square(file, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(file, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            b[make_square(file, 7)] = Piece(Color.BLACK, piece_type)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
