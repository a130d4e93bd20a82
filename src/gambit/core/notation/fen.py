"""FEN parsing and serialization."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, PieceType
from gambit.core.errors import FenError
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
_EMPTY_RUNS = "12345678"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


@dataclass(frozen=True, slots=True)
class FenParseResult:
    """Outcome of :func:`parse_position`: a position or the reason there is none."""

    position: Position | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.position is not None


def _parse_clock(text: str, name: str, minimum: int) -> int:
    if not text.isascii():
        raise FenError(f"Invalid FEN {name}: {text!r}")
    try:
        value = int(text)
    except ValueError:
        raise FenError(f"Invalid FEN {name}: {text!r}") from None
    if value < minimum:
        raise FenError(f"Invalid FEN {name}: {text!r}")
    return value


def _parse_board(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FenError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                if ch not in _EMPTY_RUNS:
                    raise FenError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += int(ch)
            else:
                if file >= 8:
                    raise FenError(f"Invalid FEN rank width: {fen!r}")
                try:
                    board[make_square(file, rank)] = Piece.from_char(ch)
                except ValueError as exc:
                    raise FenError(f"{exc} in {fen!r}") from None
                file += 1
            if file > 8:
                raise FenError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise FenError(f"Invalid FEN rank width: {fen!r}")

    for color in Color:
        if len(board.pieces(color, PieceType.KING)) != 1:
            raise FenError(f"Invalid FEN: {color} must have exactly one king: {fen!r}")
    return board


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    The clock fields are optional.  Raises :class:`FenError` (a
    :class:`ValueError`) for anything malformed.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise FenError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement
    board = _parse_board(placement, fen)

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise FenError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or castling & right:
                raise FenError(f"Invalid FEN castling field: {castling_part!r}")
            castling |= right

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise FenError(f"Invalid FEN en-passant square: {ep_part!r}") from None
        expected_ep_rank = 5 if side == Color.WHITE else 2
        if rank_of(ep) != expected_ep_rank:
            raise FenError(f"Invalid FEN en-passant square for side-to-move: {ep_part!r}")

    # 5-6. Clocks (optional)
    halfmove = _parse_clock(parts[4], "halfmove clock", 0) if len(parts) > 4 else 0
    fullmove = _parse_clock(parts[5], "fullmove number", 1) if len(parts) > 5 else 1

    return Position(board, side, castling, ep, halfmove, fullmove)


def parse_position(text: str) -> FenParseResult:
    """Non-raising variant of :func:`position_from_fen`."""
    try:
        return FenParseResult(position=position_from_fen(text))
    except FenError as exc:
        return FenParseResult(error=str(exc))


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    # 1. Board
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[make_square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS.items() if pos.castling & right)
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} {pos.halfmove_clock} {pos.fullmove_number}"
