"""SAN (Standard Algebraic Notation) conversion and parsing."""

from __future__ import annotations

from gambit.core.enums import MoveFlag, PieceType
from gambit.core.errors import SanError
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.position import Position
from gambit.core.transition import advance, normalize_move
from gambit.core.types import file_of, parse_square, rank_of, square_name

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in _SAN_PIECE.items()}
_FILES = "abcdefgh"
_RANKS = "12345678"


def _check_suffix(position: Position, move: Move) -> str:
    after = advance(position, move, record_history=False)
    gen_after = MoveGenerator(after)
    if not gen_after.is_in_check(after.side_to_move):
        return ""
    return "+" if gen_after.has_legal_moves() else "#"


def move_to_san(position: Position, move: Move) -> str:
    """Convert a legal *move* to SAN given the *position* before the move."""
    board = position.board
    piece = board[move.from_sq]
    if piece is None:
        raise SanError(f"No piece on {square_name(move.from_sq)} for {move}")
    move = normalize_move(board, position.en_passant, move)

    # Castling
    if move.flag == MoveFlag.CASTLE_KINGSIDE:
        return "O-O" + _check_suffix(position, move)
    if move.flag == MoveFlag.CASTLE_QUEENSIDE:
        return "O-O-O" + _check_suffix(position, move)

    san = ""
    is_capture = board[move.to_sq] is not None or move.flag == MoveFlag.EN_PASSANT

    if piece.piece_type == PieceType.PAWN:
        if is_capture:
            san += _FILES[file_of(move.from_sq)]
    else:
        san += _SAN_PIECE[piece.piece_type]

        # Disambiguation
        ambiguous = []
        for m in MoveGenerator(position).generate_legal_moves():
            other = board[m.from_sq]
            if (
                m.to_sq == move.to_sq
                and m.from_sq != move.from_sq
                and other is not None
                and other.piece_type == piece.piece_type
            ):
                ambiguous.append(m)
        if ambiguous:
            same_file = any(file_of(m.from_sq) == file_of(move.from_sq) for m in ambiguous)
            same_rank = any(rank_of(m.from_sq) == rank_of(move.from_sq) for m in ambiguous)
            if not same_file:
                san += _FILES[file_of(move.from_sq)]
            elif not same_rank:
                san += _RANKS[rank_of(move.from_sq)]
            else:
                san += square_name(move.from_sq)

    if is_capture:
        san += "x"

    san += square_name(move.to_sq)

    if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
        san += "=" + _SAN_PIECE[move.promotion]

    return san + _check_suffix(position, move)


def parse_san(position: Position, san: str) -> Move:
    """Parse a SAN string into the matching legal :class:`Move`.

    Raises :class:`SanError` when the text is malformed, names no legal
    move or matches more than one.
    """
    legal = MoveGenerator(position).generate_legal_moves()

    clean = san.strip().rstrip("+#!?")

    # Castling
    castle_flag: MoveFlag | None = None
    if clean in ("O-O", "0-0"):
        castle_flag = MoveFlag.CASTLE_KINGSIDE
    elif clean in ("O-O-O", "0-0-0"):
        castle_flag = MoveFlag.CASTLE_QUEENSIDE
    if castle_flag is not None:
        for m in legal:
            if m.flag == castle_flag:
                return m
        raise SanError(f"Illegal move: {san}")

    # Promotion
    promotion: PieceType | None = None
    if "=" in clean:
        clean, _, promo_text = clean.partition("=")
        promotion = _SAN_PIECE_REV.get(promo_text)
        if promotion is None or promotion == PieceType.KING:
            raise SanError(f"Invalid promotion piece: {san}")

    # Destination (last two chars)
    try:
        to_sq = parse_square(clean[-2:])
    except ValueError:
        raise SanError(f"Invalid destination square: {san}") from None
    clean = clean[:-2]

    # Capture marker
    if clean.endswith("x"):
        clean = clean[:-1]

    # Piece type
    if clean and clean[0] in _SAN_PIECE_REV:
        piece_type = _SAN_PIECE_REV[clean[0]]
        clean = clean[1:]
    else:
        piece_type = PieceType.PAWN

    # Disambiguation
    from_file: int | None = None
    from_rank: int | None = None
    for ch in clean:
        if ch in _FILES and from_file is None:
            from_file = _FILES.index(ch)
        elif ch in _RANKS and from_rank is None:
            from_rank = _RANKS.index(ch)
        else:
            raise SanError(f"Malformed SAN: {san}")

    # Find matching legal move
    candidates: list[Move] = []
    for m in legal:
        p = position.board[m.from_sq]
        if p is None or p.piece_type != piece_type:
            continue
        if m.to_sq != to_sq or m.promotion != promotion:
            continue
        if from_file is not None and file_of(m.from_sq) != from_file:
            continue
        if from_rank is not None and rank_of(m.from_sq) != from_rank:
            continue
        candidates.append(m)

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise SanError(f"Illegal move: {san}")
    raise SanError(f"Ambiguous move: {san} -> {[str(m) for m in candidates]}")
