"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from gambit.core import Position, MoveGenerator, apply_move, position_from_fen

    pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    for move in MoveGenerator(pos).generate_legal_moves():
        outcome = apply_move(pos, move)
"""

from gambit.core.attacks import is_in_check, is_square_attacked
from gambit.core.board import Board
from gambit.core.enums import (
    CastleSide,
    CastlingRights,
    Color,
    MoveFlag,
    PieceType,
    StatusKind,
)
from gambit.core.errors import (
    ChessError,
    FenError,
    IllegalMoveError,
    MoveTokenError,
    NoLegalMovesError,
    NotationError,
    SanError,
    SearchAborted,
)
from gambit.core.material import CapturedPieces, capture_material_delta, captured_pieces
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import (
    STARTING_FEN,
    FenParseResult,
    UciMove,
    move_from_uci,
    move_to_san,
    move_to_uci,
    parse_position,
    parse_san,
    parse_uci,
    position_from_fen,
    position_to_fen,
)
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.rules import Rules
from gambit.core.status import GameStatus
from gambit.core.transition import (
    Applied,
    MoveOutcome,
    Rejected,
    RejectReason,
    apply_move,
    apply_moves,
    normalize_move,
)
from gambit.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastleSide",
    "CastlingRights",
    "Color",
    "MoveFlag",
    "PieceType",
    "StatusKind",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "GameStatus",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Attacks
    "is_in_check",
    "is_square_attacked",
    # Transition
    "Applied",
    "MoveOutcome",
    "Rejected",
    "RejectReason",
    "apply_move",
    "apply_moves",
    "normalize_move",
    # Material
    "CapturedPieces",
    "captured_pieces",
    "capture_material_delta",
    # Errors
    "ChessError",
    "FenError",
    "IllegalMoveError",
    "MoveTokenError",
    "NoLegalMovesError",
    "NotationError",
    "SanError",
    "SearchAborted",
    # Notation
    "STARTING_FEN",
    "FenParseResult",
    "UciMove",
    "move_from_uci",
    "move_to_san",
    "move_to_uci",
    "parse_position",
    "parse_san",
    "parse_uci",
    "position_from_fen",
    "position_to_fen",
]
