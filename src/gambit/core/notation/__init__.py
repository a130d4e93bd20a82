"""Notation package: FEN / UCI / SAN parsing and serialization."""

from gambit.core.notation.fen import (
    STARTING_FEN,
    FenParseResult,
    parse_position,
    position_from_fen,
    position_to_fen,
)
from gambit.core.notation.san import move_to_san, parse_san
from gambit.core.notation.uci import UciMove, move_from_uci, move_to_uci, parse_uci

__all__ = [
    "STARTING_FEN",
    "FenParseResult",
    "UciMove",
    "position_from_fen",
    "position_to_fen",
    "parse_position",
    "move_to_uci",
    "move_from_uci",
    "parse_uci",
    "move_to_san",
    "parse_san",
]
