"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from gambit.core.enums import CastleSide, MoveFlag, PieceType
from gambit.core.piece import Piece, piece_type_letter
from gambit.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    A move only describes intent; whether it is legal is decided by
    :class:`~gambit.core.move_generator.MoveGenerator`.  ``captured`` is
    filled in by :func:`~gambit.core.transition.apply_move` for history
    entries and takes no part in equality.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None
    captured: Piece | None = field(default=None, compare=False)

    # ── Classification ───────────────────────────────────────────────────

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    @property
    def castle_side(self) -> CastleSide | None:
        if self.flag == MoveFlag.CASTLE_KINGSIDE:
            return CastleSide.KING
        if self.flag == MoveFlag.CASTLE_QUEENSIDE:
            return CastleSide.QUEEN
        return None

    @property
    def is_en_passant(self) -> bool:
        return self.flag == MoveFlag.EN_PASSANT

    @property
    def is_promotion(self) -> bool:
        return self.flag == MoveFlag.PROMOTION

    def with_captured(self, captured: Piece | None) -> Move:
        """Copy of this move recording *captured*."""
        return replace(self, captured=captured)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += piece_type_letter(self.promotion)
        return base

    @property
    def uci(self) -> str:
        """Compact move token, e.g. ``e7e8q``."""
        return str(self)
