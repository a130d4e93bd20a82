"""Position: complete game state (board + metadata) as an immutable value."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color
from gambit.core.move import Move
from gambit.core.status import GameStatus
from gambit.core.types import Square, is_valid_square


@dataclass(frozen=True, slots=True)
class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    Positions are never mutated once built; :func:`gambit.core.transition.apply_move`
    returns a new one with the applied move appended to ``history``.

    Equality covers the state a FEN string can express.  ``history`` and
    ``forced_status`` ride along as metadata.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    history: tuple[Move, ...] = field(default=(), compare=False)
    forced_status: GameStatus | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.halfmove_clock < 0:
            raise ValueError(f"Halfmove clock must be >= 0: {self.halfmove_clock}")
        if self.fullmove_number < 1:
            raise ValueError(f"Fullmove number must be >= 1: {self.fullmove_number}")
        if self.en_passant is not None and not is_valid_square(self.en_passant):
            raise ValueError(f"En passant square out of range: {self.en_passant}")

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position."""
        return cls()

    # ── Derived views ────────────────────────────────────────────────────

    @property
    def last_move(self) -> Move | None:
        return self.history[-1] if self.history else None

    @property
    def ply(self) -> int:
        """Half-moves played since the start of the game."""
        return (self.fullmove_number - 1) * 2 + int(self.side_to_move == Color.BLACK)

    # ── Out-of-core outcomes ─────────────────────────────────────────────

    def with_forced_status(self, status: GameStatus) -> Position:
        """Copy of this position ended by resignation, timeout or agreement."""
        if not status.is_forced:
            raise ValueError(f"Only externally decided outcomes can be forced: {status.kind}")
        return replace(self, forced_status=status)
