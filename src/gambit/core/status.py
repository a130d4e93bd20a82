"""Game status value object."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import Color, StatusKind

_FORCED_KINDS = frozenset(
    {StatusKind.RESIGNATION, StatusKind.TIMEOUT, StatusKind.DRAW_AGREEMENT}
)
_DECISIVE_KINDS = frozenset(
    {StatusKind.CHECKMATE, StatusKind.RESIGNATION, StatusKind.TIMEOUT}
)


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Tagged terminal status: ``kind`` plus the winner for decisive kinds."""

    kind: StatusKind
    winner: Color | None = None

    def __post_init__(self) -> None:
        if (self.kind in _DECISIVE_KINDS) != (self.winner is not None):
            raise ValueError(f"{self.kind} status requires winner iff decisive")

    # ── Factories ────────────────────────────────────────────────────────

    @classmethod
    def in_progress(cls) -> GameStatus:
        return cls(StatusKind.IN_PROGRESS)

    @classmethod
    def checkmate(cls, winner: Color) -> GameStatus:
        return cls(StatusKind.CHECKMATE, winner)

    @classmethod
    def stalemate(cls) -> GameStatus:
        return cls(StatusKind.STALEMATE)

    @classmethod
    def insufficient_material(cls) -> GameStatus:
        return cls(StatusKind.INSUFFICIENT_MATERIAL)

    @classmethod
    def resignation(cls, loser: Color) -> GameStatus:
        return cls(StatusKind.RESIGNATION, loser.opposite)

    @classmethod
    def timeout(cls, loser: Color) -> GameStatus:
        return cls(StatusKind.TIMEOUT, loser.opposite)

    @classmethod
    def draw_agreement(cls) -> GameStatus:
        return cls(StatusKind.DRAW_AGREEMENT)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def is_over(self) -> bool:
        return self.kind != StatusKind.IN_PROGRESS

    @property
    def is_draw(self) -> bool:
        return self.is_over and self.winner is None

    @property
    def is_forced(self) -> bool:
        """Whether this outcome is decided outside the rules engine."""
        return self.kind in _FORCED_KINDS

    @property
    def loser(self) -> Color | None:
        return None if self.winner is None else self.winner.opposite
