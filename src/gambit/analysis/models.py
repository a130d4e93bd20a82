"""Data models produced by position analysis and coaching."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum

from gambit.core.enums import Color
from gambit.core.types import Square
from gambit.engine.config import Difficulty, EngineConfig


class GradeLabel(StrEnum):
    """Human-friendly move quality buckets."""

    BEST = "best"
    EXCELLENT = "excellent"
    GOOD = "good"
    INACCURACY = "inaccuracy"
    MISTAKE = "mistake"
    BLUNDER = "blunder"

    @property
    def nag(self) -> str:
        """Chess NAG annotation symbol."""
        return _LABEL_NAG[self]


_LABEL_NAG: dict[GradeLabel, str] = {
    GradeLabel.BEST: "",
    GradeLabel.EXCELLENT: "",
    GradeLabel.GOOD: "",
    GradeLabel.INACCURACY: "?!",
    GradeLabel.MISTAKE: "?",
    GradeLabel.BLUNDER: "??",
}


class HintLevel(IntEnum):
    NUDGE = 1
    MOVE = 2
    LINE = 3


@dataclass(slots=True, frozen=True)
class AnalysisConfig:
    """Search budget for analysis; unset fields use the engine defaults."""

    max_depth: int | None = None
    think_time_ms: int | None = None

    def engine_config(self) -> EngineConfig:
        """Deterministic engine settings: no randomness, fixed seed."""
        return EngineConfig(
            difficulty=Difficulty.CUSTOM,
            max_depth=self.max_depth,
            think_time_ms=self.think_time_ms,
            randomness=0.0,
            seed=0,
        )


@dataclass(slots=True, frozen=True)
class PositionAnalysis:
    """Engine verdict on one position.

    ``score_cp`` and ``mate_in`` are from ``perspective``; the best move and
    principal variation belong to ``side_to_move``.
    """

    perspective: Color
    side_to_move: Color
    score_cp: int | None
    mate_in: int | None
    best_move_uci: str
    pv: tuple[str, ...]
    depth: int
    nodes: int
    elapsed_ms: int


@dataclass(slots=True, frozen=True)
class MoveGrade:
    """Quality of a played move compared with the engine's choice."""

    label: GradeLabel
    cp_loss: int
    best_move_uci: str | None
    played_move_uci: str
    best_score_cp: int | None
    played_score_cp: int | None


@dataclass(slots=True, frozen=True)
class Hint:
    """One step of a progressive hint.

    A nudge carries only squares, a move hint adds the token, a line hint
    carries the principal variation.
    """

    level: HintLevel
    from_sq: Square | None = None
    to_sq: Square | None = None
    move_uci: str | None = None
    pv: tuple[str, ...] = ()
