"""Engine difficulty presets and per-engine defaults."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    CUSTOM = "custom"


def clamp_unit(value: float) -> float:
    """Clamp *value* into ``[0, 1]``; non-finite input counts as 0."""
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(1.0, value))


# difficulty -> (think time ms, max depth, randomness)
_PRESETS: dict[Difficulty, tuple[int, int, float]] = {
    Difficulty.EASY: (80, 1, 0.85),
    Difficulty.MEDIUM: (200, 1, 0.35),
    Difficulty.HARD: (450, 2, 0.05),
    Difficulty.CUSTOM: (250, 1, 0.25),
}

_SEARCH_RANDOMNESS: dict[Difficulty, float] = {
    Difficulty.EASY: 0.7,
    Difficulty.MEDIUM: 0.25,
}

# Custom configs at or above this depth are played by the alpha-beta engine.
STRONG_ENGINE_MIN_DEPTH = 3


@dataclass(slots=True, frozen=True)
class EngineConfig:
    """Limits and style for one engine.

    Unset fields fall back to per-difficulty defaults, which differ between
    the heuristic and the alpha-beta engine; use the ``*_depth`` /
    ``*_randomness`` accessors rather than the raw fields.
    """

    difficulty: Difficulty = Difficulty.CUSTOM
    max_depth: int | None = None
    think_time_ms: int | None = None
    randomness: float | None = None
    seed: int | None = None

    @classmethod
    def for_difficulty(cls, difficulty: Difficulty, seed: int | None = None) -> EngineConfig:
        think_time_ms, max_depth, randomness = _PRESETS[difficulty]
        return cls(
            difficulty=difficulty,
            max_depth=max_depth,
            think_time_ms=think_time_ms,
            randomness=randomness,
            seed=seed,
        )

    @classmethod
    def custom(
        cls,
        *,
        max_depth: int | None = None,
        think_time_ms: int | None = None,
        randomness: float | None = None,
        seed: int | None = None,
    ) -> EngineConfig:
        """Custom preset with individual overrides."""
        think, depth, rand = _PRESETS[Difficulty.CUSTOM]
        return cls(
            difficulty=Difficulty.CUSTOM,
            max_depth=depth if max_depth is None else max_depth,
            think_time_ms=think if think_time_ms is None else think_time_ms,
            randomness=rand if randomness is None else randomness,
            seed=seed,
        )

    # -- Resolved limits ----------------------------------------------------

    @property
    def wants_strong_engine(self) -> bool:
        if self.difficulty == Difficulty.HARD:
            return True
        return (
            self.difficulty == Difficulty.CUSTOM
            and (self.max_depth or 1) >= STRONG_ENGINE_MIN_DEPTH
        )

    def heuristic_depth(self) -> int:
        if self.max_depth is not None:
            return max(1, int(self.max_depth))
        return 2 if self.difficulty == Difficulty.HARD else 1

    def heuristic_randomness(self) -> float:
        if self.randomness is not None:
            return clamp_unit(self.randomness)
        return _PRESETS[self.difficulty][2]

    def search_depth(self) -> int:
        if self.max_depth is not None:
            return max(1, int(self.max_depth))
        return 4 if self.difficulty == Difficulty.HARD else 2

    def search_randomness(self) -> float:
        if self.randomness is not None:
            return clamp_unit(self.randomness)
        return _SEARCH_RANDOMNESS.get(self.difficulty, 0.05)

    def time_budget_ms(self) -> int:
        """Thinking time; ``0`` means no deadline."""
        return max(0, int(self.think_time_ms or 0))
