"""Shared engine search models and protocol."""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, TypeVar

from gambit.engine.config import EngineConfig, clamp_unit

if TYPE_CHECKING:
    from gambit.core.enums import Color
    from gambit.core.move import Move
    from gambit.core.position import Position

CancelCheck = Callable[[], bool]
Rng = Callable[[], float]

_T = TypeVar("_T")

_XORSHIFT_DEFAULT_SEED = 123456789
_MASK32 = 0xFFFF_FFFF


def never_cancelled() -> bool:
    return False


@dataclass(slots=True, frozen=True)
class MoveRequest:
    """Snapshot handed to an engine; the position is never mutated."""

    position: Position
    color: Color
    config: EngineConfig = field(default_factory=EngineConfig)
    request_id: int | None = None


@dataclass(slots=True, frozen=True)
class SearchInfo:
    """Telemetry for one move computation.

    ``score_cp`` is from the requesting colour's point of view and
    ``mate_in`` counts full moves (positive when that colour mates).
    """

    elapsed_ms: int = 0
    depth: int = 0
    nodes: int = 0
    score_cp: int | None = None
    mate_in: int | None = None
    pv: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class MoveResponse:
    """Move chosen by an engine plus how it got there."""

    move: Move
    info: SearchInfo = field(default_factory=SearchInfo)


class IEngine(Protocol):
    """Protocol for move-choosing engines."""

    def choose_move(
        self,
        request: MoveRequest,
        is_cancelled: CancelCheck | None = None,
    ) -> MoveResponse: ...


# -- Seeded tie-breaking --------------------------------------------------


class XorShift32:
    """Tiny deterministic generator so seeded games replay identically."""

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = (seed & _MASK32) or _XORSHIFT_DEFAULT_SEED

    def random(self) -> float:
        """Next value in ``[0, 1)``."""
        x = self._state
        x ^= (x << 13) & _MASK32
        x ^= x >> 17
        x ^= (x << 5) & _MASK32
        self._state = x
        return x / 0x1_0000_0000


def make_rng(seed: int | None) -> Rng:
    if seed is None:
        return random.random
    return XorShift32(seed).random


def pick_from_top(
    scored: Sequence[tuple[_T, int]],
    rng: Rng,
    randomness: float,
    max_candidates: int,
) -> tuple[_T, int]:
    """Pick uniformly among the best-scored entries.

    The candidate pool grows with *randomness*: ``0`` always returns the
    top entry, ``1`` draws from the best ``max_candidates``.  Ties keep
    their input order.
    """
    if not scored:
        raise ValueError("pick_from_top() needs at least one candidate")
    ranked = sorted(scored, key=lambda item: item[1], reverse=True)
    n = len(ranked)
    if n == 1:
        return ranked[0]
    max_k = min(max_candidates, n)
    k = max(1, 1 + int(clamp_unit(randomness) * (max_k - 1)))
    return ranked[int(rng() * k)]
