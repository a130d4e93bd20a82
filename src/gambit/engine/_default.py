"""Picks the engine implementation for a configuration."""

from __future__ import annotations

from gambit.engine.alphabeta import AlphaBetaEngine
from gambit.engine.config import EngineConfig
from gambit.engine.heuristic import HeuristicEngine
from gambit.engine.search import IEngine


def engine_for_config(config: EngineConfig) -> IEngine:
    """Heuristic engine for the light levels, alpha-beta for hard and deep custom."""
    if config.wants_strong_engine:
        return AlphaBetaEngine()
    return HeuristicEngine()


__all__ = ["engine_for_config"]
