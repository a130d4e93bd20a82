"""Chess engine package: move choosers and their shared request models.

The PyQt6 worker lives in :mod:`gambit.engine.qt_bridge` and is imported
explicitly by hosts that run a Qt event loop.
"""

from gambit.engine._default import engine_for_config
from gambit.engine.alphabeta import AlphaBetaEngine
from gambit.engine.config import Difficulty, EngineConfig
from gambit.engine.evaluation import evaluate
from gambit.engine.heuristic import HeuristicEngine
from gambit.engine.search import (
    CancelCheck,
    IEngine,
    MoveRequest,
    MoveResponse,
    SearchInfo,
    XorShift32,
)

__all__ = [
    "AlphaBetaEngine",
    "CancelCheck",
    "Difficulty",
    "EngineConfig",
    "HeuristicEngine",
    "IEngine",
    "MoveRequest",
    "MoveResponse",
    "SearchInfo",
    "XorShift32",
    "engine_for_config",
    "evaluate",
]
