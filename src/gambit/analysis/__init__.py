"""Position analysis and coaching APIs."""

from gambit.analysis.models import (
    AnalysisConfig,
    GradeLabel,
    Hint,
    HintLevel,
    MoveGrade,
    PositionAnalysis,
)
from gambit.analysis.service import (
    PositionAnalyzer,
    compute_cp_loss,
    grade_cp_loss,
    progressive_hint,
)

__all__ = [
    "AnalysisConfig",
    "GradeLabel",
    "Hint",
    "HintLevel",
    "MoveGrade",
    "PositionAnalysis",
    "PositionAnalyzer",
    "compute_cp_loss",
    "grade_cp_loss",
    "progressive_hint",
]
