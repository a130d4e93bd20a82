"""Position analysis, move grading and hints built on the alpha-beta engine."""

from __future__ import annotations

import logging
from time import perf_counter

from gambit.analysis.models import (
    AnalysisConfig,
    GradeLabel,
    Hint,
    HintLevel,
    MoveGrade,
    PositionAnalysis,
)
from gambit.core.enums import Color, StatusKind
from gambit.core.errors import IllegalMoveError, MoveTokenError
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation.uci import parse_uci
from gambit.core.position import Position
from gambit.core.rules import Rules
from gambit.core.transition import advance, normalize_move
from gambit.engine.alphabeta import MATE_SCORE, AlphaBetaEngine
from gambit.engine.search import CancelCheck, IEngine, MoveRequest

_LOGGER = logging.getLogger(__name__)

# Upper cp-loss bound (inclusive) for each label, best first.
_GRADE_THRESHOLDS: tuple[tuple[int, GradeLabel], ...] = (
    (10, GradeLabel.BEST),
    (30, GradeLabel.EXCELLENT),
    (80, GradeLabel.GOOD),
    (150, GradeLabel.INACCURACY),
    (300, GradeLabel.MISTAKE),
)


def grade_cp_loss(cp_loss: float) -> GradeLabel:
    """Bucket a centipawn loss into a :class:`GradeLabel`."""
    loss = max(0, int(cp_loss))
    for limit, label in _GRADE_THRESHOLDS:
        if loss <= limit:
            return label
    return GradeLabel.BLUNDER


def compute_cp_loss(best_score_cp: int | None, played_score_cp: int | None) -> int:
    """How much worse the played move scored than the best one (never negative)."""
    best = best_score_cp or 0
    played = played_score_cp or 0
    return max(0, round(best - played))


def _flip(value: int | None, from_color: Color, to_color: Color) -> int | None:
    if value is None or from_color == to_color:
        return value
    return -value


class PositionAnalyzer:
    """Runs deterministic searches to explain positions and grade moves."""

    __slots__ = ("_engine",)

    def __init__(self, engine: IEngine | None = None) -> None:
        self._engine = engine or AlphaBetaEngine()

    def analyze(
        self,
        position: Position,
        perspective: Color,
        config: AnalysisConfig | None = None,
        is_cancelled: CancelCheck | None = None,
    ) -> PositionAnalysis:
        """Search *position* for its side to move and report from *perspective*.

        Raises :class:`~gambit.core.errors.NoLegalMovesError` for finished
        positions and :class:`~gambit.core.errors.SearchAborted` on cancel.
        """
        config = config or AnalysisConfig()
        mover = position.side_to_move
        started = perf_counter()
        response = self._engine.choose_move(
            MoveRequest(position, mover, config.engine_config()),
            is_cancelled,
        )
        info = response.info
        best_move_uci = info.pv[0] if info.pv else response.move.uci
        return PositionAnalysis(
            perspective=perspective,
            side_to_move=mover,
            score_cp=_flip(info.score_cp, mover, perspective),
            mate_in=_flip(info.mate_in, mover, perspective),
            best_move_uci=best_move_uci,
            pv=info.pv or (best_move_uci,),
            depth=info.depth,
            nodes=info.nodes,
            elapsed_ms=info.elapsed_ms or round((perf_counter() - started) * 1000),
        )

    def grade_move(
        self,
        before: Position,
        move: Move,
        config: AnalysisConfig | None = None,
        is_cancelled: CancelCheck | None = None,
    ) -> MoveGrade:
        """Compare *move* with the engine's best move in *before*."""
        player = before.side_to_move
        move = normalize_move(before.board, before.en_passant, move)
        if move not in MoveGenerator(before).generate_legal_moves(move.from_sq):
            raise IllegalMoveError(f"Cannot grade illegal move {move}")

        best = self.analyze(before, player, config, is_cancelled)
        after = advance(before, move)

        if best.best_move_uci == move.uci:
            played_score = best.score_cp
        else:
            played_score = self._score_after(after, player, config, is_cancelled)

        cp_loss = compute_cp_loss(best.score_cp, played_score)
        label = grade_cp_loss(cp_loss)
        _LOGGER.debug("Graded %s as %s (cp loss %d)", move, label, cp_loss)
        return MoveGrade(
            label=label,
            cp_loss=cp_loss,
            best_move_uci=best.best_move_uci,
            played_move_uci=move.uci,
            best_score_cp=best.score_cp,
            played_score_cp=played_score,
        )

    def _score_after(
        self,
        after: Position,
        player: Color,
        config: AnalysisConfig | None,
        is_cancelled: CancelCheck | None,
    ) -> int | None:
        status = Rules.game_status(after)
        if status.kind == StatusKind.CHECKMATE:
            # Mate delivered on the graded move itself.
            return MATE_SCORE - 1 if status.winner == player else -(MATE_SCORE - 1)
        if status.is_over:
            return 0
        return self.analyze(after, player, config, is_cancelled).score_cp


def progressive_hint(analysis: PositionAnalysis, level: int) -> Hint | None:
    """Hint for the analysed side to move, revealing more at each level.

    Level 1 points at the squares, level 2 names the move, level 3 shows
    the whole line.  Returns ``None`` when the analysis has no usable move.
    """
    hint_level = HintLevel(level)
    first = analysis.pv[0] if analysis.pv else analysis.best_move_uci
    if not first:
        return None

    if hint_level == HintLevel.LINE:
        return Hint(hint_level, pv=analysis.pv or (first,))

    try:
        parsed = parse_uci(first)
    except MoveTokenError:
        return None

    if hint_level == HintLevel.MOVE:
        return Hint(hint_level, parsed.from_sq, parsed.to_sq, move_uci=first)
    return Hint(hint_level, parsed.from_sq, parsed.to_sq)
