"""Fast rule-of-thumb engine for the easier difficulty levels."""

from __future__ import annotations

import logging
from time import perf_counter

from gambit.core import attacks
from gambit.core.enums import Color, MoveFlag, PieceType
from gambit.core.errors import IllegalMoveError, NoLegalMovesError, SearchAborted
from gambit.core.material import PIECE_POINTS
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.rules import Rules
from gambit.core.status import GameStatus
from gambit.core.transition import advance
from gambit.core.types import D4, D5, E4, E5, rank_of, square_name
from gambit.engine.search import (
    CancelCheck,
    IEngine,
    MoveRequest,
    MoveResponse,
    SearchInfo,
    make_rng,
    never_cancelled,
    pick_from_top,
)

_LOGGER = logging.getLogger(__name__)

MATE_IN_ONE_SCORE = 1_000_000_000
CHECK_BONUS = 50_000
PROMOTION_BONUS = 40_000
POINT_WEIGHT = 10_000
DEVELOPMENT_BONUS = 300
CENTER_BONUS = 200
REPLY_MATERIAL_WEIGHT = 500
TOP_CANDIDATES = 10

_CENTER = frozenset({D4, E4, D5, E5})
_ROOT_POLL_MASK = 15
_REPLY_POLL_MASK = 31


def _material_points(position: Position, color: Color) -> int:
    total = 0
    for _, piece in position.board.items():
        value = PIECE_POINTS[piece.piece_type]
        total += value if piece.color == color else -value
    return total


def _captured_piece(position: Position, move: Move, moving: Piece) -> Piece | None:
    direct = position.board[move.to_sq]
    if direct is not None:
        return direct
    if move.flag == MoveFlag.EN_PASSANT:
        return position.board[move.to_sq - 8 * moving.color.pawn_direction]
    return None


def _develops_minor(move: Move, moving: Piece) -> bool:
    if moving.piece_type not in (PieceType.KNIGHT, PieceType.BISHOP):
        return False
    home = moving.color.home_rank
    return rank_of(move.from_sq) == home and rank_of(move.to_sq) != home


class HeuristicEngine(IEngine):
    """Scores each legal move with tactical rules of thumb.

    Mates, checks, promotions and captures dominate; development and the
    centre break ties.  With a depth of two or more every candidate is also
    charged for the opponent's most damaging material reply.
    """

    __slots__ = ("_cancel_check",)

    def __init__(self) -> None:
        self._cancel_check: CancelCheck = never_cancelled

    def choose_move(
        self,
        request: MoveRequest,
        is_cancelled: CancelCheck | None = None,
    ) -> MoveResponse:
        self._cancel_check = is_cancelled or never_cancelled
        self._check_cancelled()
        started = perf_counter()

        position, color, config = request.position, request.color, request.config
        if color != position.side_to_move:
            raise ValueError(f"{color} is not to move in this position")

        randomness = config.heuristic_randomness()
        max_depth = config.heuristic_depth()
        rng = make_rng(config.seed)

        legal = MoveGenerator(position).generate_legal_moves()
        if not legal:
            raise NoLegalMovesError("No legal moves in this position")

        scored: list[tuple[Move, int]] = []
        nodes = 0
        for index, move in enumerate(legal):
            if index & _ROOT_POLL_MASK == 0:
                self._check_cancelled()
            score, evaluated = self._score_move(position, move, color, max_depth)
            nodes += evaluated
            scored.append((move, score))

        move, score = pick_from_top(scored, rng, randomness, TOP_CANDIDATES)
        elapsed_ms = round((perf_counter() - started) * 1000)
        _LOGGER.debug(
            "Heuristic pick %s (score=%d) among %d moves in %d ms",
            move,
            score,
            len(scored),
            elapsed_ms,
        )
        return MoveResponse(
            move,
            SearchInfo(
                elapsed_ms=elapsed_ms,
                depth=max_depth,
                nodes=nodes,
                mate_in=1 if score >= MATE_IN_ONE_SCORE else None,
                pv=(move.uci,),
            ),
        )

    # -- Scoring (private) --------------------------------------------------

    def _score_move(
        self, position: Position, move: Move, color: Color, max_depth: int
    ) -> tuple[int, int]:
        """Return the move's score and the number of positions visited."""
        moving = position.board[move.from_sq]
        if moving is None:
            raise IllegalMoveError(f"No piece on {square_name(move.from_sq)}")
        after = advance(position, move, record_history=False)

        if Rules.game_status(after) == GameStatus.checkmate(color):
            return MATE_IN_ONE_SCORE, 1

        score = 0
        if attacks.is_in_check(after.board, color.opposite):
            score += CHECK_BONUS
        if move.promotion is not None:
            gain = PIECE_POINTS[move.promotion] - PIECE_POINTS[PieceType.PAWN]
            score += PROMOTION_BONUS + gain * POINT_WEIGHT
        captured = _captured_piece(position, move, moving)
        if captured is not None:
            score += PIECE_POINTS[captured.piece_type] * POINT_WEIGHT
        if _develops_minor(move, moving):
            score += DEVELOPMENT_BONUS
        if move.to_sq in _CENTER:
            score += CENTER_BONUS

        visited = 1
        if max_depth >= 2:
            worst, replies = self._worst_reply(after, color)
            score += worst * REPLY_MATERIAL_WEIGHT
            visited += replies
        return score, visited

    def _worst_reply(self, after: Position, color: Color) -> tuple[int, int]:
        replies = MoveGenerator(after).generate_legal_moves()
        if not replies:
            return _material_points(after, color), 0

        values: list[int] = []
        for index, reply in enumerate(replies):
            if index & _REPLY_POLL_MASK == 0:
                self._check_cancelled()
            values.append(_material_points(advance(after, reply, record_history=False), color))
        return min(values), len(replies)

    def _check_cancelled(self) -> None:
        if self._cancel_check():
            _LOGGER.info("Heuristic search cancelled")
            raise SearchAborted("Search cancelled")
