"""Pure-Python chess engine search (negamax + alpha-beta)."""

from __future__ import annotations

import logging
from time import perf_counter

from gambit.core.errors import NoLegalMovesError, SearchAborted
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.position import Position
from gambit.core.transition import advance
from gambit.engine.evaluation import evaluate, order_moves
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

_INF_SCORE = 10_000_000
FORCED_WIN_SCORE = 1_000_000
MATE_SCORE = 900_000
MATE_THRESHOLD = 850_000
TOP_CANDIDATES = 8

_NODE_POLL_INTERVAL = 1024
_ROOT_POLL_MASK = 15
_CHILD_POLL_MASK = 31


class _SearchTimeout(Exception):
    """Internal unwind when the thinking-time budget runs out."""


def mate_in_moves(score: int) -> int | None:
    """Full moves to mate encoded in *score*, signed; ``None`` for ordinary scores."""
    if not MATE_THRESHOLD <= abs(score) <= MATE_SCORE:
        return None
    plies = MATE_SCORE - abs(score)
    moves = (plies + 1) // 2
    return moves if score > 0 else -moves


class AlphaBetaEngine(IEngine):
    """Classical searcher with iterative deepening and a time budget.

    Every root move is searched with a full window so the final choice can
    be randomised among near-equal moves without mixing in bounds.
    """

    __slots__ = ("_cancel_check", "_deadline", "_nodes", "_next_poll", "_pv")

    def __init__(self) -> None:
        self._nodes = 0
        self._next_poll = _NODE_POLL_INTERVAL
        self._deadline: float | None = None
        self._cancel_check: CancelCheck = never_cancelled
        self._pv: list[list[Move]] = []

    def choose_move(
        self,
        request: MoveRequest,
        is_cancelled: CancelCheck | None = None,
    ) -> MoveResponse:
        self._cancel_check = is_cancelled or never_cancelled
        if self._cancel_check():
            raise SearchAborted("Search cancelled")

        position, color, config = request.position, request.color, request.config
        if color != position.side_to_move:
            raise ValueError(f"{color} is not to move in this position")

        started = perf_counter()
        max_depth = config.search_depth()
        randomness = config.search_randomness()
        budget_ms = config.time_budget_ms()
        rng = make_rng(config.seed)

        self._nodes = 0
        self._next_poll = _NODE_POLL_INTERVAL
        self._deadline = started + budget_ms / 1000.0 if budget_ms > 0 else None
        self._pv = [[] for _ in range(max_depth + 2)]

        legal = MoveGenerator(position).generate_legal_moves()
        if not legal:
            raise NoLegalMovesError("No legal moves in this position")
        ordered_root = order_moves(position.board, legal)

        best_move = ordered_root[0]
        best_score: int | None = None
        best_pv: tuple[Move, ...] = (best_move,)
        completed_depth = 0

        for depth in range(1, max_depth + 1):
            try:
                scored, lines = self._search_root(position, ordered_root, depth)
            except _SearchTimeout:
                _LOGGER.info(
                    "Time budget of %d ms spent during depth %d; keeping depth %d",
                    budget_ms,
                    depth,
                    completed_depth,
                )
                break

            best_move, best_score = pick_from_top(scored, rng, randomness, TOP_CANDIDATES)
            best_pv = lines[best_move]
            completed_depth = depth
            _LOGGER.debug(
                "Depth %d: %s score=%d nodes=%d", depth, best_move, best_score, self._nodes
            )

            if abs(best_score) >= MATE_THRESHOLD:
                break

        elapsed_ms = round((perf_counter() - started) * 1000)
        return MoveResponse(
            best_move,
            SearchInfo(
                elapsed_ms=elapsed_ms,
                depth=completed_depth,
                nodes=self._nodes,
                score_cp=best_score,
                mate_in=None if best_score is None else mate_in_moves(best_score),
                pv=tuple(move.uci for move in best_pv),
            ),
        )

    # -- Search (private) ---------------------------------------------------

    def _search_root(
        self,
        position: Position,
        root_moves: list[Move],
        depth: int,
    ) -> tuple[list[tuple[Move, int]], dict[Move, tuple[Move, ...]]]:
        scored: list[tuple[Move, int]] = []
        lines: dict[Move, tuple[Move, ...]] = {}

        for index, move in enumerate(root_moves):
            if index & _ROOT_POLL_MASK == 0:
                self._check_budget()
            child = advance(position, move, record_history=False)
            score = -self._negamax(child, depth - 1, -_INF_SCORE, _INF_SCORE, ply=1)
            scored.append((move, score))
            lines[move] = (move, *self._pv[1])

        return scored, lines

    def _negamax(
        self,
        position: Position,
        depth: int,
        alpha: int,
        beta: int,
        ply: int,
    ) -> int:
        """Score of *position* for its side to move."""
        self._visit()
        self._pv[ply] = []

        forced = position.forced_status
        if forced is not None:
            if forced.winner is None:
                return 0
            return FORCED_WIN_SCORE if forced.winner == position.side_to_move else -FORCED_WIN_SCORE

        if depth <= 0:
            return evaluate(position, position.side_to_move)

        gen = MoveGenerator(position)
        legal = gen.generate_legal_moves()
        if not legal:
            if gen.is_in_check(position.side_to_move):
                return -(MATE_SCORE - ply)
            return 0

        best_score = -_INF_SCORE
        for index, move in enumerate(order_moves(position.board, legal)):
            if index & _CHILD_POLL_MASK == 0:
                self._check_budget()
            child = advance(position, move, record_history=False)
            score = -self._negamax(child, depth - 1, -beta, -alpha, ply + 1)

            if score > best_score:
                best_score = score
                self._pv[ply] = [move, *self._pv[ply + 1]]
            if score > alpha:
                alpha = score
            if alpha >= beta:
                break

        return best_score

    def _visit(self) -> None:
        self._nodes += 1
        if self._nodes >= self._next_poll:
            self._next_poll = self._nodes + _NODE_POLL_INTERVAL
            self._check_budget()

    def _check_budget(self) -> None:
        if self._cancel_check():
            _LOGGER.info("Search cancelled after %d nodes", self._nodes)
            raise SearchAborted("Search cancelled")
        if self._deadline is not None and perf_counter() >= self._deadline:
            raise _SearchTimeout
