"""Tests for the alpha-beta engine and shared search helpers."""

import pytest

from gambit.core.enums import Color
from gambit.core.errors import NoLegalMovesError, SearchAborted
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import STARTING_FEN, position_from_fen
from gambit.core.position import Position
from gambit.core.rules import Rules
from gambit.core.status import GameStatus
from gambit.core.transition import advance
from gambit.engine import AlphaBetaEngine, EngineConfig, MoveRequest, XorShift32, evaluate
from gambit.engine.alphabeta import MATE_SCORE, mate_in_moves
from gambit.engine.evaluation import PIECE_VALUES, order_moves, piece_square_value
from gambit.engine.search import pick_from_top

MATE_IN_ONE = "7k/5K2/6Q1/8/8/8/8/8 w - - 0 1"
BLACK_MATE_IN_ONE = "7K/5k2/6q1/8/8/8/8/8 b - - 0 1"
HANGING_QUEEN = "4k3/8/8/3q4/8/8/8/3QK3 w - - 0 1"
KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


def _config(depth: int = 2, think_time_ms: int = 0) -> EngineConfig:
    return EngineConfig.custom(max_depth=depth, think_time_ms=think_time_ms, randomness=0.0, seed=1)


def _request(fen: str, config: EngineConfig | None = None) -> MoveRequest:
    position = position_from_fen(fen)
    return MoveRequest(position, position.side_to_move, config or _config())


class _CountdownCancel:
    """Reports cancellation after a number of polls."""

    def __init__(self, polls: int) -> None:
        self.remaining = polls

    def __call__(self) -> bool:
        self.remaining -= 1
        return self.remaining < 0


class TestAlphaBetaEngine:
    def test_returns_legal_move_from_start(self) -> None:
        request = _request(STARTING_FEN)
        response = AlphaBetaEngine().choose_move(request)
        assert response.move in MoveGenerator(request.position).generate_legal_moves()
        assert response.info.depth == 2
        assert response.info.nodes > 20
        assert response.info.score_cp is not None
        assert response.info.mate_in is None
        assert response.info.pv[0] == response.move.uci

    @pytest.mark.parametrize(("fen", "winner"), [(MATE_IN_ONE, Color.WHITE), (BLACK_MATE_IN_ONE, Color.BLACK)])
    def test_finds_mate_in_one(self, fen: str, winner: Color) -> None:
        request = _request(fen, _config(depth=3))
        response = AlphaBetaEngine().choose_move(request)

        after = advance(request.position, response.move)
        assert Rules.game_status(after) == GameStatus.checkmate(winner)
        assert response.info.mate_in == 1
        assert response.info.score_cp == MATE_SCORE - 1
        # Mate scores end the deepening early.
        assert response.info.depth == 2
        assert response.info.pv == (response.move.uci,)

    def test_takes_hanging_queen(self) -> None:
        response = AlphaBetaEngine().choose_move(_request(HANGING_QUEEN))
        assert response.move.uci == "d1d5"
        assert response.info.score_cp > 500

    def test_principal_variation_is_playable(self) -> None:
        request = _request(HANGING_QUEEN, _config(depth=3))
        response = AlphaBetaEngine().choose_move(request)
        position = request.position
        assert len(response.info.pv) >= 2
        for token in response.info.pv:
            move = next(m for m in MoveGenerator(position).generate_legal_moves() if m.uci == token)
            position = advance(position, move, record_history=False)

    def test_seeded_search_is_reproducible(self) -> None:
        config = EngineConfig.custom(max_depth=2, think_time_ms=0, randomness=1.0, seed=99)
        moves = {AlphaBetaEngine().choose_move(_request(STARTING_FEN, config)).move for _ in range(3)}
        assert len(moves) == 1

    def test_tiny_budget_still_returns_a_move(self) -> None:
        request = _request(KIWIPETE, _config(depth=8, think_time_ms=1))
        response = AlphaBetaEngine().choose_move(request)
        assert response.move in MoveGenerator(request.position).generate_legal_moves()
        assert response.info.depth < 8
        if response.info.depth == 0:
            assert response.info.score_cp is None

    def test_forced_outcome_is_scored_as_terminal(self) -> None:
        position = Position.initial().with_forced_status(GameStatus.resignation(Color.BLACK))
        response = AlphaBetaEngine().choose_move(MoveRequest(position, Color.WHITE, _config(depth=1)))
        assert response.info.score_cp == 1_000_000

    def test_no_legal_moves(self) -> None:
        with pytest.raises(NoLegalMovesError):
            AlphaBetaEngine().choose_move(_request("7k/5K2/6Q1/8/8/8/8/8 b - - 0 1"))

    def test_cancelled_before_start(self) -> None:
        with pytest.raises(SearchAborted):
            AlphaBetaEngine().choose_move(_request(STARTING_FEN), is_cancelled=lambda: True)

    def test_cancelled_mid_search(self) -> None:
        cancel = _CountdownCancel(polls=3)
        with pytest.raises(SearchAborted):
            AlphaBetaEngine().choose_move(_request(KIWIPETE, _config(depth=4)), is_cancelled=cancel)
        assert cancel.remaining < 0

    def test_wrong_colour_rejected(self) -> None:
        position = position_from_fen(STARTING_FEN)
        with pytest.raises(ValueError):
            AlphaBetaEngine().choose_move(MoveRequest(position, Color.BLACK, _config()))


class TestMateScores:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (MATE_SCORE - 1, 1),
            (MATE_SCORE - 3, 2),
            (-(MATE_SCORE - 2), -1),
            (-(MATE_SCORE - 4), -2),
            (350, None),
            (1_000_000, None),
        ],
    )
    def test_mate_in_moves(self, score: int, expected: int | None) -> None:
        assert mate_in_moves(score) == expected


class TestEvaluation:
    def test_start_is_balanced_apart_from_mobility(self) -> None:
        pos = Position.initial()
        assert evaluate(pos, Color.WHITE) == -evaluate(pos, Color.BLACK)
        assert evaluate(pos, Color.WHITE) == 40

    def test_extra_queen_dominates(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/3QK3 w - - 0 1")
        assert evaluate(pos, Color.WHITE) > 800
        assert evaluate(pos, Color.BLACK) < -800

    def test_mobility_counts_legal_moves(self) -> None:
        # The rook on e2 gives check; only Kd1, Kf1 and Kxe2 are legal.
        pos = position_from_fen("4k3/8/8/8/8/8/4r3/4K3 w - - 0 1")
        static = 0
        for sq, piece in pos.board.items():
            value = PIECE_VALUES[piece.piece_type] + piece_square_value(piece.piece_type, piece.color, sq)
            static += value if piece.color == Color.WHITE else -value
        assert len(MoveGenerator(pos).generate_legal_moves()) == 3
        assert evaluate(pos, Color.WHITE) == static + 3 * 2

    def test_captures_ordered_first(self) -> None:
        pos = position_from_fen(HANGING_QUEEN)
        ordered = order_moves(pos.board, MoveGenerator(pos).generate_legal_moves())
        assert ordered[0].uci == "d1d5"


class TestRandomHelpers:
    def test_xorshift_is_deterministic(self) -> None:
        a, b = XorShift32(2024), XorShift32(2024)
        values = [a.random() for _ in range(50)]
        assert values == [b.random() for _ in range(50)]
        assert all(0.0 <= v < 1.0 for v in values)

    def test_xorshift_zero_seed_uses_default(self) -> None:
        assert XorShift32(0).random() == XorShift32(123456789).random()

    def test_pick_from_top_without_randomness(self) -> None:
        scored = [("a", 1), ("b", 5), ("c", 3)]
        assert pick_from_top(scored, lambda: 0.99, 0.0, 8) == ("b", 5)

    def test_pick_from_top_pool_grows_with_randomness(self) -> None:
        scored = [("a", 1), ("b", 5), ("c", 3), ("d", 4)]
        assert pick_from_top(scored, lambda: 0.99, 1.0, 3) == ("c", 3)

    def test_pick_from_top_keeps_tie_order(self) -> None:
        scored = [("x", 2), ("y", 2)]
        assert pick_from_top(scored, lambda: 0.0, 1.0, 8) == ("x", 2)

    def test_pick_from_top_requires_candidates(self) -> None:
        with pytest.raises(ValueError):
            pick_from_top([], lambda: 0.0, 0.5, 8)
