"""Tests for the rule-of-thumb engine."""

import pytest

from gambit.core.enums import Color
from gambit.core.errors import NoLegalMovesError, SearchAborted
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import STARTING_FEN, position_from_fen
from gambit.core.rules import Rules
from gambit.core.status import GameStatus
from gambit.core.transition import advance
from gambit.engine import Difficulty, EngineConfig, HeuristicEngine, MoveRequest

MATE_IN_ONE = "7k/5K2/6Q1/8/8/8/8/8 w - - 0 1"
HANGING_QUEEN = "4k3/8/8/3q4/8/8/8/3QK3 w - - 0 1"
STALEMATE = "7k/5K2/6Q1/8/8/8/8/8 b - - 0 1"

_STRICT = EngineConfig.custom(max_depth=1, randomness=0.0, seed=1)


class _CountdownCancel:
    """Reports cancellation after a number of polls."""

    def __init__(self, polls: int) -> None:
        self.remaining = polls

    def __call__(self) -> bool:
        self.remaining -= 1
        return self.remaining < 0


def _request(fen: str, config: EngineConfig = _STRICT) -> MoveRequest:
    position = position_from_fen(fen)
    return MoveRequest(position, position.side_to_move, config)


class TestHeuristicEngine:
    def test_returns_legal_move_from_start(self) -> None:
        request = _request(STARTING_FEN, EngineConfig.for_difficulty(Difficulty.EASY, seed=3))
        response = HeuristicEngine().choose_move(request)
        assert response.move in MoveGenerator(request.position).generate_legal_moves()
        assert response.info.pv == (response.move.uci,)
        assert response.info.nodes == 20

    def test_seeded_choice_is_reproducible(self) -> None:
        config = EngineConfig.for_difficulty(Difficulty.EASY, seed=42)
        first = HeuristicEngine().choose_move(_request(STARTING_FEN, config)).move
        for _ in range(3):
            assert HeuristicEngine().choose_move(_request(STARTING_FEN, config)).move == first

    def test_finds_mate_in_one(self) -> None:
        request = _request(MATE_IN_ONE)
        response = HeuristicEngine().choose_move(request)
        after = advance(request.position, response.move)
        assert Rules.game_status(after) == GameStatus.checkmate(Color.WHITE)
        assert response.info.mate_in == 1

    def test_takes_hanging_queen(self) -> None:
        response = HeuristicEngine().choose_move(_request(HANGING_QUEEN))
        assert response.move.uci == "d1d5"

    def test_reply_lookahead_counts_nodes(self) -> None:
        config = EngineConfig.custom(max_depth=2, randomness=0.0, seed=1)
        response = HeuristicEngine().choose_move(_request(STARTING_FEN, config))
        assert response.info.depth == 2
        # Each of the 20 root moves sees 20 replies.
        assert response.info.nodes == 20 + 20 * 20

    def test_no_legal_moves(self) -> None:
        with pytest.raises(NoLegalMovesError):
            HeuristicEngine().choose_move(_request(STALEMATE))

    def test_cancelled_before_start(self) -> None:
        with pytest.raises(SearchAborted):
            HeuristicEngine().choose_move(_request(STARTING_FEN), is_cancelled=lambda: True)

    def test_cancelled_mid_search(self) -> None:
        cancel = _CountdownCancel(polls=3)
        config = EngineConfig.custom(max_depth=2, randomness=0.0, seed=1)
        with pytest.raises(SearchAborted):
            HeuristicEngine().choose_move(_request(STARTING_FEN, config), is_cancelled=cancel)
        assert cancel.remaining < 0

    def test_wrong_colour_rejected(self) -> None:
        position = position_from_fen(STARTING_FEN)
        with pytest.raises(ValueError):
            HeuristicEngine().choose_move(MoveRequest(position, Color.BLACK, _STRICT))
