"""Tests for FEN, move-token and SAN notation."""

import pytest

from gambit.core.enums import CastlingRights, Color, MoveFlag, PieceType
from gambit.core.errors import FenError, IllegalMoveError, MoveTokenError, SanError
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import (
    STARTING_FEN,
    UciMove,
    move_from_uci,
    move_to_san,
    move_to_uci,
    parse_position,
    parse_san,
    parse_uci,
    position_from_fen,
    position_to_fen,
)
from gambit.core.position import Position
from gambit.core.transition import advance
from gambit.core.types import parse_square

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


def _sq(name: str) -> int:
    return parse_square(name)


def _play(fen: str, *tokens: str) -> Position:
    pos = position_from_fen(fen)
    for token in tokens:
        pos = advance(pos, move_from_uci(pos, token))
    return pos


# ── FEN ──────────────────────────────────────────────────────────────────────


class TestFen:
    def test_starting_fen_matches_initial(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos == Position.initial()
        assert position_to_fen(pos) == STARTING_FEN

    @pytest.mark.parametrize(
        "fen",
        [
            KIWIPETE,
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
            "4k3/8/8/8/8/8/8/4K3 b - - 37 90",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        assert position_to_fen(position_from_fen(fen)) == fen

    def test_fields(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R b Kq - 12 40")
        assert pos.side_to_move == Color.BLACK
        assert pos.castling == CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        assert pos.en_passant is None
        assert pos.halfmove_clock == 12
        assert pos.fullmove_number == 40

    def test_clocks_are_optional(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 w - -")
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 1

    def test_serialised_after_double_push(self) -> None:
        pos = _play(STARTING_FEN, "e2e4")
        assert position_to_fen(pos) == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "4k3/8/8/8/8/8/8 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K3 x - - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w X - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w KK - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - e3 0 1",
            "4k3/8/8/8/8/8/8/4K3 b - e6 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - z9 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - - -1 1",
            "4k3/8/8/8/8/8/8/4K3 w - - 0 0",
            "4k3/8/8/8/8/8/8/4K3 w - - x 1",
            "4k3/8/8/8/8/8/8/4K4 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K2 w - - 0 1",
            "4k3/8/8/8/8/8/8/4X3 w - - 0 1",
            "4k3/8/8/8/8/8/8/8 w - - 0 1",
            "4kk2/8/8/8/8/8/8/4K3 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - - 0 1 extra",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBN² w KQkq - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - - ١ 1",
            "4k3/8/8/9/8/8/8/4K3 w - - 0 1",
        ],
    )
    def test_invalid(self, fen: str) -> None:
        with pytest.raises(FenError):
            position_from_fen(fen)

    def test_fen_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            position_from_fen("not a fen")


class TestParsePosition:
    def test_ok(self) -> None:
        result = parse_position(STARTING_FEN)
        assert result.ok
        assert result.position == Position.initial()
        assert result.error is None

    def test_error_is_reported(self) -> None:
        result = parse_position("8/8/8 w - - 0 1")
        assert not result.ok
        assert result.position is None
        assert result.error

    def test_unicode_digit_is_reported(self) -> None:
        result = parse_position("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBN² w KQkq - 0 1")
        assert not result.ok
        assert result.position is None
        assert result.error


# ── Move tokens ──────────────────────────────────────────────────────────────


class TestUci:
    def test_parse(self) -> None:
        assert parse_uci("e2e4") == UciMove(_sq("e2"), _sq("e4"))

    def test_parse_normalises_case_and_whitespace(self) -> None:
        assert parse_uci("  E7E8Q ") == UciMove(_sq("e7"), _sq("e8"), PieceType.QUEEN)

    @pytest.mark.parametrize("token", ["", "e2", "e2e", "e2e4qq", "i2e4", "e2e9", "e7e8k", "e7e8p"])
    def test_parse_rejects(self, token: str) -> None:
        with pytest.raises(MoveTokenError):
            parse_uci(token)

    def test_to_move_has_no_flag(self) -> None:
        assert parse_uci("e1g1").to_move() == Move(_sq("e1"), _sq("g1"))

    def test_move_to_uci(self) -> None:
        assert move_to_uci(Move(_sq("b7"), _sq("b8"), MoveFlag.PROMOTION, PieceType.KNIGHT)) == "b7b8n"

    def test_move_from_uci_resolves_flags(self) -> None:
        assert move_from_uci(Position.initial(), "e2e4").flag == MoveFlag.DOUBLE_PAWN
        castle = move_from_uci(position_from_fen(KIWIPETE), "e1c1")
        assert castle.flag == MoveFlag.CASTLE_QUEENSIDE

    def test_move_from_uci_promotion(self) -> None:
        pos = position_from_fen("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        move = move_from_uci(pos, "e7e8r")
        assert move.promotion == PieceType.ROOK
        with pytest.raises(IllegalMoveError):
            move_from_uci(pos, "e7e8")

    @pytest.mark.parametrize("token", ["e2e5", "e7e5", "e1e2"])
    def test_move_from_uci_illegal(self, token: str) -> None:
        with pytest.raises(IllegalMoveError):
            move_from_uci(Position.initial(), token)


# ── SAN ──────────────────────────────────────────────────────────────────────


class TestMoveToSan:
    @pytest.mark.parametrize(
        ("fen", "token", "san"),
        [
            (STARTING_FEN, "e2e4", "e4"),
            (STARTING_FEN, "g1f3", "Nf3"),
            (KIWIPETE, "e1g1", "O-O"),
            (KIWIPETE, "e1c1", "O-O-O"),
            (KIWIPETE, "e5f7", "Nxf7"),
            ("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1", "e5d6", "exd6"),
            ("k7/4P3/8/8/8/8/8/4K3 w - - 0 1", "e7e8q", "e8=Q+"),
            ("k7/4P3/8/8/8/8/8/4K3 w - - 0 1", "e7e8n", "e8=N"),
            ("7k/5K2/6Q1/8/8/8/8/8 w - - 0 1", "g6g7", "Qg7#"),
            # Disambiguation by file, by rank, and by full square.
            ("4k3/8/8/8/8/8/4K3/R6R w - - 0 1", "a1d1", "Rad1"),
            ("4k3/8/8/R7/8/8/4K3/R7 w - - 0 1", "a1a3", "R1a3"),
            ("4k3/8/8/8/8/Q7/8/Q1Q1K3 w - - 0 1", "a1b2", "Qa1b2"),
        ],
    )
    def test_san(self, fen: str, token: str, san: str) -> None:
        pos = position_from_fen(fen)
        assert move_to_san(pos, move_from_uci(pos, token)) == san

    def test_capture_from_history(self) -> None:
        pos = _play(STARTING_FEN, "e2e4", "d7d5")
        assert move_to_san(pos, move_from_uci(pos, "e4d5")) == "exd5"

    def test_unflagged_move_is_normalised(self) -> None:
        pos = position_from_fen(KIWIPETE)
        assert move_to_san(pos, Move(_sq("e1"), _sq("g1"))) == "O-O"

    def test_empty_origin_raises(self) -> None:
        with pytest.raises(SanError):
            move_to_san(Position.initial(), Move(_sq("e4"), _sq("e5")))


class TestParseSan:
    @pytest.mark.parametrize(
        ("fen", "san", "token"),
        [
            (STARTING_FEN, "e4", "e2e4"),
            (STARTING_FEN, "Nf3", "g1f3"),
            (STARTING_FEN, "Nf3!?", "g1f3"),
            (KIWIPETE, "O-O", "e1g1"),
            (KIWIPETE, "0-0-0", "e1c1"),
            (KIWIPETE, "Nxf7", "e5f7"),
            ("k7/4P3/8/8/8/8/8/4K3 w - - 0 1", "e8=Q+", "e7e8q"),
            ("4k3/8/8/8/8/8/4K3/R6R w - - 0 1", "Rad1", "a1d1"),
            ("4k3/8/8/R7/8/8/4K3/R7 w - - 0 1", "R1a3", "a1a3"),
            ("4k3/8/8/8/8/Q7/8/Q1Q1K3 w - - 0 1", "Qa1b2", "a1b2"),
        ],
    )
    def test_parse(self, fen: str, san: str, token: str) -> None:
        pos = position_from_fen(fen)
        assert parse_san(pos, san) == move_from_uci(pos, token)

    @pytest.mark.parametrize(
        ("fen", "san"),
        [
            (STARTING_FEN, "e5"),
            (STARTING_FEN, "Ke2"),
            (STARTING_FEN, "O-O"),
            (STARTING_FEN, "Nz9"),
            (STARTING_FEN, "N"),
            (STARTING_FEN, "Nqf3"),
            ("k7/4P3/8/8/8/8/8/4K3 w - - 0 1", "e8=K"),
            ("k7/4P3/8/8/8/8/8/4K3 w - - 0 1", "e8"),
            # Two rooks reach d1.
            ("4k3/8/8/8/8/8/4K3/R6R w - - 0 1", "Rd1"),
        ],
    )
    def test_rejects(self, fen: str, san: str) -> None:
        with pytest.raises(SanError):
            parse_san(position_from_fen(fen), san)

    def test_round_trip_over_all_legal_moves(self) -> None:
        pos = position_from_fen(KIWIPETE)
        for move in MoveGenerator(pos).generate_legal_moves():
            assert parse_san(pos, move_to_san(pos, move)) == move
