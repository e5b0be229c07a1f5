"""Tests for FEN encoding and decoding."""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color, FenErrorKind, PieceType
from chessrules.core.fen import (
    STARTING_FEN,
    FenError,
    ParsedFen,
    castling_field,
    decode,
    encode,
)
from chessrules.core.piece import Piece
from chessrules.core.position import (
    A1,
    A8,
    D2,
    D6,
    E1,
    E2,
    E4,
    E5,
    E8,
    H1,
    H8,
)


def _parsed(fen: str) -> ParsedFen:
    parsed = decode(fen)
    assert isinstance(parsed, ParsedFen), parsed
    return parsed


class TestEncode:
    def test_initial(self) -> None:
        assert encode(Board.initial()) == STARTING_FEN

    def test_explicit_fields(self) -> None:
        fen = encode(Board.initial(), Color.BLACK, 3, 7)
        assert fen.split()[1:] == ["b", "KQkq", "-", "3", "7"]

    def test_empty_board(self) -> None:
        assert encode(Board()) == "8/8/8/8/8/8/8/8 w - - 0 1"

    def test_castling_drops_after_king_moves(self) -> None:
        board = Board.initial()
        board.apply_move(E2, E4)
        board.apply_move(E1, E2)
        assert castling_field(board) == "kq"

    def test_castling_drops_after_rook_moves(self) -> None:
        board = Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        assert isinstance(board, Board)
        board.apply_move(A1, A8)
        assert castling_field(board) == "Kk"


class TestDecode:
    def test_initial(self) -> None:
        parsed = _parsed(STARTING_FEN)
        assert parsed.board == Board.initial()
        assert parsed.side_to_move == Color.WHITE
        assert parsed.halfmove_clock == 0
        assert parsed.fullmove_number == 1

    def test_all_fields(self) -> None:
        parsed = _parsed("4k3/8/8/3pP3/8/8/8/4K3 w - d6 12 40")
        assert parsed.board.en_passant_target == D6
        assert parsed.board[E5] == Piece(Color.WHITE, PieceType.PAWN)
        assert parsed.halfmove_clock == 12
        assert parsed.fullmove_number == 40

    def test_placement_only(self) -> None:
        parsed = _parsed("4k3/8/8/8/8/8/8/4K3")
        assert parsed.side_to_move == Color.WHITE
        assert parsed.board.en_passant_target is None
        assert parsed.fullmove_number == 1

    def test_black_to_move(self) -> None:
        parsed = _parsed(
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )
        assert parsed.side_to_move == Color.BLACK
        assert parsed.board[E4] == Piece(Color.WHITE, PieceType.PAWN)

    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
            "r3k2r/8/8/8/8/8/8/R3K2R b Kq - 5 20",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        parsed = _parsed(fen)
        encoded = encode(
            parsed.board,
            parsed.side_to_move,
            parsed.halfmove_clock,
            parsed.fullmove_number,
        )
        assert encoded == fen

    def test_round_trip_after_moves(self) -> None:
        board = Board.initial()
        for src, dst in (("e2", "e4"), ("c7", "c5"), ("g1", "f3")):
            board.apply_move(src, dst)
        assert _parsed(board.to_fen()).board == board


class TestMovedFlags:
    def test_rights_map_to_flags(self) -> None:
        board = _parsed("r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1").board
        assert not board[E1].has_moved  # type: ignore[union-attr]
        assert not board[H1].has_moved  # type: ignore[union-attr]
        assert board[A1].has_moved  # type: ignore[union-attr]
        assert not board[E8].has_moved  # type: ignore[union-attr]
        assert not board[A8].has_moved  # type: ignore[union-attr]
        assert board[H8].has_moved  # type: ignore[union-attr]

    def test_no_rights_means_kings_moved(self) -> None:
        board = _parsed("r3k2r/8/8/8/8/8/8/R3K2R w - - 0 1").board
        assert board[E1].has_moved  # type: ignore[union-attr]
        assert board[E8].has_moved  # type: ignore[union-attr]

    def test_advanced_pawn_is_moved(self) -> None:
        board = _parsed("4k3/8/8/8/4P3/8/3P4/4K3 w - - 0 1").board
        assert board[E4].has_moved  # type: ignore[union-attr]
        assert not board[D2].has_moved  # type: ignore[union-attr]


class TestMalformed:
    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1",
            "rnbqkbnr/ppppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/ppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX w KQkq - 0 1",
            "rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KX - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KK - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e5 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e3 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - -1 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 0",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - a 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1 extra",
        ],
    )
    def test_rejected(self, fen: str) -> None:
        result = decode(fen)
        assert isinstance(result, FenError)
        assert result.kind == FenErrorKind.MALFORMED
        assert not result
        assert str(result)

    def test_board_from_fen_returns_error(self) -> None:
        result = Board.from_fen("not a fen")
        assert isinstance(result, FenError)
