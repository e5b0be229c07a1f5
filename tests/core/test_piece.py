"""Tests for Piece identity and the has-moved flag."""

import pytest

from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece


class TestPieceIdentity:
    def test_fen_chars(self) -> None:
        assert str(Piece(Color.WHITE, PieceType.KNIGHT)) == "N"
        assert str(Piece(Color.BLACK, PieceType.QUEEN)) == "q"

    def test_from_char(self) -> None:
        piece = Piece.from_char("k")
        assert piece.color == Color.BLACK
        assert piece.piece_type == PieceType.KING
        assert not piece.has_moved

    def test_from_char_invalid(self) -> None:
        with pytest.raises(ValueError, match="Invalid piece character"):
            Piece.from_char("x")

    def test_symbol(self) -> None:
        assert Piece(Color.WHITE, PieceType.KING).symbol == "♔"
        assert Piece(Color.BLACK, PieceType.PAWN).symbol == "♟"

    def test_equality_ignores_moved_flag(self) -> None:
        fresh = Piece(Color.WHITE, PieceType.ROOK)
        moved = Piece(Color.WHITE, PieceType.ROOK, has_moved=True)
        assert fresh == moved
        assert hash(fresh) == hash(moved)
        assert fresh != Piece(Color.BLACK, PieceType.ROOK)


class TestHasMoved:
    def test_read_only(self) -> None:
        piece = Piece(Color.WHITE, PieceType.KING)
        with pytest.raises(AttributeError):
            piece.has_moved = True  # type: ignore[misc]

    def test_copy_is_independent(self) -> None:
        piece = Piece(Color.WHITE, PieceType.ROOK, has_moved=True)
        clone = piece.copy()
        assert clone is not piece
        assert clone == piece
        assert clone.has_moved
