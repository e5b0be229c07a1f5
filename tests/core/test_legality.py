"""Tests for legal move filtering, including perft node counts."""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import PROMOTION_TYPES, Color
from chessrules.core.legality import (
    all_legal_moves,
    has_legal_moves,
    is_promotion_move,
    legal_moves,
    simulate,
)
from chessrules.core.position import (
    B5,
    B6,
    D1,
    D2,
    E1,
    E2,
    E3,
    E4,
    E5,
    E6,
    E7,
    E8,
    F2,
)

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
ENDGAME = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


def _board(fen: str) -> Board:
    board = Board.from_fen(fen)
    assert isinstance(board, Board)
    return board


def perft(board: Board, color: Color, depth: int) -> int:
    """Count leaf nodes of the legal move tree, expanding promotions."""
    if depth == 0:
        return 1
    nodes = 0
    for from_pos, targets in all_legal_moves(board, color).items():
        piece = board[from_pos]
        assert piece is not None
        for to_pos in targets:
            promotions = (
                PROMOTION_TYPES if is_promotion_move(piece, to_pos) else (None,)
            )
            for promotion in promotions:
                child = simulate(board, from_pos, to_pos, promotion)
                nodes += perft(child, color.opposite, depth - 1)
    return nodes


class TestOpening:
    def test_twenty_moves_each(self) -> None:
        board = Board.initial()
        for color in Color:
            total = sum(len(t) for t in all_legal_moves(board, color).values())
            assert total == 20

    def test_king_has_no_moves(self) -> None:
        assert legal_moves(Board.initial(), E1) == set()

    def test_empty_square(self) -> None:
        assert legal_moves(Board.initial(), E4) == set()

    def test_has_legal_moves(self) -> None:
        assert has_legal_moves(Board.initial(), Color.WHITE)


class TestSelfCheck:
    def test_pinned_rook_stays_on_file(self) -> None:
        board = _board("k3r3/8/8/8/8/8/4R3/4K3 w - - 0 1")
        assert legal_moves(board, E2) == {E3, E4, E5, E6, E7, E8}

    def test_king_cannot_step_along_checking_ray(self) -> None:
        board = _board("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert legal_moves(board, E1) == {D2, E2, F2}

    def test_must_resolve_check(self) -> None:
        board = _board("4k3/8/8/8/8/8/3P4/r3K1N1 w - - 0 1")
        moves = all_legal_moves(board, Color.WHITE)
        # nothing can block the first rank
        assert set(moves) == {E1}

    def test_king_may_capture_undefended_attacker(self) -> None:
        board = _board("4k3/8/8/8/8/8/8/3rK3 w - - 0 1")
        assert D1 in legal_moves(board, E1)

    def test_king_may_not_capture_defended_attacker(self) -> None:
        board = _board("4k3/8/8/8/8/8/8/r2rK3 w - - 0 1")
        assert D1 not in legal_moves(board, E1)

    def test_en_passant_exposing_king_is_illegal(self) -> None:
        board = _board("8/8/8/KPp4r/8/8/8/7k w - c6 0 1")
        assert legal_moves(board, B5) == {B6}

    def test_every_legal_move_is_safe(self) -> None:
        for fen in (KIWIPETE, ENDGAME):
            board = _board(fen)
            for color in Color:
                for from_pos, targets in all_legal_moves(board, color).items():
                    for to_pos in targets:
                        after = simulate(board, from_pos, to_pos)
                        assert not after.is_king_in_check(color)


class TestSimulate:
    def test_original_untouched(self) -> None:
        board = Board.initial()
        after = simulate(board, E2, E4)
        assert board == Board.initial()
        assert after[E4] is not None
        assert after.en_passant_target == E3


class TestPerft:
    @pytest.mark.parametrize("depth,expected", [(1, 20), (2, 400)])
    def test_initial_position(self, depth: int, expected: int) -> None:
        assert perft(Board.initial(), Color.WHITE, depth) == expected

    @pytest.mark.slow
    def test_initial_position_depth_three(self) -> None:
        assert perft(Board.initial(), Color.WHITE, 3) == 8902

    def test_kiwipete(self) -> None:
        assert perft(_board(KIWIPETE), Color.WHITE, 1) == 48

    @pytest.mark.slow
    def test_kiwipete_depth_two(self) -> None:
        assert perft(_board(KIWIPETE), Color.WHITE, 2) == 2039

    @pytest.mark.parametrize("depth,expected", [(1, 14), (2, 191)])
    def test_endgame(self, depth: int, expected: int) -> None:
        assert perft(_board(ENDGAME), Color.WHITE, depth) == expected
