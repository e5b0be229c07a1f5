"""Attack and check detection built on :mod:`chessrules.core.move_rules`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color, PieceType
from chessrules.core.move_rules import reaches

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.position import Position


def attackers_of(board: Board, square: Position, by_color: Color) -> list[Position]:
    """Squares of every *by_color* piece attacking *square*."""
    return [
        pos
        for pos, piece in board.pieces(by_color)
        if reaches(board, pos, square)
    ]


def is_square_attacked(board: Board, square: Position, by_color: Color) -> bool:
    """Is *square* attacked by any piece of *by_color*?"""
    for pos, _piece in board.pieces(by_color):
        if reaches(board, pos, square):
            return True
    return False


def find_king(board: Board, color: Color) -> Position | None:
    """Square of *color*'s king, or ``None`` if the board has none."""
    for pos, piece in board.pieces(color):
        if piece.piece_type == PieceType.KING:
            return pos
    return None


def is_king_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked?  False when there is no such king.

    Edited positions may lack a king, so False is not a legality guarantee.
    """
    king_pos = find_king(board, color)
    if king_pos is None:
        return False
    return is_square_attacked(board, king_pos, color.opposite)
