"""Legal move filtering by simulating each candidate on a cloned board."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.check import is_king_in_check
from chessrules.core.enums import Color, PieceType
from chessrules.core.move_rules import (
    castling_rook_cols,
    promotion_row,
    pseudo_legal_destinations,
)
from chessrules.core.piece import Piece
from chessrules.core.position import Position

if TYPE_CHECKING:
    from chessrules.core.board import Board


def is_castling_move(piece: Piece, from_pos: Position, to_pos: Position) -> bool:
    return piece.piece_type == PieceType.KING and abs(to_pos.col - from_pos.col) == 2


def is_en_passant_move(
    board: Board, piece: Piece, from_pos: Position, to_pos: Position
) -> bool:
    return (
        piece.piece_type == PieceType.PAWN
        and from_pos.col != to_pos.col
        and board[to_pos] is None
        and to_pos == board.en_passant_target
    )


def is_promotion_move(piece: Piece, to_pos: Position) -> bool:
    return piece.piece_type == PieceType.PAWN and to_pos.row == promotion_row(
        piece.color
    )


def relocate(
    board: Board,
    from_pos: Position,
    to_pos: Position,
    promotion: PieceType | None = None,
) -> Piece | None:
    """Mechanically play a move on *board* in place and return the captured piece.

    No legality check.  Handles the rook hop of castling, removal of the
    passed pawn on en passant, and replacement on promotion.  The en-passant
    target is recomputed for the next move.
    """
    piece = board[from_pos]
    if piece is None:
        raise ValueError(f"No piece on {from_pos}")

    captured = board[to_pos]
    en_passant = is_en_passant_move(board, piece, from_pos, to_pos)
    board.en_passant_target = None

    if en_passant:
        victim_pos = Position(from_pos.row, to_pos.col)
        captured = board[victim_pos]
        board.set_piece(victim_pos, None)

    if is_castling_move(piece, from_pos, to_pos):
        rook_from_col, rook_to_col = castling_rook_cols(from_pos.col, to_pos.col)
        rook_from = Position(from_pos.row, rook_from_col)
        rook = board[rook_from]
        if rook is not None:
            board.set_piece(rook_from, None)
            board.set_piece(Position(from_pos.row, rook_to_col), rook)
            rook._mark_moved()

    board.set_piece(from_pos, None)
    if promotion is not None and is_promotion_move(piece, to_pos):
        piece = Piece(piece.color, promotion, has_moved=True)
    board.set_piece(to_pos, piece)
    piece._mark_moved()

    if piece.piece_type == PieceType.PAWN and abs(to_pos.row - from_pos.row) == 2:
        board.en_passant_target = Position(
            (from_pos.row + to_pos.row) // 2, from_pos.col
        )
    return captured


def simulate(
    board: Board,
    from_pos: Position,
    to_pos: Position,
    promotion: PieceType | None = None,
) -> Board:
    """Clone *board* and play the move on the clone."""
    clone = board.copy()
    relocate(clone, from_pos, to_pos, promotion)
    return clone


def legal_moves(board: Board, position: Position) -> set[Position]:
    """Pseudo-legal destinations that do not leave the mover's king in check."""
    piece = board[position]
    if piece is None:
        return set()

    color = piece.color
    return {
        to_pos
        for to_pos in pseudo_legal_destinations(board, position)
        if not is_king_in_check(simulate(board, position, to_pos), color)
    }


def all_legal_moves(board: Board, color: Color) -> dict[Position, set[Position]]:
    """Legal destinations of every *color* piece that has at least one."""
    result: dict[Position, set[Position]] = {}
    for pos, _piece in list(board.pieces(color)):
        targets = legal_moves(board, pos)
        if targets:
            result[pos] = targets
    return result


def has_legal_moves(board: Board, color: Color) -> bool:
    for pos, _piece in list(board.pieces(color)):
        if legal_moves(board, pos):
            return True
    return False
