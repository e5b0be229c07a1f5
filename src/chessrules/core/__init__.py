"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import Board, Color, PieceType

    board = Board.initial()
    result = board.apply_move("e2", "e4")
    print(result.san, board.status(Color.BLACK))
"""

from chessrules.core.board import Board
from chessrules.core.check import (
    attackers_of,
    find_king,
    is_king_in_check,
    is_square_attacked,
)
from chessrules.core.enums import (
    PROMOTION_TYPES,
    Color,
    DrawReason,
    FenErrorKind,
    GameResult,
    MoveErrorKind,
    PieceType,
    StatusKind,
)
from chessrules.core.fen import STARTING_FEN, FenError, ParsedFen, decode, encode
from chessrules.core.legality import all_legal_moves, has_legal_moves, legal_moves
from chessrules.core.move import AppliedMove, Move, MoveError
from chessrules.core.move_rules import is_path_clear, pseudo_legal_destinations
from chessrules.core.notation import (
    find_source_square,
    move_to_san,
    parse_san,
    parse_uci,
)
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.status import GameStatus, classify

__all__ = [
    # Enums
    "Color",
    "DrawReason",
    "FenErrorKind",
    "GameResult",
    "MoveErrorKind",
    "PROMOTION_TYPES",
    "PieceType",
    "StatusKind",
    # Domain objects
    "AppliedMove",
    "Board",
    "GameStatus",
    "Move",
    "MoveError",
    "Piece",
    "Position",
    # Rules
    "all_legal_moves",
    "attackers_of",
    "classify",
    "find_king",
    "has_legal_moves",
    "is_king_in_check",
    "is_path_clear",
    "is_square_attacked",
    "legal_moves",
    "pseudo_legal_destinations",
    # FEN / notation
    "STARTING_FEN",
    "FenError",
    "ParsedFen",
    "decode",
    "encode",
    "find_source_square",
    "move_to_san",
    "parse_san",
    "parse_uci",
]
