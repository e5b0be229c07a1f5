"""SAN rendering and SAN / UCI parsing on top of the legality filter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color, PieceType, StatusKind
from chessrules.core.legality import legal_moves, simulate
from chessrules.core.position import Position

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.move import Move

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in _SAN_PIECE.items()}
_UCI_PROMO: dict[str, PieceType] = {
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
}

MoveSpec = tuple[Position, Position, PieceType | None]


def move_to_san(board: Board, move: Move) -> str:
    """SAN for *move* given *board* as it stood before the move."""
    if move.is_castling:
        san = "O-O" if move.to_pos.col > move.from_pos.col else "O-O-O"
    else:
        piece = move.piece
        is_capture = move.captured is not None or move.is_en_passant
        san = ""

        if piece.piece_type == PieceType.PAWN:
            if is_capture:
                san += move.from_pos.file
        else:
            san += _SAN_PIECE[piece.piece_type]
            san += _disambiguation(board, move)

        if is_capture:
            san += "x"
        san += move.to_pos.to_algebraic()

        if move.promoted_to is not None:
            san += "=" + _SAN_PIECE[move.promoted_to]

    after = simulate(board, move.from_pos, move.to_pos, move.promoted_to)
    status = after.status(move.piece.color.opposite)
    if status.kind == StatusKind.CHECKMATE:
        san += "#"
    elif status.kind == StatusKind.CHECK:
        san += "+"
    return san


def _disambiguation(board: Board, move: Move) -> str:
    piece = move.piece
    rivals = [
        pos
        for pos, other in board.pieces(piece.color)
        if pos != move.from_pos
        and other.piece_type == piece.piece_type
        and move.to_pos in legal_moves(board, pos)
    ]
    if not rivals:
        return ""
    if all(pos.col != move.from_pos.col for pos in rivals):
        return move.from_pos.file
    if all(pos.row != move.from_pos.row for pos in rivals):
        return str(move.from_pos.rank)
    return move.from_pos.to_algebraic()


def parse_uci(text: str) -> MoveSpec | None:
    """``"e7e8q"`` → (e7, e8, QUEEN); ``None`` when malformed."""
    text = text.strip()
    if len(text) not in (4, 5):
        return None
    from_pos = Position.from_algebraic(text[:2])
    to_pos = Position.from_algebraic(text[2:4])
    if from_pos is None or to_pos is None:
        return None
    promotion: PieceType | None = None
    if len(text) == 5:
        promotion = _UCI_PROMO.get(text[4].lower())
        if promotion is None:
            return None
    return from_pos, to_pos, promotion


def parse_san(board: Board, san: str, color: Color) -> MoveSpec | None:
    """Resolve *san* against *color*'s legal moves on *board*.

    Returns ``None`` if the text is malformed, illegal or ambiguous.
    """
    clean = san.strip().rstrip("+#!?")

    if clean in ("O-O", "0-0", "O-O-O", "0-0-0"):
        king_pos = board.find_king(color)
        if king_pos is None:
            return None
        step = 2 if clean in ("O-O", "0-0") else -2
        to_pos = king_pos.offset(0, step)
        if to_pos is None or to_pos not in legal_moves(board, king_pos):
            return None
        return king_pos, to_pos, None

    promotion: PieceType | None = None
    if "=" in clean:
        clean, _, promo = clean.partition("=")
        promotion = _SAN_PIECE_REV.get(promo)
        if promotion is None or promotion == PieceType.KING:
            return None
    elif len(clean) > 2 and clean[-1] in "QRBN" and clean[-2] in "18":
        promotion = _SAN_PIECE_REV[clean[-1]]
        clean = clean[:-1]

    if len(clean) < 2:
        return None
    to_pos = Position.from_algebraic(clean[-2:])
    if to_pos is None:
        return None
    clean = clean[:-2].rstrip("x")

    piece_type = PieceType.PAWN
    if clean and clean[0] in _SAN_PIECE_REV:
        piece_type = _SAN_PIECE_REV[clean[0]]
        clean = clean[1:]

    from_file: str | None = None
    from_rank: int | None = None
    for ch in clean:
        if ch in "abcdefgh":
            from_file = ch
        elif ch in "12345678":
            from_rank = int(ch)
        else:
            return None

    candidates = [
        pos
        for pos, piece in board.pieces(color)
        if piece.piece_type == piece_type
        and (from_file is None or pos.file == from_file)
        and (from_rank is None or pos.rank == from_rank)
        and to_pos in legal_moves(board, pos)
    ]
    if len(candidates) != 1:
        return None
    return candidates[0], to_pos, promotion


def find_source_square(
    board: Board, piece_type: PieceType, color: Color, to_pos: Position
) -> Position | None:
    """First *color* piece of *piece_type* that may legally move to *to_pos*."""
    for pos, piece in board.pieces(color):
        if piece.piece_type == piece_type and to_pos in legal_moves(board, pos):
            return pos
    return None
