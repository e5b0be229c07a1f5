"""FEN parsing and serialization.

Castling rights are not stored on the board; they are derived from the
``has_moved`` flags of kings and rooks on their home squares.  Decoding maps
the rights back onto those flags, which cannot tell "moved and came back"
from "never moved", so a lost right always reads as a moved piece.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chessrules.core.board import Board
from chessrules.core.enums import Color, FenErrorKind, PieceType
from chessrules.core.move_rules import home_row, pawn_start_row
from chessrules.core.piece import Piece
from chessrules.core.position import Position

_LOGGER = logging.getLogger(__name__)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_KING_COL = 4
# castling letter -> (color, rook col)
_CASTLING_SIDES: dict[str, tuple[Color, int]] = {
    "K": (Color.WHITE, 7),
    "Q": (Color.WHITE, 0),
    "k": (Color.BLACK, 7),
    "q": (Color.BLACK, 0),
}


@dataclass(frozen=True, slots=True)
class FenError:
    """Decoding failure; no board is produced."""

    kind: FenErrorKind
    message: str

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class ParsedFen:
    """All six FEN fields, with the board already populated."""

    board: Board
    side_to_move: Color = Color.WHITE
    halfmove_clock: int = 0
    fullmove_number: int = 1


# ── Encoding ────────────────────────────────────────────────────────────────


def castling_field(board: Board) -> str:
    """Castling rights implied by unmoved kings and rooks on home squares."""
    rights = ""
    for letter, (color, rook_col) in _CASTLING_SIDES.items():
        row = home_row(color)
        king = board[Position(row, _KING_COL)]
        rook = board[Position(row, rook_col)]
        if (
            king is not None
            and king.piece_type == PieceType.KING
            and king.color == color
            and not king.has_moved
            and rook is not None
            and rook.piece_type == PieceType.ROOK
            and rook.color == color
            and not rook.has_moved
        ):
            rights += letter
    return rights or "-"


def placement_field(board: Board) -> str:
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = board[Position(row, col)]
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    return "/".join(rows)


def encode(
    board: Board,
    side_to_move: Color | None = None,
    halfmove_clock: int = 0,
    fullmove_number: int = 1,
) -> str:
    """Serialise *board* to a full six-field FEN string.

    Without an explicit *side_to_move* it is derived from the en-passant
    target: a target on rank 3 means White just double-stepped.
    """
    ep = board.en_passant_target
    if side_to_move is None:
        side_to_move = Color.BLACK if ep is not None and ep.rank == 3 else Color.WHITE

    side_str = "w" if side_to_move == Color.WHITE else "b"
    ep_str = ep.to_algebraic() if ep is not None else "-"
    return (
        f"{placement_field(board)} {side_str} {castling_field(board)} {ep_str} "
        f"{halfmove_clock} {fullmove_number}"
    )


# ── Decoding ────────────────────────────────────────────────────────────────


def decode(fen: str) -> ParsedFen | FenError:
    """Parse *fen*; any structural problem yields :class:`FenError`."""
    try:
        return _parse(fen)
    except ValueError as exc:
        _LOGGER.debug("Rejected FEN %r: %s", fen, exc)
        return FenError(FenErrorKind.MALFORMED, str(exc))


def _parse(fen: str) -> ParsedFen:
    parts = fen.split()
    if not (1 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 1-6 fields): {fen!r}")
    defaults = ["w", "-", "-", "0", "1"]
    placement, side_part, castling_part, ep_part, half_part, full_part = (
        parts + defaults[len(parts) - 1 :]
    )

    # 1. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                board.set_piece(Position(row, col), Piece.from_char(ch))
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    rights: set[str] = set()
    if castling_part != "-":
        for ch in castling_part:
            if ch not in _CASTLING_SIDES or ch in rights:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            rights.add(ch)
    _apply_moved_flags(board, rights)

    # 4. En passant
    if ep_part != "-":
        ep = Position.from_algebraic(ep_part)
        if ep is None or ep.rank not in (3, 6):
            raise ValueError(f"Invalid FEN en-passant square: {ep_part!r}")
        expected_rank = 6 if side == Color.WHITE else 3
        if ep.rank != expected_rank:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        board.en_passant_target = ep

    # 5–6. Clocks
    halfmove = int(half_part)
    if halfmove < 0:
        raise ValueError(f"Invalid FEN halfmove clock: {half_part!r}")
    fullmove = int(full_part)
    if fullmove < 1:
        raise ValueError(f"Invalid FEN fullmove number: {full_part!r}")

    return ParsedFen(board, side, halfmove, fullmove)


def _apply_moved_flags(board: Board, rights: set[str]) -> None:
    for pos, piece in list(board.pieces()):
        color = piece.color
        row = home_row(color)
        if piece.piece_type == PieceType.KING:
            has_right = any(
                letter in rights
                for letter, (c, _col) in _CASTLING_SIDES.items()
                if c == color
            )
            if pos != Position(row, _KING_COL) or not has_right:
                piece._mark_moved()
        elif piece.piece_type == PieceType.ROOK:
            letter = next(
                (
                    letter
                    for letter, (c, col) in _CASTLING_SIDES.items()
                    if c == color and pos == Position(row, col)
                ),
                None,
            )
            if letter is None or letter not in rights:
                piece._mark_moved()
        elif piece.piece_type == PieceType.PAWN and pos.row != pawn_start_row(color):
            piece._mark_moved()
