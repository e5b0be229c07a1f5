"""Pseudo-legal move generation and path obstruction.

Everything here ignores whether the mover's own king ends up in check;
:mod:`chessrules.core.legality` filters that.  Castling is the exception: its
attack conditions are resolved here, so a castling destination is only ever
produced when the king may actually pass.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color, PieceType
from chessrules.core.position import Position

if TYPE_CHECKING:
    from chessrules.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_SLIDER_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}

# Home squares, keyed by color: (king row, king col).
_HOME_ROW: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}
_KING_COL = 4


# -- Direction helpers -------------------------------------------------------


def pawn_direction(color: Color) -> int:
    """Row delta of a pawn advance.  Depends on color only, never on display."""
    return -1 if color == Color.WHITE else 1


def pawn_start_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def promotion_row(color: Color) -> int:
    return 0 if color == Color.WHITE else 7


def home_row(color: Color) -> int:
    return _HOME_ROW[color]


def castling_rook_cols(king_col: int, to_col: int) -> tuple[int, int]:
    """(rook from col, rook to col) for a castling king move."""
    if to_col > king_col:
        return 7, 5
    return 0, 3


# -- Path obstruction --------------------------------------------------------


def is_path_clear(board: Board, from_pos: Position, to_pos: Position) -> bool:
    """True when every square strictly between two aligned squares is empty.

    Squares that share no rank, file or diagonal have no path: False.
    """
    d_row = to_pos.row - from_pos.row
    d_col = to_pos.col - from_pos.col
    if d_row == 0 and d_col == 0:
        return False
    if d_row != 0 and d_col != 0 and abs(d_row) != abs(d_col):
        return False

    step_row = (d_row > 0) - (d_row < 0)
    step_col = (d_col > 0) - (d_col < 0)
    row = from_pos.row + step_row
    col = from_pos.col + step_col
    while (row, col) != (to_pos.row, to_pos.col):
        if board[Position(row, col)] is not None:
            return False
        row += step_row
        col += step_col
    return True


# -- Reach (attack geometry) -------------------------------------------------


def reaches(board: Board, from_pos: Position, target: Position) -> bool:
    """Could the piece on *from_pos* capture something standing on *target*?

    Pawns use their diagonal attack pattern; castling never counts.  The
    occupant of *target* is not inspected.
    """
    piece = board[from_pos]
    if piece is None or from_pos == target:
        return False

    d_row = target.row - from_pos.row
    d_col = target.col - from_pos.col
    ptype = piece.piece_type

    if ptype == PieceType.PAWN:
        return d_row == pawn_direction(piece.color) and abs(d_col) == 1
    if ptype == PieceType.KNIGHT:
        return (d_row, d_col) in KNIGHT_OFFSETS
    if ptype == PieceType.KING:
        return max(abs(d_row), abs(d_col)) == 1

    straight = d_row == 0 or d_col == 0
    diagonal = abs(d_row) == abs(d_col)
    if ptype == PieceType.ROOK and not straight:
        return False
    if ptype == PieceType.BISHOP and not diagonal:
        return False
    if ptype == PieceType.QUEEN and not (straight or diagonal):
        return False
    return is_path_clear(board, from_pos, target)


# -- Pseudo-legal destinations -----------------------------------------------


def pseudo_legal_destinations(board: Board, position: Position) -> set[Position]:
    """All squares the piece on *position* may move to, ignoring self-check."""
    piece = board[position]
    if piece is None:
        return set()

    moves: set[Position] = set()
    ptype = piece.piece_type
    if ptype == PieceType.PAWN:
        _gen_pawn(board, position, piece.color, moves)
    elif ptype == PieceType.KNIGHT:
        _gen_steps(board, position, piece.color, KNIGHT_OFFSETS, moves)
    elif ptype == PieceType.KING:
        _gen_steps(board, position, piece.color, KING_OFFSETS, moves)
        _gen_castling(board, position, piece.color, moves)
    else:
        _gen_sliding(board, position, piece.color, _SLIDER_DIRS[ptype], moves)
    return moves


def _gen_pawn(
    board: Board, position: Position, color: Color, moves: set[Position]
) -> None:
    pawn = board[position]
    direction = pawn_direction(color)

    one_step = position.offset(direction, 0)
    if one_step is not None and board[one_step] is None:
        moves.add(one_step)
        if (
            pawn is not None
            and not pawn.has_moved
            and position.row == pawn_start_row(color)
        ):
            two_step = position.offset(2 * direction, 0)
            if two_step is not None and board[two_step] is None:
                moves.add(two_step)

    for d_col in (-1, 1):
        cap = position.offset(direction, d_col)
        if cap is None:
            continue
        target = board[cap]
        if target is not None:
            if target.color != color:
                moves.add(cap)
        elif cap == board.en_passant_target and _is_en_passant_victim(
            board, Position(position.row, cap.col), color
        ):
            moves.add(cap)


def _is_en_passant_victim(board: Board, sq: Position, color: Color) -> bool:
    victim = board[sq]
    return (
        victim is not None
        and victim.piece_type == PieceType.PAWN
        and victim.color != color
    )


def _gen_steps(
    board: Board,
    position: Position,
    color: Color,
    offsets: tuple[tuple[int, int], ...],
    moves: set[Position],
) -> None:
    for d_row, d_col in offsets:
        to_pos = position.offset(d_row, d_col)
        if to_pos is None:
            continue
        target = board[to_pos]
        if target is None or target.color != color:
            moves.add(to_pos)


def _gen_sliding(
    board: Board,
    position: Position,
    color: Color,
    directions: tuple[tuple[int, int], ...],
    moves: set[Position],
) -> None:
    for d_row, d_col in directions:
        to_pos = position.offset(d_row, d_col)
        while to_pos is not None:
            target = board[to_pos]
            if target is None:
                moves.add(to_pos)
                to_pos = to_pos.offset(d_row, d_col)
                continue
            if target.color != color:
                moves.add(to_pos)
            break


def _gen_castling(
    board: Board, king_pos: Position, color: Color, moves: set[Position]
) -> None:
    from chessrules.core.check import is_square_attacked

    king = board[king_pos]
    row = home_row(color)
    if king is None or king.has_moved or king_pos != Position(row, _KING_COL):
        return

    opponent = color.opposite
    if is_square_attacked(board, king_pos, opponent):
        return

    for rook_col, step in ((7, 1), (0, -1)):
        rook = board[Position(row, rook_col)]
        if (
            rook is None
            or rook.piece_type != PieceType.ROOK
            or rook.color != color
            or rook.has_moved
        ):
            continue

        between = range(min(rook_col, _KING_COL) + 1, max(rook_col, _KING_COL))
        if any(board[Position(row, col)] is not None for col in between):
            continue

        transit = Position(row, _KING_COL + step)
        destination = Position(row, _KING_COL + 2 * step)
        if is_square_attacked(board, transit, opponent) or is_square_attacked(
            board, destination, opponent
        ):
            continue
        moves.add(destination)
