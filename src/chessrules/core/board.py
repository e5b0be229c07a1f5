"""Board: 8x8 piece placement, en-passant target and display orientation."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import replace
from typing import TYPE_CHECKING

from chessrules.core import check, legality
from chessrules.core.enums import Color, MoveErrorKind, PieceType
from chessrules.core.move import AppliedMove, Move, MoveError
from chessrules.core.piece import Piece
from chessrules.core.position import Position

if TYPE_CHECKING:
    from chessrules.core.fen import FenError
    from chessrules.core.status import GameStatus

_LOGGER = logging.getLogger(__name__)

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _coerce(value: Position | str) -> Position | None:
    if isinstance(value, Position):
        return value
    return Position.from_algebraic(value)


class Board:
    """Mutable 8x8 board.

    ``side_at_bottom`` only affects rendering; move rules never look at it.
    """

    __slots__ = ("_grid", "en_passant_target", "side_at_bottom")

    def __init__(self, side_at_bottom: Color = Color.WHITE) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]
        self.en_passant_target: Position | None = None
        self.side_at_bottom = side_at_bottom

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Piece | None:
        return self._grid[pos.row][pos.col]

    def get_piece(self, pos: Position) -> Piece | None:
        return self._grid[pos.row][pos.col]

    def set_piece(self, pos: Position, piece: Piece | None) -> None:
        """Place or remove a piece without any legality check."""
        self._grid[pos.row][pos.col] = piece

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Position, Piece]]:
        """(square, piece) pairs, a8 first, optionally restricted to *color*."""
        for row in range(8):
            for col in range(8):
                piece = self._grid[row][col]
                if piece is not None and (color is None or piece.color == color):
                    yield Position(row, col), piece

    # -- Queries ------------------------------------------------------------

    def legal_moves(self, pos: Position) -> set[Position]:
        return legality.legal_moves(self, pos)

    def is_king_in_check(self, color: Color) -> bool:
        return check.is_king_in_check(self, color)

    def find_king(self, color: Color) -> Position | None:
        return check.find_king(self, color)

    def status(self, color: Color) -> GameStatus:
        from chessrules.core.status import classify

        return classify(self, color)

    # -- Moves --------------------------------------------------------------

    def apply_move(
        self,
        from_pos: Position | str,
        to_pos: Position | str,
        promotion: PieceType | None = None,
    ) -> AppliedMove | MoveError:
        """Validate and play a move.

        Refusals come back as :class:`MoveError` and leave the board as it
        was.  A pawn reaching the last rank needs an explicit *promotion*.
        """
        src = _coerce(from_pos)
        dst = _coerce(to_pos)
        if src is None or dst is None:
            bad = from_pos if src is None else to_pos
            return self._reject(
                MoveErrorKind.INVALID_POSITION, f"Invalid square: {bad!r}"
            )

        piece = self[src]
        if piece is None:
            return self._reject(MoveErrorKind.NO_PIECE_AT_SOURCE, f"No piece on {src}")

        if dst not in legality.legal_moves(self, src):
            return self._reject(
                MoveErrorKind.ILLEGAL_MOVE, f"Illegal move: {piece.name} {src}-{dst}"
            )

        is_promotion = legality.is_promotion_move(piece, dst)
        if is_promotion:
            if promotion is None:
                return self._reject(
                    MoveErrorKind.PROMOTION_REQUIRED,
                    f"Promotion piece required for {src}-{dst}",
                )
            if promotion in (PieceType.PAWN, PieceType.KING):
                return self._reject(
                    MoveErrorKind.INVALID_PROMOTION,
                    f"Cannot promote to {promotion.name.lower()}",
                )

        from chessrules.core.notation import move_to_san

        before = self.copy()
        move = Move(
            from_pos=src,
            to_pos=dst,
            piece=piece.copy(),
            is_castling=legality.is_castling_move(piece, src, dst),
            is_en_passant=legality.is_en_passant_move(self, piece, src, dst),
            is_promotion=is_promotion,
            promoted_to=promotion if is_promotion else None,
        )
        captured = legality.relocate(self, src, dst, move.promoted_to)
        if captured is not None:
            move = replace(move, captured=captured)

        return AppliedMove(
            move=move,
            en_passant_target=self.en_passant_target,
            san=move_to_san(before, move),
        )

    def _reject(self, kind: MoveErrorKind, message: str) -> MoveError:
        _LOGGER.debug("Move rejected (%s): %s", kind.name, message)
        return MoveError(kind, message)

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        """Deep copy: independent pieces, flags and en-passant target."""
        b = Board(self.side_at_bottom)
        b._grid = [
            [piece.copy() if piece is not None else None for piece in row]
            for row in self._grid
        ]
        b.en_passant_target = self.en_passant_target
        return b

    def clear(self) -> None:
        self._grid = [[None] * 8 for _ in range(8)]
        self.en_passant_target = None

    def reset(self) -> None:
        """Standard starting array, White on ranks 1-2."""
        self.clear()
        for col, ptype in enumerate(_BACK_RANK):
            self._grid[7][col] = Piece(Color.WHITE, ptype)
            self._grid[6][col] = Piece(Color.WHITE, PieceType.PAWN)
            self._grid[1][col] = Piece(Color.BLACK, PieceType.PAWN)
            self._grid[0][col] = Piece(Color.BLACK, ptype)

    # -- Factory / FEN ------------------------------------------------------

    @classmethod
    def initial(cls, side_at_bottom: Color = Color.WHITE) -> Board:
        """Standard starting position."""
        b = cls(side_at_bottom)
        b.reset()
        return b

    @classmethod
    def from_fen(cls, fen: str) -> Board | FenError:
        from chessrules.core.fen import FenError, decode

        parsed = decode(fen)
        if isinstance(parsed, FenError):
            return parsed
        return parsed.board

    def to_fen(self) -> str:
        from chessrules.core.fen import encode

        return encode(self)

    get_fen = to_fen

    # -- Rendering ----------------------------------------------------------

    def render(self, side_at_bottom: Color | None = None) -> str:
        """Text diagram with *side_at_bottom* (default: the board's) nearest."""
        bottom = self.side_at_bottom if side_at_bottom is None else side_at_bottom
        rows = range(8) if bottom == Color.WHITE else range(7, -1, -1)
        cols = list(range(8)) if bottom == Color.WHITE else list(range(7, -1, -1))

        lines: list[str] = []
        for row in rows:
            cells = []
            for col in cols:
                p = self._grid[row][col]
                cells.append(str(p) if p else ".")
            lines.append(f"{8 - row} {' '.join(cells)}")
        lines.append("  " + " ".join("abcdefgh"[c] for c in cols))
        return "\n".join(lines)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._grid == other._grid
            and self.en_passant_target == other.en_passant_target
        )

    def __repr__(self) -> str:
        return self.render(Color.WHITE)

