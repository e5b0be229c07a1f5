"""Move value objects and the explicit error results of move requests."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import MoveErrorKind, PieceType
from chessrules.core.piece import Piece
from chessrules.core.position import Position

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """A move as it was played; carries enough to render notation or replay it."""

    from_pos: Position
    to_pos: Position
    piece: Piece
    captured: Piece | None = None
    is_castling: bool = False
    is_en_passant: bool = False
    is_promotion: bool = False
    promoted_to: PieceType | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return self.uci

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        base = f"{self.from_pos}{self.to_pos}"
        if self.promoted_to is not None:
            base += _PROMO_CHARS.get(self.promoted_to, "")
        return base


@dataclass(frozen=True, slots=True)
class AppliedMove:
    """Successful result of :meth:`Board.apply_move`."""

    move: Move
    en_passant_target: Position | None
    san: str


@dataclass(frozen=True, slots=True)
class MoveError:
    """Refused move request; falsy so callers can branch on the result."""

    kind: MoveErrorKind
    message: str = ""

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.message or self.kind.name.lower()
