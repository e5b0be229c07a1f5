"""Piece: identity (type, color) plus the has-moved flag."""

from __future__ import annotations

from chessrules.core.enums import Color, PieceType

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


class Piece:
    """A chess piece owned by exactly one board square.

    ``has_moved`` doubles as castling-rights and double-step bookkeeping.
    It is read-only for callers; only the board flips it when the piece moves.
    Equality ignores the flag: two white knights are the same piece kind.
    """

    __slots__ = ("color", "piece_type", "_has_moved")

    def __init__(
        self, color: Color, piece_type: PieceType, has_moved: bool = False
    ) -> None:
        self.color = color
        self.piece_type = piece_type
        self._has_moved = has_moved

    @property
    def has_moved(self) -> bool:
        return self._has_moved

    def _mark_moved(self) -> None:
        self._has_moved = True

    def copy(self) -> Piece:
        """Independent instance carrying the same flag."""
        return Piece(self.color, self.piece_type, self._has_moved)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    @property
    def name(self) -> str:
        return f"{self.color} {self.piece_type.name.lower()}"

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return self.color == other.color and self.piece_type == other.piece_type

    def __hash__(self) -> int:
        return hash((self.color, self.piece_type))

    def __repr__(self) -> str:
        moved = ", moved" if self._has_moved else ""
        return f"Piece({self.color.name}, {self.piece_type.name}{moved})"
