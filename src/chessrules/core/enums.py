"""Core enumerations for the rules engine."""

from __future__ import annotations

from enum import IntEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class StatusKind(IntEnum):
    """Classification of a position for the side to move."""

    PLAYING = auto()
    CHECK = auto()
    CHECKMATE = auto()
    STALEMATE = auto()


class MoveErrorKind(IntEnum):
    """Reasons a move request can be refused."""

    INVALID_POSITION = auto()
    NO_PIECE_AT_SOURCE = auto()
    ILLEGAL_MOVE = auto()
    PROMOTION_REQUIRED = auto()
    INVALID_PROMOTION = auto()
    WRONG_TURN = auto()
    GAME_OVER = auto()


class FenErrorKind(IntEnum):
    """FEN decoding failure classes."""

    MALFORMED = auto()


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3


class DrawReason(IntEnum):
    """Why a game ended drawn."""

    NONE = 0
    STALEMATE = auto()
    INSUFFICIENT_MATERIAL = auto()
    FIFTY_MOVE_RULE = auto()
    THREEFOLD_REPETITION = auto()
