"""Game state classification: Playing / Check / Checkmate / Stalemate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessrules.core.check import is_king_in_check
from chessrules.core.enums import Color, StatusKind
from chessrules.core.legality import has_legal_moves

if TYPE_CHECKING:
    from chessrules.core.board import Board


@dataclass(frozen=True, slots=True)
class GameStatus:
    """State of the position for one side.

    ``color`` names the side in check or mated; it is ``None`` for
    ``PLAYING`` and ``STALEMATE``.
    """

    kind: StatusKind
    color: Color | None = None

    @classmethod
    def playing(cls) -> GameStatus:
        return cls(StatusKind.PLAYING)

    @classmethod
    def check(cls, color: Color) -> GameStatus:
        return cls(StatusKind.CHECK, color)

    @classmethod
    def checkmate(cls, color: Color) -> GameStatus:
        return cls(StatusKind.CHECKMATE, color)

    @classmethod
    def stalemate(cls) -> GameStatus:
        return cls(StatusKind.STALEMATE)

    @property
    def is_terminal(self) -> bool:
        return self.kind in (StatusKind.CHECKMATE, StatusKind.STALEMATE)

    @property
    def winner(self) -> Color | None:
        if self.kind == StatusKind.CHECKMATE and self.color is not None:
            return self.color.opposite
        return None

    def __str__(self) -> str:
        if self.color is None:
            return self.kind.name.lower()
        return f"{self.kind.name.lower()}({self.color})"


def classify(board: Board, color: Color) -> GameStatus:
    """Classify *board* for *color*, the side about to move."""
    in_check = is_king_in_check(board, color)
    can_move = has_legal_moves(board, color)

    if in_check:
        return GameStatus.check(color) if can_move else GameStatus.checkmate(color)
    if not can_move:
        return GameStatus.stalemate()
    return GameStatus.playing()
