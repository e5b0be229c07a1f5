"""User-configurable presentation and input settings."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Color, PieceType


@dataclass
class BoardSettings:
    """Settings consumed by the view-model layer, never by the rules."""

    # Which side is drawn nearest the player.
    side_at_bottom: Color = Color.WHITE

    # Move-indicator dots for the selected piece.
    show_legal_moves: bool = True

    # Caller policy: promote without asking.  None means ask every time.
    auto_promote_to: PieceType | None = None
