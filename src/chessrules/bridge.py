"""Qt view-model bridge: exposes a :class:`GameState` through signals/slots.

The bridge owns no rules.  Every decision is delegated to the engine; the
bridge only turns results into signals and runs the two-step promotion
handshake (request, then choice) on behalf of the UI.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessrules.core.enums import Color, MoveErrorKind, PieceType
from chessrules.core.fen import FenError
from chessrules.core.move import AppliedMove, MoveError
from chessrules.core.position import Position, square
from chessrules.game.state import GameState
from chessrules.settings import BoardSettings

_LOGGER = logging.getLogger(__name__)


class BoardBridge(QObject):
    """Thread-affine adapter between board widgets and the rules engine."""

    board_changed = pyqtSignal(str)
    move_applied = pyqtSignal(object)
    promotion_requested = pyqtSignal(object, object)
    move_rejected = pyqtSignal(str)
    fen_rejected = pyqtSignal(str)
    status_changed = pyqtSignal(object)
    game_over = pyqtSignal(object)

    def __init__(
        self,
        settings: BoardSettings | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings if settings is not None else BoardSettings()
        self._game = GameState()
        self._game.board.side_at_bottom = self._settings.side_at_bottom
        self._pending: tuple[Position, Position] | None = None

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def game(self) -> GameState:
        return self._game

    @property
    def settings(self) -> BoardSettings:
        return self._settings

    @property
    def pending_promotion(self) -> tuple[Position, Position] | None:
        return self._pending

    def apply_settings(self, settings: BoardSettings) -> None:
        self._settings = settings
        self._game.board.side_at_bottom = settings.side_at_bottom
        self.board_changed.emit(self._game.fen)

    # ── Rendering helpers ────────────────────────────────────────────────

    def display_rows(self) -> list[list[Position]]:
        """Squares top-left to bottom-right as the player sees them."""
        white_bottom = self._settings.side_at_bottom == Color.WHITE
        rows = range(8) if white_bottom else range(7, -1, -1)
        cols = range(8) if white_bottom else range(7, -1, -1)
        return [[Position(row, col) for col in cols] for row in rows]

    def legal_targets(self, pos: Position) -> set[Position]:
        """Move-indicator squares for the piece on *pos*."""
        if not self._settings.show_legal_moves:
            return set()
        return self._game.legal_moves(pos)

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot(str)
    def new_game(self, fen: str = "") -> None:
        """Start over from *fen* (or the standard position)."""
        error = self._game.setup(fen or None)
        if isinstance(error, FenError):
            self.fen_rejected.emit(str(error))
            return
        self._game.board.side_at_bottom = self._settings.side_at_bottom
        self._pending = None
        self.board_changed.emit(self._game.fen)
        self.status_changed.emit(self._game.status)

    @pyqtSlot(object, object)
    def request_move(self, from_pos: object, to_pos: object) -> None:
        """Try the move; a bare pawn promotion turns into a promotion request."""
        if not isinstance(from_pos, (Position, str)) or not isinstance(
            to_pos, (Position, str)
        ):
            self.move_rejected.emit("Bridge received invalid squares")
            return

        self._pending = None
        result = self._game.play(from_pos, to_pos, self._settings.auto_promote_to)
        if (
            isinstance(result, MoveError)
            and result.kind == MoveErrorKind.PROMOTION_REQUIRED
        ):
            src = _as_position(from_pos)
            dst = _as_position(to_pos)
            self._pending = (src, dst)
            _LOGGER.info("Promotion requested for %s-%s", src, dst)
            self.promotion_requested.emit(src, dst)
            return
        self._publish(result)

    @pyqtSlot(object)
    def choose_promotion(self, piece_type: object) -> None:
        """Complete a pending promotion with the player's choice."""
        if self._pending is None:
            self.move_rejected.emit("No promotion pending")
            return
        if not isinstance(piece_type, PieceType):
            self.move_rejected.emit(f"Invalid promotion piece: {piece_type!r}")
            return

        src, dst = self._pending
        result = self._game.play(src, dst, piece_type)
        if (
            isinstance(result, MoveError)
            and result.kind == MoveErrorKind.INVALID_PROMOTION
        ):
            # Keep the handshake open so the player can pick again.
            self.move_rejected.emit(str(result))
            return
        self._pending = None
        self._publish(result)

    @pyqtSlot()
    def cancel_promotion(self) -> None:
        if self._pending is not None:
            _LOGGER.info("Promotion cancelled for %s-%s", *self._pending)
        self._pending = None

    @pyqtSlot()
    def undo(self) -> None:
        self._pending = None
        if self._game.undo() is None:
            return
        self.board_changed.emit(self._game.fen)
        self.status_changed.emit(self._game.status)

    # ── Internal ─────────────────────────────────────────────────────────

    def _publish(self, result: AppliedMove | MoveError) -> None:
        if isinstance(result, MoveError):
            self.move_rejected.emit(str(result))
            return

        self.move_applied.emit(result)
        self.board_changed.emit(self._game.fen)
        self.status_changed.emit(self._game.status)
        if self._game.is_game_over:
            self.game_over.emit(self._game.result)


def _as_position(value: Position | str) -> Position:
    return value if isinstance(value, Position) else square(value)
