"""Game bookkeeping layered on the single-position rules engine.

Tracks turn order, move history, clocks for the fifty-move rule and
repetition counts.  The board itself knows none of this.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field

from chessrules.core.board import Board
from chessrules.core.enums import (
    Color,
    DrawReason,
    GameResult,
    MoveErrorKind,
    PieceType,
    StatusKind,
)
from chessrules.core.fen import STARTING_FEN, FenError, decode, encode
from chessrules.core.move import AppliedMove, Move, MoveError
from chessrules.core.position import Position
from chessrules.core.status import GameStatus

_LOGGER = logging.getLogger(__name__)


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    applied: AppliedMove
    fen_after: str
    status_after: GameStatus
    board_before: Board = field(repr=False)
    halfmove_before: int = 0

    @property
    def move(self) -> Move:
        return self.applied.move

    @property
    def san(self) -> str:
        return self.applied.san


def is_insufficient_material(board: Board) -> bool:
    """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-colour bishops)."""
    others = [
        (pos, piece)
        for pos, piece in board.pieces()
        if piece.piece_type != PieceType.KING
    ]

    if not others:
        return True

    if len(others) == 1:
        return others[0][1].piece_type in (PieceType.KNIGHT, PieceType.BISHOP)

    if len(others) == 2:
        (sq_a, a), (sq_b, b) = others
        return (
            a.piece_type == PieceType.BISHOP
            and b.piece_type == PieceType.BISHOP
            and a.color != b.color
            and sq_a.is_light == sq_b.is_light
        )

    return False


def _repetition_key(board: Board, side_to_move: Color) -> str:
    """Placement, side, castling and en passant; the en-passant square only
    counts when *side_to_move* can actually capture on it.
    """
    fields = encode(board, side_to_move).split()[:4]
    if fields[3] != "-" and not _can_capture_en_passant(board, side_to_move):
        fields[3] = "-"
    return " ".join(fields)


def _can_capture_en_passant(board: Board, color: Color) -> bool:
    target = board.en_passant_target
    return any(
        piece.piece_type == PieceType.PAWN and target in board.legal_moves(pos)
        for pos, piece in board.pieces(color)
    )


@dataclass
class GameState:
    """Turn order, history and results on top of a :class:`Board`.

    Checkmate, stalemate and insufficient material end the game on their own.
    The fifty-move rule and threefold repetition only make a draw claimable.
    """

    board: Board = field(default_factory=Board.initial, init=False)
    side_to_move: Color = field(default=Color.WHITE, init=False)
    halfmove_clock: int = field(default=0, init=False)
    fullmove_number: int = field(default=1, init=False)
    status: GameStatus = field(default_factory=GameStatus.playing, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    draw_reason: DrawReason = field(default=DrawReason.NONE, init=False)
    history: list[MoveRecord] = field(default_factory=list, init=False)
    start_fen: str = field(default=STARTING_FEN, init=False)
    _repetitions: Counter[str] = field(default_factory=Counter, init=False, repr=False)

    def __post_init__(self) -> None:
        self.setup()

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> FenError | None:
        """Initialise (or reset) the game.  A bad FEN leaves the game as it was."""
        start_fen = fen or STARTING_FEN
        parsed = decode(start_fen)
        if isinstance(parsed, FenError):
            return parsed

        parsed.board.side_at_bottom = self.board.side_at_bottom
        self.board = parsed.board
        self.side_to_move = parsed.side_to_move
        self.halfmove_clock = parsed.halfmove_clock
        self.fullmove_number = parsed.fullmove_number
        self.start_fen = start_fen
        self.history.clear()
        self._repetitions = Counter({self._position_key(): 1})
        self.result = GameResult.IN_PROGRESS
        self.draw_reason = DrawReason.NONE
        self._refresh_status()
        return None

    # ── Move application ─────────────────────────────────────────────────

    def play(
        self,
        from_pos: Position | str,
        to_pos: Position | str,
        promotion: PieceType | None = None,
    ) -> AppliedMove | MoveError:
        """Validate turn order, then hand the move to the board."""
        if self.is_game_over:
            return MoveError(MoveErrorKind.GAME_OVER, "The game is over")

        src = (
            from_pos
            if isinstance(from_pos, Position)
            else Position.from_algebraic(from_pos)
        )
        piece = self.board[src] if src is not None else None
        if piece is not None and piece.color != self.side_to_move:
            return MoveError(
                MoveErrorKind.WRONG_TURN, f"It is {self.side_to_move}'s turn"
            )

        board_before = self.board.copy()
        halfmove_before = self.halfmove_clock
        applied = self.board.apply_move(from_pos, to_pos, promotion)
        if isinstance(applied, MoveError):
            return applied

        move = applied.move
        if move.piece.piece_type == PieceType.PAWN or move.is_capture:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1
        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = self.side_to_move.opposite

        self._refresh_status()
        fen_after = self.fen
        self._repetitions[self._position_key()] += 1
        self.history.append(
            MoveRecord(
                applied=applied,
                fen_after=fen_after,
                status_after=self.status,
                board_before=board_before,
                halfmove_before=halfmove_before,
            )
        )
        self._check_game_over()
        return applied

    def undo(self) -> MoveRecord | None:
        """Take back the last move.  Returns its record, or None if empty."""
        if not self.history:
            return None

        key = self._position_key()
        record = self.history.pop()
        self._repetitions[key] -= 1
        if self._repetitions[key] <= 0:
            del self._repetitions[key]

        self.board = record.board_before
        self.halfmove_clock = record.halfmove_before
        self.side_to_move = self.side_to_move.opposite
        if self.side_to_move == Color.BLACK:
            self.fullmove_number -= 1

        self.result = GameResult.IN_PROGRESS
        self.draw_reason = DrawReason.NONE
        self._refresh_status()
        return record

    # ── Resignation / draw ───────────────────────────────────────────────

    def resign(self, color: Color) -> bool:
        """*color* gives up.  Returns False if the game had already ended."""
        if self.is_game_over:
            return False
        _LOGGER.info("%s resigned", color)
        if color == Color.WHITE:
            self._finish(GameResult.BLACK_WINS)
        else:
            self._finish(GameResult.WHITE_WINS)
        return True

    def claim_draw(self) -> bool:
        """End the game drawn if the fifty-move or repetition rule allows it."""
        if self.is_game_over:
            return False
        if self.is_threefold_repetition:
            self._finish(GameResult.DRAW, DrawReason.THREEFOLD_REPETITION)
            return True
        if self.is_fifty_move_rule:
            self._finish(GameResult.DRAW, DrawReason.FIFTY_MOVE_RULE)
            return True
        return False

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def fen(self) -> str:
        return encode(
            self.board, self.side_to_move, self.halfmove_clock, self.fullmove_number
        )

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.history)

    @property
    def is_fifty_move_rule(self) -> bool:
        return self.halfmove_clock >= 100  # 100 half-moves = 50 full moves

    @property
    def is_threefold_repetition(self) -> bool:
        return self._repetitions[self._position_key()] >= 3

    @property
    def is_claimable_draw(self) -> bool:
        return self.is_fifty_move_rule or self.is_threefold_repetition

    def legal_moves(self, pos: Position) -> set[Position]:
        """Legal destinations of *pos*; empty for the side not to move."""
        piece = self.board[pos]
        if piece is None or piece.color != self.side_to_move or self.is_game_over:
            return set()
        return self.board.legal_moves(pos)

    # ── Internal ─────────────────────────────────────────────────────────

    def _position_key(self) -> str:
        return _repetition_key(self.board, self.side_to_move)

    def _refresh_status(self) -> None:
        self.status = self.board.status(self.side_to_move)

    def _check_game_over(self) -> None:
        if self.status.kind == StatusKind.CHECKMATE:
            if self.status.winner == Color.WHITE:
                self._finish(GameResult.WHITE_WINS)
            else:
                self._finish(GameResult.BLACK_WINS)
        elif self.status.kind == StatusKind.STALEMATE:
            self._finish(GameResult.DRAW, DrawReason.STALEMATE)
        elif is_insufficient_material(self.board):
            self._finish(GameResult.DRAW, DrawReason.INSUFFICIENT_MATERIAL)

    def _finish(self, result: GameResult, reason: DrawReason = DrawReason.NONE) -> None:
        self.result = result
        self.draw_reason = reason
        _LOGGER.info("Game over: %s (%s)", result.name, reason.name)
