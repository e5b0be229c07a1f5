"""Position: a validated board coordinate.

Grid layout (row-major, rank 8 first)::

    row 0 -> rank 8   a8 = (0, 0) ... h8 = (0, 7)
    ...
    row 7 -> rank 1   a1 = (7, 0) ... h1 = (7, 7)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Immutable (row, col) coordinate; construction fails outside 0..7."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if not (0 <= self.row < 8 and 0 <= self.col < 8):
            raise ValueError(f"Square out of range: ({self.row}, {self.col})")

    # ── Algebraic notation ───────────────────────────────────────────────

    @classmethod
    def from_algebraic(cls, name: str) -> Position | None:
        """Parse a square name such as ``"e4"``; ``None`` when invalid."""
        if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
            return None
        return cls(8 - int(name[1]), _FILES.index(name[0]))

    def to_algebraic(self) -> str:
        return f"{_FILES[self.col]}{8 - self.row}"

    def __str__(self) -> str:
        return self.to_algebraic()

    # ── Geometry helpers ─────────────────────────────────────────────────

    @property
    def file(self) -> str:
        return _FILES[self.col]

    @property
    def rank(self) -> int:
        """Rank number 1–8."""
        return 8 - self.row

    @property
    def is_light(self) -> bool:
        return (self.row + self.col) % 2 == 0

    def offset(self, d_row: int, d_col: int) -> Position | None:
        """Neighbouring square, or ``None`` when it falls off the board."""
        row = self.row + d_row
        col = self.col + d_col
        if 0 <= row < 8 and 0 <= col < 8:
            return Position(row, col)
        return None

    @staticmethod
    def all() -> Iterator[Position]:
        """All 64 squares, a8 first."""
        for row in range(8):
            for col in range(8):
                yield Position(row, col)


def square(name: str) -> Position:
    """Strict variant of :meth:`Position.from_algebraic` for literals."""
    pos = Position.from_algebraic(name)
    if pos is None:
        raise ValueError(f"Invalid square name: {name!r}")
    return pos


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = (Position(0, c) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Position(1, c) for c in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Position(2, c) for c in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Position(3, c) for c in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Position(4, c) for c in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Position(5, c) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Position(6, c) for c in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = (Position(7, c) for c in range(8))
