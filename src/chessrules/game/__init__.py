"""Game management layer: turn order, history and draw rules.

Quick start::

    from chessrules.game import GameState

    game = GameState()
    game.play("e2", "e4")
    print(game.fen, game.status)
"""

from chessrules.game.state import GameState, MoveRecord, is_insufficient_material

__all__ = [
    "GameState",
    "MoveRecord",
    "is_insufficient_material",
]
