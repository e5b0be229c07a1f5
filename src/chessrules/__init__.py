"""chessrules: a single-position chess rules engine.

The pure rules live in :mod:`chessrules.core`, game bookkeeping in
:mod:`chessrules.game` and the Qt view-model seam in :mod:`chessrules.bridge`.
"""

__version__ = "0.1.0"
