# exceptions.py - Contract violations raised by the board and piece code.
# Placement failures are not exceptions; see board.PlaceResult.

class BoardStateError(RuntimeError):
    """Raised when the board is used out of order (e.g. place while uncommitted)."""
    pass

class PieceParseError(ValueError):
    """Raised when a piece string is not a list of x y integer pairs."""
    pass
