"""Game logic: points, pieces, and the board."""

from tetris_core.game.point import Point
from tetris_core.game.pieces import Piece, parse_points, standard_pieces
from tetris_core.game.board import Board, PlaceResult
from tetris_core.game.exceptions import BoardStateError, PieceParseError

__all__ = [
    "Point",
    "Piece",
    "parse_points",
    "standard_pieces",
    "Board",
    "PlaceResult",
    "BoardStateError",
    "PieceParseError",
]
