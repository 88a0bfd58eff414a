"""
Tetromino definitions and the immutable Piece value type.

A Piece is one rotation of a shape, described by the cells of its body.
Rotating a piece never changes it; it returns a new Piece.

Coordinate convention:
  - Body cells are (x, y) offsets from the piece's origin, the lower-left
    corner of its bounding box.
  - y increases UPWARD, matching the board (row 0 is the floor).
  - The skirt holds, for each column of the piece, the lowest y in the body
    (None for a column with no cell).
    Comparing it with the board's column heights gives the drop height.
"""

from __future__ import annotations

import re
from typing import Iterable, Union

from tetris_core.game.exceptions import PieceParseError
from tetris_core.game.point import Point

# =============================================================================
# Standard piece encodings: "x0 y0 x1 y1 ..." for the first rotation
# =============================================================================

STICK_STR   = "0 0 0 1 0 2 0 3"
L1_STR      = "0 0 0 1 0 2 1 0"
L2_STR      = "0 0 1 0 1 1 1 2"
S1_STR      = "0 0 1 0 1 1 2 1"
S2_STR      = "0 1 1 1 1 0 2 0"
SQUARE_STR  = "0 0 0 1 1 0 1 1"
PYRAMID_STR = "0 0 1 0 1 1 2 0"

# Order of the table returned by standard_pieces()
STANDARD_PIECE_STRS: tuple[str, ...] = (
    STICK_STR,
    L1_STR,
    L2_STR,
    S1_STR,
    S2_STR,
    SQUARE_STR,
    PYRAMID_STR,
)

_TOKEN_RE = re.compile(r"[0-9]+")

PointLike = Union[Point, tuple[int, int]]


def parse_points(text: str) -> list[Point]:
    """Parse a string of whitespace-separated x y pairs into Points.

    Args:
        text: e.g. "0 0 1 0 2 0 1 1".

    Returns:
        The points in the order they appear.

    Raises:
        PieceParseError: If a token is not a non-negative decimal integer,
            the token count is odd, or the string holds no tokens.
    """
    tokens = text.split()
    if not tokens:
        raise PieceParseError("Piece string is empty")
    for token in tokens:
        if not _TOKEN_RE.fullmatch(token):
            raise PieceParseError(f"Invalid coordinate {token!r} in piece string {text!r}")
    if len(tokens) % 2 != 0:
        raise PieceParseError(f"Odd number of coordinates ({len(tokens)}) in piece string {text!r}")

    values = [int(token) for token in tokens]
    return [Point(values[i], values[i + 1]) for i in range(0, len(values), 2)]


class Piece:
    """One rotation of a Tetris piece.

    Attributes are computed once in the constructor and never change:
    width and height of the bounding box, the body (a tuple of Points in
    the order given) and the skirt (a tuple with one entry per column).

    Two pieces are equal when their bodies hold the same set of cells,
    whatever the order the cells were listed in.
    """

    def __init__(self, points: Union[str, Iterable[PointLike]]) -> None:
        """Build a piece from Points, (x, y) pairs, or a piece string.

        Args:
            points: Body cells, or a string accepted by parse_points().

        Raises:
            PieceParseError: If a string argument is malformed.
            ValueError: If the body is empty or holds a negative coordinate.
        """
        if isinstance(points, str):
            body = parse_points(points)
        else:
            body = [p if isinstance(p, Point) else Point(*p) for p in points]
        if not body:
            raise ValueError("A piece needs at least one body cell")

        self._body: tuple[Point, ...] = tuple(body)
        self._width = 1 + max(p.x for p in body)
        self._height = 1 + max(p.y for p in body)

        # None marks a column with no cell; it never limits a drop.
        skirt: list[int | None] = [None] * self._width
        for p in body:
            if skirt[p.x] is None or p.y < skirt[p.x]:
                skirt[p.x] = p.y
        self._skirt: tuple[int | None, ...] = tuple(skirt)
        self._cells: frozenset[Point] = frozenset(body)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def body(self) -> tuple[Point, ...]:
        return self._body

    @property
    def skirt(self) -> tuple[int | None, ...]:
        return self._skirt

    def rotated(self) -> Piece:
        """Return a new piece rotated 90 degrees counter-clockwise.

        Each cell (x, y) maps to (height - 1 - y, x).
        """
        return Piece(Point(self._height - 1 - p.y, p.x) for p in self._body)

    def rotations(self) -> list[Piece]:
        """Return the distinct rotations, starting with this piece.

        Rotates until a piece equal to this one comes back, so the square
        yields 1 entry, the stick and S pieces 2, the rest 4.
        """
        result = [self]
        nxt = self.rotated()
        while nxt != self:
            result.append(nxt)
            nxt = nxt.rotated()
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        return hash(self._cells)

    def __repr__(self) -> str:
        coords = " ".join(f"{p.x} {p.y}" for p in sorted(self._cells))
        return f"Piece({coords!r})"

    def __str__(self) -> str:
        lines = [
            f"Piece: width={self._width} height={self._height} skirt={list(self._skirt)}"
        ]
        for y in range(self._height - 1, -1, -1):
            row = "".join(
                "X" if Point(x, y) in self._cells else " " for x in range(self._width)
            )
            lines.append(row)
        return "\n".join(lines)


# =============================================================================
# Standard piece table (built on first use, shared read-only afterwards)
# =============================================================================

_STANDARD_PIECES: tuple[Piece, ...] | None = None


def standard_pieces() -> tuple[Piece, ...]:
    """Return the first rotation of each of the 7 standard pieces.

    Order: stick, L1, L2, S1, S2, square, pyramid. The same tuple is
    returned on every call.
    """
    global _STANDARD_PIECES
    if _STANDARD_PIECES is None:
        _STANDARD_PIECES = tuple(Piece(s) for s in STANDARD_PIECE_STRS)
    return _STANDARD_PIECES
