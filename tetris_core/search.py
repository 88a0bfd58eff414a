"""
Placement search over a Board using place()/undo() probes.

Instead of copying the board for every candidate, each candidate placement
is written onto the live board, inspected, and rolled back with undo():

  For each distinct rotation of the piece:
    For each column where the rotation fits horizontally:
      1. y = board.drop_height(piece, x)
      2. board.place(piece, x, y), then board.clear_rows() on ROW_FILLED
      3. Inspect the afterstate (summaries, or a caller-supplied score)
      4. board.undo()

The board must be committed on entry and is committed and unchanged on
exit. Scoring heuristics are not defined here; a policy passes its own
score function or implements the Brain protocol.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Protocol

from tetris_core.game.board import Board, PlaceResult
from tetris_core.game.exceptions import BoardStateError
from tetris_core.game.pieces import Piece


@dataclass(frozen=True)
class Placement:
    """The outcome of one probe."""
    piece: Piece
    x: int
    y: int
    result: PlaceResult
    rows_cleared: int
    max_height: int


@dataclass(frozen=True)
class Move:
    """A chosen placement and its score (lower is better)."""
    piece: Piece
    x: int
    y: int
    score: float


class Brain(Protocol):
    """Interface of a move-search policy."""

    def best_move(self, board: Board, piece: Piece, limit_height: int) -> Move | None:
        ...


def _probe(
    board: Board,
    piece: Piece,
    limit_height: int | None,
) -> Iterator[Placement]:
    """Yield each placement while it is still on the board.

    The caller may read the board between yields; the placement is undone
    when the generator resumes.
    """
    if not board.committed:
        raise BoardStateError("Placement search requires a committed board")

    limit = board.height if limit_height is None else min(limit_height, board.height)
    for rotation in piece.rotations():
        for x in range(board.width - rotation.width + 1):
            y = board.drop_height(rotation, x)
            if y + rotation.height > limit:
                continue

            result = board.place(rotation, x, y)
            try:
                if result in (PlaceResult.OUT_OF_BOUNDS, PlaceResult.BAD):
                    continue
                rows_cleared = board.clear_rows() if result == PlaceResult.ROW_FILLED else 0
                yield Placement(
                    piece=rotation,
                    x=x,
                    y=y,
                    result=result,
                    rows_cleared=rows_cleared,
                    max_height=board.max_height(),
                )
            finally:
                board.undo()


def enumerate_placements(
    board: Board,
    piece: Piece,
    limit_height: int | None = None,
) -> list[Placement]:
    """List every resting placement of piece on board.

    Args:
        board: A committed board; left committed and unchanged.
        piece: Any rotation of the piece; all distinct rotations are tried.
        limit_height: Skip placements whose top row would reach this
            height. Defaults to the board height.

    Returns:
        One Placement per (rotation, column) that fits, in rotation order
        then column order.

    Raises:
        BoardStateError: If the board is not committed.
    """
    return list(_probe(board, piece, limit_height))


def best_move(
    board: Board,
    piece: Piece,
    score: Callable[[Board], float],
    limit_height: int | None = None,
) -> Move | None:
    """Return the lowest-scoring placement of piece, or None if none fits.

    score is called with the board holding the placed piece (rows already
    cleared) and must not mutate it. Ties keep the first placement found.
    """
    best: Move | None = None
    for placement in _probe(board, piece, limit_height):
        value = score(board)
        if best is None or value < best.score:
            best = Move(placement.piece, placement.x, placement.y, value)
    return best
