"""
Board logic with single-level undo.

The board is a 2D numpy bool array of shape (height, width), indexed
grid[y, x], with row 0 at the FLOOR and y increasing upward.

Two summaries are kept in step with the grid so that callers never scan it:
  - heights[x]: one past the highest filled row of column x (0 if empty).
  - widths[y]:  number of filled cells in row y.

Transactions:
  The board is either committed or uncommitted. place() requires a
  committed board and leaves it uncommitted. commit() snapshots the grid
  and both summaries; undo() restores the last snapshot. A search can
  therefore try place()/undo() many times and leave the board as it was.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np

from tetris_core.game.exceptions import BoardStateError
from tetris_core.game.pieces import Piece


class PlaceResult(enum.IntEnum):
    """Outcome of Board.place()."""
    OK = 0
    ROW_FILLED = 1
    OUT_OF_BOUNDS = 2
    BAD = 3


@dataclass
class _BoardState:
    """Grid plus summaries; one live copy and one committed copy per board."""
    grid: np.ndarray
    widths: np.ndarray
    heights: np.ndarray

    @classmethod
    def empty(cls, width: int, height: int) -> _BoardState:
        return cls(
            grid=np.zeros((height, width), dtype=bool),
            widths=np.zeros(height, dtype=np.int32),
            heights=np.zeros(width, dtype=np.int32),
        )

    def copy(self) -> _BoardState:
        return _BoardState(self.grid.copy(), self.widths.copy(), self.heights.copy())


class Board:
    """Tetris board with placement, row clearing, and commit/undo.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        committed: False between place() and the following commit()/undo().
    """

    def __init__(self, width: int = 10, height: int = 20) -> None:
        """Initialize an empty, committed board.

        Args:
            width: Number of columns.
            height: Number of rows.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._state = _BoardState.empty(width, height)
        self._backup = self._state.copy()
        self._committed = True

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def committed(self) -> bool:
        return self._committed

    # ── Queries ──────────────────────────────────────────────────────────

    def column_height(self, x: int) -> int:
        """Return one past the highest filled row of column x (0 if empty)."""
        return int(self._state.heights[x])

    def row_width(self, y: int) -> int:
        """Return the number of filled cells in row y."""
        return int(self._state.widths[y])

    def cell_filled(self, x: int, y: int) -> bool:
        """Return whether cell (x, y) is filled.

        Cells outside the board report filled, so probing one past an edge
        sees a wall rather than empty space.
        """
        if x < 0 or y < 0 or x >= self._width or y >= self._height:
            return True
        return bool(self._state.grid[y, x])

    def max_height(self) -> int:
        """Return the tallest column height (0 for an empty board)."""
        return int(self._state.heights.max())

    def drop_height(self, piece: Piece, x: int) -> int:
        """Return the y at which piece comes to rest if dropped at column x.

        Uses the piece skirt against the column heights, so the cost is
        proportional to the piece width, not the board area.

        Raises:
            ValueError: If the piece does not fit horizontally at x.
        """
        if x < 0 or x + piece.width > self._width:
            raise ValueError(
                f"Piece of width {piece.width} does not fit at column {x} "
                f"on a board of width {self._width}"
            )
        heights = self._state.heights
        deltas = (
            int(heights[x + i]) - low
            for i, low in enumerate(piece.skirt)
            if low is not None
        )
        return max(0, max(deltas))

    def get_grid(self) -> np.ndarray:
        """Return a copy of the grid, shape (height, width), indexed [y, x]."""
        return self._state.grid.copy()

    def summaries_consistent(self) -> bool:
        """Recompute both summaries from the grid and compare (vectorized).

        Only meaningful on a committed board or after a successful place();
        a BAD placement leaves the summaries matching the partial write.
        """
        grid = self._state.grid
        widths = grid.sum(axis=1)
        has_block = grid.any(axis=0)
        # Highest filled row per column: search the grid flipped upside down
        top_from_above = np.argmax(grid[::-1], axis=0)
        heights = np.where(has_block, self._height - top_from_above, 0)
        return bool(
            np.array_equal(widths, self._state.widths)
            and np.array_equal(heights, self._state.heights)
        )

    # ── Mutation ─────────────────────────────────────────────────────────

    def place(self, piece: Piece, x: int, y: int) -> PlaceResult:
        """Write the piece body into the grid with its origin at (x, y).

        The board becomes uncommitted whatever the result. On BAD the cells
        written before the collision stay written; call undo() to recover.

        Returns:
            OUT_OF_BOUNDS if any part of the piece lies outside the board
            (nothing is written), BAD on overlap with a filled cell,
            ROW_FILLED if a row became full, OK otherwise.

        Raises:
            BoardStateError: If the board is not committed.
        """
        if not self._committed:
            raise BoardStateError("place() requires a committed board; call commit() or undo() first")
        self._committed = False

        if (
            x < 0
            or y < 0
            or x + piece.width > self._width
            or y + piece.height > self._height
        ):
            return PlaceResult.OUT_OF_BOUNDS

        state = self._state
        row_filled = False
        for p in piece.body:
            cx, cy = x + p.x, y + p.y
            if state.grid[cy, cx]:
                return PlaceResult.BAD
            state.grid[cy, cx] = True
            state.widths[cy] += 1
            if state.widths[cy] == self._width:
                row_filled = True
            if state.heights[cx] < cy + 1:
                state.heights[cx] = cy + 1

        return PlaceResult.ROW_FILLED if row_filled else PlaceResult.OK

    def clear_rows(self) -> int:
        """Remove every full row and shift the rows above it down.

        Full rows are found bottom to top and removed top first, so removing
        one never moves a full row that is still waiting to be removed.

        Returns:
            The number of rows cleared.
        """
        state = self._state
        full_rows = [y for y in range(self._height) if state.widths[y] == self._width]

        for y in reversed(full_rows):
            # Shift everything above y down one row; the top row becomes empty
            state.grid[y:-1] = state.grid[y + 1:]
            state.grid[-1] = False
            state.widths[y:-1] = state.widths[y + 1:]
            state.widths[-1] = 0

            # Every column had a cell in the full row, so every height drops
            # by at least one. A column may drop further if the cells below
            # the removed one were empty.
            state.heights -= 1
            for x in range(self._width):
                h = state.heights[x]
                while h > 0 and not state.grid[h - 1, x]:
                    h -= 1
                state.heights[x] = h

        return len(full_rows)

    def commit(self) -> None:
        """Snapshot the current state as the one undo() returns to."""
        self._backup = self._state.copy()
        self._committed = True

    def undo(self) -> None:
        """Restore the last committed state. A no-op if already committed."""
        if self._committed:
            return
        self._state = self._backup.copy()
        self._committed = True

    def copy(self) -> Board:
        """Return an independent deep copy, including the undo snapshot."""
        other = Board.__new__(Board)
        other._width = self._width
        other._height = self._height
        other._state = self._state.copy()
        other._backup = self._backup.copy()
        other._committed = self._committed
        return other

    def __str__(self) -> str:
        lines = []
        for y in range(self._height - 1, -1, -1):
            row = "".join("+" if self._state.grid[y, x] else " " for x in range(self._width))
            lines.append(f"|{row}|")
        lines.append("-" * (self._width + 2))
        return "\n".join(lines)
