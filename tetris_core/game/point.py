"""
Cell coordinates shared by pieces and the board.

Coordinate convention:
  - x is the column, increasing rightward from 0.
  - y is the row, increasing UPWARD from 0 (row 0 is the floor).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Point:
    """An immutable (x, y) cell coordinate. Orders by x, then y."""

    x: int
    y: int

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Point coordinates must be non-negative: ({self.x}, {self.y})")

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
