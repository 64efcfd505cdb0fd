"""Board dimensions, bounds checks and the occupancy view."""

from __future__ import annotations

import enum
from collections.abc import Iterable

import numpy as np

GRID_WIDTH = 20
GRID_HEIGHT = 20


class CellType(enum.IntEnum):
    """Integer codes stored in the occupancy array."""

    EMPTY = 0
    SNAKE = 1
    HEAD = 2
    FOOD = 3


class Grid:
    """Fixed-size playfield.

    Coordinates are ``(x, y)`` cells. The occupancy array returned by
    :meth:`occupancy` is indexed ``[y, x]`` so that rows are screen lines.
    """

    def __init__(self, width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> None:
        if width < 4 or height < 4:
            raise ValueError("Grid dimensions must be at least 4×4.")
        self.width = width
        self.height = height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> tuple[int, int]:
        return self.width // 2, self.height // 2

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def random_cell(self, rng: np.random.Generator) -> tuple[int, int]:
        """Draw a uniformly random cell."""
        x = int(rng.integers(0, self.width))
        y = int(rng.integers(0, self.height))
        return x, y

    def occupancy(
        self,
        body: Iterable[tuple[int, int]],
        food: tuple[int, int] | None = None,
    ) -> np.ndarray:
        """Paint the snake and food into an ``int8`` array of cell codes.

        Out-of-bounds segments (a head that left the board on the losing
        move) are skipped.
        """
        cells = np.zeros((self.height, self.width), dtype=np.int8)
        if food is not None and self.in_bounds(*food):
            cells[food[1], food[0]] = CellType.FOOD
        segments = list(body)
        for x, y in reversed(segments[1:]):
            if self.in_bounds(x, y):
                cells[y, x] = CellType.SNAKE
        if segments and self.in_bounds(*segments[0]):
            x, y = segments[0]
            cells[y, x] = CellType.HEAD
        return cells
