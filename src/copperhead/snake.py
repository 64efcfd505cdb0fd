"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque

Cell = tuple[int, int]


class Direction(enum.Enum):
    """Cardinal headings with (dx, dy) grid deltas."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """A snake represented as an ordered deque of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``. Growth is lagged by
    one tick: :meth:`grow` only marks the snake, and the following
    :meth:`move` keeps its tail instead of dropping it.
    """

    def __init__(
        self,
        head_x: int,
        head_y: int,
        direction: Direction = Direction.RIGHT,
        length: int = 3,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        self.body: deque[Cell] = deque()
        for i in range(length):
            self.body.append((head_x - dx * i, head_y - dy * i))
        self.direction = direction
        self.grow_pending = False

    @classmethod
    def from_cells(
        cls, cells: list[Cell], direction: Direction = Direction.RIGHT,
    ) -> Snake:
        """Build a snake from an explicit head-first list of cells."""
        if not cells:
            raise ValueError("Snake needs at least one cell.")
        snake = cls(*cells[0], direction=direction, length=1)
        snake.body = deque(cells)
        return snake

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Cell:
        """Return the head coordinate."""
        if not self.body:
            raise RuntimeError("Snake has no body.")
        return self.body[0]

    def set_direction(self, new_direction: Direction) -> bool:
        """Change heading unless it would reverse into the neck.

        Returns whether the change was accepted.
        """
        if new_direction is self.direction.opposite:
            return False
        self.direction = new_direction
        return True

    def next_head(self) -> Cell:
        """Compute the next head position without moving."""
        dx, dy = self.direction.value
        x, y = self.head
        return x + dx, y + dy

    def move(self, food: Cell | None) -> bool:
        """Move one cell along the heading and report whether *food* was hit.

        The tail is dropped unless growth was scheduled by a previous
        :meth:`grow`, so eating only lengthens the body on the next move.
        Keeping the tail on the eating move as well would grow the snake
        by two segments per food.
        """
        new_head = self.next_head()
        self.body.appendleft(new_head)
        ate = new_head == food
        if self.grow_pending:
            self.grow_pending = False
        else:
            self.body.pop()
        return ate

    def grow(self) -> None:
        """Keep the tail on the next move."""
        self.grow_pending = True

    def self_collision(self) -> bool:
        """Check whether the head overlaps any other body segment."""
        head = self.head
        return any(seg == head for seg in list(self.body)[1:])

