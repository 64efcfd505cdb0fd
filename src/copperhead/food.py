"""Food placement by rejection sampling."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from copperhead.grid import Grid

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places food on a random cell not covered by the snake.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()

    def spawn(self, occupied: Collection[tuple[int, int]]) -> tuple[int, int] | None:
        """Return a free cell, or ``None`` when the snake fills the board.

        Candidates are drawn uniformly over the whole grid and rejected
        while they land on *occupied*.
        """
        taken = {cell for cell in occupied if self.grid.in_bounds(*cell)}
        if len(taken) >= self.grid.area:
            logger.warning("No free cells available for food placement.")
            return None

        attempts = 1
        cell = self.grid.random_cell(self.rng)
        while cell in taken:
            attempts += 1
            cell = self.grid.random_cell(self.rng)

        logger.debug("Food placed at %s after %d draw(s).", cell, attempts)
        return cell
