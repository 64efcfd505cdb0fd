"""Tick-based game: lifecycle state machine, scoring and food placement."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import numpy as np

from copperhead.food import FoodSpawner
from copperhead.grid import GRID_HEIGHT, GRID_WIDTH, Grid
from copperhead.snake import Cell, Direction, Snake

logger = logging.getLogger(__name__)

INITIAL_LENGTH = 3


class GameState(enum.Enum):
    """Lifecycle states of a game."""

    START = "start"
    RUNNING = "running"
    GAME_OVER = "game_over"


class InputEvent(enum.Enum):
    """Discrete input events understood by :meth:`Game.pressed`."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ACTIVATE = "activate"

    @property
    def direction(self) -> Direction | None:
        """The heading this event requests, or ``None`` for ACTIVATE."""
        return _EVENT_DIRECTIONS.get(self)

    @classmethod
    def parse(cls, name: object) -> InputEvent | None:
        """Map a key name such as ``"Up"`` or ``"space"`` to an event.

        Unknown names yield ``None`` so callers can ignore them.
        """
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            return None
        return _KEY_ALIASES.get(name.strip().lower())


_EVENT_DIRECTIONS: dict[InputEvent, Direction] = {
    InputEvent.UP: Direction.UP,
    InputEvent.DOWN: Direction.DOWN,
    InputEvent.LEFT: Direction.LEFT,
    InputEvent.RIGHT: Direction.RIGHT,
}

_KEY_ALIASES: dict[str, InputEvent] = {
    "up": InputEvent.UP,
    "arrowup": InputEvent.UP,
    "w": InputEvent.UP,
    "down": InputEvent.DOWN,
    "arrowdown": InputEvent.DOWN,
    "s": InputEvent.DOWN,
    "left": InputEvent.LEFT,
    "arrowleft": InputEvent.LEFT,
    "a": InputEvent.LEFT,
    "right": InputEvent.RIGHT,
    "arrowright": InputEvent.RIGHT,
    "d": InputEvent.RIGHT,
    "activate": InputEvent.ACTIVATE,
    "space": InputEvent.ACTIVATE,
    "enter": InputEvent.ACTIVATE,
    "return": InputEvent.ACTIVATE,
}


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a game for renderers and network clients."""

    state: GameState
    body: tuple[Cell, ...]
    heading: Direction
    food: Cell | None
    score: int
    high_score: int
    tick: int
    board_full: bool
    width: int
    height: int

    def to_dict(self) -> dict:
        """Return a JSON-serializable dictionary."""
        return {
            "state": self.state.value,
            "snake": {
                "body": [list(seg) for seg in self.body],
                "heading": self.heading.name.lower(),
            },
            "food": list(self.food) if self.food is not None else None,
            "score": self.score,
            "high_score": self.high_score,
            "tick": self.tick,
            "board_full": self.board_full,
            "grid": {"width": self.width, "height": self.height},
        }


class Game:
    """Single-snake game driven by input events and fixed-rate ticks.

    The game owns the snake, the food cell and the scores. Input goes
    through :meth:`pressed`; the driver calls :meth:`update` once per tick.
    Directional input is buffered in a single slot and applied at the start
    of the next tick, so a second turn pressed within the same tick window
    is dropped.
    """

    # (state, event kind) -> handler name. Pairs not listed are ignored.
    _TRANSITIONS: dict[tuple[GameState, str], str] = {
        (GameState.START, "activate"): "_start",
        (GameState.RUNNING, "direction"): "queue_direction",
        (GameState.GAME_OVER, "activate"): "reset",
    }

    def __init__(
        self,
        width: int = GRID_WIDTH,
        height: int = GRID_HEIGHT,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = Grid(width=width, height=height)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.food_spawner = FoodSpawner(self.grid, rng=self.rng)

        self.high_score = 0
        self.snake = self._new_snake()
        self.food: Cell | None = None
        self.score = 0
        self.tick = 0
        self.board_full = False
        self.state = GameState.START
        self._pending_direction: Direction | None = None
        self.spawn_food()

    @property
    def pending_direction(self) -> Direction | None:
        return self._pending_direction

    def _new_snake(self) -> Snake:
        x, y = self.grid.center
        return Snake(x, y, Direction.RIGHT, length=INITIAL_LENGTH)

    # -- input -------------------------------------------------------------

    def pressed(self, event: object) -> bool:
        """Consume one input event. Returns whether it had any effect.

        Accepts an :class:`InputEvent` or a key name; anything that does not
        apply to the current state is ignored.
        """
        parsed = InputEvent.parse(event)
        if parsed is None:
            return False
        kind = "activate" if parsed is InputEvent.ACTIVATE else "direction"
        handler = self._TRANSITIONS.get((self.state, kind))
        if handler is None:
            return False
        if kind == "direction":
            return getattr(self, handler)(parsed.direction)
        getattr(self, handler)()
        return True

    def queue_direction(self, direction: Direction) -> bool:
        """Buffer at most one direction change for the next tick."""
        if self._pending_direction is not None:
            return False
        self._pending_direction = direction
        return True

    def _start(self) -> None:
        self.state = GameState.RUNNING
        logger.info("Game started.")

    # -- simulation --------------------------------------------------------

    def update(self) -> GameSnapshot:
        """Advance the game by one tick.

        Does nothing unless the game is running. Eating is resolved before
        the collision check, so food taken on the fatal move still scores.
        """
        if self.state != GameState.RUNNING:
            return self.snapshot()

        if self._pending_direction is not None:
            self.snake.set_direction(self._pending_direction)
            self._pending_direction = None

        ate = self.snake.move(self.food)
        if ate:
            self.score += 1
            self.snake.grow()
            self.spawn_food()

        self.tick += 1
        x, y = self.snake.head
        if not self.grid.in_bounds(x, y) or self.snake.self_collision():
            self._end_game()
        elif self.food is None:
            self.board_full = True
            self._end_game()

        return self.snapshot()

    def spawn_food(self) -> Cell | None:
        """Place food on a cell the snake does not cover."""
        self.food = self.food_spawner.spawn(self.snake.body)
        return self.food

    def reset(self) -> None:
        """Start over with a fresh snake and food, keeping the high score."""
        self.snake = self._new_snake()
        self.score = 0
        self.tick = 0
        self.board_full = False
        self._pending_direction = None
        self.state = GameState.START
        self.spawn_food()
        logger.info("Game reset (high score %d).", self.high_score)

    def _end_game(self) -> None:
        self.state = GameState.GAME_OVER
        if self.score > self.high_score:
            self.high_score = self.score
        if self.board_full:
            logger.info("Board full at tick %d with score %d.", self.tick, self.score)
        else:
            logger.info(
                "Snake died at tick %d with score %d.", self.tick, self.score,
            )

    # -- views -------------------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        """Return an immutable view of the current state."""
        return GameSnapshot(
            state=self.state,
            body=tuple(self.snake.body),
            heading=self.snake.direction,
            food=self.food,
            score=self.score,
            high_score=self.high_score,
            tick=self.tick,
            board_full=self.board_full,
            width=self.grid.width,
            height=self.grid.height,
        )
