"""Copperhead — snake game simulation core."""

from copperhead.food import FoodSpawner
from copperhead.game import Game, GameSnapshot, GameState, InputEvent
from copperhead.grid import CellType, Grid
from copperhead.snake import Direction, Snake

__all__ = [
    "CellType",
    "Direction",
    "FoodSpawner",
    "Game",
    "GameSnapshot",
    "GameState",
    "Grid",
    "InputEvent",
    "Snake",
]
