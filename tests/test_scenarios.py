"""Reference scenarios for movement, growth, turning, walls and restart."""

from copperhead.game import Game, GameState, InputEvent
from copperhead.snake import Direction, Snake


def _start_snake() -> Snake:
    return Snake.from_cells([(10, 10), (9, 10), (8, 10)], Direction.RIGHT)


def test_move_without_food():
    snake = _start_snake()
    assert snake.move(food=(99, 99)) is False
    assert list(snake.body) == [(11, 10), (10, 10), (9, 10)]


def test_eat_then_grow_next_tick():
    snake = _start_snake()
    assert snake.move(food=(11, 10)) is True
    assert list(snake.body) == [(11, 10), (10, 10), (9, 10)]
    snake.grow()
    snake.move(food=(99, 99))
    assert list(snake.body) == [(12, 10), (11, 10), (10, 10), (9, 10)]


def test_turn_rules():
    snake = _start_snake()
    snake.set_direction(Direction.LEFT)
    assert snake.direction == Direction.RIGHT
    snake.set_direction(Direction.UP)
    assert snake.direction == Direction.UP


def test_wall_collision_ends_game():
    game = Game(seed=0)
    game.pressed(InputEvent.ACTIVATE)
    game.score = 2
    game.snake = Snake.from_cells([(0, 10), (1, 10), (2, 10)], Direction.LEFT)
    game.update()
    assert game.snake.head == (-1, 10)
    assert game.state == GameState.GAME_OVER
    assert game.high_score == 2


def test_activate_in_game_over_resets():
    game = Game(seed=0)
    game.pressed(InputEvent.ACTIVATE)
    game.score = 4
    game.snake = Snake.from_cells([(0, 10), (1, 10), (2, 10)], Direction.LEFT)
    game.update()
    assert game.state == GameState.GAME_OVER

    game.pressed(InputEvent.ACTIVATE)
    assert game.state == GameState.START
    assert game.score == 0
    assert game.high_score == 4
    assert list(game.snake.body) == [(10, 10), (9, 10), (8, 10)]
    assert game.food not in game.snake.body
