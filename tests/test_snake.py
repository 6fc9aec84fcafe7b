"""
Tests for grid geometry and the Snake entity.
"""

import random

import pytest

from term_snake.errors import CollisionKind
from term_snake.grid import Direction, Grid
from term_snake.snake import Snake


@pytest.fixture
def grid():
    return Grid(10, 10)


class TestGrid:
    """Tests for Grid and Direction."""

    def test_contains_bounds(self, grid):
        """Cells inside the grid are contained, edges included."""
        assert grid.contains((0, 0))
        assert grid.contains((9, 9))
        assert not grid.contains((10, 5))
        assert not grid.contains((5, -1))

    def test_cells_row_major(self):
        """cells() walks rows top to bottom."""
        assert list(Grid(2, 2).cells()) == [(0, 0), (1, 0), (0, 1), (1, 1)]
        assert Grid(3, 4).total_cells == 12

    def test_empty_grid_rejected(self):
        """A grid needs at least one cell."""
        with pytest.raises(ValueError):
            Grid(0, 5)

    def test_opposites(self):
        """Opposite pairs are Up/Down and Left/Right."""
        assert Direction.UP.opposite == Direction.DOWN
        assert Direction.DOWN.opposite == Direction.UP
        assert Direction.LEFT.opposite == Direction.RIGHT
        assert Direction.RIGHT.opposite == Direction.LEFT

    def test_step_uses_screen_coordinates(self):
        """Up decreases y, right increases x."""
        assert Direction.UP.step((5, 5)) == (5, 4)
        assert Direction.RIGHT.step((5, 5)) == (6, 5)


class TestSnakeConstruction:
    """Tests for building snakes."""

    def test_spawn_centre_facing_right(self, grid):
        """Spawned snake has its head on the centre and trails left."""
        snake = Snake.spawn(grid, 3)
        assert snake.body == ((5, 5), (4, 5), (3, 5))
        assert snake.facing == Direction.RIGHT
        assert snake.pending_growth == 0

    def test_empty_body_rejected(self, grid):
        """A snake needs at least one segment."""
        with pytest.raises(ValueError):
            Snake(grid, [], Direction.RIGHT)

    def test_overlapping_body_rejected(self, grid):
        """Duplicate segments are not a valid starting state."""
        with pytest.raises(ValueError):
            Snake(grid, [(1, 1), (1, 2), (1, 1)], Direction.UP)


class TestSnakeMovement:
    """Tests for Snake.turn and Snake.advance."""

    def test_advance_without_growth_keeps_length(self, grid):
        """One plain tick moves the head and vacates the tail."""
        snake = Snake.spawn(grid, 3)
        assert snake.advance() is None
        assert snake.head == (6, 5)
        assert snake.tail == (4, 5)
        assert len(snake) == 3

    def test_wall_collision(self, grid):
        """Moving off the right edge reports a wall collision and leaves the body alone."""
        snake = Snake(grid, [(9, 5), (8, 5)], Direction.RIGHT)
        assert snake.advance() == CollisionKind.WALL
        assert snake.body == ((9, 5), (8, 5))

    def test_turn_rejects_reversal(self, grid):
        """A 180 degree turn is ignored."""
        snake = Snake.spawn(grid, 3)
        assert snake.turn(Direction.LEFT) is False
        assert snake.facing == Direction.RIGHT
        assert snake.turn(Direction.UP) is True
        assert snake.facing == Direction.UP

    @pytest.mark.parametrize("facing", list(Direction))
    def test_reverse_then_forward_never_hits_neck(self, grid, facing):
        """turn(opposite(d)) then turn(d) keeps the snake off its second segment."""
        head = (5, 5)
        neck = facing.opposite.step(head)
        snake = Snake(grid, [head, neck, facing.opposite.step(neck)], facing)

        snake.turn(facing.opposite)
        snake.turn(facing)

        assert snake.advance() is None
        assert snake.head == facing.step(head)
        assert snake.head != neck

    def test_head_may_follow_vacating_tail(self):
        """Moving into the cell the tail leaves this tick is legal."""
        grid = Grid(5, 5)
        snake = Snake(grid, [(0, 1), (1, 1), (1, 0), (0, 0)], Direction.UP)

        assert snake.advance() is None
        assert snake.body == ((0, 0), (0, 1), (1, 1), (1, 0))

    def test_tail_cell_blocked_while_growing(self):
        """The tail cell is occupied when the tail stays put."""
        grid = Grid(5, 5)
        growing = Snake(grid, [(0, 1), (1, 1), (1, 0), (0, 0)], Direction.UP)
        assert growing.advance(grow=True) == CollisionKind.SELF

        owed = Snake(grid, [(0, 1), (1, 1), (1, 0), (0, 0)], Direction.UP, pending_growth=1)
        assert owed.advance() == CollisionKind.SELF
        assert owed.pending_growth == 1

    def test_self_collision(self, grid):
        """Running into a body segment other than the tail ends the move."""
        snake = Snake(grid, [(2, 1), (2, 2), (1, 2), (1, 1), (1, 0)], Direction.LEFT)
        assert snake.advance() == CollisionKind.SELF
        assert len(snake) == 5

    def test_growth_is_paid_over_ticks(self, grid):
        """Eating keeps the tail this tick and owes growth for the next ones."""
        snake = Snake.spawn(grid, 3)

        assert snake.advance(grow=True) is None
        assert len(snake) == 4
        assert snake.pending_growth == 1

        assert snake.advance() is None
        assert len(snake) == 5
        assert snake.pending_growth == 0
        assert snake.tail == (3, 5)

        assert snake.advance() is None
        assert len(snake) == 5

    def test_growth_units(self, grid):
        """Food worth several units owes that many cells."""
        snake = Snake.spawn(grid, 2)
        snake.advance(grow=True, growth=5)
        assert snake.pending_growth == 5

    def test_random_walk_keeps_invariants(self):
        """Body stays duplicate-free and contiguous over a long random walk."""
        rng = random.Random(42)
        grid = Grid(12, 12)
        for _ in range(20):
            snake = Snake.spawn(grid, 3)
            for _ in range(300):
                snake.turn(rng.choice(list(Direction)))
                before = snake.body
                result = snake.advance(grow=rng.random() < 0.1)
                if result is not None:
                    assert snake.body == before
                    break
                body = snake.body
                assert len(set(body)) == len(body)
                for a, b in zip(body, body[1:]):
                    assert abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1
                assert all(grid.contains(cell) for cell in body)
