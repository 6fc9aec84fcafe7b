"""The snake: body, heading, owed growth and its own movement rules."""

from __future__ import annotations

from collections import deque
from typing import Iterable, Iterator

from .errors import CollisionKind
from .grid import Direction, Grid, Position


class Snake:
    """
    A snake on the grid.

    Attributes:
        grid: the board the snake moves on (shared, read-only)
        facing: direction the head moves on the next advance
        pending_growth: cells still owed from food already eaten
    """

    def __init__(
        self,
        grid: Grid,
        segments: Iterable[Position],
        facing: Direction,
        pending_growth: int = 0,
    ) -> None:
        self.grid = grid
        self._body: deque[Position] = deque(segments)
        if not self._body:
            raise ValueError("a snake needs at least one segment")
        self._cells = set(self._body)
        if len(self._cells) != len(self._body):
            raise ValueError("snake segments overlap")
        self.facing = facing
        self.pending_growth = pending_growth

    @classmethod
    def spawn(cls, grid: Grid, length: int, facing: Direction = Direction.RIGHT) -> Snake:
        """Lay out a straight snake with its head on the grid centre, trailing behind ``facing``."""
        head = (grid.width // 2, grid.height // 2)
        behind = facing.opposite
        segments = [head]
        for _ in range(length - 1):
            segments.append(behind.step(segments[-1]))
        return cls(grid, segments, facing)

    @property
    def head(self) -> Position:
        return self._body[0]

    @property
    def tail(self) -> Position:
        return self._body[-1]

    @property
    def body(self) -> tuple[Position, ...]:
        return tuple(self._body)

    def __len__(self) -> int:
        return len(self._body)

    def __iter__(self) -> Iterator[Position]:
        return iter(self._body)

    def occupies(self, pos: Position) -> bool:
        return pos in self._cells

    def next_head(self) -> Position:
        return self.facing.step(self.head)

    def turn(self, direction: Direction) -> bool:
        """Face ``direction`` unless it is a 180° reversal. Returns whether facing changed."""
        if direction == self.facing.opposite:
            return False
        changed = direction != self.facing
        self.facing = direction
        return changed

    def advance(self, grow: bool = False, growth: int = 1) -> CollisionKind | None:
        """
        Move one cell toward ``facing``.

        Returns the collision that stopped the move, or None on success. A
        failed move leaves the body untouched. The head may enter the cell the
        tail leaves in the same tick.
        """
        new_head = self.next_head()
        if not self.grid.contains(new_head):
            return CollisionKind.WALL

        tail_vacates = not grow and self.pending_growth == 0
        if new_head in self._cells and not (tail_vacates and new_head == self.tail):
            return CollisionKind.SELF

        if tail_vacates:
            self._cells.discard(self._body.pop())
        elif grow:
            self.pending_growth += growth
        else:
            self.pending_growth -= 1

        self._body.appendleft(new_head)
        self._cells.add(new_head)
        return None

    def __repr__(self) -> str:
        return (
            f"<Snake head={self.head}, length={len(self)}, facing={self.facing.value}, "
            f"pending_growth={self.pending_growth}>"
        )
