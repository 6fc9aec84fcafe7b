"""Board geometry: positions, directions and the immutable grid."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

Position = tuple[int, int]


class Direction(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def step(self, pos: Position) -> Position:
        """Return the cell one step away from ``pos`` in this direction."""
        dx, dy = self.delta
        return (pos[0] + dx, pos[1] + dy)


# y grows downward, matching terminal rows
_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True, slots=True)
class Grid:
    """Logical play field of ``width`` x ``height`` cells."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid must be non-empty, got {self.width}x{self.height}")

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    def contains(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def cells(self) -> Iterator[Position]:
        """Yield every cell in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)
