"""Collision outcomes and the exception hierarchy for Terminal Snake."""

from __future__ import annotations

from enum import Enum


class CollisionKind(str, Enum):
    WALL = "wall"
    SELF = "self"
    NO_SPACE = "no_space"

    @property
    def label(self) -> str:
        """Short human readable cause shown on the game-over screen."""
        return _LABELS[self]


_LABELS = {
    CollisionKind.WALL: "hit wall",
    CollisionKind.SELF: "hit yourself",
    CollisionKind.NO_SPACE: "board full",
}


class SnakeError(Exception):
    """Base class for errors raised by the game."""


class ConfigError(SnakeError, ValueError):
    """A configuration value is outside its playable range."""


class BoardFullError(SnakeError):
    """No free cell is left for food: the snake has filled the grid."""

    kind = CollisionKind.NO_SPACE

    def __init__(self, width: int, height: int) -> None:
        super().__init__(f"no free cells on the board ({width}x{height})")
        self.width = width
        self.height = height
