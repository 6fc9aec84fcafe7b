"""Food placement and the bonus-food lifecycle."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Collection

from .errors import BoardFullError
from .grid import Grid, Position

logger = logging.getLogger(__name__)

NORMAL_POINTS: int = 1
BONUS_POINTS: int = 5


class FoodKind(str, Enum):
    NORMAL = "normal"
    BONUS = "bonus"


@dataclass(frozen=True, slots=True)
class Food:
    """A food item; bonus food also carries its remaining lifetime in ticks."""

    position: Position
    kind: FoodKind = FoodKind.NORMAL
    ticks_remaining: int | None = None

    @property
    def points(self) -> int:
        return BONUS_POINTS if self.kind is FoodKind.BONUS else NORMAL_POINTS

    @property
    def is_bonus(self) -> bool:
        return self.kind is FoodKind.BONUS


def free_cells(grid: Grid, occupied: Collection[Position]) -> list[Position]:
    """Return unoccupied cells in row-major order."""
    return [cell for cell in grid.cells() if cell not in occupied]


class FoodSpawner:
    """Places food on free cells using an injected random source."""

    def __init__(
        self,
        grid: Grid,
        rng: random.Random,
        *,
        bonus_chance: float,
        bonus_lifetime: int,
    ) -> None:
        self.grid = grid
        self.rng = rng
        self.bonus_chance = bonus_chance
        self.bonus_lifetime = bonus_lifetime

    def spawn(self, occupied: Collection[Position], kind: FoodKind | None = None) -> Food:
        """
        Place food on a uniformly random cell outside ``occupied``.

        Raises BoardFullError when every cell is occupied. Without a forced
        ``kind`` the food is a bonus with probability ``bonus_chance``.
        """
        candidates = free_cells(self.grid, occupied)
        if not candidates:
            raise BoardFullError(self.grid.width, self.grid.height)
        return self._place(candidates, kind)

    def tick_bonus(self, food: Food, occupied: Collection[Position]) -> Food:
        """
        Count down a bonus food's lifetime.

        Normal food is returned as is. An expired bonus is replaced by normal
        food on a different free cell; its own cell is reused only when it is
        the last one left.
        """
        if not food.is_bonus:
            return food
        remaining = (food.ticks_remaining or 0) - 1
        if remaining > 0:
            return replace(food, ticks_remaining=remaining)

        candidates = free_cells(self.grid, occupied)
        elsewhere = [cell for cell in candidates if cell != food.position]
        if not candidates:
            raise BoardFullError(self.grid.width, self.grid.height)
        logger.debug("Bonus food at %s expired", food.position)
        return self._place(elsewhere or candidates, FoodKind.NORMAL)

    def _place(self, candidates: list[Position], kind: FoodKind | None) -> Food:
        position = self.rng.choice(candidates)
        if kind is None:
            kind = FoodKind.BONUS if self.rng.random() < self.bonus_chance else FoodKind.NORMAL
        if kind is FoodKind.BONUS:
            food = Food(position, FoodKind.BONUS, self.bonus_lifetime)
        else:
            food = Food(position)
        logger.debug("Spawned %s food at %s", food.kind.value, position)
        return food
