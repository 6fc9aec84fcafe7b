"""Session state machine: snake, food, score and the per-tick transition."""

from __future__ import annotations

import bisect
import logging
import random
from dataclasses import dataclass
from enum import Enum

from .config import (
    MIN_TICK_INTERVAL_MS,
    SPEED_INTERVAL_SCALE,
    SPEED_THRESHOLDS,
    GameConfig,
)
from .errors import BoardFullError, CollisionKind
from .food import Food, FoodSpawner
from .grid import Direction, Grid, Position
from .input import ControlEvent
from .snake import Snake

logger = logging.getLogger(__name__)


def speed_level_for(score: int) -> int:
    """Speed level (1-based) reached at ``score``."""
    return max(1, bisect.bisect_right(SPEED_THRESHOLDS, score))


def tick_interval_ms(base_interval_ms: int, speed_level: int) -> int:
    """Sleep between ticks at ``speed_level``; never below the global minimum."""
    index = min(max(speed_level, 1), len(SPEED_INTERVAL_SCALE)) - 1
    scaled = int(round(base_interval_ms * SPEED_INTERVAL_SCALE[index]))
    return max(MIN_TICK_INTERVAL_MS, min(base_interval_ms, scaled))


@dataclass(frozen=True, slots=True)
class ScoreState:
    score: int = 0
    speed_level: int = 1

    def add(self, points: int) -> ScoreState:
        """Return the state after gaining ``points``; neither field ever decreases."""
        score = self.score + max(0, points)
        return ScoreState(score, max(self.speed_level, speed_level_for(score)))

    def to_dict(self) -> dict[str, int]:
        return {"score": self.score, "speed_level": self.speed_level}

    @classmethod
    def from_dict(cls, data: dict) -> ScoreState:
        return cls(int(data["score"]), int(data["speed_level"]))


class SessionStatus(str, Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    VICTORY = "victory"

    @property
    def is_finished(self) -> bool:
        return self in (SessionStatus.GAME_OVER, SessionStatus.VICTORY)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of one tick, handed to the renderer."""

    grid: Grid
    snake: tuple[Position, ...]
    facing: Direction
    food: Food | None
    score: ScoreState
    status: SessionStatus
    high_score: int
    death_reason: CollisionKind | None
    tick_interval_ms: int
    elapsed_ms: int
    ticks: int
    controller_enabled: bool
    terminated: bool

    @property
    def head(self) -> Position | None:
        return self.snake[0] if self.snake else None


class GameState:
    """Owns one game session and applies the tick transition."""

    def __init__(self, config: GameConfig, rng: random.Random | None = None) -> None:
        self.config = config
        self.grid = Grid(config.width, config.height)
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.spawner = FoodSpawner(
            self.grid,
            self.rng,
            bonus_chance=config.bonus_chance,
            bonus_lifetime=config.bonus_lifetime,
        )
        self.status = SessionStatus.MENU
        self.terminated = False
        self.high_score = 0
        self._reset_session()

    def _reset_session(self) -> None:
        """Fresh snake, food and score so a new game can start."""
        self.snake = Snake.spawn(self.grid, self.config.start_length)
        self.score = ScoreState()
        self.death_reason: CollisionKind | None = None
        self.elapsed_ms = 0
        self.ticks = 0
        self.food: Food | None = self.spawner.spawn(set(self.snake))

    @property
    def tick_interval_ms(self) -> int:
        return tick_interval_ms(self.config.tick_interval_ms, self.score.speed_level)

    # --- Control events ------------------------------------------------

    def start(self) -> None:
        self._reset_session()
        self.status = SessionStatus.PLAYING
        logger.info(
            "Session started on %dx%d grid, snake length %d",
            self.grid.width,
            self.grid.height,
            len(self.snake),
        )

    def toggle_pause(self) -> None:
        """Toggle between playing and paused (ignored in every other state)."""
        if self.status == SessionStatus.PLAYING:
            self.status = SessionStatus.PAUSED
        elif self.status == SessionStatus.PAUSED:
            self.status = SessionStatus.PLAYING

    def quit(self) -> None:
        self.terminated = True
        logger.info("Quit requested during %s", self.status.value)

    def _apply_control(self, control: ControlEvent) -> None:
        if control == ControlEvent.QUIT:
            self.quit()
        elif control == ControlEvent.PAUSE:
            self.toggle_pause()
        elif control == ControlEvent.CONFIRM:
            if self.status == SessionStatus.MENU:
                self.start()
            elif self.status.is_finished:
                self.status = SessionStatus.MENU

    # --- Tick ----------------------------------------------------------

    def advance(
        self,
        direction: Direction | None = None,
        control: ControlEvent | None = None,
    ) -> Snapshot:
        """
        Apply one tick of buffered input and return the resulting snapshot.

        The control event is handled first; the snake only moves on ticks
        that begin and end in the playing state.
        """
        if self.terminated:
            return self.snapshot()

        before = self.status
        if control is not None:
            self._apply_control(control)
        if self.terminated or before != SessionStatus.PLAYING or self.status != before:
            return self.snapshot()

        if direction is not None:
            self.snake.turn(direction)
        self._step()
        return self.snapshot()

    def _step(self) -> None:
        interval = self.tick_interval_ms
        food = self.food
        ate = food is not None and self.snake.next_head() == food.position
        collision = self.snake.advance(grow=ate, growth=food.points if ate else 1)
        self.ticks += 1
        self.elapsed_ms += interval

        if collision is not None:
            self._finish(SessionStatus.GAME_OVER, collision)
            return

        occupied = set(self.snake)
        try:
            if ate:
                self._eat(food)
                self.food = self.spawner.spawn(occupied)
            else:
                # only food that was already on the board ages
                self.food = self.spawner.tick_bonus(food, occupied)
        except BoardFullError as exc:
            self.food = None
            self._finish(SessionStatus.VICTORY, exc.kind)

    def _eat(self, food: Food) -> None:
        level = self.score.speed_level
        self.score = self.score.add(food.points)
        logger.debug(
            "Ate %s food at %s, score %d", food.kind.value, food.position, self.score.score
        )
        if self.score.speed_level != level:
            logger.debug(
                "Speed level %d, tick interval %d ms",
                self.score.speed_level,
                self.tick_interval_ms,
            )

    def _finish(self, status: SessionStatus, reason: CollisionKind) -> None:
        self.status = status
        self.death_reason = reason
        logger.info(
            "Session ended (%s) with score %d after %d ticks",
            reason.value,
            self.score.score,
            self.ticks,
        )

    def snapshot(self) -> Snapshot:
        return Snapshot(
            grid=self.grid,
            snake=self.snake.body,
            facing=self.snake.facing,
            food=self.food,
            score=self.score,
            status=self.status,
            high_score=self.high_score,
            death_reason=self.death_reason,
            tick_interval_ms=self.tick_interval_ms,
            elapsed_ms=self.elapsed_ms,
            ticks=self.ticks,
            controller_enabled=self.config.controller_enabled,
            terminated=self.terminated,
        )

    def __repr__(self) -> str:
        return (
            f"<GameState status={self.status.value}, score={self.score.score}, "
            f"level={self.score.speed_level}, snake={self.snake!r}, food={self.food}>"
        )
