"""Centralized configuration for Terminal Snake: paths, defaults and validation."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError


def _default_data_dir() -> Path:
    """Return a platform-appropriate user data directory for saves/logs."""

    if sys.platform.startswith("win"):
        base = Path(os.getenv("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share")
    return base / "term-snake"


def data_dir() -> Path:
    return Path(os.getenv("TERM_SNAKE_DATA_DIR") or _default_data_dir())


def highscore_file() -> Path:
    return Path(os.getenv("TERM_SNAKE_HIGHSCORE_FILE") or data_dir() / "scores.json")


def log_file() -> Path:
    return Path(os.getenv("TERM_SNAKE_LOG_FILE") or data_dir() / "term-snake.log")


def log_level() -> str:
    return (os.getenv("TERM_SNAKE_LOG_LEVEL") or "").strip().upper() or DEFAULT_LOG_LEVEL


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


MIN_GRID_SIZE: int = 5
MAX_GRID_SIZE: int = 200

DEFAULT_WIDTH: int = 30
DEFAULT_HEIGHT: int = 20
DEFAULT_START_LENGTH: int = 3

DEFAULT_TICK_INTERVAL_MS: int = 200
MIN_TICK_INTERVAL_MS: int = 60

DEFAULT_BONUS_CHANCE: float = 0.15
DEFAULT_BONUS_LIFETIME: int = 40  # ticks

# score threshold -> speed level (index + 1); multiplier applied to the base interval
SPEED_THRESHOLDS: tuple[int, ...] = (0, 5, 10, 20, 35, 50, 75, 100, 150, 200)
SPEED_INTERVAL_SCALE: tuple[float, ...] = (1.0, 0.9, 0.8, 0.7, 0.6, 0.52, 0.45, 0.4, 0.35, 0.3)

DEFAULT_LOG_LEVEL: str = "WARNING"


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Validated settings handed to the engine once, at construction."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS
    start_length: int = DEFAULT_START_LENGTH
    controller_enabled: bool = True
    bonus_chance: float = DEFAULT_BONUS_CHANCE
    bonus_lifetime: int = DEFAULT_BONUS_LIFETIME
    seed: int | None = None

    @classmethod
    def from_env(cls) -> GameConfig:
        """Build defaults, letting ``TERM_SNAKE_*`` variables override them."""
        seed = os.getenv("TERM_SNAKE_SEED")
        return cls(
            width=_env_int("TERM_SNAKE_WIDTH", DEFAULT_WIDTH),
            height=_env_int("TERM_SNAKE_HEIGHT", DEFAULT_HEIGHT),
            tick_interval_ms=_env_int("TERM_SNAKE_TICK_MS", DEFAULT_TICK_INTERVAL_MS),
            start_length=_env_int("TERM_SNAKE_START_LENGTH", DEFAULT_START_LENGTH),
            controller_enabled=os.getenv("TERM_SNAKE_CONTROLLER", "1").lower()
            not in ("0", "false", "no", "off"),
            bonus_chance=_env_float("TERM_SNAKE_BONUS_CHANCE", DEFAULT_BONUS_CHANCE),
            bonus_lifetime=_env_int("TERM_SNAKE_BONUS_LIFETIME", DEFAULT_BONUS_LIFETIME),
            seed=_env_int("TERM_SNAKE_SEED", 0) if seed and seed.strip() else None,
        )


def validate_config(config: GameConfig) -> GameConfig:
    """Reject settings that cannot produce a playable session."""
    for name, value in (("width", config.width), ("height", config.height)):
        if not MIN_GRID_SIZE <= value <= MAX_GRID_SIZE:
            raise ConfigError(
                f"{name} must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}, got {value}"
            )
    if config.tick_interval_ms < MIN_TICK_INTERVAL_MS:
        raise ConfigError(
            f"tick interval must be at least {MIN_TICK_INTERVAL_MS} ms, "
            f"got {config.tick_interval_ms}"
        )
    # the snake spawns on the centre cell and trails to the left
    max_length = config.width // 2 + 1
    if not 1 <= config.start_length <= max_length:
        raise ConfigError(
            f"start length must be between 1 and {max_length} for width {config.width}, "
            f"got {config.start_length}"
        )
    if not 0.0 <= config.bonus_chance <= 1.0:
        raise ConfigError(f"bonus chance must be within [0, 1], got {config.bonus_chance}")
    if config.bonus_lifetime < 1:
        raise ConfigError(f"bonus lifetime must be at least 1 tick, got {config.bonus_lifetime}")
    return config
