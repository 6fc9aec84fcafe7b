"""Normalised game input and the per-tick input buffer."""

from __future__ import annotations

import curses
import threading
from enum import Enum
from typing import Callable, Iterable, Union

from .grid import Direction


class ControlEvent(str, Enum):
    PAUSE = "PAUSE"
    QUIT = "QUIT"
    CONFIRM = "CONFIRM"


# A game input is either a movement direction or a control event.
GameInput = Union[Direction, ControlEvent]

# Polled once per tick; returns whatever arrived since the last poll.
InputSource = Callable[[], Iterable[GameInput]]

CTRL_C = 3
ESCAPE = 27

KEY_TO_INPUT: dict[int, GameInput] = {
    curses.KEY_UP: Direction.UP,
    ord("w"): Direction.UP,
    ord("W"): Direction.UP,
    curses.KEY_DOWN: Direction.DOWN,
    ord("s"): Direction.DOWN,
    ord("S"): Direction.DOWN,
    curses.KEY_LEFT: Direction.LEFT,
    ord("a"): Direction.LEFT,
    ord("A"): Direction.LEFT,
    curses.KEY_RIGHT: Direction.RIGHT,
    ord("d"): Direction.RIGHT,
    ord("D"): Direction.RIGHT,
    ord("p"): ControlEvent.PAUSE,
    ord("P"): ControlEvent.PAUSE,
    ESCAPE: ControlEvent.PAUSE,
    ord("q"): ControlEvent.QUIT,
    ord("Q"): ControlEvent.QUIT,
    CTRL_C: ControlEvent.QUIT,
    curses.KEY_ENTER: ControlEvent.CONFIRM,
    ord("\n"): ControlEvent.CONFIRM,
    ord("\r"): ControlEvent.CONFIRM,
    ord(" "): ControlEvent.CONFIRM,
}


def map_key(key: int) -> GameInput | None:
    """Translate a curses key code into a game input (None for unbound keys)."""
    return KEY_TO_INPUT.get(key)


class KeyboardSource:
    """Drains a no-delay curses window each tick."""

    def __init__(self, window) -> None:
        self.window = window
        self.window.nodelay(True)
        self.window.keypad(True)

    def __call__(self) -> list[GameInput]:
        events: list[GameInput] = []
        while True:
            key = self.window.getch()
            if key == -1:
                return events
            event = map_key(key)
            if event is not None:
                events.append(event)


class InputBuffer:
    """
    Holds at most one direction and one control event between ticks.

    Later events overwrite earlier ones in the same slot. ``record`` may be
    called from another thread while the engine calls ``consume``.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._direction: Direction | None = None
        self._control: ControlEvent | None = None

    def record(self, event: GameInput) -> None:
        with self._lock:
            if isinstance(event, Direction):
                self._direction = event
            elif isinstance(event, ControlEvent):
                self._control = event
            else:
                raise TypeError(f"not a game input: {event!r}")

    def consume(self) -> tuple[Direction | None, ControlEvent | None]:
        """Return and clear both slots in one step."""
        with self._lock:
            pending = (self._direction, self._control)
            self._direction = None
            self._control = None
        return pending
