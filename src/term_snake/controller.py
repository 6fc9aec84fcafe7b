"""Game controller input via pygame's joystick subsystem."""

from __future__ import annotations

import logging
import os

# pygame prints a banner on import and needs a video driver for its event
# queue; neither may touch the terminal curses is drawing on.
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame  # noqa: E402

from .grid import Direction  # noqa: E402
from .input import ControlEvent, GameInput  # noqa: E402

logger = logging.getLogger(__name__)

STICK_DEAD_ZONE: float = 0.6
STICK_AXES: tuple[int, int] = (0, 1)  # left stick x, y

HAT_TO_DIRECTION: dict[tuple[int, int], Direction] = {
    (0, 1): Direction.UP,
    (0, -1): Direction.DOWN,
    (-1, 0): Direction.LEFT,
    (1, 0): Direction.RIGHT,
}

# Xbox-style layout as reported by SDL
BUTTON_TO_CONTROL: dict[int, ControlEvent] = {
    0: ControlEvent.CONFIRM,  # A
    1: ControlEvent.PAUSE,  # B
    6: ControlEvent.QUIT,  # Back
    7: ControlEvent.PAUSE,  # Start
}

JOYSTICK_EVENTS = (
    pygame.JOYHATMOTION,
    pygame.JOYAXISMOTION,
    pygame.JOYBUTTONDOWN,
    pygame.JOYDEVICEADDED,
    pygame.JOYDEVICEREMOVED,
)


class StickTracker:
    """Turns analog stick motion into one direction per push past the dead zone."""

    def __init__(self, dead_zone: float = STICK_DEAD_ZONE) -> None:
        self.dead_zone = dead_zone
        self.axes: dict[int, float] = {axis: 0.0 for axis in STICK_AXES}
        self.current: Direction | None = None

    def update(self, axis: int, value: float) -> Direction | None:
        if axis not in self.axes:
            return None
        self.axes[axis] = value
        x, y = self.axes[STICK_AXES[0]], self.axes[STICK_AXES[1]]
        direction: Direction | None = None
        if max(abs(x), abs(y)) >= self.dead_zone:
            if abs(x) >= abs(y):
                direction = Direction.RIGHT if x > 0 else Direction.LEFT
            else:
                direction = Direction.DOWN if y > 0 else Direction.UP
        if direction == self.current:
            return None
        self.current = direction
        return direction


def translate_event(event: pygame.event.Event, stick: StickTracker) -> GameInput | None:
    """Map a single pygame joystick event to a game input."""
    if event.type == pygame.JOYHATMOTION:
        return HAT_TO_DIRECTION.get(tuple(event.value))
    if event.type == pygame.JOYAXISMOTION:
        return stick.update(event.axis, event.value)
    if event.type == pygame.JOYBUTTONDOWN:
        return BUTTON_TO_CONTROL.get(event.button)
    return None


class ControllerSource:
    """
    Polls attached controllers once per tick.

    Starts disabled when pygame cannot bring up its joystick subsystem, so a
    missing SDL backend never blocks keyboard play.
    """

    def __init__(self) -> None:
        self.enabled = False
        self.joysticks: dict[int, pygame.joystick.JoystickType] = {}
        self.stick = StickTracker()
        self._init_joysticks()

    def _init_joysticks(self) -> None:
        try:
            pygame.display.init()
            pygame.joystick.init()
        except pygame.error as exc:
            logger.warning("Controller support unavailable: %s", exc)
            return
        self.enabled = True
        for index in range(pygame.joystick.get_count()):
            self._open(index)

    def _open(self, device_index: int) -> None:
        try:
            joystick = pygame.joystick.Joystick(device_index)
        except pygame.error as exc:
            logger.warning("Could not open controller %d: %s", device_index, exc)
            return
        self.joysticks[joystick.get_instance_id()] = joystick
        logger.info("Controller connected: %s", joystick.get_name())

    @property
    def count(self) -> int:
        return len(self.joysticks)

    def __call__(self) -> list[GameInput]:
        if not self.enabled:
            return []
        events: list[GameInput] = []
        for event in pygame.event.get(JOYSTICK_EVENTS):
            if event.type == pygame.JOYDEVICEADDED:
                self._open(event.device_index)
                continue
            if event.type == pygame.JOYDEVICEREMOVED:
                self.joysticks.pop(event.instance_id, None)
                logger.info("Controller %d disconnected", event.instance_id)
                continue
            game_input = translate_event(event, self.stick)
            if game_input is not None:
                events.append(game_input)
        return events

    def close(self) -> None:
        if not self.enabled:
            return
        self.joysticks.clear()
        pygame.joystick.quit()
        pygame.display.quit()
        self.enabled = False
