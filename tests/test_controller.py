"""
Tests for controller event translation and platform capability detection.
"""

import sys

import pygame
import pytest

from term_snake import capabilities, controller
from term_snake.controller import ControllerSource, StickTracker, translate_event
from term_snake.grid import Direction
from term_snake.input import ControlEvent


def hat(value):
    return pygame.event.Event(pygame.JOYHATMOTION, joy=0, instance_id=0, hat=0, value=value)


def axis(number, value):
    return pygame.event.Event(pygame.JOYAXISMOTION, joy=0, instance_id=0, axis=number, value=value)


def button(number):
    return pygame.event.Event(pygame.JOYBUTTONDOWN, joy=0, instance_id=0, button=number)


class TestTranslateEvent:
    """Tests for mapping joystick events to game inputs."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ((0, 1), Direction.UP),
            ((0, -1), Direction.DOWN),
            ((-1, 0), Direction.LEFT),
            ((1, 0), Direction.RIGHT),
            ((0, 0), None),
            ((1, 1), None),
        ],
    )
    def test_hat(self, value, expected):
        """The D-pad maps to directions; centre and diagonals do nothing."""
        assert translate_event(hat(value), StickTracker()) == expected

    @pytest.mark.parametrize(
        "number, expected",
        [
            (0, ControlEvent.CONFIRM),
            (1, ControlEvent.PAUSE),
            (6, ControlEvent.QUIT),
            (7, ControlEvent.PAUSE),
            (3, None),
        ],
    )
    def test_buttons(self, number, expected):
        """Face and menu buttons map to control events."""
        assert translate_event(button(number), StickTracker()) == expected

    def test_stick_fires_once_per_push(self):
        """Holding the stick reports the direction only when it changes."""
        stick = StickTracker()
        assert translate_event(axis(0, 0.9), stick) == Direction.RIGHT
        assert translate_event(axis(0, 0.95), stick) is None
        assert translate_event(axis(0, 0.1), stick) is None
        assert translate_event(axis(0, 0.9), stick) == Direction.RIGHT

    def test_stick_vertical_and_dead_zone(self):
        """Small deflections are ignored; up is negative y."""
        stick = StickTracker()
        assert translate_event(axis(1, -0.3), stick) is None
        assert translate_event(axis(1, -0.8), stick) == Direction.UP
        assert translate_event(axis(1, 0.8), stick) == Direction.DOWN

    def test_other_axes_ignored(self):
        """Triggers and the right stick do not steer."""
        assert translate_event(axis(2, 1.0), StickTracker()) is None


class TestControllerSource:
    """Tests for ControllerSource start-up."""

    def test_disabled_when_pygame_fails(self, monkeypatch):
        """A failing joystick subsystem leaves the source disabled and silent."""

        def broken():
            raise pygame.error("no SDL")

        monkeypatch.setattr(controller.pygame.display, "init", broken)
        source = ControllerSource()

        assert source.enabled is False
        assert source() == []
        source.close()


class TestCapabilities:
    """Tests for platform detection."""

    def test_wsl_kernel(self, monkeypatch, tmp_path):
        """A Microsoft kernel release means WSL."""
        release = tmp_path / "osrelease"
        release.write_text("5.15.90.1-microsoft-standard-WSL2\n", encoding="utf-8")
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.delenv("WSL_DISTRO_NAME", raising=False)

        assert capabilities.is_wsl(release) is True

    def test_plain_linux(self, monkeypatch, tmp_path):
        """Other kernels and unreadable files are not WSL."""
        release = tmp_path / "osrelease"
        release.write_text("6.1.0-generic\n", encoding="utf-8")
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.delenv("WSL_DISTRO_NAME", raising=False)

        assert capabilities.is_wsl(release) is False
        assert capabilities.is_wsl(tmp_path / "missing") is False

    @pytest.mark.parametrize(
        "requested, supported, expected",
        [(True, True, True), (True, False, False), (False, True, False)],
    )
    def test_controller_flag(self, requested, supported, expected):
        """The controller is on only when requested and available."""
        assert capabilities.detect(requested, supported).controller_enabled is expected
