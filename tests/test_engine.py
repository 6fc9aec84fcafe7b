"""
Tests for the fixed-interval engine loop.
"""

import random

import pytest

from term_snake.config import GameConfig
from term_snake.engine import Engine
from term_snake.food import Food
from term_snake.game import GameState, SessionStatus
from term_snake.grid import Direction
from term_snake.input import ControlEvent


class FakeClock:
    def __init__(self):
        self.now = 100.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class ScriptedSource:
    """Returns one prepared batch of events per poll, then nothing."""

    def __init__(self, *batches, clock=None, cost=0.0):
        self.batches = list(batches)
        self.polls = 0
        self.clock = clock
        self.cost = cost

    def __call__(self):
        self.polls += 1
        if self.clock is not None:
            self.clock.now += self.cost
        return self.batches.pop(0) if self.batches else []


def make_engine(*batches, clock=None, cost=0.0):
    config = GameConfig(width=10, height=10, bonus_chance=0.0, controller_enabled=False)
    state = GameState(config, random.Random(1))
    clock = clock or FakeClock()
    source = ScriptedSource(*batches, clock=clock, cost=cost)
    engine = Engine(state, [source], clock=clock, sleep=clock.sleep)
    return engine, source, clock


class TestEngineStep:
    """Tests for single engine ticks."""

    def test_step_polls_each_source_once(self):
        """Every tick polls the sources exactly once."""
        engine, source, _ = make_engine()
        engine.step()
        engine.step()
        assert source.polls == 2

    def test_burst_keeps_last_direction(self):
        """Of several directions in one tick only the last is applied."""
        engine, _, _ = make_engine([Direction.UP, Direction.DOWN])
        engine.state.start()
        engine.state.food = Food((0, 0))

        assert engine.step().head == (5, 6)

    def test_burst_cannot_sneak_a_reversal(self):
        """Up then Left in one tick is one Left commit, which the reversal guard drops."""
        engine, _, _ = make_engine([Direction.UP, Direction.LEFT])
        engine.state.start()
        engine.state.food = Food((0, 0))

        snapshot = engine.step()
        assert snapshot.head == (6, 5)
        assert snapshot.status == SessionStatus.PLAYING

    def test_buffer_is_empty_after_tick(self):
        """Input consumed by a tick is not replayed on the next one."""
        engine, _, _ = make_engine([Direction.UP])
        engine.state.start()
        engine.state.food = Food((0, 0))

        assert engine.step().head == (5, 4)
        assert engine.buffer.consume() == (None, None)
        assert engine.step().head == (5, 3)

    def test_high_score_reaches_snapshot(self):
        """The high score set on the engine is shown in snapshots."""
        engine, _, _ = make_engine()
        engine.high_score = 42
        assert engine.step().high_score == 42


class TestEngineRun:
    """Tests for Engine.run."""

    def test_runs_until_quit(self):
        """The loop yields the initial state, one snapshot per tick, and stops on quit."""
        engine, _, clock = make_engine([ControlEvent.CONFIRM], [], [ControlEvent.QUIT])

        snapshots = list(engine.run())

        assert [s.status for s in snapshots] == [
            SessionStatus.MENU,
            SessionStatus.PLAYING,
            SessionStatus.PLAYING,
            SessionStatus.PLAYING,
        ]
        assert snapshots[-1].terminated
        assert clock.sleeps == [pytest.approx(0.2), pytest.approx(0.2)]

    def test_sleep_subtracts_tick_work(self):
        """Time spent inside a tick is taken off the sleep."""
        engine, _, clock = make_engine([], [ControlEvent.QUIT], cost=0.05)

        list(engine.run())

        assert clock.sleeps == [pytest.approx(0.15)]

    def test_slow_tick_does_not_sleep(self):
        """A tick that overruns its interval starts the next one immediately."""
        engine, _, clock = make_engine([], [ControlEvent.QUIT], cost=0.5)

        list(engine.run())

        assert clock.sleeps == []
