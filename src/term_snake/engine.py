"""Fixed-interval game loop: poll input, consume once, advance, yield a snapshot."""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterator, Sequence

from .game import GameState, Snapshot
from .input import InputBuffer, InputSource

logger = logging.getLogger(__name__)


class Engine:
    """
    Drives a GameState at the tick interval of its current speed level.

    Input sources are polled without blocking once per tick and only ever
    reach the game through the InputBuffer, which is consumed exactly once
    per tick.
    """

    def __init__(
        self,
        state: GameState,
        sources: Sequence[InputSource] = (),
        *,
        buffer: InputBuffer | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.state = state
        self.sources = list(sources)
        self.buffer = buffer if buffer is not None else InputBuffer()
        self.clock = clock
        self.sleep = sleep

    @property
    def high_score(self) -> int:
        return self.state.high_score

    @high_score.setter
    def high_score(self, value: int) -> None:
        self.state.high_score = value

    def poll(self) -> None:
        """Record every event the sources produced since the last tick."""
        for source in self.sources:
            for event in source():
                self.buffer.record(event)

    def step(self) -> Snapshot:
        """Run a single tick without sleeping."""
        self.poll()
        direction, control = self.buffer.consume()
        return self.state.advance(direction, control)

    def run(self) -> Iterator[Snapshot]:
        """Yield one snapshot per tick until the session is quit."""
        yield self.state.snapshot()
        while True:
            started = self.clock()
            snapshot = self.step()
            yield snapshot
            if snapshot.terminated:
                logger.debug("Engine stopped after %d ticks", snapshot.ticks)
                return
            remaining = snapshot.tick_interval_ms / 1000.0 - (self.clock() - started)
            if remaining > 0:
                self.sleep(remaining)
