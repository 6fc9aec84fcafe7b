"""Terminal Snake application: wires input, engine, renderer and persistence."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from . import capabilities, score
from .config import GameConfig
from .engine import Engine
from .game import GameState, SessionStatus, Snapshot
from .input import InputSource, KeyboardSource
from .renderer import CursesRenderer

logger = logging.getLogger(__name__)


class TerminalSnake:
    """Owns the collaborators around one engine for the lifetime of the program."""

    def __init__(
        self,
        window,
        config: GameConfig,
        *,
        highscore_path: Path | None = None,
    ) -> None:
        self.highscore_path = highscore_path
        self.controller = None
        sources: list[InputSource] = [KeyboardSource(window)]
        controller_support = False
        if config.controller_enabled:
            from .controller import ControllerSource

            self.controller = ControllerSource()
            controller_support = self.controller.enabled
            if controller_support:
                sources.append(self.controller)

        caps = capabilities.detect(config.controller_enabled, controller_support)
        self.config = replace(config, controller_enabled=caps.controller_enabled)

        self.engine = Engine(GameState(self.config), sources)
        self.engine.high_score = score.load_high_score(highscore_path)
        self.best_score = self.engine.high_score
        self.renderer = CursesRenderer(window, wsl=caps.wsl)

    # --- High score persistence ----------------------------------------

    def _on_status_change(self, previous: SessionStatus, snapshot: Snapshot) -> Snapshot:
        if snapshot.status.is_finished:
            self.best_score = score.record_score(snapshot.score.score, self.highscore_path)
        elif snapshot.status == SessionStatus.MENU and previous.is_finished:
            # the finished screen keeps comparing against the old best
            self.engine.high_score = self.best_score
            return replace(snapshot, high_score=self.best_score)
        return snapshot

    # --- Main loop -------------------------------------------------------

    def start(self) -> int:
        """Run until the player quits; returns the best score seen."""
        previous = self.engine.state.status
        try:
            for snapshot in self.engine.run():
                if snapshot.status != previous:
                    snapshot = self._on_status_change(previous, snapshot)
                    previous = snapshot.status
                self.renderer.draw(snapshot)
        finally:
            if self.controller is not None:
                self.controller.close()
        return self.best_score
