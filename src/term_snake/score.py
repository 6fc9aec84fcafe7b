"""High score persistence: a single JSON record in the user data directory."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path

from . import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScoreRecord:
    high_score: int = 0
    achieved_at: str | None = None  # ISO-8601, UTC

    @classmethod
    def now(cls, score: int) -> ScoreRecord:
        return cls(score, datetime.now(timezone.utc).isoformat(timespec="seconds"))

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    @classmethod
    def from_json(cls, text: str) -> ScoreRecord:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("score record must be a JSON object")
        high_score = int(data.get("high_score", 0))
        if high_score < 0:
            raise ValueError(f"negative high score: {high_score}")
        achieved_at = data.get("achieved_at")
        return cls(high_score, str(achieved_at) if achieved_at is not None else None)


def load_record(path: Path | None = None) -> ScoreRecord:
    """Read the saved record; missing or malformed files count as no score."""
    path = path or config.highscore_file()
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ScoreRecord()
    except OSError as exc:
        logger.warning("Could not read high score file %s: %s", path, exc)
        return ScoreRecord()
    try:
        return ScoreRecord.from_json(text)
    except (ValueError, TypeError) as exc:
        logger.warning("Ignoring malformed high score file %s: %s", path, exc)
        return ScoreRecord()


def load_high_score(path: Path | None = None) -> int:
    return load_record(path).high_score


def save_record(record: ScoreRecord, path: Path | None = None) -> None:
    """Write ``record``, creating parent directories as needed."""
    path = path or config.highscore_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(record.to_json(), encoding="utf-8")


def record_score(score: int, path: Path | None = None) -> int:
    """
    Persist ``score`` if it beats the stored best.

    Returns the best score after the update. Write failures are logged and
    leave the game running.
    """
    best = load_high_score(path)
    if score <= best:
        return best
    try:
        save_record(ScoreRecord.now(score), path)
    except OSError as exc:
        logger.warning("Could not save high score %d: %s", score, exc)
    return score
