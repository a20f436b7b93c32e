"""Best-score storage backends."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class BestScoreStore(Protocol):
    """Key-value persistence for the single best-score scalar."""

    def load_best_score(self) -> int: ...

    def save_best_score(self, score: int) -> None: ...


def _coerce_score(raw: object) -> int | None:
    """Parse a stored score, or ``None`` when it is not a number."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return max(raw, 0)
    if isinstance(raw, (float, str)):
        try:
            return max(int(float(raw)), 0)
        except (ValueError, OverflowError):
            return None
    return None


class MemoryBestScoreStore:
    """In-process store, used for tests and server sessions."""

    def __init__(self, initial: int = 0) -> None:
        self.best_score = initial

    def load_best_score(self) -> int:
        return self.best_score

    def save_best_score(self, score: int) -> None:
        self.best_score = score


class JsonBestScoreStore:
    """Stores the best score as ``{"best_score": N}`` in a JSON file.

    Missing, unreadable or malformed files read as 0.
    """

    key = "best_score"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load_best_score(self) -> int:
        if not self.path.exists():
            return 0
        try:
            raw = json.loads(self.path.read_text())
        except (OSError, ValueError):
            logger.warning("Unreadable best-score file %s; using 0.", self.path)
            return 0
        value = raw.get(self.key) if isinstance(raw, dict) else raw
        if value is None:
            return 0
        score = _coerce_score(value)
        if score is None:
            logger.warning(
                "Non-numeric best score %r in %s; using 0.", value, self.path,
            )
            return 0
        return score

    def save_best_score(self, score: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write beside the target then swap, so a crash never truncates it.
        tmp = self.path.with_name(f"{self.path.name}.tmp")
        tmp.write_text(json.dumps({self.key: int(score)}))
        tmp.replace(self.path)
        logger.info("Best score %d saved to %s", score, self.path)
