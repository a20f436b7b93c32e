"""Score keeping and best-score comparison."""

from __future__ import annotations

import logging

from mode_snake.persistence import BestScoreStore, MemoryBestScoreStore

logger = logging.getLogger(__name__)


class ScoreTracker:
    """Tracks the run score against the stored best.

    The best score is read from *store* on construction and again before
    each :meth:`commit`, which writes it back only when the run beat it.
    """

    def __init__(self, store: BestScoreStore | None = None) -> None:
        self.store = store if store is not None else MemoryBestScoreStore()
        self.score = 0
        self.best_score = self.store.load_best_score()

    def reset(self) -> None:
        self.score = 0

    def record(self, score: int) -> None:
        """Follow the run score; it may only move upward within a run."""
        if score < self.score:
            raise ValueError("Score cannot decrease within a run.")
        self.score = score

    def commit(self) -> bool:
        """Persist the run score if it is a new best. Returns True if so."""
        # The store may be shared, so another tracker could have raised it.
        self.best_score = max(self.best_score, self.store.load_best_score())
        if self.score <= self.best_score:
            return False
        self.best_score = self.score
        self.store.save_best_score(self.best_score)
        logger.info("New best score: %d", self.best_score)
        return True
