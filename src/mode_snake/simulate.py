"""Headless simulation with a random autopilot."""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass, field

import numpy as np

from mode_snake.config import GameConfig
from mode_snake.engine import GameEngine
from mode_snake.persistence import BestScoreStore
from mode_snake.snake import Direction
from mode_snake.state import GameMode

logger = logging.getLogger(__name__)

_DIRECTIONS = list(Direction)


def safe_directions(engine: GameEngine) -> list[Direction]:
    """Directions whose next head would not end the run this tick."""
    state = engine.state
    snake = state.snake
    original = snake.direction
    safe: list[Direction] = []
    try:
        for direction in _DIRECTIONS:
            if direction is original.opposite:
                continue
            snake.direction = direction
            candidate = engine.detector.resolve_candidate(state)
            if not engine.detector.check(state, candidate).terminal:
                safe.append(direction)
    finally:
        snake.direction = original
    return safe


@dataclass
class SimulationResult:
    """Aggregate outcome of a batch of headless games."""

    mode: str
    games: int
    total_ticks: int
    scores: list[int]
    wall_time_seconds: float
    end_reasons: dict[str, int] = field(default_factory=dict)

    @property
    def mean_score(self) -> float:
        return float(np.mean(self.scores)) if self.scores else 0.0

    @property
    def max_score(self) -> int:
        return max(self.scores, default=0)

    def summary(self) -> str:
        reasons = ", ".join(
            f"{k}={v}" for k, v in sorted(self.end_reasons.items())
        )
        return (
            f"Simulation: {self.games} {self.mode} game(s), "
            f"{self.total_ticks} ticks in {self.wall_time_seconds:.2f}s | "
            f"mean score {self.mean_score:.2f}, max {self.max_score} | "
            f"ends: {reasons or 'none'}"
        )


def simulate_games(
    *,
    mode: str = "classic",
    num_games: int = 10,
    max_ticks: int = 500,
    seed: int | None = 42,
    config: GameConfig | None = None,
    store: BestScoreStore | None = None,
) -> SimulationResult:
    """Play *num_games* runs with an autopilot that avoids instant death.

    The autopilot keeps its heading while that is safe, turning at random
    now and then, and otherwise picks a random safe direction. Runs that
    survive *max_ticks* (always the case for noDie) end as ``"max_ticks"``.
    """
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    if max_ticks < 1:
        raise ValueError("max_ticks must be at least 1.")

    cfg = config or GameConfig(seed=seed)
    engine = GameEngine(cfg, store=store)
    engine.set_mode(GameMode.parse(mode))
    rng = np.random.default_rng(seed)

    scores: list[int] = []
    reasons: Counter[str] = Counter()
    total_ticks = 0
    start = time.perf_counter()

    for _ in range(num_games):
        engine.start()
        for _ in range(max_ticks):
            if not engine.state.running:
                break
            safe = safe_directions(engine)
            if safe and (engine.state.snake.direction not in safe
                         or rng.random() < 0.2):
                engine.set_direction(safe[int(rng.integers(len(safe)))])
            engine.step()
            total_ticks += 1
        if engine.state.running:
            engine.end_game("max_ticks")
        scores.append(engine.state.score)
        reasons[engine.state.end_reason or "unknown"] += 1

    elapsed = time.perf_counter() - start
    result = SimulationResult(
        mode=engine.selected_mode.value,
        games=num_games,
        total_ticks=total_ticks,
        scores=scores,
        wall_time_seconds=elapsed,
        end_reasons=dict(reasons),
    )
    logger.info(result.summary())
    return result
