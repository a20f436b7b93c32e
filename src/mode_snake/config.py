"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

from mode_snake.grid import Position
from mode_snake.snake import DEFAULT_BODY, Direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Board, timing and spawning settings for a game.

    Supports JSON serialization so a setup can be reproduced.
    """

    # Board
    grid_width: int = 20
    grid_height: int = 20

    # Snake
    initial_body: tuple[Position, ...] = DEFAULT_BODY
    initial_direction: str = "right"

    # Timing
    tick_rate: float = 10.0
    speed_factor: float = 1.10

    # Spawning
    max_spawn_attempts: int = 200
    seed: int | None = None

    # Rules
    mode: str = "classic"

    # Persistence
    best_score_path: str | None = field(default=None)

    def __post_init__(self) -> None:
        if self.tick_rate <= 0:
            raise ValueError("tick_rate must be positive.")
        if self.speed_factor <= 1.0:
            raise ValueError("speed_factor must be greater than 1.")
        if self.max_spawn_attempts < 1:
            raise ValueError("max_spawn_attempts must be at least 1.")
        if not self.initial_body:
            raise ValueError("initial_body must contain at least one segment.")
        if Direction.from_name(self.initial_direction) is None:
            raise ValueError(
                f"Unknown initial_direction: {self.initial_direction!r}."
            )
        for x, y in self.initial_body:
            if not (0 <= x < self.grid_width and 0 <= y < self.grid_height):
                raise ValueError(
                    "initial_body does not fit the configured grid."
                )

    def to_dict(self) -> dict:
        """Serialize to a plain dict (tuples become lists)."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if "initial_body" in raw:
            raw["initial_body"] = tuple(tuple(seg) for seg in raw["initial_body"])
        return cls(**raw)
