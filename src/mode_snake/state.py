"""Game state aggregate and the value types it is built from."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

from mode_snake.grid import Position
from mode_snake.snake import Snake

logger = logging.getLogger(__name__)


class GameMode(str, enum.Enum):
    """Rule sets selectable before a run."""

    CLASSIC = "classic"
    NO_DIE = "noDie"
    SPEED = "speed"
    WALLS = "walls"
    PORTAL = "portal"

    @classmethod
    def parse(cls, value: str | GameMode | None) -> GameMode:
        """Resolve a mode selection, falling back to classic when unknown."""
        if isinstance(value, GameMode):
            return value
        if isinstance(value, str):
            for mode in cls:
                if mode.value.lower() == value.strip().lower():
                    return mode
        logger.warning("Unknown game mode %r; falling back to classic.", value)
        return cls.CLASSIC


class CollectibleKind(enum.Enum):
    FOOD = "food"
    PORTAL_A = "portal_a"
    PORTAL_B = "portal_b"


@dataclass(frozen=True)
class Collectible:
    """An item on the board that is consumed when the head reaches it."""

    position: Position
    kind: CollectibleKind = CollectibleKind.FOOD

    def to_dict(self) -> dict:
        return {"position": list(self.position), "kind": self.kind.value}


@dataclass(frozen=True)
class PortalPair:
    """Two linked portals; touching one moves the head to the other."""

    a: Collectible
    b: Collectible

    def __post_init__(self) -> None:
        if self.a.position == self.b.position:
            raise ValueError("Portal positions must be distinct.")

    def __iter__(self):
        yield self.a
        yield self.b

    def partner_of(self, position: Position) -> Collectible | None:
        """Return the portal opposite the one at *position*, if any."""
        if position == self.a.position:
            return self.b
        if position == self.b.position:
            return self.a
        return None

    def to_dict(self) -> dict:
        return {"a": self.a.to_dict(), "b": self.b.to_dict()}


@dataclass
class GameState:
    """All mutable state for a single run.

    Every component receives the state explicitly; nothing here reaches
    back into the components.
    """

    snake: Snake
    mode: GameMode = GameMode.CLASSIC
    tick_rate: float = 10.0
    food: Collectible | None = None
    portals: PortalPair | None = None
    walls: list[Position] = field(default_factory=list)
    score: int = 0
    running: bool = False
    tick: int = 0
    end_reason: str | None = None

    def collectibles(self) -> list[Collectible]:
        """Return every collectible currently on the board."""
        items: list[Collectible] = []
        if self.food is not None:
            items.append(self.food)
        if self.portals is not None:
            items.extend(self.portals)
        return items

    def occupied(self) -> set[Position]:
        """Positions blocked for spawning: snake, walls and collectibles."""
        taken = set(self.snake.body)
        taken.update(self.walls)
        taken.update(item.position for item in self.collectibles())
        return taken

    def to_dict(self) -> dict:
        """Serialize the drawable state to a dictionary."""
        return {
            "mode": self.mode.value,
            "tick": self.tick,
            "tick_rate": self.tick_rate,
            "score": self.score,
            "running": self.running,
            "end_reason": self.end_reason,
            "snake": self.snake.to_dict(),
            "food": self.food.to_dict() if self.food is not None else None,
            "portals": (
                self.portals.to_dict() if self.portals is not None else None
            ),
            "walls": [list(w) for w in self.walls],
        }
