"""Mode-specific collision policies."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mode_snake.state import GameMode

if TYPE_CHECKING:
    from mode_snake.grid import Grid, Position
    from mode_snake.state import GameState


class Collision(enum.Enum):
    """Outcome of checking a candidate head position."""

    NONE = "none"
    BOUNDARY = "boundary"
    SELF = "self"
    WALL = "wall"

    @property
    def terminal(self) -> bool:
        return self is not Collision.NONE


@dataclass(frozen=True)
class CollisionPolicy:
    """Which checks a mode applies to the candidate head."""

    wraps: bool = False
    check_self: bool = True
    check_walls: bool = False


COLLISION_POLICIES: dict[GameMode, CollisionPolicy] = {
    GameMode.CLASSIC: CollisionPolicy(),
    GameMode.SPEED: CollisionPolicy(),
    GameMode.PORTAL: CollisionPolicy(),
    GameMode.WALLS: CollisionPolicy(check_walls=True),
    GameMode.NO_DIE: CollisionPolicy(wraps=True, check_self=False),
}


class CollisionDetector:
    """Evaluates candidate heads against the active mode's policy."""

    def __init__(self, grid: Grid) -> None:
        self.grid = grid

    def resolve_candidate(self, state: GameState) -> Position:
        """Return the next head, wrapped when the mode wraps the board."""
        x, y = state.snake.next_head()
        if COLLISION_POLICIES[state.mode].wraps:
            return self.grid.wrap(x, y)
        return x, y

    def check(self, state: GameState, candidate: Position) -> Collision:
        """Classify *candidate* before it is committed to the snake."""
        policy = COLLISION_POLICIES[state.mode]
        if not policy.wraps and not self.grid.in_bounds(*candidate):
            return Collision.BOUNDARY

        if policy.check_self:
            snake = state.snake
            body = list(snake.body)
            # The tail vacates this tick unless a queued growth keeps it.
            if not snake.will_retain_tail:
                body = body[:-1]
            if candidate in body:
                return Collision.SELF

        if policy.check_walls and candidate in state.walls:
            return Collision.WALL
        return Collision.NONE

    def check_relocated_head(self, state: GameState) -> Collision:
        """Check a head that was moved in place, e.g. through a portal."""
        if not COLLISION_POLICIES[state.mode].check_self:
            return Collision.NONE
        head = state.snake.head
        if any(seg == head for seg in list(state.snake.body)[1:]):
            return Collision.SELF
        return Collision.NONE
