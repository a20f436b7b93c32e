"""Per-mode effects of consuming food or portals."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mode_snake.state import CollectibleKind, GameMode

if TYPE_CHECKING:
    from mode_snake.grid import Position
    from mode_snake.spawner import SpawnEngine
    from mode_snake.state import GameState

logger = logging.getLogger(__name__)

SPEED_FACTOR = 1.10


@dataclass(frozen=True)
class EatenEvent:
    """A consumption that happened during a tick."""

    kind: CollectibleKind
    position: Position
    destination: Position | None = None


class ModeController:
    """Dispatches eaten-events to the handler registered for each mode.

    Every handler grows the snake and adds one point; the mode decides
    what else happens. Adding a mode means adding one entry to
    :attr:`handlers` and one to the collision policy table.
    """

    def __init__(
        self, spawner: SpawnEngine, speed_factor: float = SPEED_FACTOR,
    ) -> None:
        if speed_factor <= 1.0:
            raise ValueError("speed_factor must be greater than 1.")
        self.spawner = spawner
        self.speed_factor = speed_factor
        self.handlers: dict[
            GameMode, Callable[[GameState], EatenEvent | None]
        ] = {
            GameMode.CLASSIC: self._eat_food,
            GameMode.NO_DIE: self._eat_food,
            GameMode.SPEED: self._eat_food_speed_up,
            GameMode.WALLS: self._eat_food_add_wall,
            GameMode.PORTAL: self._enter_portal,
        }

    def place_initial(self, state: GameState) -> None:
        """Put the first collectible(s) for a fresh run on the board."""
        if state.mode is GameMode.PORTAL:
            self.spawner.spawn_portal_pair(state)
        else:
            self.spawner.spawn_food(state)

    def on_eaten(self, state: GameState) -> EatenEvent | None:
        """Apply the active mode's effects if the head reached a collectible."""
        return self.handlers[state.mode](state)

    @staticmethod
    def _reward(state: GameState) -> None:
        state.snake.grow()
        state.score += 1

    def _eat_food(self, state: GameState) -> EatenEvent | None:
        food = state.food
        if food is None or state.snake.head != food.position:
            return None
        self._reward(state)
        state.food = None
        self.spawner.spawn_food(state)
        return EatenEvent(food.kind, food.position)

    def _eat_food_speed_up(self, state: GameState) -> EatenEvent | None:
        event = self._eat_food(state)
        if event is not None:
            state.tick_rate *= self.speed_factor
            logger.debug("Tick rate raised to %.2f.", state.tick_rate)
        return event

    def _eat_food_add_wall(self, state: GameState) -> EatenEvent | None:
        event = self._eat_food(state)
        if event is not None:
            self.spawner.spawn_wall(state)
        return event

    def _enter_portal(self, state: GameState) -> EatenEvent | None:
        portals = state.portals
        if portals is None:
            return None
        head = state.snake.head
        exit_portal = portals.partner_of(head)
        if exit_portal is None:
            return None

        state.snake.relocate_head(exit_portal.position)
        self._reward(state)
        state.portals = None
        self.spawner.spawn_portal_pair(state)
        entry = portals.a if exit_portal is portals.b else portals.b
        return EatenEvent(entry.kind, head, exit_portal.position)
