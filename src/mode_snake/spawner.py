"""Placement of food, portals and walls on free cells."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from mode_snake.grid import Grid, Position
from mode_snake.state import Collectible, CollectibleKind, PortalPair

if TYPE_CHECKING:
    from mode_snake.state import GameState

logger = logging.getLogger(__name__)


class BoardFullError(RuntimeError):
    """Raised when no free cell is left for a spawn."""


class SpawnEngine:
    """Picks unoccupied cells by rejection sampling.

    Draws come from a seeded NumPy RNG so runs are reproducible. Sampling
    is capped at *max_attempts* draws; after that the free cells are
    enumerated and one is chosen uniformly, which also detects a full
    board.
    """

    def __init__(
        self,
        grid: Grid,
        max_attempts: int = 200,
        rng: np.random.Generator | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.grid = grid
        self.max_attempts = max_attempts
        self.rng = rng if rng is not None else np.random.default_rng()

    def _draw(self) -> Position:
        x = int(self.rng.integers(self.grid.width))
        y = int(self.rng.integers(self.grid.height))
        return x, y

    def _pick_free(self, occupied: set[Position]) -> Position:
        for _ in range(self.max_attempts):
            pos = self._draw()
            if pos not in occupied:
                return pos

        free = self.grid.free_cells(occupied)
        if not free:
            logger.warning("No free cells left on a %dx%d board.",
                           self.grid.width, self.grid.height)
            raise BoardFullError("No free cell available for spawning.")
        logger.debug(
            "Rejection sampling exhausted after %d draws; %d free cells left.",
            self.max_attempts, len(free),
        )
        return free[int(self.rng.integers(len(free)))]

    def spawn_food(self, state: GameState) -> Collectible:
        """Place a food item on a free cell and store it on *state*."""
        pos = self._pick_free(state.occupied())
        state.food = Collectible(pos, CollectibleKind.FOOD)
        return state.food

    def spawn_portal_pair(self, state: GameState) -> PortalPair:
        """Place two linked portals on distinct free cells."""
        occupied = state.occupied()
        for _ in range(self.max_attempts):
            first, second = self._draw(), self._draw()
            if first in occupied or second in occupied or first == second:
                continue
            return self._store_portals(state, first, second)

        free = self.grid.free_cells(occupied)
        if len(free) < 2:
            logger.warning(
                "Only %d free cell(s) left; cannot place a portal pair.",
                len(free),
            )
            raise BoardFullError("Not enough free cells for a portal pair.")
        i, j = self.rng.choice(len(free), size=2, replace=False).tolist()
        return self._store_portals(state, free[i], free[j])

    @staticmethod
    def _store_portals(
        state: GameState, first: Position, second: Position,
    ) -> PortalPair:
        state.portals = PortalPair(
            Collectible(first, CollectibleKind.PORTAL_A),
            Collectible(second, CollectibleKind.PORTAL_B),
        )
        return state.portals

    def spawn_wall(self, state: GameState) -> Position:
        """Append a wall block on a free cell."""
        pos = self._pick_free(state.occupied())
        state.walls.append(pos)
        return pos
