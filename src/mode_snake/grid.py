"""Fixed coordinate domain for the snake board."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from mode_snake.state import GameState

Position = tuple[int, int]


class CellType(enum.IntEnum):
    """Integer codes stored in rendered cell arrays."""

    EMPTY = 0
    SNAKE = 1
    HEAD = 2
    FOOD = 3
    PORTAL = 4
    WALL = 5


class Grid:
    """Square or rectangular board addressed by ``(x, y)`` positions.

    ``x`` is the column and ``y`` the row, so NumPy arrays produced here
    are indexed ``cells[y, x]``.
    """

    def __init__(self, width: int = 20, height: int = 20) -> None:
        if width < 4 or height < 4:
            raise ValueError("Grid dimensions must be at least 4×4.")
        self.width = width
        self.height = height

    @property
    def size(self) -> int:
        return self.width * self.height

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def wrap(self, x: int, y: int) -> Position:
        """Wrap coordinates around the grid edges."""
        return x % self.width, y % self.height

    def free_mask(self, occupied: Iterable[Position]) -> np.ndarray:
        """Boolean ``(height, width)`` mask, True where no position is occupied."""
        mask = np.ones((self.height, self.width), dtype=bool)
        for x, y in occupied:
            if self.in_bounds(x, y):
                mask[y, x] = False
        return mask

    def free_cells(self, occupied: Iterable[Position]) -> list[Position]:
        """Return every in-bounds position not present in *occupied*."""
        ys, xs = np.nonzero(self.free_mask(occupied))
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def render_cells(self, state: GameState) -> np.ndarray:
        """Paint the drawable parts of *state* into an ``int8`` cell array."""
        cells = np.zeros((self.height, self.width), dtype=np.int8)
        for x, y in state.walls:
            cells[y, x] = CellType.WALL
        if state.food is not None:
            x, y = state.food.position
            cells[y, x] = CellType.FOOD
        if state.portals is not None:
            for portal in state.portals:
                x, y = portal.position
                cells[y, x] = CellType.PORTAL
        for x, y in state.snake.body:
            if self.in_bounds(x, y):
                cells[y, x] = CellType.SNAKE
        hx, hy = state.snake.head
        if self.in_bounds(hx, hy):
            cells[hy, hx] = CellType.HEAD
        return cells

    def to_dict(self) -> dict:
        """Serialize grid dimensions to a dictionary."""
        return {"width": self.width, "height": self.height}
