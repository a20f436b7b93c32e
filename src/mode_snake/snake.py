"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable

from mode_snake.grid import Position


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values; y grows downward."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @classmethod
    def from_name(cls, name: str) -> Direction | None:
        """Look up a direction by case-insensitive name, or ``None``."""
        return cls.__members__.get(name.strip().upper())


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

DEFAULT_BODY: tuple[Position, ...] = ((1, 10), (0, 10))


class Snake:
    """A snake represented as an ordered deque of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``. Growth is deferred:
    :meth:`grow` only queues a segment, which is added by keeping the tail
    on the next :meth:`advance`.
    """

    def __init__(
        self,
        body: Iterable[Position] = DEFAULT_BODY,
        direction: Direction = Direction.RIGHT,
    ) -> None:
        self.body: deque[Position] = deque(tuple(seg) for seg in body)
        if not self.body:
            raise ValueError("Snake length must be at least 1.")
        self.direction = direction
        self.growth_queue = 0

    @property
    def head(self) -> Position:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Position:
        return self.body[-1]

    @property
    def will_retain_tail(self) -> bool:
        """True when the next advance keeps the tail segment in place."""
        return self.growth_queue > 0

    def __len__(self) -> int:
        return len(self.body)

    def set_direction(self, new_direction: Direction) -> bool:
        """Change direction, ignoring 180° reversals.

        Returns whether the change was accepted.
        """
        if new_direction is self.direction.opposite:
            return False
        self.direction = new_direction
        return True

    def next_head(self) -> Position:
        """Compute the next head position without moving."""
        dx, dy = self.direction.value
        x, y = self.head
        return x + dx, y + dy

    def advance(self, new_head: Position | None = None) -> Position | None:
        """Move the snake one step forward onto *new_head*.

        *new_head* defaults to :meth:`next_head`; callers pass an already
        wrapped coordinate when the board wraps. Returns the vacated tail
        cell, or ``None`` if a queued growth kept it.
        """
        if new_head is None:
            new_head = self.next_head()
        self.body.appendleft(new_head)
        if self.growth_queue > 0:
            self.growth_queue -= 1
            return None
        return self.body.pop()

    def grow(self, segments: int = 1) -> None:
        """Queue growth for the next *segments* ticks."""
        if segments < 0:
            raise ValueError("segments must be non-negative.")
        self.growth_queue += segments

    def relocate_head(self, position: Position) -> None:
        """Overwrite the head coordinate in place without moving the body."""
        self.body[0] = position

    def occupies(self, x: int, y: int) -> bool:
        """Check whether the snake occupies a given cell."""
        return (x, y) in self.body

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "direction": self.direction.name.lower(),
            "growth_queue": self.growth_queue,
        }
