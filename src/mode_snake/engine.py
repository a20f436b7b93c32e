"""Step-based game engine composing grid, snake, spawning and mode rules."""

from __future__ import annotations

import logging
import threading

import numpy as np

from mode_snake.collision import Collision, CollisionDetector
from mode_snake.config import GameConfig
from mode_snake.grid import Grid
from mode_snake.modes import EatenEvent, ModeController
from mode_snake.persistence import BestScoreStore
from mode_snake.score import ScoreTracker
from mode_snake.snake import Direction, Snake
from mode_snake.spawner import BoardFullError, SpawnEngine
from mode_snake.state import GameMode, GameState

logger = logging.getLogger(__name__)


class GameEngine:
    """Single-snake, step-based game engine.

    The engine owns the current :class:`GameState` and the components that
    mutate it. Each call to :meth:`step` advances the run by one tick and
    returns the updated state dictionary.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: BestScoreStore | None = None,
    ) -> None:
        cfg = config or GameConfig()
        self.config = cfg
        self.grid = Grid(width=cfg.grid_width, height=cfg.grid_height)
        self.rng = np.random.default_rng(cfg.seed)
        self.spawner = SpawnEngine(
            self.grid, max_attempts=cfg.max_spawn_attempts, rng=self.rng,
        )
        self.detector = CollisionDetector(self.grid)
        self.modes = ModeController(self.spawner, speed_factor=cfg.speed_factor)
        self.scores = ScoreTracker(store)

        self.selected_mode = GameMode.parse(cfg.mode)
        self._direction_lock = threading.Lock()
        self._pending_direction: Direction | None = None
        self.last_event: EatenEvent | None = None
        self.state = self._new_state()

    def _new_state(self) -> GameState:
        # GameConfig has already validated the name.
        direction = Direction.from_name(self.config.initial_direction)
        snake = Snake(self.config.initial_body, direction)
        return GameState(
            snake=snake,
            mode=self.selected_mode,
            tick_rate=self.config.tick_rate,
        )

    # -- setup -------------------------------------------------------------

    def set_mode(self, mode: str | GameMode) -> GameMode:
        """Select the mode for the next reset; the current run is unaffected."""
        self.selected_mode = GameMode.parse(mode)
        return self.selected_mode

    def reset(self) -> dict:
        """Replace the state with a fresh run in the selected mode."""
        with self._direction_lock:
            self._pending_direction = None
        self.state = self._new_state()
        self.scores.reset()
        self.last_event = None
        try:
            self.modes.place_initial(self.state)
        except BoardFullError:
            self.state.end_reason = "board_full"
            logger.warning("Board full before the run could start.")
        return self.get_state()

    def start(self) -> dict:
        """Reset and mark the new run as running."""
        self.reset()
        if self.state.end_reason is None:
            self.state.running = True
            logger.info("Run started in %s mode.", self.state.mode.value)
        return self.get_state()

    # -- input -------------------------------------------------------------

    def set_direction(self, direction: Direction) -> bool:
        """Buffer a direction change for the next step.

        Reversals of the committed direction are dropped; otherwise the
        latest intent replaces any earlier one from the same tick.
        """
        with self._direction_lock:
            if direction is self.state.snake.direction.opposite:
                return False
            self._pending_direction = direction
            return True

    def _apply_pending_direction(self) -> None:
        with self._direction_lock:
            pending, self._pending_direction = self._pending_direction, None
            if pending is not None:
                self.state.snake.set_direction(pending)

    # -- simulation --------------------------------------------------------

    def step(self) -> dict:
        """Advance the game by one tick.

        Returns the full game state as a serializable dict.
        """
        state = self.state
        if not state.running:
            return self.get_state()

        self.last_event = None
        self._apply_pending_direction()

        candidate = self.detector.resolve_candidate(state)
        collision = self.detector.check(state, candidate)
        if collision.terminal:
            self._finish(collision.value)
            return self.get_state()

        state.snake.advance(candidate)
        state.tick += 1

        try:
            event = self.modes.on_eaten(state)
        except BoardFullError:
            self.scores.record(state.score)
            self._finish("board_full")
            return self.get_state()

        self.last_event = event
        self.scores.record(state.score)
        if event is not None and event.destination is not None:
            after_portal = self.detector.check_relocated_head(state)
            if after_portal is not Collision.NONE:
                self._finish(after_portal.value)
        return self.get_state()

    def end_game(self, reason: str = "stopped", commit: bool = True) -> bool:
        """Stop the current run and, by default, commit the best score.

        Returns True when a new best score was recorded.
        """
        if self.state.running:
            self.state.running = False
            self.state.end_reason = reason
            logger.info(
                "Run ended (%s) at tick %d with score %d.",
                reason, self.state.tick, self.state.score,
            )
        return self.scores.commit() if commit else False

    def _finish(self, reason: str) -> None:
        if reason == "board_full":
            logger.warning("Board full at tick %d; ending run.", self.state.tick)
        self.end_game(reason)

    @property
    def game_over(self) -> bool:
        return not self.state.running and self.state.end_reason is not None

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        data = self.state.to_dict()
        data["best_score"] = self.scores.best_score
        data["grid"] = {
            **self.grid.to_dict(),
            "cells": self.grid.render_cells(self.state).tolist(),
        }
        return data
