"""Tick scheduling and run lifecycle."""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Callable

from mode_snake.engine import GameEngine
from mode_snake.snake import Direction
from mode_snake.state import GameMode

logger = logging.getLogger(__name__)

RenderCallback = Callable[[dict], None]


class Phase(str, enum.Enum):
    """Lifecycle states of the scheduler."""

    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


class GameLoopScheduler:
    """Drives a :class:`GameEngine` one tick at a time.

    Ticks run either synchronously through :meth:`tick` or from the
    :meth:`run` coroutine, which sleeps ``1 / tick_rate`` seconds between
    ticks and re-reads the rate every iteration. Stopping only takes
    effect between ticks.
    """

    def __init__(
        self,
        engine: GameEngine,
        render: RenderCallback | None = None,
    ) -> None:
        self.engine = engine
        self.render = render
        self.phase = Phase.IDLE
        self.menu_visible = True
        self.ticks_run = 0
        self._lock = asyncio.Lock()
        self._stop_requested = False

    @property
    def mode(self) -> GameMode:
        return self.engine.selected_mode

    @property
    def interval(self) -> float:
        """Seconds between ticks at the current rate."""
        return 1.0 / self.engine.state.tick_rate

    def _emit(self, state: dict) -> None:
        if self.render is not None:
            self.render(state)

    # -- UI controls -------------------------------------------------------

    def start(self) -> dict:
        """Begin a fresh run: IDLE/ENDED -> RUNNING."""
        state = self.engine.start()
        self._stop_requested = False
        self.menu_visible = False
        self.phase = Phase.RUNNING if self.engine.state.running else Phase.ENDED
        self._emit(state)
        return state

    def end_game(self, reason: str = "stopped") -> bool:
        """Finish the current run and commit the best score."""
        self._stop_requested = True
        new_best = self.engine.end_game(reason)
        if self.phase is Phase.RUNNING:
            self.phase = Phase.ENDED
        return new_best

    def stop(self) -> None:
        """Request that the loop halt at the next tick boundary."""
        self._stop_requested = True

    def resume(self) -> bool:
        """Clear a pending stop so :meth:`run` continues the current run."""
        if self.phase is not Phase.RUNNING:
            return False
        self._stop_requested = False
        return True

    def toggle_menu(self, show: bool) -> None:
        """Show or hide the menu; showing it abandons the current run.

        A noDie run has no terminal collision, so returning to the menu is
        where its best score gets committed.
        """
        self.menu_visible = show
        if not show:
            return
        self._stop_requested = True
        self.engine.end_game(
            "menu", commit=self.engine.state.mode is GameMode.NO_DIE,
        )
        self.phase = Phase.IDLE

    def set_mode(self, mode: str | GameMode) -> GameMode:
        """Select the mode used by the next :meth:`start`."""
        return self.engine.set_mode(mode)

    # -- input -------------------------------------------------------------

    def submit_direction(self, direction: Direction | str) -> bool:
        """Queue a direction intent. Unknown names are ignored."""
        if isinstance(direction, str):
            resolved = Direction.from_name(direction)
            if resolved is None:
                return False
            direction = resolved
        return self.engine.set_direction(direction)

    # -- ticking -----------------------------------------------------------

    def tick(self) -> dict:
        """Run exactly one tick and report it to the render callback."""
        if self.phase is not Phase.RUNNING or self._stop_requested:
            return self.engine.get_state()
        state = self.engine.step()
        self.ticks_run += 1
        if self.engine.game_over:
            self.phase = Phase.ENDED
        self._emit(state)
        return state

    async def run(self, max_ticks: int | None = None) -> dict:
        """Tick at the configured rate until the run ends or is stopped.

        Call :meth:`start` first; an idle or ended scheduler returns at once.
        """
        ticks = 0
        try:
            while self.phase is Phase.RUNNING and not self._stop_requested:
                if max_ticks is not None and ticks >= max_ticks:
                    break
                await asyncio.sleep(self.interval)
                async with self._lock:
                    if self._stop_requested:
                        break
                    self.tick()
                ticks += 1
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled after %d ticks.", ticks)
            raise
        return self.engine.get_state()
