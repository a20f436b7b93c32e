"""In-memory session registry, lifecycle management, and async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from mode_snake.config import GameConfig
from mode_snake.engine import GameEngine
from mode_snake.persistence import BestScoreStore, MemoryBestScoreStore
from mode_snake.scheduler import GameLoopScheduler, Phase
from mode_snake.server.models import SessionSummary

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100


@dataclass
class GameSession:
    """A single player's game plus the sockets watching it."""

    session_id: str
    scheduler: GameLoopScheduler
    pending_states: asyncio.Queue
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def engine(self) -> GameEngine:
        return self.scheduler.engine

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            phase=self.scheduler.phase.value,
            mode=self.scheduler.mode.value,
            score=self.engine.state.score,
            best_score=self.engine.scores.best_score,
            tick_rate=self.engine.state.tick_rate,
        )


class SessionManager:
    """Central registry managing all game sessions.

    All sessions share one best-score store.
    """

    def __init__(
        self,
        store: BestScoreStore | None = None,
        max_sessions: int = _MAX_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self.store = store if store is not None else MemoryBestScoreStore()
        self._sessions: dict[str, GameSession] = {}
        self._max_sessions = max_sessions

    def create_session(
        self,
        mode: str = "classic",
        tick_rate: float = 10.0,
        grid_width: int = 20,
        grid_height: int = 20,
        seed: int | None = None,
    ) -> GameSession:
        """Create an idle session and return it."""
        self._prune_idle_sessions()
        if len(self._sessions) >= self._max_sessions:
            raise ValueError("Too many sessions. Try again later.")

        config = GameConfig(
            grid_width=grid_width,
            grid_height=grid_height,
            tick_rate=tick_rate,
            seed=seed,
            mode=mode,
        )
        engine = GameEngine(config, store=self.store)
        session_id = uuid.uuid4().hex[:12]
        states: asyncio.Queue = asyncio.Queue()
        session = GameSession(
            session_id=session_id,
            scheduler=GameLoopScheduler(engine, render=states.put_nowait),
            pending_states=states,
        )
        self._sessions[session_id] = session
        logger.info(
            "Session %s created (mode=%s).", session_id, engine.selected_mode.value,
        )
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    def start_session(self, session_id: str) -> dict:
        """Start a fresh run and its tick loop."""
        session = self.require_session(session_id)
        if session.scheduler.phase is Phase.RUNNING:
            raise ValueError("Session is already running.")
        if session._task is not None and not session._task.done():
            # A stopped loop may still be sleeping before its exit check.
            session._task.cancel()
        state = session.scheduler.start()
        session._task = asyncio.create_task(self._tick_loop(session))
        logger.info("Session %s started.", session_id)
        return state

    def stop_session(self, session_id: str) -> bool:
        """End the current run; returns True when it set a new best."""
        session = self.require_session(session_id)
        return session.scheduler.end_game("stopped")

    def toggle_menu(self, session_id: str, show: bool) -> None:
        self.require_session(session_id).scheduler.toggle_menu(show)

    def set_mode(self, session_id: str, mode: str) -> str:
        return self.require_session(session_id).scheduler.set_mode(mode).value

    async def _tick_loop(self, session: GameSession) -> None:
        """Run the scheduler, broadcasting every rendered state."""
        broadcaster = asyncio.create_task(self._pump(session))
        try:
            await session.scheduler.run()
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Tick loop error in session %s.", session.session_id)
            session.scheduler.end_game("error")
        finally:
            await session.pending_states.join()
            broadcaster.cancel()
            await asyncio.gather(broadcaster, return_exceptions=True)
            await self._broadcast(session, session.engine.get_state())

    async def _pump(self, session: GameSession) -> None:
        while True:
            state = await session.pending_states.get()
            try:
                await self._broadcast(session, state)
            finally:
                session.pending_states.task_done()

    async def _broadcast(self, session: GameSession, state: dict) -> None:
        """Send game state to every connected socket."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)
        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    def _prune_idle_sessions(self) -> None:
        """Drop sessions that are not running and have no viewers."""
        if len(self._sessions) < self._max_sessions:
            return
        stale = [
            s for s in self._sessions.values()
            if s.scheduler.phase is not Phase.RUNNING and not s.sockets
        ]
        stale.sort(key=lambda s: s.created_at)
        overflow = len(self._sessions) - self._max_sessions + 1
        for session in stale[:overflow]:
            self._sessions.pop(session.session_id, None)
        if stale[:overflow]:
            logger.info("Pruned %d idle sessions.", len(stale[:overflow]))

    async def cleanup(self) -> None:
        """Cancel all running tick loops."""
        for session in self._sessions.values():
            session.scheduler.stop()
            if session._task and not session._task.done():
                session._task.cancel()
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
