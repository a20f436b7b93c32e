"""Load test: concurrent sessions running simultaneously."""

from __future__ import annotations

import asyncio

import pytest

from mode_snake.persistence import MemoryBestScoreStore
from mode_snake.scheduler import Phase
from mode_snake.server.session_manager import GameSession, SessionManager


class TestConcurrentSessions:
    @pytest.mark.asyncio
    async def test_30_concurrent_sessions(self):
        """Spin up 30 classic sessions; every snake eventually hits a wall."""
        store = MemoryBestScoreStore()
        manager = SessionManager(store=store)
        session_ids = [
            manager.create_session(tick_rate=200.0, seed=i).session_id
            for i in range(30)
        ]
        for sid in session_ids:
            manager.start_session(sid)

        for _ in range(200):
            await asyncio.sleep(0.05)
            phases = [manager.get_session(sid).scheduler.phase for sid in session_ids]
            if all(p is Phase.ENDED for p in phases):
                break

        ended = sum(
            1 for sid in session_ids
            if manager.get_session(sid).scheduler.phase is Phase.ENDED
        )
        assert ended == 30, f"Only {ended}/30 sessions ended"
        best = max(
            manager.get_session(sid).engine.state.score for sid in session_ids
        )
        assert store.best_score == best
        await manager.cleanup()

    def test_session_limit(self):
        manager = SessionManager(max_sessions=2)
        manager.create_session()
        manager.create_session()
        # Idle sessions without viewers are pruned to make room.
        manager.create_session()
        assert len(manager.list_sessions()) == 2

    def test_invalid_limit(self):
        with pytest.raises(ValueError, match="at least 1"):
            SessionManager(max_sessions=0)

    def test_render_feeds_session_queue(self):
        manager = SessionManager()
        session = manager.create_session(seed=1)
        assert session.pending_states.empty()
        session.scheduler.start()
        session.scheduler.tick()
        assert session.pending_states.qsize() == 2
        assert session.pending_states.get_nowait()["tick"] == 0

    def test_session_requires_state_queue(self):
        manager = SessionManager()
        scheduler = manager.create_session().scheduler
        with pytest.raises(TypeError):
            GameSession(session_id="abc", scheduler=scheduler)
