"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from mode_snake.persistence import BestScoreStore
from mode_snake.server.routes import router
from mode_snake.server.session_manager import SessionManager
from mode_snake.server.websocket import ws_router


def create_app(store: BestScoreStore | None = None) -> FastAPI:
    """Build and return the FastAPI application."""

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.session_manager = SessionManager(store=store)
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Mode Snake API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
