"""REST API route handlers for session lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from mode_snake.server.models import (
    CreateSessionRequest,
    MenuRequest,
    ModeRequest,
    SessionSummary,
)
from mode_snake.server.session_manager import GameSession, SessionManager

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _require(manager: SessionManager, session_id: str) -> GameSession:
    try:
        return manager.require_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create an idle game session."""
    manager = _get_manager(request)
    try:
        session = manager.create_session(
            mode=body.mode,
            tick_rate=body.tick_rate,
            grid_width=body.grid_width,
            grid_height=body.grid_height,
            seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List all sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the full game state."""
    session = _require(_get_manager(request), session_id)
    result = session.summary().model_dump()
    result["menu_visible"] = session.scheduler.menu_visible
    result["state"] = session.engine.get_state()
    return result


@router.post("/{session_id}/start")
async def start_session(session_id: str, request: Request) -> dict:
    """Start a fresh run in the selected mode."""
    manager = _get_manager(request)
    _require(manager, session_id)
    try:
        state = manager.start_session(session_id)
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"status": "started", "session_id": session_id, "state": state}


@router.post("/{session_id}/stop")
async def stop_session(session_id: str, request: Request) -> dict:
    """End the current run and record the best score."""
    manager = _get_manager(request)
    session = _require(manager, session_id)
    new_best = manager.stop_session(session_id)
    return {
        "status": "stopped",
        "session_id": session_id,
        "new_best": new_best,
        "best_score": session.engine.scores.best_score,
    }


@router.post("/{session_id}/menu")
async def toggle_menu(
    session_id: str, body: MenuRequest, request: Request,
) -> dict:
    """Show or hide the menu; showing it abandons the run."""
    manager = _get_manager(request)
    session = _require(manager, session_id)
    manager.toggle_menu(session_id, body.show)
    return {
        "menu_visible": session.scheduler.menu_visible,
        "phase": session.scheduler.phase.value,
    }


@router.put("/{session_id}/mode")
async def set_mode(
    session_id: str, body: ModeRequest, request: Request,
) -> dict:
    """Select the mode for the next run. Unknown modes become classic."""
    manager = _get_manager(request)
    _require(manager, session_id)
    return {"mode": manager.set_mode(session_id, body.mode)}
