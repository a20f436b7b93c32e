"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    mode: str = "classic"
    tick_rate: float = Field(default=10.0, gt=0, le=60)
    grid_width: int = Field(default=20, ge=4, le=100)
    grid_height: int = Field(default=20, ge=4, le=100)
    seed: int | None = None


class ModeRequest(BaseModel):
    """Request body for PUT /sessions/{session_id}/mode."""

    mode: str


class MenuRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/menu."""

    show: bool = True


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    phase: str
    mode: str
    score: int
    best_score: int
    tick_rate: float


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
