"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from copperhead.game import GameState


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    seed: int | None = None
    tick_rate_ms: int | None = Field(default=None, ge=10, le=2000)


class InputRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/input."""

    key: str = Field(min_length=1, max_length=32)


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    state: GameState
    score: int
    high_score: int
    tick_rate_ms: int
    connections: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
