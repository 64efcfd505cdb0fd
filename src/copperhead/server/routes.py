"""REST API route handlers for session lifecycle and input."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from copperhead.server.models import (
    CreateSessionRequest,
    ErrorResponse,
    InputRequest,
    SessionSummary,
)
from copperhead.server.session_manager import SessionManager

router = APIRouter(prefix="/sessions", tags=["sessions"])

_NOT_FOUND = {404: {"model": ErrorResponse}}


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new game session in the START state."""
    manager = _get_manager(request)
    try:
        session = manager.create_session(
            seed=body.seed, tick_rate_ms=body.tick_rate_ms,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List live sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}", responses=_NOT_FOUND)
async def get_session(session_id: str, request: Request) -> dict:
    """Return the current game snapshot."""
    session = _get_manager(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    return session.game.snapshot().to_dict()


@router.post("/{session_id}/input", responses=_NOT_FOUND)
async def send_input(
    session_id: str, body: InputRequest, request: Request,
) -> dict:
    """Deliver a key press. Unknown keys are ignored."""
    manager = _get_manager(request)
    try:
        snapshot = await manager.press(session_id, body.key)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return snapshot.to_dict()


@router.delete("/{session_id}", status_code=204, responses=_NOT_FOUND)
async def delete_session(session_id: str, request: Request) -> Response:
    """Stop a session and release it."""
    try:
        await _get_manager(request).close_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=204)
