"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from copperhead.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Send key presses, receive the game snapshot whenever it changes."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    manager.attach(session, websocket)
    logger.info("Client connected to session %s.", session_id)

    # Initial snapshot so the client can draw immediately.
    await websocket.send_text(session.payload())

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            key = msg.get("key")
            if not isinstance(key, str):
                continue

            try:
                await manager.press(session_id, key)
            except KeyError:
                break
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    finally:
        manager.detach(session, websocket)
