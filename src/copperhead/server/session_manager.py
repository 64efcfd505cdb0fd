"""In-memory session registry and per-session async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from copperhead.game import Game, GameSnapshot, GameState
from copperhead.server.models import SessionSummary

logger = logging.getLogger(__name__)

_DEFAULT_TICK_RATE_MS = 100
_MAX_SESSIONS = 100
_MAX_FINISHED_SESSIONS = 20
_IDLE_TIMEOUT = 600.0  # seconds without input or sockets


@dataclass
class GameSession:
    """One game plus the sockets watching it."""

    session_id: str
    game: Game
    tick_rate_ms: int
    sockets: list[WebSocket] = field(default_factory=list)
    last_active_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)
    _last_payload: str | None = field(default=None, repr=False)

    def touch(self) -> None:
        self.last_active_at = time.monotonic()

    def refresh_finished(self) -> None:
        """Stamp the moment the game ended; clear it once it restarts."""
        if self.game.state != GameState.GAME_OVER:
            self.finished_at = None
        elif self.finished_at is None:
            self.finished_at = time.monotonic()

    def payload(self) -> str:
        return _encode(self.game.snapshot())

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            state=self.game.state,
            score=self.game.score,
            high_score=self.game.high_score,
            tick_rate_ms=self.tick_rate_ms,
            connections=len(self.sockets),
        )


def _encode(snapshot: GameSnapshot) -> str:
    return json.dumps(snapshot.to_dict(), separators=(",", ":"))


class SessionManager:
    """Central registry of independent single-player sessions.

    Each session owns one :class:`Game` and one tick task. Input and ticks
    for a session are serialized through its lock. Sessions nobody is
    watching are pruned once their game is over or they sit idle.
    """

    def __init__(
        self,
        default_tick_rate_ms: int = _DEFAULT_TICK_RATE_MS,
        default_seed: int | None = None,
        max_sessions: int = _MAX_SESSIONS,
        max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
        idle_timeout: float = _IDLE_TIMEOUT,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        if idle_timeout <= 0:
            raise ValueError("idle_timeout must be positive.")
        self._sessions: dict[str, GameSession] = {}
        self._default_tick_rate_ms = default_tick_rate_ms
        self._default_seed = default_seed
        self._max_sessions = max_sessions
        self._max_finished_sessions = max_finished_sessions
        self._idle_timeout = idle_timeout

    def create_session(
        self,
        seed: int | None = None,
        tick_rate_ms: int | None = None,
    ) -> GameSession:
        """Create a session and start its tick loop.

        Must be called from within a running event loop.
        """
        self._prune_sessions()
        if len(self._sessions) >= self._max_sessions:
            raise ValueError("Session limit reached. Try again later.")

        game = Game(seed=seed if seed is not None else self._default_seed)
        session = GameSession(
            session_id=uuid.uuid4().hex[:12],
            game=game,
            tick_rate_ms=tick_rate_ms or self._default_tick_rate_ms,
        )
        session._last_payload = session.payload()
        self._sessions[session.session_id] = session
        session._task = asyncio.create_task(self._tick_loop(session))
        logger.info(
            "Session %s created (tick=%dms).",
            session.session_id, session.tick_rate_ms,
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

    async def press(self, session_id: str, key: object) -> GameSnapshot:
        """Deliver one input event to a session and return its snapshot."""
        session = self.require_session(session_id)
        async with session.lock:
            session.game.pressed(key)
            session.touch()
            session.refresh_finished()
            snapshot = session.game.snapshot()
        await self._broadcast(session)
        return snapshot

    def attach(self, session: GameSession, websocket: WebSocket) -> None:
        session.sockets.append(websocket)
        session.touch()

    def detach(self, session: GameSession, websocket: WebSocket) -> None:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
            session.touch()

    def _prune_sessions(self) -> None:
        """Drop unwatched sessions that expired or whose game is over.

        Idle sessions past the timeout always go. Finished ones are kept up
        to ``max_finished_sessions``, oldest first out, and further while
        the registry is full.
        """
        now = time.monotonic()
        unwatched = [s for s in self._sessions.values() if not s.sockets]
        expired = [
            s for s in unwatched
            if now - s.last_active_at >= self._idle_timeout
        ]
        expired_ids = {s.session_id for s in expired}
        finished = sorted(
            (
                s for s in unwatched
                if s.finished_at is not None and s.session_id not in expired_ids
            ),
            key=lambda s: s.finished_at,
        )
        overflow = max(
            len(finished) - self._max_finished_sessions,
            len(self._sessions) - len(expired) - self._max_sessions + 1,
            0,
        )
        stale = expired + finished[:overflow]
        for session in stale:
            self._sessions.pop(session.session_id, None)
            if session._task is not None and not session._task.done():
                session._task.cancel()
        if stale:
            logger.info(
                "Pruned %d idle or finished sessions (retaining up to %d finished).",
                len(stale), self._max_finished_sessions,
            )

    async def close_session(self, session_id: str) -> None:
        """Stop a session's tick loop and drop it from the registry."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        await self._stop(session)
        logger.info("Session %s closed.", session_id)

    async def _tick_loop(self, session: GameSession) -> None:
        """Advance the game at a fixed rate, broadcasting state changes."""
        tick_interval = session.tick_rate_ms / 1000.0
        try:
            while True:
                await asyncio.sleep(tick_interval)
                async with session.lock:
                    session.game.update()
                    session.refresh_finished()
                await self._broadcast(session)
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Tick loop error in session %s.", session.session_id)
            self._sessions.pop(session.session_id, None)
            await self._close_connections(session)

    async def _broadcast(self, session: GameSession) -> None:
        """Send the snapshot to every socket if it changed since last sent."""
        payload = session.payload()
        if payload == session._last_payload:
            return
        session._last_payload = payload

        dead: list[WebSocket] = []
        # Iterate over a copy so disconnect handlers can mutate the list.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)
        for ws in dead:
            self.detach(session, ws)

    async def _stop(self, session: GameSession) -> None:
        task = session._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        await self._close_connections(session)

    async def _close_connections(self, session: GameSession) -> None:
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session closed.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )
        session.sockets.clear()

    async def cleanup(self) -> None:
        """Cancel all tick loops and forget every session."""
        sessions = list(self._sessions.values())
        self._sessions.clear()
        for session in sessions:
            await self._stop(session)
        logger.info("SessionManager cleanup complete.")
