"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from copperhead.config import GameConfig
from copperhead.server.routes import router
from copperhead.server.session_manager import SessionManager
from copperhead.server.websocket import ws_router


@asynccontextmanager
async def _lifespan(app: FastAPI):
    config: GameConfig = app.state.config
    app.state.session_manager = SessionManager(
        default_tick_rate_ms=config.tick_rate_ms, default_seed=config.seed,
    )
    yield
    await app.state.session_manager.cleanup()


def create_app(config: GameConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(title="Copperhead API", version="0.1.0", lifespan=_lifespan)
    app.state.config = config if config is not None else GameConfig()
    app.include_router(router)
    app.include_router(ws_router)
    return app
