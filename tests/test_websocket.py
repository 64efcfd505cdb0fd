"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import json

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from copperhead.config import GameConfig
from copperhead.server.app import create_app


@pytest.fixture()
def tc():
    """Starlette TestClient entered as a context manager so the lifespan
    runs and every call shares one event loop."""
    application = create_app(GameConfig(tick_rate_ms=2000, seed=0))
    with TestClient(application) as client:
        yield client


def _create(tc, **body) -> str:
    resp = tc.post("/sessions", json=body)
    assert resp.status_code == 201
    return resp.json()["session_id"]


class TestPlayWebSocket:
    def test_connect_and_receive_initial_state(self, tc):
        sid = _create(tc)
        with tc.websocket_connect(f"/sessions/{sid}/play") as ws:
            state = json.loads(ws.receive_text())
            assert state["state"] == "start"
            assert state["snake"]["body"][0] == [10, 10]
            assert "food" in state

    def test_key_press_broadcasts_new_state(self, tc):
        sid = _create(tc)
        with tc.websocket_connect(f"/sessions/{sid}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"key": "space"}))
            state = json.loads(ws.receive_text())
            assert state["state"] == "running"

    def test_malformed_messages_skipped(self, tc):
        sid = _create(tc)
        with tc.websocket_connect(f"/sessions/{sid}/play") as ws:
            ws.receive_text()
            ws.send_text("not json")
            ws.send_text(json.dumps(["space"]))
            ws.send_text(json.dumps({"key": 5}))
            ws.send_text(json.dumps({"key": "space"}))
            state = json.loads(ws.receive_text())
            assert state["state"] == "running"

    def test_connection_counted(self, tc):
        sid = _create(tc)
        with tc.websocket_connect(f"/sessions/{sid}/play") as ws:
            ws.receive_text()
            summary = tc.get("/sessions").json()[0]
            assert summary["connections"] == 1

    def test_ticks_stream_until_game_over(self, tc):
        sid = _create(tc, tick_rate_ms=10)
        with tc.websocket_connect(f"/sessions/{sid}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"key": "space"}))
            states = []
            while not states or states[-1]["state"] != "game_over":
                states.append(json.loads(ws.receive_text()))
                assert len(states) < 50
            assert states[-1]["tick"] == 10
            ticks = [s["tick"] for s in states]
            assert ticks == sorted(ticks)

    def test_nonexistent_session_rejected(self, tc):
        with pytest.raises(WebSocketDisconnect), tc.websocket_connect(
            "/sessions/nonexistent/play",
        ) as ws:
            ws.receive_text()
