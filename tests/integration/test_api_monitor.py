"""
Integration tests for the monitor API endpoints.
Runs the full app lifespan with the logging speech engine (no audio, no network).
Use: pytest tests/unit/ for fast unit-only runs.
"""
import os
import time
from unittest.mock import patch

import pytest

pytestmark = pytest.mark.integration
from fastapi.testclient import TestClient

from crowdguard.core.config import reset_settings


def _frame(count, width=640, height=480):
    return {
        "frame_width": width,
        "frame_height": height,
        "detections": [
            {"class": "person", "score": 0.9, "bbox": [i * 70, 100, 60, 150]}
            for i in range(count)
        ],
    }


def _wait_for(client, predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        stats = client.get("/api/v1/monitor/stats").json()
        if predicate(stats):
            return stats
        time.sleep(0.05)
    raise AssertionError("frame was not processed in time")


@pytest.fixture
def client():
    """Create test client with a fresh session and headless voice."""
    env = {"CROWDGUARD_TTS_PROVIDER": "log", "CROWDGUARD_TIMEZONE": "UTC", "CROWDGUARD_FPS": "20"}
    with patch.dict(os.environ, env):
        reset_settings()
        from crowdguard.main import app

        with TestClient(app) as c:
            yield c
    reset_settings()


class TestMonitorAPI:
    """Tests for /api/v1/monitor endpoints"""

    def test_frames_rejected_while_stopped(self, client):
        response = client.post("/api/v1/monitor/frames", json=_frame(1))
        assert response.status_code == 409

    def test_invalid_payload_returns_422(self, client):
        client.post("/api/v1/monitor/start")
        response = client.post("/api/v1/monitor/frames", json={"frame_width": 0, "frame_height": 480})
        assert response.status_code == 422
        client.post("/api/v1/monitor/stop")

    def test_full_session_flow(self, client):
        start = client.post("/api/v1/monitor/start")
        assert start.status_code == 200
        assert start.json()["running"] is True

        response = client.post("/api/v1/monitor/frames", json=_frame(9))
        assert response.status_code == 202
        assert response.json()["detections"] == 9

        stats = _wait_for(client, lambda s: s["current_count"] == 9)
        assert stats["total_in"] == 9
        assert stats["peak_count"] == 9
        assert stats["adult_count"] == 9

        alerts = client.get("/api/v1/monitor/alerts").json()
        assert [a["message"] for a in alerts] == [
            "SUDDEN RUSH: Rapid crowd increase detected!",
            "Overcrowding alert! 9 people detected!",
        ]
        assert [a["severity"] for a in alerts] == ["warning", "danger"]

        client.post("/api/v1/monitor/frames", json=_frame(2))
        stats = _wait_for(client, lambda s: s["current_count"] == 2)
        assert stats["total_out"] == 7

        stop = client.post("/api/v1/monitor/stop")
        assert stop.json()["running"] is False
        # Counters survive a stop
        assert client.get("/api/v1/monitor/stats").json()["peak_count"] == 9
        assert client.post("/api/v1/monitor/frames", json=_frame(1)).status_code == 409

    def test_history_shape(self, client):
        data = client.get("/api/v1/monitor/history").json()
        assert data == {"chart": [], "history": []}

    def test_voice_controls(self, client):
        assert client.get("/api/v1/monitor/voice").json()["enabled"] is True

        toggled = client.post("/api/v1/monitor/voice/toggle").json()
        assert toggled["enabled"] is False
        assert toggled["speaking"] is False

        assert client.post("/api/v1/monitor/voice/toggle").json()["enabled"] is True

        cancelled = client.post("/api/v1/monitor/voice/cancel").json()
        assert cancelled["speaking"] is False
        assert cancelled["pending"] == 0

    def test_status(self, client):
        status = client.get("/api/v1/monitor/status").json()
        assert status["running"] is False
        assert status["fps"] == 20

    def test_websocket_receives_updates(self, client):
        with client.websocket_connect("/api/v1/monitor/ws") as websocket:
            hello = websocket.receive_json()
            assert hello["type"] == "connection_established"
            assert hello["voice"]["enabled"] is True

            client.post("/api/v1/monitor/start")
            client.post("/api/v1/monitor/frames", json=_frame(9))

            update = websocket.receive_json()
            assert update["type"] == "stats_update"
            assert update["stats"]["current_count"] == 9
            assert [o["label"] for o in update["overlays"]][:2] == ["PERSON-1 90%", "PERSON-2 90%"]

            alert = websocket.receive_json()
            assert alert["type"] == "alert_notification"
            assert alert["alert"]["message"] == "SUDDEN RUSH: Rapid crowd increase detected!"

            client.post("/api/v1/monitor/stop")
