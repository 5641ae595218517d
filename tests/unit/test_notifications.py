"""
Unit tests for NotificationService, WebSocketManager and MonitorSession publishing
"""
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from crowdguard.application import MonitorSession
from crowdguard.core.exceptions import PipelineStateError
from crowdguard.domain.models import AlertEntry, OccupancyStats, Severity
from crowdguard.infrastructure.audio import LoggingSpeechEngine
from crowdguard.infrastructure.notifications import NotificationService, WebSocketManager
from crowdguard.processing.pipeline import FrameResult

ENTRY = AlertEntry(
    time=datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc),
    message="Animal detected: dog",
    severity=Severity.WARNING,
)


def _websocket(fail=False):
    websocket = MagicMock()
    websocket.send_text = AsyncMock(side_effect=RuntimeError("closed") if fail else None)
    return websocket


class TestNotificationService:
    def test_format_alert(self):
        assert NotificationService.format_alert(ENTRY) == {
            "time": "2025-01-15T12:00:00Z",
            "display_time": "12:00:00",
            "message": "Animal detected: dog",
            "severity": "warning",
        }

    def test_format_alert_notification(self, mock_settings):
        notification = NotificationService.format_alert_notification(ENTRY)
        assert notification["type"] == "alert_notification"
        assert notification["alert"]["message"] == "Animal detected: dog"

    def test_format_stats_notification(self):
        stats = OccupancyStats(current_count=2, total_in=2, peak_count=2, adult_count=2)
        notification = NotificationService.format_stats_notification(
            stats, 7, voice={"enabled": True, "speaking": False}
        )
        assert notification["type"] == "stats_update"
        assert notification["frame_index"] == 7
        assert notification["stats"]["current_count"] == 2
        assert notification["overlays"] == []
        assert notification["voice"]["enabled"] is True


class TestWebSocketManager:
    """Tests for broadcast and dead connection cleanup"""

    @pytest.mark.asyncio
    async def test_broadcast_to_all(self):
        manager = WebSocketManager()
        first, second = _websocket(), _websocket()
        await manager.add_connection(first)
        await manager.add_connection(second)

        sent = await manager.broadcast({"type": "stats_update"})

        assert sent == 2
        first.send_text.assert_awaited_once_with('{"type": "stats_update"}')

    @pytest.mark.asyncio
    async def test_failed_connection_removed(self):
        manager = WebSocketManager()
        await manager.add_connection(_websocket())
        await manager.add_connection(_websocket(fail=True))

        assert await manager.broadcast({"type": "x"}) == 1
        assert manager.get_total_connections() == 1

    @pytest.mark.asyncio
    async def test_broadcast_without_connections(self):
        assert await WebSocketManager().broadcast({"type": "x"}) == 0


class TestMonitorSession:
    """Tests for session wiring and publishing"""

    @pytest.fixture
    def session(self, settings):
        return MonitorSession(settings=settings, speech_engine=LoggingSpeechEngine(seconds_per_char=0))

    def test_submit_while_stopped_raises(self, session):
        with pytest.raises(PipelineStateError):
            session.submit_frame([], frame_width=640, frame_height=480)

    @pytest.mark.asyncio
    async def test_submit_while_running_queues_batch(self, session):
        await session.start()
        try:
            batch = session.submit_frame(
                [{"class": "person", "score": 0.9, "bbox": [0, 0, 60, 150]}, {"bogus": True}],
                frame_width=640,
                frame_height=480,
            )
            assert len(batch.detections) == 1
        finally:
            await session.aclose()

    @pytest.mark.asyncio
    async def test_publish_sends_stats_then_alerts(self, session, mock_settings):
        session.websocket_manager = MagicMock()
        session.websocket_manager.get_total_connections.return_value = 1
        session.websocket_manager.broadcast = AsyncMock(return_value=1)
        result = FrameResult(frame_index=3, timestamp=0.0, stats=OccupancyStats(), alerts=[ENTRY])

        await session.publish(result)

        types = [c.args[0]["type"] for c in session.websocket_manager.broadcast.await_args_list]
        assert types == ["stats_update", "alert_notification"]

    @pytest.mark.asyncio
    async def test_publish_skipped_without_clients(self, session):
        session.websocket_manager = MagicMock()
        session.websocket_manager.get_total_connections.return_value = 0
        session.websocket_manager.broadcast = AsyncMock()

        await session.publish(FrameResult(frame_index=1, timestamp=0.0, stats=OccupancyStats()))

        session.websocket_manager.broadcast.assert_not_awaited()

    def test_voice_status(self, session):
        assert session.voice_status() == {"enabled": True, "speaking": False, "pending": 0}
