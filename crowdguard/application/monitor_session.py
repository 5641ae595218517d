"""
Monitor Session
---------------

Wires one monitoring session together: detection source, pipeline, frame
loop, alert dispatcher, voice queue and WebSocket publishing.

The application creates exactly one session at startup; the HTTP layer only
talks to this object.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from ..core.config import Settings, get_settings
from ..core.exceptions import PipelineStateError
from ..domain.models import Severity
from ..infrastructure.audio import SpeechEngine, VoiceQueue, WebSocketAudioPlayer, create_speech_engine
from ..infrastructure.notifications import AlertDispatcher, NotificationService, WebSocketManager
from ..processing.detections import DetectionBatch, DetectionBuilder
from ..processing.history import CrowdHistoryRecorder
from ..processing.pipeline import CrowdPipeline, FrameResult, PipelineContext, PipelineRunner
from ..processing.sources import QueueDetectionSource

logger = logging.getLogger(__name__)


class MonitorSession:
    """Owns every long-lived component of the monitor."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        speech_engine: Optional[SpeechEngine] = None,
        websocket_manager: Optional[WebSocketManager] = None,
        scenario_configs: Optional[List[Dict[str, Any]]] = None,
    ):
        """
        Args:
            settings: Application settings
            speech_engine: Speech engine (built from settings when omitted)
            websocket_manager: Broadcast target for per-frame notifications
            scenario_configs: Behavior scenario configs (all built-ins when omitted)
        """
        self.settings = settings or get_settings()
        settings = self.settings

        self.websocket_manager = websocket_manager or WebSocketManager()
        if speech_engine is None:
            player = WebSocketAudioPlayer(self.websocket_manager)
            speech_engine = create_speech_engine(settings, player=player, on_stop=player.stop)
        self.voice = VoiceQueue(
            speech_engine,
            enabled=settings.voice_enabled,
            default_cooldown_ms=settings.voice_default_cooldown_ms,
        )
        self.dispatcher = AlertDispatcher(
            voice=self.voice,
            log_size=settings.alert_log_size,
            cooldowns_ms={
                Severity.DANGER: settings.danger_cooldown_ms,
                Severity.WARNING: settings.warning_cooldown_ms,
                Severity.INFO: settings.info_cooldown_ms,
            },
        )
        self.context = PipelineContext(settings, scenario_configs)
        self.pipeline = CrowdPipeline(self.context, self.dispatcher)
        self.recorder = CrowdHistoryRecorder(
            chart_interval=settings.chart_interval_seconds,
            chart_size=settings.chart_size,
            history_interval=settings.history_interval_seconds,
            history_size=settings.history_rows,
        )
        self.source = QueueDetectionSource(maxsize=settings.frame_queue_size)
        self.runner = PipelineRunner(
            self.pipeline,
            self.source,
            recorder=self.recorder,
            on_frame=self.publish,
        )

    # ------------------------------------------------------------------
    # Frame input
    # ------------------------------------------------------------------

    def submit_frame(
        self,
        detections: List[Dict[str, Any]],
        frame_width: int,
        frame_height: int,
        frame_index: Optional[int] = None,
    ) -> DetectionBatch:
        """
        Queue one frame of detections for the frame loop.

        Raises:
            PipelineStateError: Monitoring is stopped
        """
        if not self.runner.is_running:
            raise PipelineStateError("Monitoring is not running")
        batch = DetectionBuilder.from_payload(
            detections,
            frame_width=frame_width,
            frame_height=frame_height,
            timestamp=time.monotonic(),
            frame_index=frame_index or 0,
        )
        self.source.submit(batch)
        return batch

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------

    async def publish(self, result: FrameResult) -> None:
        """Broadcast the frame's stats, then each newly accepted alert."""
        manager = self.websocket_manager
        if manager.get_total_connections() == 0:
            return
        await manager.broadcast(NotificationService.format_stats_notification(
            result.stats,
            result.frame_index,
            overlays=result.overlays_to_dict(),
            voice=self.voice_status(),
        ))
        for entry in result.alerts:
            await manager.broadcast(NotificationService.format_alert_notification(entry))

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def voice_status(self) -> Dict[str, Any]:
        return {
            "enabled": self.voice.enabled,
            "speaking": self.voice.is_speaking,
            "pending": len(self.voice.pending),
        }

    def runner_status(self) -> Dict[str, Any]:
        return self.context.to_status_dict()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> bool:
        return await self.runner.start()

    async def stop(self) -> bool:
        return await self.runner.stop()

    async def aclose(self) -> None:
        await self.runner.stop()
        await self.voice.aclose()
        logger.info("Monitor session closed")
