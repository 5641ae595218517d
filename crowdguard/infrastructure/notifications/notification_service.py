"""Notification Service for formatting pipeline output into client payloads"""

import logging
from typing import Any, Dict, List, Optional

from ...domain.models import AlertEntry, OccupancyStats
from ...utils.datetime_utils import now_iso, to_display_time, to_iso

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Service for formatting alerts and stats into notification payloads.

    Payloads are plain JSON-serializable dicts sent to web clients via
    WebSocket and returned by the HTTP API.
    """

    @staticmethod
    def format_alert(entry: AlertEntry) -> Dict[str, Any]:
        return {
            "time": to_iso(entry.time),
            "display_time": to_display_time(entry.time),
            "message": entry.message,
            "severity": entry.severity.value,
        }

    @staticmethod
    def format_alert_notification(entry: AlertEntry) -> Dict[str, Any]:
        """
        Format an accepted alert into a notification message.

        Args:
            entry: Alert log entry

        Returns:
            Notification dictionary ready for WebSocket transmission
        """
        return {
            "type": "alert_notification",
            "alert": NotificationService.format_alert(entry),
            "received_at": now_iso(),
        }

    @staticmethod
    def format_stats_notification(
        stats: OccupancyStats,
        frame_index: int,
        overlays: Optional[List[Dict[str, Any]]] = None,
        voice: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Format a per-frame stats snapshot.

        Args:
            stats: Occupancy counters after the frame
            frame_index: Frame sequence number
            overlays: Render-ready overlay boxes for this frame
            voice: Voice status ({"enabled", "speaking"})
        """
        notification = {
            "type": "stats_update",
            "frame_index": frame_index,
            "stats": stats.to_dict(),
            "overlays": overlays or [],
        }
        if voice is not None:
            notification["voice"] = voice
        return notification
