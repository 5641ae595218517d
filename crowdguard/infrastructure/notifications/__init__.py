"""Notifications infrastructure: alert dispatch and real-time delivery"""

from .alert_dispatcher import AlertDispatcher, DEFAULT_COOLDOWNS_MS
from .notification_service import NotificationService
from .websocket_manager import WebSocketManager

__all__ = [
    "AlertDispatcher",
    "DEFAULT_COOLDOWNS_MS",
    "NotificationService",
    "WebSocketManager",
]
