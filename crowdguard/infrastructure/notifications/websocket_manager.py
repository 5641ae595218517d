"""WebSocket Manager for managing client connections and broadcasting notifications"""

import json
import logging
from threading import Lock
from typing import Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class WebSocketManager:
    """
    Manages WebSocket connections and broadcasts notifications to connected clients.

    Every client receives every message; the monitor has a single audience.
    """

    def __init__(self):
        """Initialize WebSocket manager"""
        self._connections: Set[WebSocket] = set()
        self._lock = Lock()  # Thread safety for connection management
        logger.info("WebSocketManager initialized")

    async def add_connection(self, websocket: WebSocket) -> None:
        with self._lock:
            self._connections.add(websocket)
        logger.info(f"Added WebSocket connection. Total connections: {self.get_total_connections()}")

    async def remove_connection(self, websocket: WebSocket) -> None:
        with self._lock:
            self._connections.discard(websocket)
        logger.info(f"Removed WebSocket connection. Total connections: {self.get_total_connections()}")

    async def broadcast(self, message: dict) -> int:
        """
        Broadcast a message to all connected clients.

        Args:
            message: Message dictionary (will be JSON serialized)

        Returns:
            Number of connections the message was successfully sent to
        """
        with self._lock:
            connections = self._connections.copy()

        if not connections:
            return 0

        try:
            message_json = json.dumps(message)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize message to JSON: {e}")
            return 0

        sent_count = 0
        disconnected_connections = []

        for websocket in connections:
            try:
                await websocket.send_text(message_json)
                sent_count += 1
            except Exception as e:
                logger.warning(f"Failed to send message to WebSocket connection: {e}")
                disconnected_connections.append(websocket)

        # Clean up disconnected connections
        if disconnected_connections:
            with self._lock:
                for ws in disconnected_connections:
                    self._connections.discard(ws)

        logger.debug(f"Broadcast message sent to {sent_count}/{len(connections)} connections")
        return sent_count

    def get_total_connections(self) -> int:
        with self._lock:
            return len(self._connections)
