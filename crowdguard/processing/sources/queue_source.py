"""
Queue detection source
----------------------

Push-based source: an external detector (for example a browser running the
model client-side) posts per-frame detections, and the frame loop pulls them.

The queue is bounded. When the loop falls behind, the oldest batch is
dropped so the loop always works on the freshest frames.
"""

import asyncio
import logging
from typing import Optional

from crowdguard.processing.detections.contracts import DetectionBatch

logger = logging.getLogger(__name__)


class QueueDetectionSource:
    """Bounded asyncio queue of DetectionBatch objects."""

    def __init__(self, maxsize: int = 30, read_timeout: Optional[float] = 1.0):
        """
        Args:
            maxsize: Maximum number of buffered batches
            read_timeout: Seconds read() waits before returning None (None waits forever)
        """
        self._queue: "asyncio.Queue[DetectionBatch]" = asyncio.Queue(maxsize=maxsize)
        self.read_timeout = read_timeout
        self.dropped = 0

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def submit(self, batch: DetectionBatch) -> bool:
        """
        Buffer a batch without blocking.

        Returns:
            False if an older batch had to be dropped to make room
        """
        dropped = False
        if self._queue.full():
            self._queue.get_nowait()
            self.dropped += 1
            dropped = True
            logger.debug(f"Detection queue full, dropped oldest batch (total dropped={self.dropped})")
        self._queue.put_nowait(batch)
        return not dropped

    async def read(self) -> Optional[DetectionBatch]:
        if self.read_timeout is None:
            return await self._queue.get()
        try:
            return await asyncio.wait_for(self._queue.get(), timeout=self.read_timeout)
        except asyncio.TimeoutError:
            return None

    def clear(self) -> None:
        while not self._queue.empty():
            self._queue.get_nowait()

    async def __aenter__(self) -> "QueueDetectionSource":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        # Batches posted while stopped must not be replayed on restart
        self.clear()
