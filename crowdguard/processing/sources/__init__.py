"""
Sources Module
--------------

Provides per-frame detections to the frame loop:
- DetectionSource: Protocol every source implements
- QueueDetectionSource: Push-based source fed by the HTTP API
"""

from crowdguard.processing.sources.contracts import DetectionSource
from crowdguard.processing.sources.queue_source import QueueDetectionSource

__all__ = ["DetectionSource", "QueueDetectionSource"]
