"""
Pipeline Data Contracts
-----------------------

Defines the per-frame result handed from CrowdPipeline to its consumers
(the runner, the WebSocket publisher, tests).
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from typing import Any, Dict, List

# -----------------------------------------------------------------------------
# Application
# -----------------------------------------------------------------------------
from crowdguard.domain.models import AlertEntry, OccupancyStats
from crowdguard.processing.detections.contracts import ClassifiedPerson
from crowdguard.processing.drawing.overlays import OverlayBox
from crowdguard.processing.scenarios.contracts import ScenarioEvent


@dataclass
class FrameResult:
    """
    Everything one frame produced.

    `candidates` are the raw scenario outputs; `alerts` are the entries the
    dispatcher actually accepted into the log.
    """

    frame_index: int
    timestamp: float
    stats: OccupancyStats
    people: List[ClassifiedPerson] = field(default_factory=list)
    candidates: List[ScenarioEvent] = field(default_factory=list)
    alerts: List[AlertEntry] = field(default_factory=list)
    overlays: List[OverlayBox] = field(default_factory=list)

    def overlays_to_dict(self) -> List[Dict[str, Any]]:
        return [overlay.to_dict() for overlay in self.overlays]
