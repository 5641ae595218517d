"""
Scenario Data Contracts
-----------------------

Defines the base interfaces for behavior scenarios:
- BaseScenario: Abstract base class for all scenarios
- ScenarioFrameContext: Per-frame input from pipeline
- ScenarioEvent: Candidate alert emitted by scenarios

Events are candidates only; deduplication and rate limiting happen in the
alert dispatcher.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from crowdguard.core.config import Settings, get_settings
from crowdguard.domain.models import Severity
from crowdguard.processing.detections.contracts import ClassifiedPerson, DetectionBatch
from crowdguard.processing.tracking import TrackedIdentity


@dataclass
class ScenarioFrameContext:
    """
    Per-frame context provided to scenarios.

    Built after the tracker update, so identity histories already include
    this frame. `identities` is aligned index-for-index with `people`.
    """
    batch: DetectionBatch  # Raw detections (animal presence reads these)
    people: List[ClassifiedPerson]
    identities: List[TrackedIdentity]
    previous_count: int  # Classified people in the previous frame
    frame_index: int
    timestamp: float


@dataclass
class ScenarioEvent:
    """
    Candidate alert emitted by a scenario.

    `label` is the human-readable alert message; the dispatcher compares
    labels verbatim for adjacent-repeat suppression.
    """
    event_type: str  # "fall_detected", "altercation", "sudden_rush", ...
    label: str
    severity: Severity
    metadata: Dict[str, Any] = field(default_factory=dict)
    detection_indices: List[int] = field(default_factory=list)
    frame_index: Optional[int] = None


class BaseScenario(ABC):
    """
    Base class for all behavior scenarios.

    Scenarios read the current frame and the tracker's histories and
    return candidate alerts. They must not block.
    """

    severity: Severity = Severity.WARNING

    def __init__(self, config: Dict[str, Any], settings: Optional[Settings] = None):
        """
        Initialize scenario with configuration.

        Args:
            config: Scenario-specific configuration ({"type": ..., overrides})
            settings: Application settings supplying threshold defaults
        """
        self.config = config
        self.settings = settings or get_settings()
        self.scenario_id = config.get("type", "unknown")

    @abstractmethod
    def process(self, frame_context: ScenarioFrameContext) -> List[ScenarioEvent]:
        """
        Process a single frame.

        Returns:
            List of candidate alerts (may be empty)
        """
        pass
