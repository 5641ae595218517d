"""
Animal Presence Scenario
------------------------

Warns about animals in the monitored area.

Reads the raw detections directly; the person shape filter does not apply.
One candidate alert is emitted per qualifying animal detection.
"""

from typing import Any, Dict, Iterable, List, Optional, Set

from crowdguard.core.config import Settings
from crowdguard.domain.models import Severity
from crowdguard.processing.detections.contracts import RawDetection
from crowdguard.processing.scenarios.contracts import (
    BaseScenario,
    ScenarioEvent,
    ScenarioFrameContext,
)
from crowdguard.processing.scenarios.registry import register_scenario


def generate_animal_label(class_name: str) -> str:
    return f"Animal detected: {class_name}"


def is_watched_animal(detection: RawDetection, classes: Set[str], min_score: float) -> bool:
    return detection.class_name in classes and detection.score > min_score


def find_animals(
    detections: Iterable[RawDetection],
    classes: Set[str],
    min_score: float
) -> List[RawDetection]:
    """Raw detections of a watched animal class scoring above min_score."""
    return [d for d in detections if is_watched_animal(d, classes, min_score)]


@register_scenario("animal_presence")
class AnimalPresenceScenario(BaseScenario):
    severity = Severity.WARNING

    def __init__(self, config: Dict[str, Any], settings: Optional[Settings] = None):
        super().__init__(config, settings)
        classes = config.get("classes") or self.settings.animal_classes
        self.classes = {str(name).strip().lower() for name in classes}
        self.min_score = float(config.get("min_score", self.settings.animal_min_score))

    def watched_animals(self, detections: Iterable[RawDetection]) -> List[RawDetection]:
        return find_animals(detections, self.classes, self.min_score)

    def process(self, frame_context: ScenarioFrameContext) -> List[ScenarioEvent]:
        return [
            ScenarioEvent(
                event_type="animal_detected",
                label=generate_animal_label(detection.class_name),
                severity=self.severity,
                metadata={"class": detection.class_name, "score": detection.score},
                detection_indices=[index],
                frame_index=frame_context.frame_index
            )
            for index, detection in enumerate(frame_context.batch.detections)
            if is_watched_animal(detection, self.classes, self.min_score)
        ]
