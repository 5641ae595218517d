"""
Altercation Scenario
--------------------

Flags pairs of people whose boxes are unusually close together.

A pair qualifies when the distance between their centers is below
`distance_factor` times the average width of the two boxes. Every pair is
checked every frame; sustained contact keeps producing candidates and the
dispatcher rate-limits them.
"""

import math
from itertools import combinations
from typing import Any, Dict, List, Optional

from crowdguard.core.config import Settings
from crowdguard.domain.models import Severity
from crowdguard.processing.detections.contracts import ClassifiedPerson
from crowdguard.processing.scenarios.contracts import (
    BaseScenario,
    ScenarioEvent,
    ScenarioFrameContext,
)
from crowdguard.processing.scenarios.registry import register_scenario

DEFAULT_ALTERCATION_LABEL = "PHYSICAL ALTERCATION: Possible fight detected!"


def is_close_contact(first: ClassifiedPerson, second: ClassifiedPerson, distance_factor: float) -> bool:
    (ax, ay), (bx, by) = first.center, second.center
    average_width = (first.bbox[2] + second.bbox[2]) / 2.0
    return math.hypot(ax - bx, ay - by) < average_width * distance_factor


@register_scenario("altercation")
class AltercationScenario(BaseScenario):
    """Emits a danger alert for each pair of people in close contact."""

    severity = Severity.DANGER

    def __init__(self, config: Dict[str, Any], settings: Optional[Settings] = None):
        super().__init__(config, settings)
        self.distance_factor = float(
            config.get("distance_factor", self.settings.altercation_distance_factor)
        )
        self.label = config.get("label") or DEFAULT_ALTERCATION_LABEL

    def process(self, frame_context: ScenarioFrameContext) -> List[ScenarioEvent]:
        events = []
        for (i, first), (j, second) in combinations(enumerate(frame_context.people), 2):
            if is_close_contact(first, second, self.distance_factor):
                events.append(ScenarioEvent(
                    event_type="altercation",
                    label=self.label,
                    severity=self.severity,
                    detection_indices=[i, j],
                    frame_index=frame_context.frame_index
                ))
        return events
