"""
Overcrowding Scenario
---------------------

Raises a danger alert while the person count is above the limit.
The count is part of the message, so each distinct count is a distinct alert.
"""

from typing import Any, Dict, List, Optional

from crowdguard.core.config import Settings
from crowdguard.domain.models import Severity
from crowdguard.processing.scenarios.contracts import (
    BaseScenario,
    ScenarioEvent,
    ScenarioFrameContext,
)
from crowdguard.processing.scenarios.registry import register_scenario


def generate_overcrowding_label(count: int) -> str:
    return f"Overcrowding alert! {count} people detected!"


@register_scenario("overcrowding")
class OvercrowdingScenario(BaseScenario):
    severity = Severity.DANGER

    def __init__(self, config: Dict[str, Any], settings: Optional[Settings] = None):
        super().__init__(config, settings)
        self.limit = int(config.get("limit", self.settings.overcrowding_limit))

    def process(self, frame_context: ScenarioFrameContext) -> List[ScenarioEvent]:
        count = len(frame_context.people)
        if count <= self.limit:
            return []
        return [ScenarioEvent(
            event_type="overcrowding",
            label=generate_overcrowding_label(count),
            severity=self.severity,
            metadata={"count": count, "limit": self.limit},
            detection_indices=list(range(count)),
            frame_index=frame_context.frame_index
        )]
