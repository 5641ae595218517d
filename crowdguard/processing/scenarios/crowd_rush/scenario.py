"""
Crowd Rush Scenario
-------------------

Warns when the person count jumps by more than `delta` in a single frame.
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

DEFAULT_RUSH_LABEL = "SUDDEN RUSH: Rapid crowd increase detected!"


@register_scenario("crowd_rush")
class CrowdRushScenario(BaseScenario):
    severity = Severity.WARNING

    def __init__(self, config: Dict[str, Any], settings: Optional[Settings] = None):
        super().__init__(config, settings)
        self.delta = int(config.get("delta", self.settings.rush_delta))
        self.label = config.get("label") or DEFAULT_RUSH_LABEL

    def process(self, frame_context: ScenarioFrameContext) -> List[ScenarioEvent]:
        count = len(frame_context.people)
        if count <= frame_context.previous_count + self.delta:
            return []
        return [ScenarioEvent(
            event_type="sudden_rush",
            label=self.label,
            severity=self.severity,
            metadata={"previous_count": frame_context.previous_count, "count": count},
            frame_index=frame_context.frame_index
        )]
