"""
Fall Detection Scenario
-----------------------

Detects falls from the shape of a tracked person's bounding box.

Algorithm:
1. Only identities with more than `window` recorded positions qualify
2. Take the last `window` positions and their height/width ratios
3. Upright at the start (ratio > upright_ratio) and flattened at the end
   (ratio < flat_ratio) means a fall

The check runs every frame an identity qualifies, so a fall keeps alerting
while the window still spans the transition.
"""

import logging
from typing import Any, Dict, List, Optional

from crowdguard.core.config import Settings
from crowdguard.domain.models import Severity
from crowdguard.processing.scenarios.contracts import (
    BaseScenario,
    ScenarioEvent,
    ScenarioFrameContext,
)
from crowdguard.processing.scenarios.fall_detection.config import FallDetectionConfig
from crowdguard.processing.scenarios.registry import register_scenario
from crowdguard.processing.tracking import TrackedIdentity

logger = logging.getLogger(__name__)

DEFAULT_FALL_LABEL = "FALL DETECTED: Person may have fallen down!"


def has_fallen(identity: TrackedIdentity, config: FallDetectionConfig) -> bool:
    """Check the identity's recent box shape for an upright-to-flat transition."""
    if len(identity.positions) <= config.window:
        return False
    ratios = identity.recent_aspect_ratios(config.window)
    return ratios[0] > config.upright_ratio and ratios[-1] < config.flat_ratio


@register_scenario("fall_detection")
class FallDetectionScenario(BaseScenario):
    """Emits a danger alert for every identity whose box collapsed from upright to flat."""

    severity = Severity.DANGER

    def __init__(self, config: Dict[str, Any], settings: Optional[Settings] = None):
        super().__init__(config, settings)
        self.config_obj = FallDetectionConfig(config, self.settings)

    def process(self, frame_context: ScenarioFrameContext) -> List[ScenarioEvent]:
        events = []
        for person_index, identity in enumerate(frame_context.identities):
            if not has_fallen(identity, self.config_obj):
                continue

            logger.info(f"Fall detected for {identity.key} (frame {frame_context.frame_index})")
            events.append(ScenarioEvent(
                event_type="fall_detected",
                label=self._generate_label(),
                severity=self.severity,
                metadata={
                    "identity": identity.key,
                    "aspect_ratios": identity.recent_aspect_ratios(self.config_obj.window),
                },
                detection_indices=[person_index],
                frame_index=frame_context.frame_index
            ))
        return events

    def _generate_label(self) -> str:
        custom_label = self.config_obj.custom_label
        if custom_label and isinstance(custom_label, str) and custom_label.strip():
            return custom_label.strip()
        return DEFAULT_FALL_LABEL
