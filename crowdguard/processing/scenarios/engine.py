"""
Scenario Engine
---------------

The behavior analyzer: manages scenario instances and runs them per frame.
"""

import logging
from typing import Any, Dict, List, Optional

from crowdguard.core.config import Settings
from crowdguard.core.exceptions import ConfigurationError
from crowdguard.processing.scenarios.contracts import (
    BaseScenario,
    ScenarioEvent,
    ScenarioFrameContext,
)
from crowdguard.processing.scenarios.registry import get_scenario_class

logger = logging.getLogger(__name__)

# Evaluation order; also the order candidate alerts reach the dispatcher
DEFAULT_SCENARIOS: List[Dict[str, Any]] = [
    {"type": "fall_detection"},
    {"type": "altercation"},
    {"type": "crowd_rush"},
    {"type": "animal_presence"},
    {"type": "overcrowding"},
]


class ScenarioEngine:
    """
    Creates scenario instances from configuration and calls process() each frame.
    """

    def __init__(
        self,
        scenario_configs: Optional[List[Dict[str, Any]]] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize scenario engine.

        Args:
            scenario_configs: Scenario configs; defaults to every built-in behavior
            settings: Application settings passed to each scenario

        Raises:
            ConfigurationError: If a config names an unknown scenario type
        """
        self.settings = settings
        self.scenarios: List[BaseScenario] = []
        self._initialize_scenarios(DEFAULT_SCENARIOS if scenario_configs is None else scenario_configs)

    def _initialize_scenarios(self, scenario_configs: List[Dict[str, Any]]) -> None:
        for config in scenario_configs:
            if not config.get("enabled", True):
                continue

            scenario_type = config.get("type")
            scenario_class = get_scenario_class(scenario_type) if scenario_type else None
            if scenario_class is None:
                raise ConfigurationError(
                    f"Unknown scenario type '{scenario_type}'",
                    details={"config": config}
                )
            self.scenarios.append(scenario_class(config, self.settings))

        logger.info(f"Initialized {len(self.scenarios)} scenario(s): {[s.scenario_id for s in self.scenarios]}")

    def process_frame(self, frame_context: ScenarioFrameContext) -> List[ScenarioEvent]:
        """
        Process a frame through all enabled scenarios.

        Returns:
            Candidate alerts from all scenarios, in scenario order
        """
        all_events: List[ScenarioEvent] = []
        for scenario in self.scenarios:
            try:
                events = scenario.process(frame_context)
            except Exception as exc:
                # One faulty scenario must not take the frame down
                logger.warning(f"Error in scenario '{scenario.scenario_id}': {exc}", exc_info=True)
                continue
            if events:
                all_events.extend(events)
        return all_events

    def get_scenario(self, scenario_id: str) -> Optional[BaseScenario]:
        """First enabled scenario of the given type, if any."""
        for scenario in self.scenarios:
            if scenario.scenario_id == scenario_id:
                return scenario
        return None
