"""
Scenarios Module
----------------

Behavior analysis through scenario processors.

Scenarios receive the per-frame context (raw detections, classified people,
tracked identities) and emit candidate alerts for the dispatcher.
"""

from crowdguard.processing.scenarios.contracts import (
    BaseScenario,
    ScenarioFrameContext,
    ScenarioEvent
)
from crowdguard.processing.scenarios.registry import (
    register_scenario,
    get_scenario_class,
    scenario_registry
)
from crowdguard.processing.scenarios.engine import DEFAULT_SCENARIOS, ScenarioEngine

# Import all scenarios to trigger registration decorators
from crowdguard.processing.scenarios.fall_detection import scenario as fall_detection_scenario  # noqa: F401
from crowdguard.processing.scenarios.altercation import scenario as altercation_scenario  # noqa: F401
from crowdguard.processing.scenarios.crowd_rush import scenario as crowd_rush_scenario  # noqa: F401
from crowdguard.processing.scenarios.overcrowding import scenario as overcrowding_scenario  # noqa: F401
from crowdguard.processing.scenarios.animal_presence import scenario as animal_presence_scenario  # noqa: F401

__all__ = [
    "BaseScenario",
    "ScenarioFrameContext",
    "ScenarioEvent",
    "ScenarioEngine",
    "DEFAULT_SCENARIOS",
    "register_scenario",
    "get_scenario_class",
    "scenario_registry",
]
