from crowdguard.processing.scenarios.crowd_rush.scenario import CrowdRushScenario

__all__ = ["CrowdRushScenario"]
