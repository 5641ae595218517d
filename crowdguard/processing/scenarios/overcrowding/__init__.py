from crowdguard.processing.scenarios.overcrowding.scenario import OvercrowdingScenario

__all__ = ["OvercrowdingScenario"]
