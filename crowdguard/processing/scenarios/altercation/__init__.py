from crowdguard.processing.scenarios.altercation.scenario import AltercationScenario

__all__ = ["AltercationScenario"]
