from crowdguard.processing.scenarios.animal_presence.scenario import AnimalPresenceScenario

__all__ = ["AnimalPresenceScenario"]
