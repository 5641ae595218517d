"""
Fall Detection Scenario
-----------------------

Detects falls from tracked bounding-box shape changes.
"""

from crowdguard.processing.scenarios.fall_detection.scenario import FallDetectionScenario
from crowdguard.processing.scenarios.fall_detection.config import FallDetectionConfig

__all__ = ["FallDetectionScenario", "FallDetectionConfig"]
