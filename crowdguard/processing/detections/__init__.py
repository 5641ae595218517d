"""
Detections Module
-----------------

Turns raw detection-source output into classified people:
builder (payload parsing) -> shape filter -> classifier.
"""

from crowdguard.processing.detections.builder import DetectionBuilder
from crowdguard.processing.detections.classifier import classify_people, classify_person
from crowdguard.processing.detections.config import PersonFilterConfig
from crowdguard.processing.detections.contracts import (
    BBox,
    ClassificationResult,
    ClassifiedPerson,
    DetectionBatch,
    RawDetection,
)
from crowdguard.processing.detections.shape_filter import filter_people, is_real_person

__all__ = [
    "BBox",
    "ClassificationResult",
    "ClassifiedPerson",
    "DetectionBatch",
    "DetectionBuilder",
    "PersonFilterConfig",
    "RawDetection",
    "classify_people",
    "classify_person",
    "filter_people",
    "is_real_person",
]
