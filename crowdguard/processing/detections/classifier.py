"""
Person Classifier
-----------------

Labels filtered person detections as adult or child.

Children tend to get lower confidence and smaller boxes while keeping an
upright silhouette. Adults must clear a stricter score bar; adult-shaped
detections under it are dropped.
"""

from typing import List, Optional

from crowdguard.processing.detections.config import PersonFilterConfig
from crowdguard.processing.detections.contracts import (
    ClassificationResult,
    ClassifiedPerson,
    RawDetection,
    safe_ratio,
)


def classify_person(
    detection: RawDetection,
    frame_area: float,
    config: PersonFilterConfig
) -> Optional[ClassifiedPerson]:
    """
    Classify one shape-filtered detection.

    Returns:
        ClassifiedPerson, or None if it is an adult below the adult score bar
    """
    _, _, w, h = detection.bbox
    area_ratio = safe_ratio(w * h, frame_area)

    is_child = (
        detection.score < config.child_max_score
        and area_ratio < config.child_max_area_ratio
        and safe_ratio(h, w) > config.child_min_aspect_ratio
    )
    if not is_child and detection.score < config.adult_min_score:
        return None

    return ClassifiedPerson(bbox=detection.bbox, score=detection.score, is_child=is_child)


def classify_people(
    detections: List[RawDetection],
    frame_area: float,
    config: PersonFilterConfig
) -> ClassificationResult:
    """Classify every filtered detection, preserving order."""
    people = []
    for detection in detections:
        person = classify_person(detection, frame_area, config)
        if person is not None:
            people.append(person)
    return ClassificationResult(people=people)
