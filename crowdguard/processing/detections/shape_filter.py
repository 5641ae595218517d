"""
Shape Filter
------------

Rejects person candidates that are shadows or pixel noise.

Shadows are wide and flat (low height-to-width ratio) and often cover a
large part of the frame. Real people, children included, are taller than
they are wide and occupy a reasonable area.
"""

from typing import List

from crowdguard.processing.detections.config import PersonFilterConfig
from crowdguard.processing.detections.contracts import BBox, RawDetection, safe_ratio


def is_person_candidate(detection: RawDetection, config: PersonFilterConfig) -> bool:
    """Person class with a score above the loose (child) floor."""
    return detection.class_name == config.person_class and detection.score > config.min_score


def is_real_person(bbox: BBox, frame_area: float, config: PersonFilterConfig) -> bool:
    """
    Check box geometry against the shadow/noise rules.

    Args:
        bbox: (x, y, w, h) in pixels
        frame_area: Frame width * height in pixels
        config: Filter thresholds

    Returns:
        True if the box looks like a person
    """
    _, _, w, h = bbox
    aspect_ratio = safe_ratio(h, w)
    area_ratio = safe_ratio(w * h, frame_area)

    if aspect_ratio < config.min_aspect_ratio:
        return False  # too wide: shadow or lying object
    if area_ratio > config.max_area_ratio:
        return False  # fills the frame: almost certainly a shadow
    if min(w, h) < config.min_dimension_px:
        return False  # pixel noise
    return True


def filter_people(
    detections: List[RawDetection],
    frame_area: float,
    config: PersonFilterConfig
) -> List[RawDetection]:
    """Keep person candidates that pass the shape rules, in source order."""
    return [
        detection for detection in detections
        if is_person_candidate(detection, config) and is_real_person(detection.bbox, frame_area, config)
    ]
