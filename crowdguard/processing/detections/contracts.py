"""
Detection Data Contracts
------------------------

Defines the standardized detection data structures used throughout the pipeline.

- RawDetection: one candidate reported by the external model
- DetectionBatch: all candidates for one frame plus the frame dimensions
- ClassifiedPerson: a person detection that survived filtering, tagged adult/child

Bounding boxes are pixel-space (x, y, w, h) with (x, y) the top-left corner.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

BBox = Tuple[float, float, float, float]


def bbox_center(bbox: BBox) -> Tuple[float, float]:
    """Center point (cx, cy) of an (x, y, w, h) box."""
    x, y, w, h = bbox
    return x + w / 2.0, y + h / 2.0


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, treating a zero denominator as 1."""
    return numerator / (denominator or 1)


@dataclass(frozen=True)
class RawDetection:
    """One candidate object from the detection source (ephemeral, per frame)."""
    class_name: str
    score: float
    bbox: BBox


@dataclass
class DetectionBatch:
    """
    Detection-source output for a single frame.

    Frame dimensions are carried alongside because the shape filter and the
    classifier reason about boxes relative to the frame area.
    """
    detections: List[RawDetection]
    frame_width: int
    frame_height: int
    timestamp: float  # Monotonic time (seconds)
    frame_index: int = 0

    @property
    def frame_area(self) -> float:
        return float(self.frame_width * self.frame_height)


@dataclass(frozen=True)
class ClassifiedPerson:
    """A person detection that passed the shape filter and classifier."""
    bbox: BBox
    score: float
    is_child: bool = False

    @property
    def center(self) -> Tuple[float, float]:
        return bbox_center(self.bbox)


@dataclass
class ClassificationResult:
    """Classifier output for one frame."""
    people: List[ClassifiedPerson] = field(default_factory=list)

    @property
    def child_count(self) -> int:
        return sum(1 for person in self.people if person.is_child)

    @property
    def adult_count(self) -> int:
        return len(self.people) - self.child_count
