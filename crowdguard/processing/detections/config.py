"""
Person Filter Configuration
---------------------------

Thresholds for shadow/noise rejection and adult/child classification.
"""

from dataclasses import dataclass
from typing import Optional

from crowdguard.core.config import Settings, get_settings


@dataclass(frozen=True)
class PersonFilterConfig:
    """Configuration for the shape filter and person classifier."""

    person_class: str = "person"
    min_score: float = 0.40
    min_aspect_ratio: float = 0.55
    max_area_ratio: float = 0.70
    min_dimension_px: float = 25
    child_max_score: float = 0.60
    child_max_area_ratio: float = 0.12
    child_min_aspect_ratio: float = 0.85
    adult_min_score: float = 0.50

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "PersonFilterConfig":
        settings = settings or get_settings()
        return cls(
            min_score=settings.person_min_score,
            min_aspect_ratio=settings.min_aspect_ratio,
            max_area_ratio=settings.max_area_ratio,
            min_dimension_px=settings.min_dimension_px,
            child_max_score=settings.child_max_score,
            child_max_area_ratio=settings.child_max_area_ratio,
            child_min_aspect_ratio=settings.child_min_aspect_ratio,
            adult_min_score=settings.adult_min_score,
        )
