"""
Overlay Builder
---------------

Render-ready overlay data for the display layer.

Nothing is drawn here: the renderer receives boxes, labels and a kind
("adult", "child", "animal") and picks colours itself.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List

from crowdguard.processing.detections.contracts import BBox, ClassifiedPerson, RawDetection


@dataclass(frozen=True)
class OverlayBox:
    bbox: BBox
    label: str
    kind: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["bbox"] = list(self.bbox)
        return data


def person_label(index: int, person: ClassifiedPerson) -> str:
    """e.g. "PERSON-1 87%" or "CHILD-2 52%" (index is 1-based)."""
    type_tag = "CHILD" if person.is_child else "PERSON"
    return f"{type_tag}-{index} {round(person.score * 100)}%"


def build_overlays(people: List[ClassifiedPerson], animals: Iterable[RawDetection]) -> List[OverlayBox]:
    overlays = [
        OverlayBox(
            bbox=person.bbox,
            label=person_label(i + 1, person),
            kind="child" if person.is_child else "adult",
        )
        for i, person in enumerate(people)
    ]
    overlays.extend(
        OverlayBox(bbox=animal.bbox, label=f"Animal: {animal.class_name}", kind="animal")
        for animal in animals
    )
    return overlays
