"""
Detection Builder
-----------------

Converts detection-source output into a standardized DetectionBatch.
This is the only place that interprets source-specific output formats.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from crowdguard.processing.detections.contracts import DetectionBatch, RawDetection

logger = logging.getLogger(__name__)


class DetectionBuilder:
    """
    Builds DetectionBatch from detection-source payloads.

    Accepts the COCO-SSD style payload ({class, score, bbox: [x, y, w, h]}).
    """

    @staticmethod
    def from_payload(
        items: Iterable[Dict[str, Any]],
        frame_width: int,
        frame_height: int,
        timestamp: float,
        frame_index: int = 0
    ) -> DetectionBatch:
        """
        Build a batch from a list of {class, score, bbox} dicts.

        Malformed entries are skipped rather than rejected so one bad
        candidate never costs the whole frame.
        """
        detections: List[RawDetection] = []
        for item in items or []:
            detection = DetectionBuilder._parse_item(item)
            if detection is not None:
                detections.append(detection)

        return DetectionBatch(
            detections=detections,
            frame_width=int(frame_width),
            frame_height=int(frame_height),
            timestamp=timestamp,
            frame_index=frame_index
        )

    @staticmethod
    def _parse_item(item: Any) -> Optional[RawDetection]:
        if not isinstance(item, dict):
            return None
        class_name = item.get("class", item.get("class_name"))
        bbox = item.get("bbox")
        if not isinstance(class_name, str) or not isinstance(bbox, (list, tuple)) or len(bbox) < 4:
            return None
        try:
            score = float(item.get("score", 0.0))
            x, y, w, h = (float(v) for v in bbox[:4])
        except (TypeError, ValueError):
            logger.debug(f"Skipping malformed detection: {item!r}")
            return None
        return RawDetection(class_name=class_name.strip().lower(), score=score, bbox=(x, y, w, h))
