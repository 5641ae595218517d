"""
Identity Tracking
-----------------

Frame-local nearest-neighbour tracker used by the behavior scenarios.

Each frame has two steps:
1. Assignment: current detections are matched greedily, in detection order,
   to the nearest still-unmatched identity seen in the previous frame whose
   center lies within the match distance. Unmatched detections open a new
   identity.
2. Sweep: identities that have been idle longer than the TTL and never
   gathered enough observations are treated as noise and dropped.

This is not a Kalman or globally optimal matcher; it only needs to be stable
enough for the fall heuristic.
"""

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Sequence, Tuple

import numpy as np

from crowdguard.processing.detections.contracts import BBox, ClassifiedPerson, bbox_center, safe_ratio

logger = logging.getLogger(__name__)

# (center_x, center_y, width, height)
Position = Tuple[float, float, float, float]


class TrackedIdentity:
    """Represents a single tracked occupant."""

    def __init__(self, key: str, bbox: BBox, timestamp: float, history_size: int = 30):
        self.key = key
        self.positions: Deque[Position] = deque(maxlen=history_size)
        self.first_seen = timestamp
        self.last_seen = timestamp
        self.update(bbox, timestamp)

    def update(self, bbox: BBox, timestamp: float) -> None:
        """Record a new observation. Oldest position is evicted past the cap."""
        center_x, center_y = bbox_center(bbox)
        _, _, w, h = bbox
        self.positions.append((center_x, center_y, w, h))
        self.last_seen = timestamp

    @property
    def center(self) -> Tuple[float, float]:
        center_x, center_y, _, _ = self.positions[-1]
        return center_x, center_y

    def recent_aspect_ratios(self, window: int) -> List[float]:
        """Height/width ratio of the last `window` positions, oldest first."""
        recent = list(self.positions)[-window:]
        return [safe_ratio(h, w) for _, _, w, h in recent]

    def __repr__(self) -> str:
        return f"TrackedIdentity(key={self.key!r}, positions={len(self.positions)})"


def assign_nearest(
    current_centers: np.ndarray,
    previous_centers: np.ndarray,
    max_distance: float
) -> List[Optional[int]]:
    """
    Greedy nearest-neighbour assignment.

    Args:
        current_centers: (N, 2) array of current detection centers
        previous_centers: (M, 2) array of previous identity centers
        max_distance: Matches must be strictly closer than this

    Returns:
        For each current detection, the index of its previous identity or None.
        Earlier detections claim identities first; on equal distance the
        earlier previous identity wins.
    """
    current_count = len(current_centers)
    previous_count = len(previous_centers)
    if current_count == 0:
        return []
    if previous_count == 0:
        return [None] * current_count

    distances = np.hypot(
        current_centers[:, None, 0] - previous_centers[None, :, 0],
        current_centers[:, None, 1] - previous_centers[None, :, 1],
    )
    available = np.ones(previous_count, dtype=bool)
    assignments: List[Optional[int]] = []

    for row in distances:
        candidates = np.where(available & (row < max_distance), row, np.inf)
        best = int(np.argmin(candidates))
        if np.isfinite(candidates[best]):
            assignments.append(best)
            available[best] = False
        else:
            assignments.append(None)

    return assignments


def _centers(points: Sequence[Tuple[float, float]]) -> np.ndarray:
    return np.asarray(points, dtype=np.float64).reshape(-1, 2)


class IdentityTracker:
    """Associates per-frame people with persistent identities."""

    def __init__(
        self,
        match_distance: float = 150.0,
        history_size: int = 30,
        ttl_seconds: float = 60.0,
        min_observations: int = 2
    ):
        self.match_distance = match_distance
        self.history_size = history_size
        self.ttl_seconds = ttl_seconds
        self.min_observations = min_observations
        self.identities: Dict[str, TrackedIdentity] = {}
        self._previous_keys: List[str] = []
        self._id_counter = 0

    def _new_key(self) -> str:
        self._id_counter += 1
        return f"person_{self._id_counter}"

    def update(self, people: List[ClassifiedPerson], timestamp: float) -> List[TrackedIdentity]:
        """
        Update tracker with the current frame's people.

        Args:
            people: Classified people for this frame
            timestamp: Frame time in seconds (monotonic)

        Returns:
            One identity per person, in the same order as `people`
        """
        previous = [self.identities[key] for key in self._previous_keys if key in self.identities]
        assignments = assign_nearest(
            _centers([person.center for person in people]),
            _centers([identity.center for identity in previous]),
            self.match_distance,
        )

        frame_identities: List[TrackedIdentity] = []
        for person, previous_index in zip(people, assignments):
            if previous_index is None:
                identity = TrackedIdentity(self._new_key(), person.bbox, timestamp, self.history_size)
                self.identities[identity.key] = identity
            else:
                identity = previous[previous_index]
                identity.update(person.bbox, timestamp)
            frame_identities.append(identity)

        self._previous_keys = [identity.key for identity in frame_identities]
        self.evict_stale(timestamp)
        return frame_identities

    def evict_stale(self, timestamp: float) -> List[str]:
        """
        Drop identities idle longer than the TTL with too few observations.

        Returns:
            Keys of the evicted identities
        """
        stale = [
            key for key, identity in self.identities.items()
            if timestamp - identity.last_seen > self.ttl_seconds
            and len(identity.positions) < self.min_observations
        ]
        for key in stale:
            del self.identities[key]
        if stale:
            logger.debug(f"Evicted {len(stale)} stale identities")
        return stale
