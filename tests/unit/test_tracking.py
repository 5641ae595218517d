"""
Unit tests for crowdguard.processing.tracking
"""
import numpy as np

from crowdguard.processing.tracking import IdentityTracker, TrackedIdentity, assign_nearest
from tests.factories import adult


def _centers(*points):
    return np.asarray(points, dtype=np.float64).reshape(-1, 2)


class TestAssignNearest:
    """Tests for greedy nearest-neighbour assignment"""

    def test_empty_inputs(self):
        assert assign_nearest(_centers(), _centers((0, 0)), 150) == []
        assert assign_nearest(_centers((0, 0)), _centers(), 150) == [None]

    def test_nearest_previous_wins(self):
        result = assign_nearest(_centers((100, 100)), _centers((300, 100), (110, 100)), 150)
        assert result == [1]

    def test_distance_must_be_strictly_below_threshold(self):
        assert assign_nearest(_centers((150, 0)), _centers((0, 0)), 150) == [None]
        assert assign_nearest(_centers((149, 0)), _centers((0, 0)), 150) == [0]

    def test_earlier_detection_claims_first(self):
        # Both detections are nearest to previous 0; the first one takes it
        result = assign_nearest(_centers((10, 0), (5, 0)), _centers((0, 0), (100, 0)), 150)
        assert result == [0, 1]

    def test_tie_goes_to_earlier_previous_identity(self):
        result = assign_nearest(_centers((50, 0)), _centers((0, 0), (100, 0)), 150)
        assert result == [0]


class TestTrackedIdentity:
    def test_history_is_capped(self):
        identity = TrackedIdentity("person_1", (0, 0, 10, 20), timestamp=0.0, history_size=30)
        for i in range(1, 40):
            identity.update((i, 0, 10, 20), timestamp=float(i))
        assert len(identity.positions) == 30
        assert identity.positions[-1][0] == 39 + 5
        assert identity.last_seen == 39.0
        assert identity.first_seen == 0.0

    def test_recent_aspect_ratios_oldest_first(self):
        identity = TrackedIdentity("person_1", (0, 0, 100, 140), timestamp=0.0)
        identity.update((0, 0, 100, 80), timestamp=1.0)
        assert identity.recent_aspect_ratios(5) == [1.4, 0.8]


class TestIdentityTracker:
    """Tests for IdentityTracker update and eviction"""

    def test_small_move_keeps_identity(self):
        tracker = IdentityTracker()
        first = tracker.update([adult(x=100)], timestamp=0.0)
        second = tracker.update([adult(x=110)], timestamp=0.1)
        assert first[0].key == second[0].key
        assert len(second[0].positions) == 2

    def test_large_jump_opens_new_identity(self):
        tracker = IdentityTracker()
        first = tracker.update([adult(x=0)], timestamp=0.0)
        second = tracker.update([adult(x=400)], timestamp=0.1)
        assert first[0].key != second[0].key
        assert second[0].key == "person_2"

    def test_identities_aligned_with_people(self):
        tracker = IdentityTracker()
        tracker.update([adult(x=0), adult(x=400)], timestamp=0.0)
        identities = tracker.update([adult(x=405), adult(x=5)], timestamp=0.1)
        assert [i.key for i in identities] == ["person_2", "person_1"]

    def test_only_previous_frame_identities_are_candidates(self):
        tracker = IdentityTracker()
        first = tracker.update([adult(x=100)], timestamp=0.0)
        tracker.update([], timestamp=0.1)
        third = tracker.update([adult(x=100)], timestamp=0.2)
        assert third[0].key != first[0].key

    def test_single_observation_identity_evicted_after_ttl(self):
        tracker = IdentityTracker(ttl_seconds=60)
        tracker.update([adult(x=100)], timestamp=0.0)

        tracker.update([], timestamp=60.0)
        assert "person_1" in tracker.identities

        tracker.update([], timestamp=60.5)
        assert "person_1" not in tracker.identities

    def test_established_identity_not_evicted(self):
        tracker = IdentityTracker(ttl_seconds=60)
        tracker.update([adult(x=100)], timestamp=0.0)
        tracker.update([adult(x=105)], timestamp=0.1)

        evicted = tracker.evict_stale(timestamp=500.0)

        assert evicted == []
        assert "person_1" in tracker.identities
