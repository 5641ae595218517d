"""
Unit tests for crowdguard.processing.occupancy
"""
from crowdguard.processing.occupancy import OccupancyCounter


class TestOccupancyCounter:
    def test_in_out_peak_over_sequence(self):
        counter = OccupancyCounter()
        for count in [0, 2, 1, 3, 0]:
            stats = counter.update(count)

        assert stats.current_count == 0
        assert stats.total_in == 4
        assert stats.total_out == 4
        assert stats.peak_count == 3

    def test_totals_never_decrease(self):
        counter = OccupancyCounter()
        previous = counter.snapshot()
        for count in [5, 1, 7, 7, 0, 2]:
            stats = counter.update(count)
            assert stats.total_in >= previous.total_in
            assert stats.total_out >= previous.total_out
            assert stats.peak_count >= previous.peak_count
            previous = stats

    def test_adult_child_split(self):
        counter = OccupancyCounter()
        stats = counter.update(5, child_count=2)
        assert stats.child_count == 2
        assert stats.adult_count == 3

    def test_previous_count_tracks_last_frame(self):
        counter = OccupancyCounter()
        counter.update(4)
        assert counter.previous_count == 4
        counter.update(1)
        assert counter.previous_count == 1

    def test_snapshot_is_a_copy(self):
        counter = OccupancyCounter()
        snapshot = counter.update(2)
        counter.update(6)
        assert snapshot.current_count == 2
        assert snapshot.to_dict()["peak_count"] == 2
