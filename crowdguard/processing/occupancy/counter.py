"""
Occupancy Counter
-----------------

Maintains cumulative occupancy counters from frame-to-frame count deltas.

Counts persist when nobody is visible: only current_count follows the live
frame, total_in/total_out/peak_count only ever grow.
"""

from crowdguard.domain.models import OccupancyStats


class OccupancyCounter:
    """Accumulates in/out/peak counters across frames."""

    def __init__(self):
        self.current_count = 0
        self.total_in = 0
        self.total_out = 0
        self.peak_count = 0
        self.child_count = 0
        self.adult_count = 0
        self.previous_count = 0

    def update(self, count: int, child_count: int = 0) -> OccupancyStats:
        """
        Apply the current frame's classified count.

        Args:
            count: Number of classified people this frame
            child_count: How many of them are children

        Returns:
            Snapshot of the counters after the update
        """
        previous = self.previous_count
        if count > previous:
            self.total_in += count - previous
        elif count < previous and previous > 0:
            self.total_out += previous - count

        self.current_count = count
        self.child_count = child_count
        self.adult_count = count - child_count
        self.peak_count = max(self.peak_count, count)
        self.previous_count = count
        return self.snapshot()

    def snapshot(self) -> OccupancyStats:
        """Immutable copy of the counters for consumers."""
        return OccupancyStats(
            current_count=self.current_count,
            total_in=self.total_in,
            total_out=self.total_out,
            peak_count=self.peak_count,
            child_count=self.child_count,
            adult_count=self.adult_count,
        )
