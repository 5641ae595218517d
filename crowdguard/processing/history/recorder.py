"""
Crowd History Recorder
----------------------

Samples occupancy stats into two bounded series for charts and tables:
- chart points (time, count, in, out) every `chart_interval` seconds
- history rows (timestamp, count, in, out, peak) every `history_interval` seconds

Sampling is driven by the frame loop, so nothing is recorded while stopped.
"""

from collections import deque
from dataclasses import asdict, dataclass
from typing import Any, Deque, Dict, List, Optional

from crowdguard.domain.models import OccupancyStats
from crowdguard.utils.datetime_utils import now, to_display_time


@dataclass(frozen=True)
class ChartPoint:
    time: str
    count: int
    total_in: int
    total_out: int


@dataclass(frozen=True)
class HistoryRow:
    timestamp: str
    current_count: int
    total_in: int
    total_out: int
    peak_count: int


class CrowdHistoryRecorder:
    """Interval sampler with capped in-memory series."""

    def __init__(
        self,
        chart_interval: float = 3.0,
        chart_size: int = 60,
        history_interval: float = 10.0,
        history_size: int = 100
    ):
        self.chart_interval = chart_interval
        self.history_interval = history_interval
        self.chart_points: Deque[ChartPoint] = deque(maxlen=chart_size)
        self.history_rows: Deque[HistoryRow] = deque(maxlen=history_size)
        self._last_chart_at: Optional[float] = None
        self._last_history_at: Optional[float] = None

    def maybe_record(self, stats: OccupancyStats, timestamp: float, label: Optional[str] = None) -> bool:
        """
        Record samples whose interval has elapsed.

        Args:
            stats: Latest occupancy snapshot
            timestamp: Monotonic time of the tick in seconds
            label: Display time; defaults to the current wall clock

        Returns:
            True if anything was recorded
        """
        recorded = False
        if self._last_chart_at is None:
            # Intervals start counting from the first tick, like a timer would
            self._last_chart_at = timestamp
            self._last_history_at = timestamp
            return False

        if timestamp - self._last_chart_at >= self.chart_interval:
            label = label or to_display_time(now())
            self.chart_points.append(ChartPoint(label, stats.current_count, stats.total_in, stats.total_out))
            self._last_chart_at = timestamp
            recorded = True

        if timestamp - self._last_history_at >= self.history_interval:
            label = label or to_display_time(now())
            self.history_rows.append(HistoryRow(
                label, stats.current_count, stats.total_in, stats.total_out, stats.peak_count
            ))
            self._last_history_at = timestamp
            recorded = True

        return recorded

    def pause(self) -> None:
        """Restart interval timing on the next frame (used when the loop stops)."""
        self._last_chart_at = None
        self._last_history_at = None

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "chart": [asdict(point) for point in self.chart_points],
            "history": [asdict(row) for row in self.history_rows],
        }
