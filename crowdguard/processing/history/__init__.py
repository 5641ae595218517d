from crowdguard.processing.history.recorder import ChartPoint, CrowdHistoryRecorder, HistoryRow

__all__ = ["ChartPoint", "CrowdHistoryRecorder", "HistoryRow"]
