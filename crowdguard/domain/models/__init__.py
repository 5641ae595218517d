from .alert import AlertEntry, Severity
from .occupancy import OccupancyStats

__all__ = ["AlertEntry", "Severity", "OccupancyStats"]
