from crowdguard.processing.occupancy.counter import OccupancyCounter

__all__ = ["OccupancyCounter"]
