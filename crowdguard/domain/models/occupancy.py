from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class OccupancyStats:
    """Snapshot of the occupancy counters handed to presentation consumers"""

    current_count: int = 0
    total_in: int = 0
    total_out: int = 0
    peak_count: int = 0
    child_count: int = 0
    adult_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
