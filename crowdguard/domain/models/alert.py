from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Severity(str, Enum):
    """Alert urgency tier. Drives voice cooldown and visual styling."""

    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


@dataclass(frozen=True)
class AlertEntry:
    """Domain model for one accepted alert in the rolling log"""

    time: datetime
    message: str
    severity: Severity
