"""Alert Dispatcher: dedup, rolling log, and voice forwarding for candidate alerts"""

import logging
from collections import deque
from datetime import datetime
from typing import Callable, Deque, Dict, Iterable, List, Optional, Protocol, Tuple, Union

from ...domain.models import AlertEntry, Severity
from ...utils.datetime_utils import now

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWNS_MS: Dict[Severity, int] = {
    Severity.DANGER: 6000,
    Severity.WARNING: 10000,
    Severity.INFO: 15000,
}


class VoiceSink(Protocol):
    def speak(self, message: str, cooldown_ms: Optional[int] = None) -> bool:
        ...


class AlertDispatcher:
    """
    Turns candidate alerts into log entries and voice announcements.

    Two independent dedup layers apply to every alert:
    - here, a candidate whose message equals the most recently logged
      message is not logged again (single-entry lookback)
    - in the voice queue, a per-key cooldown chosen by severity

    Every candidate reaches the voice queue, so a condition that persists
    is announced again once its cooldown has passed.
    """

    def __init__(
        self,
        voice: Optional[VoiceSink] = None,
        log_size: int = 50,
        cooldowns_ms: Optional[Dict[Severity, int]] = None,
        clock: Callable[[], datetime] = now,
    ):
        """
        Initialize dispatcher.

        Args:
            voice: Voice queue (or any object with speak(message, cooldown_ms))
            log_size: Rolling log capacity; oldest entries drop first
            cooldowns_ms: Voice cooldown per severity
            clock: Wall-clock source for entry timestamps
        """
        self._voice = voice
        self._log: Deque[AlertEntry] = deque(maxlen=log_size)
        self._cooldowns_ms = {**DEFAULT_COOLDOWNS_MS, **(cooldowns_ms or {})}
        self._clock = clock

    @property
    def alerts(self) -> Tuple[AlertEntry, ...]:
        """Read-only view of the log, most recent last."""
        return tuple(self._log)

    def cooldown_for(self, severity: Severity) -> int:
        return self._cooldowns_ms[severity]

    def dispatch(self, message: str, severity: Union[Severity, str]) -> Optional[AlertEntry]:
        """
        Submit one candidate alert.

        Returns:
            The new log entry, or None if it repeated the previous message
        """
        severity = Severity(severity)
        self._speak(message, severity)

        if self._log and self._log[-1].message == message:
            return None

        entry = AlertEntry(time=self._clock(), message=message, severity=severity)
        self._log.append(entry)
        logger.info(f"Alert [{severity.value}] {message}")
        return entry

    def dispatch_all(self, candidates: Iterable[Tuple[str, Union[Severity, str]]]) -> List[AlertEntry]:
        """Dispatch candidates in order; returns the accepted entries."""
        accepted = []
        for message, severity in candidates:
            entry = self.dispatch(message, severity)
            if entry is not None:
                accepted.append(entry)
        return accepted

    def _speak(self, message: str, severity: Severity) -> None:
        if self._voice is None:
            return
        self._voice.speak(message, self.cooldown_for(severity))

    def clear(self) -> None:
        self._log.clear()
