"""Sequential voice announcement queue.

Two states, idle and speaking, plus a FIFO of pending texts. Exactly one
utterance is in flight at a time. Each utterance runs as a task on the
event loop that drives the frame loop, so its completion is handled on the
same scheduler as `speak()` and `cancel()` and can never race them.

All public methods must be called from that event loop.
"""
import asyncio
import logging
import re
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Deque, Dict, Optional, Tuple

from .speech_engine import SpeechEngine

logger = logging.getLogger(__name__)

DEDUP_KEY_LENGTH = 40
_NON_LETTERS = re.compile(r"[^a-zA-Z ]")
_EMOJI = re.compile("[\U0001F600-\U0001FFFF]")


class VoiceState(str, Enum):
    IDLE = "idle"
    SPEAKING = "speaking"


@dataclass(frozen=True)
class VoiceQueueEntry:
    text: str
    dedup_key: str
    enqueued_at: float


def make_dedup_key(message: str) -> str:
    """Letters and spaces only, lowercased, first 40 characters."""
    return _NON_LETTERS.sub("", message).lower()[:DEDUP_KEY_LENGTH]


def strip_emoji(message: str) -> str:
    return _EMOJI.sub("", message).strip()


class VoiceQueue:
    """
    Serializes alert messages into a single spoken stream.

    - Per-key cooldown: a message whose dedup key was accepted less than
      `cooldown_ms` ago is dropped silently
    - Engine failures count as completion; the queue moves on
    - Disabling cancels everything; enabling waits for the next speak()
    """

    def __init__(
        self,
        engine: SpeechEngine,
        enabled: bool = True,
        default_cooldown_ms: int = 8000,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the queue.

        Args:
            engine: Speech engine capability handle
            enabled: Initial voice state
            default_cooldown_ms: Cooldown used when speak() gets none
            clock: Monotonic clock in seconds (injectable for tests)
        """
        self._engine = engine
        self._enabled = enabled
        self._default_cooldown_ms = default_cooldown_ms
        self._clock = clock
        self._state = VoiceState.IDLE
        self._pending: Deque[VoiceQueueEntry] = deque()
        self._last_accepted: Dict[str, float] = {}
        self._current_task: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    @property
    def state(self) -> VoiceState:
        return self._state

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def is_speaking(self) -> bool:
        return self._state is VoiceState.SPEAKING

    @property
    def pending(self) -> Tuple[VoiceQueueEntry, ...]:
        return tuple(self._pending)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def speak(self, message: str, cooldown_ms: Optional[int] = None) -> bool:
        """
        Queue a message for announcement.

        Args:
            message: Alert text (emoji are stripped before speaking)
            cooldown_ms: Minimum gap between two acceptances of the same key

        Returns:
            True if the message was queued
        """
        if not self._enabled:
            return False

        cooldown_ms = self._default_cooldown_ms if cooldown_ms is None else cooldown_ms
        key = make_dedup_key(message)
        now = self._clock()
        last = self._last_accepted.get(key)
        if last is not None and (now - last) * 1000.0 < cooldown_ms:
            return False

        self._last_accepted[key] = now
        self._pending.append(VoiceQueueEntry(text=strip_emoji(message), dedup_key=key, enqueued_at=now))
        self._advance()
        return True

    def cancel(self) -> None:
        """Drop pending texts, stop the engine, and return to idle right away."""
        self._pending.clear()
        self._engine.stop()
        task, self._current_task = self._current_task, None
        if task is not None and not task.done():
            task.cancel()
        self._state = VoiceState.IDLE

    def toggle_enabled(self) -> bool:
        """Flip voice on/off. Returns the new state."""
        self.set_enabled(not self._enabled)
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        if enabled == self._enabled:
            return
        if not enabled:
            self.cancel()
        self._enabled = enabled
        logger.info(f"Voice alerts {'enabled' if enabled else 'disabled'}")

    async def join(self) -> None:
        """Wait until the queue has drained (or was cancelled)."""
        while self._current_task is not None:
            await asyncio.wait({self._current_task})

    async def aclose(self) -> None:
        self.cancel()
        await self._engine.aclose()

    async def __aenter__(self) -> "VoiceQueue":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def _advance(self) -> None:
        if self._state is VoiceState.SPEAKING or not self._pending or not self._enabled:
            return
        entry = self._pending.popleft()
        self._state = VoiceState.SPEAKING
        self._current_task = asyncio.get_running_loop().create_task(self._play(entry))

    async def _play(self, entry: VoiceQueueEntry) -> None:
        try:
            await self._engine.speak(entry.text)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning(f"Speech failed for '{entry.text}': {exc}")
        self._on_finished(asyncio.current_task())

    def _on_finished(self, task: Optional[asyncio.Task]) -> None:
        # A cancelled utterance has already been replaced or cleared
        if task is not self._current_task:
            return
        self._current_task = None
        self._state = VoiceState.IDLE
        self._advance()
