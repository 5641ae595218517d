"""
Unit tests for crowdguard.infrastructure.notifications.alert_dispatcher
"""
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, call

import pytest

from crowdguard.domain.models import Severity
from crowdguard.infrastructure.audio import VoiceQueue
from crowdguard.infrastructure.notifications import DEFAULT_COOLDOWNS_MS, AlertDispatcher

FIXED_TIME = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def voice():
    return MagicMock()


@pytest.fixture
def dispatcher(voice):
    return AlertDispatcher(voice=voice, clock=lambda: FIXED_TIME)


class TestAlertDispatcher:
    """Tests for adjacent-repeat suppression, log cap and voice forwarding"""

    def test_adjacent_repeat_suppressed(self, dispatcher):
        assert dispatcher.dispatch("X", Severity.DANGER) is not None
        assert dispatcher.dispatch("X", Severity.DANGER) is None
        assert dispatcher.dispatch("Y", Severity.WARNING) is not None

        assert [entry.message for entry in dispatcher.alerts] == ["X", "Y"]

    def test_non_adjacent_repeat_is_logged(self, dispatcher):
        for message in ["X", "Y", "X"]:
            dispatcher.dispatch(message, Severity.INFO)
        assert [entry.message for entry in dispatcher.alerts] == ["X", "Y", "X"]

    def test_entry_fields(self, dispatcher):
        entry = dispatcher.dispatch("Animal detected: dog", "warning")
        assert entry.time == FIXED_TIME
        assert entry.severity is Severity.WARNING
        assert entry.message == "Animal detected: dog"

    def test_log_capped_most_recent_last(self, voice):
        dispatcher = AlertDispatcher(voice=voice, log_size=50)
        for i in range(60):
            dispatcher.dispatch(f"alert {i}", Severity.INFO)
        messages = [entry.message for entry in dispatcher.alerts]
        assert len(messages) == 50
        assert messages[0] == "alert 10"
        assert messages[-1] == "alert 59"

    def test_accepted_alerts_spoken_with_severity_cooldown(self, dispatcher, voice):
        dispatcher.dispatch("fall", Severity.DANGER)
        dispatcher.dispatch("rush", Severity.WARNING)
        dispatcher.dispatch("note", Severity.INFO)
        assert voice.speak.call_args_list == [
            call("fall", 6000),
            call("rush", 10000),
            call("note", 15000),
        ]

    def test_repeats_still_reach_voice(self, dispatcher, voice):
        dispatcher.dispatch("X", Severity.DANGER)
        dispatcher.dispatch("X", Severity.DANGER)
        assert voice.speak.call_args_list == [call("X", 6000), call("X", 6000)]
        assert len(dispatcher.alerts) == 1

    @pytest.mark.asyncio
    async def test_sustained_alert_announced_again_after_cooldown(self, fake_clock):
        engine = AsyncMock()
        engine.stop = MagicMock()
        voice = VoiceQueue(engine, clock=fake_clock)
        dispatcher = AlertDispatcher(voice=voice, clock=lambda: FIXED_TIME)

        # Same fall candidate every 100 ms for 7 s
        for _ in range(70):
            dispatcher.dispatch("FALL DETECTED: Person may have fallen down!", Severity.DANGER)
            await voice.join()
            fake_clock.advance(0.1)

        assert engine.speak.await_count == 2
        assert len(dispatcher.alerts) == 1

    def test_dispatch_all_preserves_order(self, dispatcher):
        accepted = dispatcher.dispatch_all([
            ("A", Severity.WARNING),
            ("A", Severity.WARNING),
            ("B", Severity.DANGER),
        ])
        assert [entry.message for entry in accepted] == ["A", "B"]

    def test_cooldown_overrides(self, voice):
        dispatcher = AlertDispatcher(voice=voice, cooldowns_ms={Severity.DANGER: 1000})
        assert dispatcher.cooldown_for(Severity.DANGER) == 1000
        assert dispatcher.cooldown_for(Severity.INFO) == DEFAULT_COOLDOWNS_MS[Severity.INFO]

    def test_without_voice(self):
        dispatcher = AlertDispatcher()
        assert dispatcher.dispatch("X", Severity.INFO) is not None

    def test_clear(self, dispatcher):
        dispatcher.dispatch("X", Severity.INFO)
        dispatcher.clear()
        assert dispatcher.alerts == ()
