"""
Unit tests for crowdguard.processing.pipeline (CrowdPipeline and stages)
"""
from unittest.mock import MagicMock

import pytest

from crowdguard.infrastructure.notifications import AlertDispatcher
from crowdguard.processing.pipeline import CrowdPipeline, PipelineContext
from tests.factories import animal, make_batch, people_at, person


@pytest.fixture
def voice():
    return MagicMock()


@pytest.fixture
def pipeline(settings, voice):
    context = PipelineContext(settings)
    return CrowdPipeline(context, AlertDispatcher(voice=voice))


def _crowd(count):
    return people_at(*[i * 70 for i in range(count)])


class TestCrowdPipeline:
    """Tests for per-frame stage sequencing"""

    def test_counts_follow_classified_people(self, pipeline):
        for t, count in enumerate([0, 2, 1, 3, 0]):
            result = pipeline.process_frame(make_batch(_crowd(count), timestamp=float(t)))

        assert result.stats.current_count == 0
        assert result.stats.total_in == 4
        assert result.stats.total_out == 4
        assert result.stats.peak_count == 3
        assert result.frame_index == 5

    def test_shadows_do_not_count(self, pipeline):
        shadow = person((0, 300, 300, 100))
        result = pipeline.process_frame(make_batch([shadow, *_crowd(1)]))
        assert result.stats.current_count == 1

    def test_alerts_in_scenario_order_and_repeats_not_logged(self, pipeline, voice):
        first = pipeline.process_frame(make_batch(_crowd(9), timestamp=0.0))
        assert [a.message for a in first.alerts] == [
            "SUDDEN RUSH: Rapid crowd increase detected!",
            "Overcrowding alert! 9 people detected!",
        ]

        second = pipeline.process_frame(make_batch(_crowd(9), timestamp=0.1))
        assert second.alerts == []
        assert [c.event_type for c in second.candidates] == ["overcrowding"]
        assert len(pipeline.dispatcher.alerts) == 2
        # The repeat is still offered to voice; its cooldown decides
        assert voice.speak.call_count == 3

    def test_rush_compares_with_previous_frame(self, pipeline):
        pipeline.process_frame(make_batch(_crowd(2), timestamp=0.0))
        result = pipeline.process_frame(make_batch(_crowd(5), timestamp=0.1))
        assert result.candidates == []

        result = pipeline.process_frame(make_batch(_crowd(1), timestamp=0.2))
        result = pipeline.process_frame(make_batch(_crowd(6), timestamp=0.3))
        assert [c.event_type for c in result.candidates] == ["sudden_rush"]

    def test_fall_detected_across_frames(self, pipeline):
        upright = person((100, 100, 60, 150))
        fallen = person((100, 170, 100, 80))

        for t in range(5):
            result = pipeline.process_frame(make_batch([upright], timestamp=t * 0.1))
            assert result.alerts == []

        result = pipeline.process_frame(make_batch([fallen], timestamp=0.5))
        assert [a.message for a in result.alerts] == ["FALL DETECTED: Person may have fallen down!"]

    def test_overlays_for_people_and_animals(self, pipeline):
        child = person((10, 50, 40, 80), score=0.55)
        grown = person((200, 50, 60, 150), score=0.874)
        result = pipeline.process_frame(make_batch([child, grown, animal("dog")]))

        assert [(o.label, o.kind) for o in result.overlays] == [
            ("CHILD-1 55%", "child"),
            ("PERSON-2 87%", "adult"),
            ("Animal: dog", "animal"),
        ]
        assert result.stats.child_count == 1
        assert result.stats.adult_count == 1

    def test_empty_frame_keeps_totals(self, pipeline):
        pipeline.process_frame(make_batch(_crowd(3), timestamp=0.0))
        result = pipeline.process_frame(make_batch([], timestamp=0.1))
        assert result.stats.current_count == 0
        assert result.stats.total_in == 3
        assert result.stats.peak_count == 3

    def test_animal_overlays_follow_scenario_config(self, settings, voice):
        context = PipelineContext(settings, [{"type": "animal_presence", "classes": ["cat"], "min_score": 0.7}])
        pipeline = CrowdPipeline(context, AlertDispatcher(voice=voice))

        result = pipeline.process_frame(make_batch([animal("dog"), animal("cat", score=0.6), animal("cat")]))

        assert [o.label for o in result.overlays] == ["Animal: cat"]
        assert [a.message for a in result.alerts] == ["Animal detected: cat"]

    def test_animal_overlays_without_animal_scenario(self, settings, voice):
        context = PipelineContext(settings, [{"type": "overcrowding"}])
        pipeline = CrowdPipeline(context, AlertDispatcher(voice=voice))

        result = pipeline.process_frame(make_batch([animal("dog")]))

        assert [o.label for o in result.overlays] == ["Animal: dog"]
        assert result.alerts == []


class TestPipelineContext:
    def test_status_dict(self, settings):
        context = PipelineContext(settings)
        context.mark_started()
        status = context.to_status_dict()
        assert status["running"] is True
        assert status["fps"] == settings.fps
        assert status["started_at"] is not None
        context.mark_stopped()
        assert context.to_status_dict()["running"] is False
