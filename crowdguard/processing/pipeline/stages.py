"""
Pipeline Stages
---------------

Individual processing stages that make up the per-frame pipeline.
Stateless stages are plain functions; stateful ones receive the component
that owns the state (tracker, counter, engine, dispatcher).

Order within a frame:
  filter -> classify -> track -> analyze -> count -> dispatch -> overlays
"""

from typing import List

from crowdguard.domain.models import AlertEntry, OccupancyStats
from crowdguard.infrastructure.notifications.alert_dispatcher import AlertDispatcher
from crowdguard.processing.detections.classifier import classify_people
from crowdguard.processing.detections.contracts import (
    ClassificationResult,
    DetectionBatch,
    RawDetection,
)
from crowdguard.processing.detections.shape_filter import filter_people
from crowdguard.processing.drawing.overlays import OverlayBox, build_overlays
from crowdguard.processing.occupancy.counter import OccupancyCounter
from crowdguard.processing.pipeline.context import PipelineContext
from crowdguard.processing.scenarios.animal_presence.scenario import AnimalPresenceScenario, find_animals
from crowdguard.processing.scenarios.contracts import ScenarioEvent, ScenarioFrameContext
from crowdguard.processing.scenarios.engine import ScenarioEngine
from crowdguard.processing.tracking import IdentityTracker, TrackedIdentity


def filter_stage(context: PipelineContext, batch: DetectionBatch) -> List[RawDetection]:
    """Stage 1: Drop non-person, low-confidence and shadow-shaped detections."""
    return filter_people(batch.detections, batch.frame_area, context.filter_config)


def classify_stage(
    context: PipelineContext,
    candidates: List[RawDetection],
    batch: DetectionBatch
) -> ClassificationResult:
    """Stage 2: Tag survivors as adult or child (or discard)."""
    return classify_people(candidates, batch.frame_area, context.filter_config)


def track_stage(
    tracker: IdentityTracker,
    result: ClassificationResult,
    batch: DetectionBatch
) -> List[TrackedIdentity]:
    """Stage 3: Associate people with identities and sweep stale ones."""
    return tracker.update(result.people, batch.timestamp)


def analyze_stage(engine: ScenarioEngine, frame_context: ScenarioFrameContext) -> List[ScenarioEvent]:
    """Stage 4: Run behavior scenarios and collect candidate alerts."""
    return engine.process_frame(frame_context)


def count_stage(counter: OccupancyCounter, result: ClassificationResult) -> OccupancyStats:
    """Stage 5: Update occupancy counters from the classified count."""
    return counter.update(len(result.people), result.child_count)


def dispatch_stage(dispatcher: AlertDispatcher, events: List[ScenarioEvent]) -> List[AlertEntry]:
    """Stage 6: Submit candidates to the dispatcher in scenario order."""
    return dispatcher.dispatch_all((event.label, event.severity) for event in events)


def overlay_stage(
    context: PipelineContext,
    engine: ScenarioEngine,
    result: ClassificationResult,
    batch: DetectionBatch
) -> List[OverlayBox]:
    """Stage 7: Build render-ready boxes for people and watched animals."""
    # Same thresholds as the animal alerts when that scenario is configured
    animal_scenario = engine.get_scenario("animal_presence")
    if isinstance(animal_scenario, AnimalPresenceScenario):
        animals = animal_scenario.watched_animals(batch.detections)
    else:
        settings = context.settings
        classes = {name.lower() for name in settings.animal_classes}
        animals = find_animals(batch.detections, classes, settings.animal_min_score)
    return build_overlays(result.people, animals)
