"""
Crowd Pipeline
--------------

Runs one frame through every stage and owns the cross-frame state:
the identity tracker, the occupancy counter and the scenario instances.

The alert dispatcher (and through it the voice queue) is shared with the
control surface and injected here.
"""

import logging
from typing import Optional

from crowdguard.domain.models import OccupancyStats
from crowdguard.infrastructure.notifications.alert_dispatcher import AlertDispatcher
from crowdguard.processing.detections.contracts import DetectionBatch
from crowdguard.processing.occupancy.counter import OccupancyCounter
from crowdguard.processing.pipeline.context import PipelineContext
from crowdguard.processing.pipeline.contracts import FrameResult
from crowdguard.processing.pipeline.stages import (
    analyze_stage,
    classify_stage,
    count_stage,
    dispatch_stage,
    filter_stage,
    overlay_stage,
    track_stage,
)
from crowdguard.processing.scenarios import ScenarioEngine
from crowdguard.processing.scenarios.contracts import ScenarioFrameContext
from crowdguard.processing.tracking import IdentityTracker

logger = logging.getLogger(__name__)


class CrowdPipeline:
    """Per-frame orchestration of filtering, tracking, analysis, counting and alerting."""

    def __init__(
        self,
        context: PipelineContext,
        dispatcher: AlertDispatcher,
        engine: Optional[ScenarioEngine] = None,
        tracker: Optional[IdentityTracker] = None,
        counter: Optional[OccupancyCounter] = None
    ):
        """
        Args:
            context: Pipeline context (settings, thresholds, counters)
            dispatcher: Alert dispatcher shared with the control surface
            engine: Behavior analyzer (built from the context when omitted)
            tracker: Identity tracker (built from settings when omitted)
            counter: Occupancy counter
        """
        settings = context.settings
        self.context = context
        self.dispatcher = dispatcher
        self.engine = engine or ScenarioEngine(context.scenario_configs, settings)
        self.tracker = tracker or IdentityTracker(
            match_distance=settings.match_distance_px,
            history_size=settings.history_size,
            ttl_seconds=settings.identity_ttl_seconds,
            min_observations=settings.identity_min_observations,
        )
        self.counter = counter or OccupancyCounter()

    @property
    def stats(self) -> OccupancyStats:
        return self.counter.snapshot()

    def process_frame(self, batch: DetectionBatch) -> FrameResult:
        """
        Process one detection batch.

        Never raises for bad input: malformed detections were already
        dropped by the builder, and scenario failures are contained by
        the engine.
        """
        frame_index = self.context.next_frame_index()

        candidates = filter_stage(self.context, batch)
        result = classify_stage(self.context, candidates, batch)
        identities = track_stage(self.tracker, result, batch)

        # Behaviors compare against the count from before this frame's update
        frame_context = ScenarioFrameContext(
            batch=batch,
            people=result.people,
            identities=identities,
            previous_count=self.counter.previous_count,
            frame_index=frame_index,
            timestamp=batch.timestamp,
        )
        events = analyze_stage(self.engine, frame_context)
        stats = count_stage(self.counter, result)
        alerts = dispatch_stage(self.dispatcher, events)
        overlays = overlay_stage(self.context, self.engine, result, batch)

        self.context.processed_frames += 1
        if alerts:
            logger.debug(f"Frame {frame_index}: {len(alerts)} new alert(s) from {len(events)} candidate(s)")

        return FrameResult(
            frame_index=frame_index,
            timestamp=batch.timestamp,
            stats=stats,
            people=result.people,
            candidates=events,
            alerts=alerts,
            overlays=overlays,
        )
