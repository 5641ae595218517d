"""
Pipeline Context
----------------

Holds the session configuration and run bookkeeping for the frame loop.
Used by CrowdPipeline (thresholds, scenarios) and PipelineRunner (FPS,
frame counters, start/stop times).
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from datetime import datetime
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# Application
# -----------------------------------------------------------------------------
from crowdguard.core.config import Settings, get_settings
from crowdguard.processing.detections.config import PersonFilterConfig
from crowdguard.utils.datetime_utils import now, to_iso


class PipelineContext:
    """
    Context for pipeline execution.

    Carries which scenarios to run, the person filter thresholds, the target
    FPS, and counters used for status reporting.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        scenario_configs: Optional[List[Dict[str, Any]]] = None
    ):
        """
        Args:
            settings: Application settings (defaults to the global settings)
            scenario_configs: Scenario configs; None runs every built-in behavior
        """
        self.settings = settings or get_settings()
        self.scenario_configs = scenario_configs
        self.filter_config = PersonFilterConfig.from_settings(self.settings)
        self.fps = max(1, int(self.settings.fps))

        # ----- Frame tracking -----
        self.frame_index = 0
        self.processed_frames = 0
        self.skipped_frames = 0

        # ----- Run bookkeeping -----
        self.running = False
        self.started_at: Optional[datetime] = None
        self.stopped_at: Optional[datetime] = None

    def next_frame_index(self) -> int:
        self.frame_index += 1
        return self.frame_index

    def mark_started(self) -> None:
        self.running = True
        self.started_at = now()
        self.stopped_at = None

    def mark_stopped(self) -> None:
        self.running = False
        self.stopped_at = now()

    def to_status_dict(self) -> Dict[str, Any]:
        return {
            "running": self.running,
            "fps": self.fps,
            "frame_index": self.frame_index,
            "processed_frames": self.processed_frames,
            "skipped_frames": self.skipped_frames,
            "started_at": to_iso(self.started_at),
            "stopped_at": to_iso(self.stopped_at),
        }
