"""
Pipeline Module
---------------

Orchestrates the processing pipeline stages:
- PipelineRunner: Frame loop (start/stop, pacing, publishing)
- CrowdPipeline: Per-frame stage sequencing and cross-frame state
- PipelineContext: Session configuration and counters
- Stages: Individual processing stages
"""

from crowdguard.processing.pipeline.context import PipelineContext
from crowdguard.processing.pipeline.contracts import FrameResult
from crowdguard.processing.pipeline.pipeline import CrowdPipeline
from crowdguard.processing.pipeline.runner import PipelineRunner

__all__ = ["CrowdPipeline", "FrameResult", "PipelineContext", "PipelineRunner"]
