"""
Pipeline Runner
---------------

Drives the frame loop: pulls detections from the source, runs them through
CrowdPipeline, samples history, and hands each result to the publisher.
Manages start/stop, FPS pacing and source acquisition.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from crowdguard.domain.models import OccupancyStats
from crowdguard.processing.history.recorder import CrowdHistoryRecorder
from crowdguard.processing.pipeline.contracts import FrameResult
from crowdguard.processing.pipeline.pipeline import CrowdPipeline
from crowdguard.processing.sources.contracts import DetectionSource

logger = logging.getLogger(__name__)

FrameCallback = Callable[[FrameResult], Awaitable[None]]


class PipelineRunner:
    """
    Orchestrates the frame loop on the running event loop.

    Stopping pauses processing only. Counters, the alert log and the
    history series are kept, and pending voice announcements play out.
    """

    def __init__(
        self,
        pipeline: CrowdPipeline,
        source: DetectionSource,
        recorder: Optional[CrowdHistoryRecorder] = None,
        on_frame: Optional[FrameCallback] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Args:
            pipeline: Per-frame pipeline
            source: Detection source (acquired for the duration of each run)
            recorder: Optional chart/history sampler
            on_frame: Optional coroutine called with every FrameResult
            clock: Monotonic clock used for pacing
        """
        self.pipeline = pipeline
        self.context = pipeline.context
        self.source = source
        self.recorder = recorder
        self.on_frame = on_frame
        self._clock = clock
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> bool:
        """
        Start the frame loop.

        Returns:
            False if it was already running
        """
        if self.is_running:
            return False
        self.context.mark_started()
        self._task = asyncio.get_running_loop().create_task(self._run())
        self._task.add_done_callback(self._on_task_done)
        logger.info(f"Frame loop started (fps={self.context.fps})")
        return True

    async def stop(self) -> bool:
        """
        Stop the frame loop and release the source.

        Returns:
            False if it was not running
        """
        task, self._task = self._task, None
        if task is None or task.done():
            return False
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self._mark_stopped()
        logger.info(
            f"Frame loop stopped (processed={self.context.processed_frames} "
            f"skipped={self.context.skipped_frames})"
        )
        return True

    async def step(self) -> Optional[FrameResult]:
        """
        Process at most one frame.

        A source or processing failure skips the frame: no counter, tracker
        or alert updates happen for it. History is sampled on every tick,
        including ticks without a frame.
        """
        try:
            batch = await self.source.read()
        except Exception as exc:
            self.context.skipped_frames += 1
            logger.warning(f"Detection source failed, skipping frame: {exc}")
            self._sample(self.pipeline.stats)
            return None
        if batch is None:
            self._sample(self.pipeline.stats)
            return None

        try:
            result = self.pipeline.process_frame(batch)
        except Exception as exc:
            self.context.skipped_frames += 1
            logger.warning(f"Frame processing failed, skipping frame: {exc}", exc_info=True)
            self._sample(self.pipeline.stats)
            return None
        self._sample(result.stats)

        if self.on_frame is not None:
            try:
                await self.on_frame(result)
            except Exception as exc:
                logger.warning(f"Frame publisher failed for frame {result.frame_index}: {exc}", exc_info=True)
        return result

    async def _run(self) -> None:
        min_interval = 1.0 / max(1, self.context.fps)
        next_tick = self._clock()

        async with self.source:
            while True:
                # FPS pacing
                now_ts = self._clock()
                if now_ts < next_tick:
                    await asyncio.sleep(next_tick - now_ts)
                next_tick = max(next_tick + min_interval, self._clock())

                await self.step()

    def _sample(self, stats: OccupancyStats) -> None:
        if self.recorder is not None:
            self.recorder.maybe_record(stats, self._clock())

    def _mark_stopped(self) -> None:
        self.context.mark_stopped()
        if self.recorder is not None:
            self.recorder.pause()

    def _on_task_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Frame loop crashed: {exc}", exc_info=exc)
            if self._task is task:
                self._task = None
            self._mark_stopped()
