"""
Detection source contracts
--------------------------

Defines what the frame loop needs from a detection source.

A source yields one DetectionBatch per frame. Acquiring it (opening a camera,
connecting to a model server) happens in __aenter__, releasing it in
__aexit__, so the runner can guarantee release on every exit path.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from typing import Optional, Protocol

# -----------------------------------------------------------------------------
# Application
# -----------------------------------------------------------------------------
from crowdguard.processing.detections.contracts import DetectionBatch


class DetectionSource(Protocol):
    """Interface for detection sources. The runner only needs read() and the context protocol."""

    async def read(self) -> Optional[DetectionBatch]:
        """
        Return the next frame's detections, or None if none is available yet.

        Raises:
            DetectionSourceError: The frame could not be produced
        """
        ...

    async def __aenter__(self) -> "DetectionSource":
        ...

    async def __aexit__(self, exc_type, exc, tb) -> None:
        ...
