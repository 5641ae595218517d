"""
Custom exception hierarchy for CrowdGuard.

The frame pipeline itself never raises for bad input; these exceptions mark
the boundaries (configuration, capability handles, control surface) where a
caller has to decide what to do.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from typing import Any, Dict, Optional


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------


class CrowdGuardError(Exception):
    """Base exception for all CrowdGuard errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(CrowdGuardError):
    """Raised when a scenario or engine configuration is invalid."""
    pass


# -----------------------------------------------------------------------------
# Capabilities
# -----------------------------------------------------------------------------


class DetectionSourceError(CrowdGuardError):
    """Raised by a detection source when a frame cannot be produced."""
    pass


class SpeechEngineError(CrowdGuardError):
    """Raised by a speech engine when an utterance fails."""
    pass


# -----------------------------------------------------------------------------
# Control surface
# -----------------------------------------------------------------------------


class PipelineStateError(CrowdGuardError):
    """Raised when an operation is not valid in the current runner state."""
    pass
