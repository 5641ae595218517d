"""CrowdGuard: detection-to-alert pipeline for live crowd monitoring."""

__version__ = "1.0.0"
