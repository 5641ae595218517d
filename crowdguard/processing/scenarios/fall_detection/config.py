"""
Fall Detection Configuration
----------------------------

Handles configuration parsing for fall detection scenario.
"""

from typing import Any, Dict

from crowdguard.core.config import Settings


class FallDetectionConfig:
    """Configuration for fall detection scenario."""

    def __init__(self, config: Dict[str, Any], settings: Settings):
        """
        Initialize configuration from config dict, falling back to settings.

        Args:
            config: Scenario configuration dictionary
            settings: Application settings
        """
        # Custom label for alerts
        self.custom_label = config.get("label")

        # Number of most recent positions compared (first vs last)
        self.window = int(config.get("window", settings.fall_window))

        # h/w above this at the start of the window counts as upright
        self.upright_ratio = float(config.get("upright_ratio", settings.fall_upright_ratio))

        # h/w below this at the end of the window counts as flattened
        self.flat_ratio = float(config.get("flat_ratio", settings.fall_flat_ratio))
