"""
Centralized DateTime Utilities
==============================

Provides consistent datetime handling for alerts and history samples.
All wall-clock timestamps use the timezone configured in crowdguard.core.config.

Functions:
- now(): Returns timezone-aware datetime object
- now_iso(): Returns ISO 8601 string
- to_iso(): Convert datetime object to ISO 8601 string
- to_display_time(): HH:MM:SS string shown next to alerts and history rows
"""
import logging
import zoneinfo
from datetime import datetime, timezone as dt_timezone
from typing import Optional

from ..core.config import get_settings

logger = logging.getLogger(__name__)


def _get_app_timezone() -> dt_timezone:
    """
    Get the application timezone from config.
    Returns timezone object (defaults to UTC if invalid).
    """
    tz_str = get_settings().local_timezone

    if tz_str.upper() == "UTC":
        return dt_timezone.utc

    try:
        return zoneinfo.ZoneInfo(tz_str)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Invalid timezone '{tz_str}', falling back to UTC")
        return dt_timezone.utc


def now() -> datetime:
    """
    Get current datetime with application-configured timezone.

    Returns:
        timezone-aware datetime object
    """
    return datetime.now(_get_app_timezone())


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """Convert a datetime to ISO 8601, using 'Z' for UTC."""
    if dt is None:
        return None
    if dt.tzinfo == dt_timezone.utc:
        return dt.replace(microsecond=0).isoformat().replace("+00:00", "Z")
    return dt.replace(microsecond=0).isoformat()


def now_iso() -> str:
    """
    Get current datetime as ISO 8601 string with application-configured timezone.

    Returns:
        ISO 8601 formatted string (e.g., "2025-12-24T10:30:00+05:30" or "2025-12-24T10:30:00Z")
    """
    return to_iso(now())


def to_display_time(dt: datetime) -> str:
    """Format a datetime as HH:MM:SS for display."""
    return dt.strftime("%H:%M:%S")
