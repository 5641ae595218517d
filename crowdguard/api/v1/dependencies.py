# Standard library imports
from typing import Optional

# External package imports
from fastapi import HTTPException, status

# Local application imports
from ...application import MonitorSession


# Global monitor session (set from main.py)
_global_session: Optional[MonitorSession] = None


def set_monitor_session(session: Optional[MonitorSession]) -> None:
    """Set the global monitor session instance"""
    global _global_session
    _global_session = session


def get_monitor_session() -> MonitorSession:
    """
    FastAPI dependency returning the running monitor session

    Raises:
        HTTPException: 503 if the application has not finished starting
    """
    if _global_session is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Monitor session not available"
        )
    return _global_session


def _global_session_or_none() -> Optional[MonitorSession]:
    """Session lookup for WebSocket handlers, which close instead of raising"""
    return _global_session
