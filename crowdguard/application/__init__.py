from .monitor_session import MonitorSession

__all__ = ["MonitorSession"]
