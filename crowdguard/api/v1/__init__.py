from .monitor_controller import router as monitor_router


__all__ = ["monitor_router"]
