from .monitor_dto import (
    AlertResponse,
    FrameAcceptedResponse,
    FramePayload,
    HistoryResponse,
    RunnerStatusResponse,
    StatsResponse,
    VoiceStatusResponse,
)

__all__ = [
    "AlertResponse",
    "FrameAcceptedResponse",
    "FramePayload",
    "HistoryResponse",
    "RunnerStatusResponse",
    "StatsResponse",
    "VoiceStatusResponse",
]
