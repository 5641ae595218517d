from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class FramePayload(BaseModel):
    """DTO for one frame of detections pushed by an external detector"""
    frame_width: int = Field(gt=0)
    frame_height: int = Field(gt=0)
    # Items are parsed leniently by DetectionBuilder; malformed ones are skipped
    detections: List[Dict[str, Any]] = Field(default_factory=list)
    frame_index: Optional[int] = None


class FrameAcceptedResponse(BaseModel):
    """DTO for a queued frame"""
    queued: bool
    detections: int
    pending: int


class RunnerStatusResponse(BaseModel):
    """DTO for frame loop status"""
    running: bool
    fps: int
    frame_index: int
    processed_frames: int
    skipped_frames: int
    started_at: Optional[str] = None
    stopped_at: Optional[str] = None


class StatsResponse(BaseModel):
    """DTO for an occupancy snapshot"""
    current_count: int
    total_in: int
    total_out: int
    peak_count: int
    child_count: int
    adult_count: int


class AlertResponse(BaseModel):
    """DTO for one alert log entry"""
    time: str
    display_time: str
    message: str
    severity: str


class VoiceStatusResponse(BaseModel):
    """DTO for voice queue status"""
    enabled: bool
    speaking: bool
    pending: int


class ChartPointResponse(BaseModel):
    time: str
    count: int
    total_in: int
    total_out: int


class HistoryRowResponse(BaseModel):
    timestamp: str
    current_count: int
    total_in: int
    total_out: int
    peak_count: int


class HistoryResponse(BaseModel):
    """DTO for sampled crowd history"""
    chart: List[ChartPointResponse]
    history: List[HistoryRowResponse]
