"""Monitor API endpoints: frame ingestion, loop control, stats, alerts, voice, live updates"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status

from ...application import MonitorSession
from ...application.dto import (
    AlertResponse,
    FrameAcceptedResponse,
    FramePayload,
    HistoryResponse,
    RunnerStatusResponse,
    StatsResponse,
    VoiceStatusResponse,
)
from ...core.exceptions import PipelineStateError
from ...infrastructure.notifications import NotificationService
from .dependencies import get_monitor_session, _global_session_or_none

logger = logging.getLogger(__name__)

router = APIRouter(tags=["monitor"])


@router.post("/frames", response_model=FrameAcceptedResponse, status_code=status.HTTP_202_ACCEPTED)
async def push_frame(
    payload: FramePayload,
    session: MonitorSession = Depends(get_monitor_session),
) -> FrameAcceptedResponse:
    """
    Queue one frame of detections for the frame loop.

    Returns 409 while monitoring is stopped.
    """
    try:
        batch = session.submit_frame(
            payload.detections,
            frame_width=payload.frame_width,
            frame_height=payload.frame_height,
            frame_index=payload.frame_index,
        )
    except PipelineStateError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message)
    return FrameAcceptedResponse(
        queued=True,
        detections=len(batch.detections),
        pending=session.source.pending,
    )


@router.post("/start", response_model=RunnerStatusResponse)
async def start_monitoring(session: MonitorSession = Depends(get_monitor_session)) -> RunnerStatusResponse:
    await session.start()
    return RunnerStatusResponse(**session.runner_status())


@router.post("/stop", response_model=RunnerStatusResponse)
async def stop_monitoring(session: MonitorSession = Depends(get_monitor_session)) -> RunnerStatusResponse:
    await session.stop()
    return RunnerStatusResponse(**session.runner_status())


@router.get("/status", response_model=RunnerStatusResponse)
async def get_status(session: MonitorSession = Depends(get_monitor_session)) -> RunnerStatusResponse:
    return RunnerStatusResponse(**session.runner_status())


@router.get("/stats", response_model=StatsResponse)
async def get_stats(session: MonitorSession = Depends(get_monitor_session)) -> StatsResponse:
    return StatsResponse(**session.pipeline.stats.to_dict())


@router.get("/alerts", response_model=List[AlertResponse])
async def list_alerts(session: MonitorSession = Depends(get_monitor_session)) -> List[AlertResponse]:
    """Alert log, most recent last."""
    return [AlertResponse(**NotificationService.format_alert(entry)) for entry in session.dispatcher.alerts]


@router.get("/history", response_model=HistoryResponse)
async def get_history(session: MonitorSession = Depends(get_monitor_session)) -> HistoryResponse:
    return HistoryResponse(**session.recorder.to_dict())


@router.get("/voice", response_model=VoiceStatusResponse)
async def get_voice_status(session: MonitorSession = Depends(get_monitor_session)) -> VoiceStatusResponse:
    return VoiceStatusResponse(**session.voice_status())


@router.post("/voice/toggle", response_model=VoiceStatusResponse)
async def toggle_voice(session: MonitorSession = Depends(get_monitor_session)) -> VoiceStatusResponse:
    session.voice.toggle_enabled()
    return VoiceStatusResponse(**session.voice_status())


@router.post("/voice/cancel", response_model=VoiceStatusResponse)
async def cancel_voice(session: MonitorSession = Depends(get_monitor_session)) -> VoiceStatusResponse:
    session.voice.cancel()
    return VoiceStatusResponse(**session.voice_status())


@router.websocket("/ws")
async def monitor_updates(websocket: WebSocket):
    """
    WebSocket endpoint for live monitor updates.

    Every connected client receives `stats_update` messages per processed
    frame and one `alert_notification` per newly logged alert.

    Example connection:
        ws://host/api/v1/monitor/ws
    """
    session = _global_session_or_none()
    if session is None:
        await websocket.close(code=1013, reason="Monitor session not available")
        return

    await websocket.accept()
    manager = session.websocket_manager

    try:
        await manager.add_connection(websocket)

        await websocket.send_json({
            "type": "connection_established",
            "message": "Connected to crowd monitor",
            "stats": session.pipeline.stats.to_dict(),
            "voice": session.voice_status(),
        })

        # Keep connection alive and handle incoming messages (ping/pong)
        while True:
            try:
                message = await websocket.receive_text()
                if message == "ping":
                    await websocket.send_text("pong")
                elif message != "pong":
                    logger.debug(f"Received WebSocket message: {message}")
            except WebSocketDisconnect:
                logger.info("WebSocket client disconnected")
                break

    except Exception as e:
        logger.error(f"Error in monitor WebSocket connection: {e}", exc_info=True)
    finally:
        await manager.remove_connection(websocket)
