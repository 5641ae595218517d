"""
API layer for CrowdGuard.

Exposes HTTP and WebSocket endpoints under /api/v1/monitor (frame ingestion,
start/stop, stats, alerts, history, voice control, live updates).
"""
