"""Audio players for synthesized speech.

The server usually runs headless, so synthesized audio is shipped to the
connected browsers and played there. The player still waits for the clip's
duration before returning, which keeps utterances strictly sequential.
"""
import asyncio
import base64
import io
import logging
import wave

from ..notifications.websocket_manager import WebSocketManager

logger = logging.getLogger(__name__)

# Fallback when the WAV header is unreadable: 16-bit mono at 24 kHz
_FALLBACK_BYTES_PER_SECOND = 48000


def wav_duration(audio: bytes) -> float:
    """Playback length of a WAV clip in seconds."""
    try:
        with wave.open(io.BytesIO(audio), "rb") as clip:
            rate = clip.getframerate()
            frames = clip.getnframes()
            if rate > 0 and 0 < frames < 0xFFFFFFFF:
                return frames / float(rate)
    except (wave.Error, EOFError) as exc:
        logger.debug(f"Unreadable WAV header, estimating duration: {exc}")
    return len(audio) / float(_FALLBACK_BYTES_PER_SECOND)


class WebSocketAudioPlayer:
    """Broadcasts WAV bytes to every client as a `voice_audio` message."""

    def __init__(self, manager: WebSocketManager):
        self.manager = manager
        self._stop_tasks: set = set()

    async def __call__(self, audio: bytes) -> None:
        await self.manager.broadcast({
            "type": "voice_audio",
            "format": "wav",
            "audio": base64.b64encode(audio).decode("ascii"),
        })
        await asyncio.sleep(wav_duration(audio))

    def stop(self) -> None:
        """Tell clients to cut playback short."""
        task = asyncio.get_running_loop().create_task(self.manager.broadcast({"type": "voice_stop"}))
        self._stop_tasks.add(task)
        task.add_done_callback(self._stop_tasks.discard)
