"""Speech engine abstraction.

A speech engine accepts one utterance at a time: `speak()` returns when the
utterance finished and raises when it failed. The voice queue owns the
sequencing; engines never queue on their own.
"""
import asyncio
import base64
import logging
from typing import Awaitable, Callable, Optional, Protocol

import httpx

from ...core.config import Settings, get_settings
from ...core.exceptions import ConfigurationError, SpeechEngineError
from ..http_client_factory import get_shared_http_client
from ..utils.retry import retry_with_backoff

logger = logging.getLogger(__name__)

AudioPlayer = Callable[[bytes], Awaitable[None]]


class SpeechEngine(Protocol):
    """Capability handle for an external text-to-speech engine."""

    async def speak(self, text: str) -> None:
        """Speak one utterance. Returns on completion, raises on failure."""
        ...

    def stop(self) -> None:
        """Stop any in-progress utterance immediately."""
        ...

    async def aclose(self) -> None:
        """Release engine resources."""
        ...


class LoggingSpeechEngine:
    """
    Headless engine: logs each utterance and simulates its duration.

    Duration is proportional to the text length so back-to-back alerts
    still serialize the way a real voice would.
    """

    def __init__(self, seconds_per_char: float = 0.06):
        self.seconds_per_char = seconds_per_char

    async def speak(self, text: str) -> None:
        logger.info(f"[voice] {text}")
        await asyncio.sleep(len(text) * self.seconds_per_char)

    def stop(self) -> None:
        # Nothing to interrupt; the queue cancels the awaiting task
        pass

    async def aclose(self) -> None:
        pass


class GroqSpeechEngine:
    """
    Speech via an OpenAI-compatible TTS HTTP endpoint (Groq by default).

    Synthesized audio is handed to an injected player coroutine; the
    utterance completes when the player returns.
    """

    def __init__(
        self,
        player: AudioPlayer,
        api_key: str,
        url: str,
        model: str,
        voice: str,
        http_client: Optional[httpx.AsyncClient] = None,
        on_stop: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize the engine.

        Args:
            player: Coroutine that plays WAV bytes and returns when done
            api_key: Provider API key
            url: TTS endpoint URL
            model: TTS model name
            voice: Voice name
            http_client: Optional shared async HTTP client for connection pooling
            on_stop: Optional hook that interrupts the player
        """
        if not api_key:
            raise ConfigurationError("GROQ_API_KEY is required for the groq speech engine")
        self.player = player
        self.api_key = api_key
        self.url = url
        self.model = model
        self.voice = voice
        self._http_client = http_client
        self._on_stop = on_stop

    async def _synthesize(self, text: str) -> bytes:
        client = self._http_client or get_shared_http_client()
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        payload = {
            "model": self.model,
            "input": text,
            "voice": self.voice,
            "response_format": "wav"
        }

        async def _synthesize_internal() -> bytes:
            response = await client.post(self.url, json=payload, headers=headers)
            response.raise_for_status()

            content_type = response.headers.get("content-type", "").lower()
            if "application/json" in content_type:
                result = response.json()
                audio_base64 = result.get("audio") or result.get("data") or result.get("content")
                if not audio_base64:
                    raise SpeechEngineError("No audio data in TTS response")
                return base64.b64decode(audio_base64)

            if not response.content:
                raise SpeechEngineError("No audio data in TTS response")
            return response.content

        return await retry_with_backoff(
            _synthesize_internal,
            max_retries=2,
            initial_delay=0.5,
            max_delay=4.0,
            exceptions=(httpx.TimeoutException, httpx.TransportError),
        )

    async def speak(self, text: str) -> None:
        try:
            audio = await self._synthesize(text)
        except httpx.HTTPError as exc:
            raise SpeechEngineError(f"TTS request failed: {exc}") from exc
        await self.player(audio)

    def stop(self) -> None:
        if self._on_stop is not None:
            self._on_stop()

    async def aclose(self) -> None:
        # The shared client is closed by the application lifespan
        pass


def create_speech_engine(
    settings: Optional[Settings] = None,
    player: Optional[AudioPlayer] = None,
    on_stop: Optional[Callable[[], None]] = None
) -> SpeechEngine:
    """
    Build the engine selected by CROWDGUARD_TTS_PROVIDER ("log" or "groq").

    Raises:
        ConfigurationError: Unknown provider, or groq without a player/API key
    """
    settings = settings or get_settings()
    provider = settings.tts_provider

    if provider == "log":
        return LoggingSpeechEngine()
    if provider == "groq":
        if player is None:
            raise ConfigurationError("The groq speech engine needs an audio player")
        return GroqSpeechEngine(
            player=player,
            api_key=settings.tts_api_key,
            url=settings.tts_url,
            model=settings.tts_model,
            voice=settings.tts_voice,
            on_stop=on_stop,
        )
    raise ConfigurationError(f"Unknown TTS provider '{provider}'")
