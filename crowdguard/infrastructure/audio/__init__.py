"""Audio infrastructure: speech engines, players and the voice announcement queue"""

from .players import WebSocketAudioPlayer, wav_duration
from .speech_engine import GroqSpeechEngine, LoggingSpeechEngine, SpeechEngine, create_speech_engine
from .voice_queue import VoiceQueue, VoiceQueueEntry, VoiceState, make_dedup_key, strip_emoji

__all__ = [
    "GroqSpeechEngine",
    "LoggingSpeechEngine",
    "SpeechEngine",
    "VoiceQueue",
    "VoiceQueueEntry",
    "VoiceState",
    "WebSocketAudioPlayer",
    "create_speech_engine",
    "make_dedup_key",
    "strip_emoji",
    "wav_duration",
]
