# Standard library imports
import os
from typing import Final, List, Optional


def _get_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


def _get_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _get_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip().lower() for item in raw.split(",") if item.strip()]


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    """

    def __init__(self) -> None:
        # Logging
        self.log_level: Final[str] = os.getenv("CROWDGUARD_LOG_LEVEL", "INFO").upper()
        self.local_timezone: Final[str] = os.getenv("CROWDGUARD_TIMEZONE", "UTC")

        # Shape filter (shadow / noise rejection)
        self.person_min_score: Final[float] = _get_float("CROWDGUARD_PERSON_MIN_SCORE", 0.40)
        self.min_aspect_ratio: Final[float] = _get_float("CROWDGUARD_MIN_ASPECT_RATIO", 0.55)
        self.max_area_ratio: Final[float] = _get_float("CROWDGUARD_MAX_AREA_RATIO", 0.70)
        self.min_dimension_px: Final[float] = _get_float("CROWDGUARD_MIN_DIMENSION_PX", 25)

        # Adult / child classification
        self.child_max_score: Final[float] = _get_float("CROWDGUARD_CHILD_MAX_SCORE", 0.60)
        self.child_max_area_ratio: Final[float] = _get_float("CROWDGUARD_CHILD_MAX_AREA_RATIO", 0.12)
        self.child_min_aspect_ratio: Final[float] = _get_float("CROWDGUARD_CHILD_MIN_ASPECT_RATIO", 0.85)
        self.adult_min_score: Final[float] = _get_float("CROWDGUARD_ADULT_MIN_SCORE", 0.50)

        # Identity tracking
        self.match_distance_px: Final[float] = _get_float("CROWDGUARD_MATCH_DISTANCE_PX", 150)
        self.history_size: Final[int] = _get_int("CROWDGUARD_HISTORY_SIZE", 30)
        self.identity_ttl_seconds: Final[float] = _get_float("CROWDGUARD_IDENTITY_TTL_SECONDS", 60)
        self.identity_min_observations: Final[int] = _get_int("CROWDGUARD_IDENTITY_MIN_OBSERVATIONS", 2)

        # Behavior analysis
        self.fall_window: Final[int] = _get_int("CROWDGUARD_FALL_WINDOW", 5)
        self.fall_upright_ratio: Final[float] = _get_float("CROWDGUARD_FALL_UPRIGHT_RATIO", 1.3)
        self.fall_flat_ratio: Final[float] = _get_float("CROWDGUARD_FALL_FLAT_RATIO", 0.9)
        self.altercation_distance_factor: Final[float] = _get_float("CROWDGUARD_ALTERCATION_FACTOR", 0.5)
        self.rush_delta: Final[int] = _get_int("CROWDGUARD_RUSH_DELTA", 3)
        self.overcrowding_limit: Final[int] = _get_int("CROWDGUARD_OVERCROWDING_LIMIT", 8)
        self.animal_classes: Final[List[str]] = _get_list("CROWDGUARD_ANIMAL_CLASSES", "dog,cat,bird,horse")
        self.animal_min_score: Final[float] = _get_float("CROWDGUARD_ANIMAL_MIN_SCORE", 0.45)

        # Alerts and voice
        self.alert_log_size: Final[int] = _get_int("CROWDGUARD_ALERT_LOG_SIZE", 50)
        self.danger_cooldown_ms: Final[int] = _get_int("CROWDGUARD_DANGER_COOLDOWN_MS", 6000)
        self.warning_cooldown_ms: Final[int] = _get_int("CROWDGUARD_WARNING_COOLDOWN_MS", 10000)
        self.info_cooldown_ms: Final[int] = _get_int("CROWDGUARD_INFO_COOLDOWN_MS", 15000)
        self.voice_enabled: Final[bool] = _get_bool("CROWDGUARD_VOICE_ENABLED", True)
        self.voice_default_cooldown_ms: Final[int] = _get_int("CROWDGUARD_VOICE_DEFAULT_COOLDOWN_MS", 8000)

        # Speech synthesis
        self.tts_provider: Final[str] = os.getenv("CROWDGUARD_TTS_PROVIDER", "log").strip().lower()
        self.tts_api_key: Final[str] = os.getenv("GROQ_API_KEY", "")
        self.tts_url: Final[str] = os.getenv(
            "CROWDGUARD_TTS_URL",
            "https://api.groq.com/openai/v1/audio/speech"
        )
        self.tts_model: Final[str] = os.getenv("CROWDGUARD_TTS_MODEL", "canopylabs/orpheus-v1-english")
        self.tts_voice: Final[str] = os.getenv("CROWDGUARD_TTS_VOICE", "troy")

        # Frame loop and history sampling
        self.fps: Final[int] = _get_int("CROWDGUARD_FPS", 10)
        self.frame_queue_size: Final[int] = _get_int("CROWDGUARD_FRAME_QUEUE_SIZE", 30)
        self.chart_interval_seconds: Final[float] = _get_float("CROWDGUARD_CHART_INTERVAL_SECONDS", 3)
        self.chart_size: Final[int] = _get_int("CROWDGUARD_CHART_SIZE", 60)
        self.history_interval_seconds: Final[float] = _get_float("CROWDGUARD_HISTORY_INTERVAL_SECONDS", 10)
        self.history_rows: Final[int] = _get_int("CROWDGUARD_HISTORY_ROWS", 100)

        # HTTP surface
        self.cors_origins: Final[List[str]] = [
            origin.strip()
            for origin in os.getenv(
                "CROWDGUARD_CORS_ORIGINS",
                "http://localhost:5173,http://localhost:3000,http://localhost:8080"
            ).split(",")
            if origin.strip()
        ]


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
