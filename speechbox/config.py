"""Application configuration. Loads from env vars."""
from pydantic_settings import BaseSettings
from typing import Literal


class Settings(BaseSettings):
    """App settings. Override via environment variables."""

    # "development" exposes error messages and stack traces in 500 responses.
    APP_ENV: Literal["development", "production", "test"] = "production"

    # Durable store (MongoDB). Empty URI = in-memory storage only.
    MONGODB_URI: str = ""
    MONGODB_DB_NAME: str = "elevenlabs-clone"
    MONGODB_COLLECTION: str = "audios"
    MONGODB_CONNECT_TIMEOUT_MS: int = 5000  # also used as server selection timeout
    MONGODB_SOCKET_TIMEOUT_MS: int = 45000

    # Mock generation: fabricated URLs look like {AUDIO_URL_BASE}/{voice}-{language}-{ms}.mp3
    AUDIO_URL_BASE: str = "https://example.com/audio"

    # Direct playback (/api/tts): edge = Edge TTS, none = disabled.
    TTS_BACKEND: Literal["edge", "none"] = "edge"
    TTS_EDGE_VOICE: str = ""  # empty = default voice per language

    # Comma-separated, served by /api/languages
    SUPPORTED_LANGUAGES: str = "english,arabic"

    # Browser UI origins. Comma-separated; "*" allows any.
    CORS_ORIGINS: str = "*"

    # Logging: level (DEBUG, INFO, WARNING, ERROR); file path empty = console only.
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def use_mongodb(self) -> bool:
        return bool(self.MONGODB_URI.strip())

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

    @property
    def supported_languages(self) -> list[str]:
        return _split_csv(self.SUPPORTED_LANGUAGES)

    @property
    def cors_origins(self) -> list[str]:
        return _split_csv(self.CORS_ORIGINS)


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in (value or "").split(",") if part.strip()]


def get_settings() -> Settings:
    return Settings()
