"""Services: request handling for /api/audio."""
from speechbox.services.audio_service import AudioService

__all__ = ["AudioService"]
