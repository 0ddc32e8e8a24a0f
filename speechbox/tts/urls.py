"""Mock generation: fabricate the audio URL stored with each record."""
from __future__ import annotations

from datetime import datetime, timezone

DEFAULT_AUDIO_URL_BASE = "https://example.com/audio"


def fabricate_audio_url(
    voice: str,
    language: str,
    created_at: datetime,
    base_url: str = DEFAULT_AUDIO_URL_BASE,
) -> str:
    """
    {base}/{voice}-{language}-{epoch_ms}.mp3. Pure function; no audio is produced
    and nothing is fetched.
    """
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    epoch_ms = int(created_at.timestamp() * 1000)
    base = (base_url or DEFAULT_AUDIO_URL_BASE).rstrip("/")
    return f"{base}/{voice}-{language}-{epoch_ms}.mp3"
