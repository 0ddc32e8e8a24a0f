"""
TTS engine interface for the direct playback endpoint. Implementation: Edge TTS.
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class TTSEngine(ABC):
    """Abstract TTS. synthesize(text, voice) returns (audio_bytes, mime_type)."""

    @abstractmethod
    async def synthesize(self, text: str, voice: str) -> tuple[bytes, str]:
        """
        Convert text to speech with the given voice. Returns (raw_audio_bytes, mime_type).
        Empty bytes means the engine produced nothing.
        """
        ...

    @property
    @abstractmethod
    def format(self) -> str:
        """MIME type of output, e.g. 'audio/mpeg'."""
        ...
