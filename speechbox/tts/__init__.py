"""
TTS: mock URL fabrication for stored records, and Edge TTS for direct playback.
"""
from __future__ import annotations

from speechbox.tts.base import TTSEngine
from speechbox.tts.edge_tts import EdgeTTSEngine
from speechbox.tts.service import get_tts_engine, language_code, resolve_voice
from speechbox.tts.urls import fabricate_audio_url

__all__ = [
    "TTSEngine",
    "EdgeTTSEngine",
    "fabricate_audio_url",
    "get_tts_engine",
    "language_code",
    "resolve_voice",
]
