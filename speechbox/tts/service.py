"""
Direct playback: pick the engine from config and map UI language names to voices.
Independent of the record API; nothing here reads or writes records.
"""
from __future__ import annotations

import logging

from speechbox.config import Settings
from speechbox.tts.base import TTSEngine
from speechbox.tts.edge_tts import EdgeTTSEngine

logger = logging.getLogger(__name__)

# UI language name -> language code
LANGUAGE_MAP = {
    "english": "en",
    "arabic": "ar",
}

# language code -> default Edge TTS voice
DEFAULT_VOICES = {
    "en": "en-US-GuyNeural",
    "ar": "ar-SA-HamedNeural",
}


def language_code(language: str | None) -> str:
    """Language name (case-insensitive) to code; unknown names fall back to 'en'."""
    return LANGUAGE_MAP.get((language or "").strip().lower(), "en")


def resolve_voice(language: str | None, voice: str | None = None, override: str = "") -> str:
    """Explicit voice wins, then the configured override, then the language default."""
    if voice and voice.strip():
        return voice.strip()
    if override and override.strip():
        return override.strip()
    return DEFAULT_VOICES[language_code(language)]


def get_tts_engine(settings: Settings) -> TTSEngine | None:
    """Return TTS engine from config (edge / none)."""
    if settings.TTS_BACKEND == "none":
        logger.info("TTS disabled (TTS_BACKEND=none)")
        return None
    return EdgeTTSEngine()
