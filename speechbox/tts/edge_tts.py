"""
Edge TTS engine (Microsoft Edge online TTS). Free, no API key.
A 403 from Microsoft usually means network/region; set TTS_BACKEND=none to disable.
"""
from __future__ import annotations

import logging
import re
from typing import List

from speechbox.tts.base import TTSEngine

logger = logging.getLogger(__name__)

# Longer text is split so a single request stays under the service limit
MAX_CHARS_PER_CHUNK = 800

_SENTENCE_END = re.compile(r"(?<=[.!?\n؟۔])\s+")


def split_text_chunks(text: str, max_chars: int = MAX_CHARS_PER_CHUNK) -> List[str]:
    """Split text into pieces of at most max_chars, preferring sentence boundaries."""
    text = (text or "").strip()
    if not text:
        return []
    if len(text) <= max_chars:
        return [text]
    chunks: List[str] = []
    current = ""
    for sentence in _SENTENCE_END.split(text):
        if not sentence:
            continue
        joined = f"{current} {sentence}" if current else sentence
        if len(joined) <= max_chars:
            current = joined
            continue
        if current:
            chunks.append(current)
        # a single sentence longer than max_chars is hard-cut
        while len(sentence) > max_chars:
            chunks.append(sentence[:max_chars])
            sentence = sentence[max_chars:]
        current = sentence
    if current:
        chunks.append(current)
    return chunks


class EdgeTTSEngine(TTSEngine):
    """TTS via edge-tts. Output: MP3."""

    @property
    def format(self) -> str:
        return "audio/mpeg"

    async def _synthesize_one(self, text: str, voice: str) -> bytes:
        """One request to Edge TTS; raw MP3 bytes or b''."""
        import edge_tts

        communicate = edge_tts.Communicate(text, voice)
        parts: List[bytes] = []
        try:
            async for chunk in communicate.stream():
                if chunk.get("type") == "audio" and chunk.get("data"):
                    parts.append(chunk["data"])
        except Exception as e:
            logger.error("Edge TTS stream failed (voice=%s): %s", voice, e)
            return b""
        audio = b"".join(parts)
        if not audio:
            logger.warning("Edge TTS returned no audio for %d chars", len(text))
        return audio

    async def synthesize(self, text: str, voice: str) -> tuple[bytes, str]:
        pieces: List[bytes] = []
        for chunk in split_text_chunks(text):
            audio = await self._synthesize_one(chunk, voice)
            if not audio:
                # a partial clip would cut mid-sentence; report nothing instead
                return b"", self.format
            pieces.append(audio)
        return b"".join(pieces), self.format
