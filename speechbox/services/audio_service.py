"""
AudioService: the create/fetch contract behind /api/audio.

create: validate -> fabricate URL -> RecordStore.put -> response.
fetch: validate id -> RecordStore.get -> response or NotFoundError.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from speechbox.errors import NotFoundError, ValidationError
from speechbox.models import (
    REQUIRED_FIELDS,
    SynthesisRecord,
    SynthesisRequest,
    SynthesisStatus,
    format_timestamp,
)
from speechbox.schemas.audio import AudioResponse
from speechbox.storage.record_store import RecordStore
from speechbox.tts.urls import DEFAULT_AUDIO_URL_BASE, fabricate_audio_url

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_filled(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def validate_request(body: Mapping[str, Any]) -> SynthesisRequest:
    """
    Check text/language/voice are non-empty strings. Raises ValidationError listing
    required fields, the keys received and the missing ones.
    """
    missing = [name for name in REQUIRED_FIELDS if not _is_filled(body.get(name))]
    if missing:
        logger.error("Missing required fields in request body: %s", missing)
        raise ValidationError(
            "Missing required fields",
            required=list(REQUIRED_FIELDS),
            received=list(body.keys()),
            missing=missing,
        )
    return SynthesisRequest(text=body["text"], language=body["language"], voice=body["voice"])


def to_response(record: SynthesisRecord) -> AudioResponse:
    return AudioResponse(
        id=record.id or "",
        url=record.url,
        language=record.language,
        voice=record.voice,
        timestamp=format_timestamp(record.timestamp),
    )


class AudioService:
    """Request handler for synthesis records. Storage and clock are injected."""

    def __init__(
        self,
        store: RecordStore,
        audio_url_base: str = DEFAULT_AUDIO_URL_BASE,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._audio_url_base = audio_url_base
        self._clock = clock

    @property
    def store(self) -> RecordStore:
        return self._store

    async def create(self, body: Mapping[str, Any]) -> AudioResponse:
        """Validate, fabricate the URL, persist, return {id, url, language, voice, timestamp}."""
        request = validate_request(body)

        created_at = self._clock()
        url = fabricate_audio_url(request.voice, request.language, created_at, self._audio_url_base)
        logger.info("Generated audio URL: %s", url)

        record = SynthesisRecord(
            text=request.text,
            language=request.language,
            voice=request.voice,
            url=url,
            timestamp=created_at,
            status=SynthesisStatus.COMPLETED,
        )
        record_id = await self._store.put(record)
        return to_response(record.with_id(record_id))

    async def fetch(self, record_id: str | None) -> AudioResponse:
        """Return the stored record reshaped, or raise NotFoundError."""
        if not _is_filled(record_id):
            logger.error("Missing audio ID parameter")
            raise ValidationError("Missing audio ID parameter")
        record_id = record_id.strip()
        logger.info("Looking up audio with ID: %s", record_id)
        record = await self._store.get(record_id)
        if record is None:
            logger.info("Audio not found: %s", record_id)
            raise NotFoundError("Audio not found")
        return to_response(record.with_id(record_id))
