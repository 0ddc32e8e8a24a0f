"""
Error taxonomy for the audio API.

ValidationError -> 400, NotFoundError -> 404. StorageUnavailable never reaches
the client: durable adapters turn it into an "unavailable" result and the
record store falls back to the transient table.
"""
from __future__ import annotations

from typing import Any


class SpeechboxError(Exception):
    """Base for errors that map to an HTTP status."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(SpeechboxError):
    """Missing or malformed input. Optionally lists required/received/missing fields."""

    status_code = 400

    def __init__(
        self,
        message: str,
        required: list[str] | None = None,
        received: list[str] | None = None,
        missing: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.required = required
        self.received = received
        self.missing = missing

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        if self.required is not None:
            payload["required"] = self.required
            payload["received"] = self.received or []
            payload["missing"] = self.missing or []
        return payload


class NotFoundError(SpeechboxError):
    status_code = 404


class StorageUnavailable(SpeechboxError):
    """
    Durable store not configured, unreachable or failed a read/write.
    Raised and caught inside storage adapters only; never mapped to a response.
    """


class TTSUnavailable(SpeechboxError):
    """Direct playback engine disabled by config."""

    status_code = 503


class TTSFailed(SpeechboxError):
    """Direct playback engine produced no audio."""

    status_code = 502
