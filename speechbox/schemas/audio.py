"""
Schemas for the record API (/api/audio) and the playback helpers.

AudioCreateRequest only documents the POST body in OpenAPI; the route reads the
raw JSON so missing fields are reported as a 400 listing required/received/missing,
not as a framework 422.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AudioCreateRequest(BaseModel):
    """Request body for POST /api/audio. All three fields are required non-empty strings."""

    model_config = ConfigDict(extra="allow")

    text: str | None = Field(None, description="Text to speak")
    language: str | None = Field(None, description="Language name, e.g. 'english'")
    voice: str | None = Field(None, description="Voice name, e.g. 'voiceA'")


class AudioResponse(BaseModel):
    """Response body for POST /api/audio and GET /api/audio."""

    id: str
    url: str = Field(..., description="Fabricated audio URL (mock; not a real resource)")
    language: str
    voice: str
    timestamp: str = Field(..., description="ISO-8601 UTC with milliseconds, e.g. 2024-05-01T12:00:00.000Z")


class ErrorResponse(BaseModel):
    error: str
    required: list[str] | None = None
    received: list[str] | None = None
    missing: list[str] | None = None
    stack: str | None = Field(None, description="Only in development")


class LanguagesResponse(BaseModel):
    languages: list[str]
