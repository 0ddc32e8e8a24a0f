"""Pydantic schemas for API request/response."""
from speechbox.schemas.audio import (
    AudioCreateRequest,
    AudioResponse,
    ErrorResponse,
    LanguagesResponse,
)

__all__ = [
    "AudioCreateRequest",
    "AudioResponse",
    "ErrorResponse",
    "LanguagesResponse",
]
