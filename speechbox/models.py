"""
Domain types: synthesis request, stored record, durable-store result.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

REQUIRED_FIELDS = ("text", "language", "voice")


class SynthesisStatus(str, Enum):
    """
    Lifecycle states. Generation is synchronous, so records are always created
    as COMPLETED; the other states are kept for stored documents and clients
    that already know them.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class SynthesisRequest:
    text: str
    language: str
    voice: str


@dataclass(frozen=True)
class SynthesisRecord:
    """One persisted text-to-speech request. id is None until a store assigns it."""

    text: str
    language: str
    voice: str
    url: str
    timestamp: datetime
    status: SynthesisStatus = SynthesisStatus.COMPLETED
    id: str | None = None

    def with_id(self, record_id: str) -> "SynthesisRecord":
        return replace(self, id=record_id)

    def to_document(self) -> dict[str, Any]:
        """Fields as stored in the durable store (no id; the store assigns _id)."""
        return {
            "text": self.text,
            "language": self.language,
            "voice": self.voice,
            "url": self.url,
            "timestamp": self.timestamp,
            "status": self.status.value,
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "SynthesisRecord":
        ts = doc.get("timestamp")
        if isinstance(ts, datetime) and ts.tzinfo is None:
            # pymongo returns naive UTC datetimes by default
            ts = ts.replace(tzinfo=timezone.utc)
        return cls(
            text=doc.get("text", ""),
            language=doc.get("language", ""),
            voice=doc.get("voice", ""),
            url=doc.get("url", ""),
            timestamp=ts,
            status=SynthesisStatus(doc.get("status", SynthesisStatus.COMPLETED.value)),
            id=str(doc["_id"]) if doc.get("_id") is not None else None,
        )


def format_timestamp(ts: datetime) -> str:
    """ISO-8601 UTC with milliseconds and Z suffix, e.g. 2024-05-01T12:00:00.000Z."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(timezone.utc)
    return ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class DurableResult:
    """
    Outcome of one durable-store call.

    ok=True: call succeeded; record is the stored record (insert) or the found
    record, None on a lookup miss. ok=False: store unavailable, reason says why.
    """

    ok: bool
    record: SynthesisRecord | None = None
    reason: str = ""

    @classmethod
    def success(cls, record: SynthesisRecord | None) -> "DurableResult":
        return cls(ok=True, record=record)

    @classmethod
    def unavailable(cls, reason: str) -> "DurableResult":
        return cls(ok=False, reason=reason)
