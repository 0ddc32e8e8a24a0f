from __future__ import annotations

import itertools
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from speechbox.config import Settings
from speechbox.main import create_app
from speechbox.models import DurableResult, SynthesisRecord
from speechbox.storage.base import DurableStore
from speechbox.tts.base import TTSEngine


class InMemoryDurableStore(DurableStore):
    """Working durable store with predictable ids."""

    def __init__(self) -> None:
        self.docs: dict[str, SynthesisRecord] = {}
        self._ids = itertools.count(1)
        self.closed = False

    @property
    def name(self) -> str:
        return "fake-durable"

    async def insert(self, record: SynthesisRecord) -> DurableResult:
        stored = record.with_id(f"durable-{next(self._ids)}")
        self.docs[stored.id] = stored
        return DurableResult.success(stored)

    async def find(self, record_id: str) -> DurableResult:
        return DurableResult.success(self.docs.get(record_id))

    def close(self) -> None:
        self.closed = True


class UnavailableDurableStore(DurableStore):
    """Durable store that is never reachable."""

    def __init__(self) -> None:
        self.insert_calls = 0
        self.find_calls = 0

    @property
    def name(self) -> str:
        return "down"

    async def insert(self, record: SynthesisRecord) -> DurableResult:
        self.insert_calls += 1
        return DurableResult.unavailable("connection refused")

    async def find(self, record_id: str) -> DurableResult:
        self.find_calls += 1
        return DurableResult.unavailable("connection refused")


class FakeTTSEngine(TTSEngine):
    def __init__(self, audio: bytes = b"ID3fake-mp3") -> None:
        self.audio = audio
        self.calls: list[tuple[str, str]] = []

    @property
    def format(self) -> str:
        return "audio/mpeg"

    async def synthesize(self, text: str, voice: str) -> tuple[bytes, str]:
        self.calls.append((text, voice))
        return self.audio, self.format


def make_settings(**overrides) -> Settings:
    values = {
        "APP_ENV": "test",
        "MONGODB_URI": "",
        "TTS_BACKEND": "none",
        "LOG_LEVEL": "DEBUG",
        "LOG_FILE": "",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def sample_record():
    return SynthesisRecord(
        text="hello",
        language="english",
        voice="voiceA",
        url="https://example.com/audio/voiceA-english-1714564800000.mp3",
        timestamp=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    )
