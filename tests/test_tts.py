from datetime import datetime, timezone

import pytest

from speechbox.tts.edge_tts import EdgeTTSEngine, split_text_chunks
from speechbox.tts.service import get_tts_engine, language_code, resolve_voice
from speechbox.tts.urls import fabricate_audio_url
from tests.conftest import FakeTTSEngine, make_settings


def test_fabricate_audio_url_uses_epoch_ms():
    ts = datetime(2024, 5, 1, 12, 0, 0, 500000, tzinfo=timezone.utc)
    assert fabricate_audio_url("voiceA", "english", ts) == (
        "https://example.com/audio/voiceA-english-1714564800500.mp3"
    )


def test_fabricate_audio_url_treats_naive_as_utc():
    naive = datetime(2024, 5, 1, 12, 0, 0)
    aware = naive.replace(tzinfo=timezone.utc)
    assert fabricate_audio_url("v", "l", naive) == fabricate_audio_url("v", "l", aware)


@pytest.mark.parametrize(
    "name, code",
    [("english", "en"), ("Arabic", "ar"), ("klingon", "en"), (None, "en")],
)
def test_language_code(name, code):
    assert language_code(name) == code


def test_resolve_voice_precedence():
    assert resolve_voice("arabic") == "ar-SA-HamedNeural"
    assert resolve_voice("english") == "en-US-GuyNeural"
    assert resolve_voice("english", override="en-GB-RyanNeural") == "en-GB-RyanNeural"
    assert resolve_voice("english", "en-AU-WilliamNeural", "en-GB-RyanNeural") == "en-AU-WilliamNeural"


def test_get_tts_engine_from_settings():
    assert get_tts_engine(make_settings(TTS_BACKEND="none")) is None
    assert isinstance(get_tts_engine(make_settings(TTS_BACKEND="edge")), EdgeTTSEngine)


def test_split_text_chunks_short_and_empty():
    assert split_text_chunks("") == []
    assert split_text_chunks("  Hello.  ") == ["Hello."]


def test_split_text_chunks_prefers_sentence_boundaries():
    text = "One two three. Four five six! Seven eight nine?"
    chunks = split_text_chunks(text, max_chars=20)
    assert chunks == ["One two three.", "Four five six!", "Seven eight nine?"]


def test_split_text_chunks_hard_cuts_long_sentence():
    chunks = split_text_chunks("a" * 25, max_chars=10)
    assert chunks == ["a" * 10, "a" * 10, "a" * 5]


def test_tts_endpoint_streams_audio(client):
    engine = FakeTTSEngine()
    client.app.state.tts_engine = engine
    resp = client.get("/api/tts", params={"text": "marhaba", "lang": "arabic"})
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "audio/mpeg"
    assert resp.content == b"ID3fake-mp3"
    assert engine.calls == [("marhaba", "ar-SA-HamedNeural")]


def test_tts_endpoint_does_not_create_records(client):
    client.app.state.tts_engine = FakeTTSEngine()
    client.get("/api/tts", params={"text": "hello"})
    assert len(client.app.state.audio_service.store.transient) == 0


def test_tts_endpoint_requires_text(client):
    client.app.state.tts_engine = FakeTTSEngine()
    resp = client.get("/api/tts", params={"text": "  "})
    assert resp.status_code == 400


def test_tts_endpoint_disabled(client):
    resp = client.get("/api/tts", params={"text": "hello"})
    assert resp.status_code == 503
    assert resp.json() == {"error": "TTS is disabled"}


def test_tts_endpoint_empty_audio(client):
    client.app.state.tts_engine = FakeTTSEngine(audio=b"")
    resp = client.get("/api/tts", params={"text": "hello"})
    assert resp.status_code == 502
