"""
FastAPI app: record API for text-to-speech requests and a direct playback endpoint.

POST /api/audio      {text, language, voice} -> {id, url, language, voice, timestamp}
GET  /api/audio?id=  -> same shape, 404 when unknown
GET  /api/tts        text/lang/voice -> audio/mpeg (Edge TTS; independent of records)
GET  /api/languages  -> {languages: [...]}

Records go to MongoDB when MONGODB_URI is set and reachable, otherwise to an
in-memory table. Storage failures never reach the client.
"""
from __future__ import annotations

import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from speechbox.config import Settings, get_settings
from speechbox.errors import SpeechboxError, TTSFailed, TTSUnavailable, ValidationError
from speechbox.logging_setup import configure_logging
from speechbox.schemas.audio import AudioCreateRequest, AudioResponse, ErrorResponse, LanguagesResponse
from speechbox.services.audio_service import AudioService
from speechbox.storage.base import DurableStore
from speechbox.storage.mongo import MongoDurableStore
from speechbox.storage.record_store import RecordStore
from speechbox.tts.service import get_tts_engine, resolve_voice

logger = logging.getLogger(__name__)

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def build_record_store(settings: Settings, durable: DurableStore | None = None) -> RecordStore:
    """Durable mode when a store is passed or MONGODB_URI is set; memory only otherwise."""
    if durable is None and settings.use_mongodb:
        durable = MongoDurableStore(
            settings.MONGODB_URI,
            db_name=settings.MONGODB_DB_NAME,
            collection=settings.MONGODB_COLLECTION,
            connect_timeout_ms=settings.MONGODB_CONNECT_TIMEOUT_MS,
            socket_timeout_ms=settings.MONGODB_SOCKET_TIMEOUT_MS,
        )
    store = RecordStore(durable=durable)
    logger.info("Using %s storage", "MongoDB" if store.mode == "mongodb" else store.mode)
    return store


def _unexpected_error(request: Request, exc: Exception, public_message: str) -> JSONResponse:
    """500 body: exception message and stack in development, generic message otherwise."""
    settings: Settings = request.app.state.settings
    if settings.is_development:
        body = {
            "error": str(exc) or "Unknown error occurred",
            "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        }
    else:
        body = {"error": public_message}
    return JSONResponse(body, status_code=500)


def create_app(settings: Settings | None = None, durable: DurableStore | None = None) -> FastAPI:
    """Build the app. settings defaults to env; durable overrides the MongoDB store (tests)."""
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = build_record_store(settings, durable)
        app.state.audio_service = AudioService(store, audio_url_base=settings.AUDIO_URL_BASE)
        app.state.tts_engine = get_tts_engine(settings)
        yield
        store.close()
        app.state.audio_service = None
        app.state.tts_engine = None

    app = FastAPI(
        title="speechbox",
        description="Text-to-speech demo backend: record API with MongoDB/in-memory storage",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(SpeechboxError)
    async def speechbox_error_handler(request: Request, exc: SpeechboxError) -> JSONResponse:
        return JSONResponse(exc.to_payload(), status_code=exc.status_code)

    @app.get("/health")
    async def health(request: Request) -> dict:
        service: AudioService = request.app.state.audio_service
        return {"status": "ok", "storage": service.store.mode}

    # body is read raw so missing fields get the 400 shape; the schema is documented only
    @app.post(
        "/api/audio",
        response_model=AudioResponse,
        responses=_ERROR_RESPONSES,
        openapi_extra={
            "requestBody": {
                "required": True,
                "content": {"application/json": {"schema": AudioCreateRequest.model_json_schema()}},
            }
        },
    )
    async def create_audio(request: Request) -> AudioResponse | JSONResponse:
        """Validate {text, language, voice}, fabricate the audio URL and store the record."""
        logger.info("POST /api/audio - Starting request")
        try:
            try:
                body = await request.json()
            except ValueError as e:
                raise ValidationError("Request body must be a JSON object") from e
            if not isinstance(body, dict):
                raise ValidationError("Request body must be a JSON object")
            logger.debug("Request body: %s", body)
            service: AudioService = request.app.state.audio_service
            return await service.create(body)
        except SpeechboxError:
            raise
        except Exception as e:
            logger.exception("Error in POST /api/audio: %s", e)
            return _unexpected_error(request, e, "Failed to process audio request")

    @app.get("/api/audio", response_model=AudioResponse, responses=_ERROR_RESPONSES)
    async def fetch_audio(
        request: Request,
        id: str | None = Query(None, description="Record id returned by POST /api/audio"),
    ) -> AudioResponse | JSONResponse:
        """Return a stored record by id."""
        logger.info("GET /api/audio - Starting request")
        try:
            service: AudioService = request.app.state.audio_service
            return await service.fetch(id)
        except SpeechboxError:
            raise
        except Exception as e:
            logger.exception("Error in GET /api/audio: %s", e)
            return _unexpected_error(request, e, "Failed to fetch audio")

    @app.get("/api/languages", response_model=LanguagesResponse)
    async def languages() -> LanguagesResponse:
        return LanguagesResponse(languages=settings.supported_languages)

    @app.get("/api/tts", responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}, 503: {"model": ErrorResponse}})
    async def tts(
        request: Request,
        text: str = Query("", description="Text to speak"),
        lang: str = Query("english", description="Language name, e.g. english or arabic"),
        voice: str | None = Query(None, description="Edge TTS voice; default depends on lang"),
    ) -> Response:
        """
        Direct playback for the UI. Not backed by the record store: nothing is persisted.
        """
        if not text.strip():
            raise ValidationError("text is required")
        engine = request.app.state.tts_engine
        if engine is None:
            raise TTSUnavailable("TTS is disabled")
        selected = resolve_voice(lang, voice, settings.TTS_EDGE_VOICE)
        try:
            audio, mime = await engine.synthesize(text.strip(), selected)
        except Exception as e:
            logger.exception("TTS failed (voice=%s): %s", selected, e)
            return _unexpected_error(request, e, "Failed to generate audio")
        if not audio:
            raise TTSFailed("TTS produced no audio")
        return Response(content=audio, media_type=mime or engine.format)

    return app


app = create_app()
