"""
MongoDurableStore: records in a MongoDB collection via pymongo.

The client is created lazily and shared. Each call pings first; if the ping
fails the client is rebuilt once (single reconnect attempt) before giving up.
pymongo is blocking, so calls run in the default executor.
"""
from __future__ import annotations

import asyncio
import logging
import threading

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from speechbox.errors import StorageUnavailable
from speechbox.models import DurableResult, SynthesisRecord
from speechbox.storage.base import DurableStore

logger = logging.getLogger(__name__)


class MongoDurableStore(DurableStore):
    """Durable store backed by one MongoDB collection."""

    def __init__(
        self,
        uri: str,
        db_name: str = "elevenlabs-clone",
        collection: str = "audios",
        connect_timeout_ms: int = 5000,
        socket_timeout_ms: int = 45000,
    ) -> None:
        self._uri = uri
        self._db_name = db_name
        self._collection_name = collection
        self._connect_timeout_ms = connect_timeout_ms
        self._socket_timeout_ms = socket_timeout_ms
        self._client: MongoClient | None = None
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "mongodb"

    def _new_client(self) -> MongoClient:
        return MongoClient(
            self._uri,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
            connectTimeoutMS=self._connect_timeout_ms,
            socketTimeoutMS=self._socket_timeout_ms,
            serverSelectionTimeoutMS=self._connect_timeout_ms,
        )

    def _collection(self) -> Collection:
        """Return a verified collection handle or raise StorageUnavailable."""
        with self._lock:
            try:
                if self._client is None:
                    self._client = self._new_client()
                    logger.info("MongoDB client initialized")
            except (PyMongoError, ValueError) as e:
                # malformed URIs and option values raise a plain ValueError
                raise StorageUnavailable(f"MongoDB client init failed: {e}") from e
            try:
                self._client[self._db_name].command("ping")
            except PyMongoError as e:
                logger.warning("MongoDB ping failed, reconnecting: %s", e)
                self._client.close()
                self._client = None
                try:
                    self._client = self._new_client()
                    self._client[self._db_name].command("ping")
                except (PyMongoError, ValueError) as err:
                    raise StorageUnavailable(f"Failed to connect to MongoDB: {err}") from err
                logger.info("Reconnected to MongoDB")
            return self._client[self._db_name][self._collection_name]

    def _sync_insert(self, record: SynthesisRecord) -> DurableResult:
        try:
            result = self._collection().insert_one(record.to_document())
        except StorageUnavailable as e:
            return DurableResult.unavailable(e.message)
        except PyMongoError as e:
            return DurableResult.unavailable(f"MongoDB insert failed: {e}")
        return DurableResult.success(record.with_id(str(result.inserted_id)))

    def _sync_find(self, record_id: str) -> DurableResult:
        try:
            object_id = ObjectId(record_id)
        except (InvalidId, TypeError):
            # transient ids are not ObjectIds
            return DurableResult.success(None)
        try:
            doc = self._collection().find_one({"_id": object_id})
        except StorageUnavailable as e:
            return DurableResult.unavailable(e.message)
        except PyMongoError as e:
            return DurableResult.unavailable(f"MongoDB lookup failed: {e}")
        if doc is None:
            return DurableResult.success(None)
        return DurableResult.success(SynthesisRecord.from_document(doc))

    async def insert(self, record: SynthesisRecord) -> DurableResult:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._sync_insert, record)

    async def find(self, record_id: str) -> DurableResult:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._sync_find, record_id)

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None
