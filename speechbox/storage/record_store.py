"""
RecordStore: durable-or-transient persistence of SynthesisRecord.

put() tries the durable backend when one is given and falls back to the
transient table whenever the backend reports unavailable. It never fails for
storage reasons. get() checks durable first, then transient.
"""
from __future__ import annotations

import logging

from speechbox.errors import ValidationError
from speechbox.models import REQUIRED_FIELDS, SynthesisRecord
from speechbox.storage.base import DurableStore
from speechbox.storage.memory import TransientTable

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Storage mode is explicit: pass a DurableStore for durable mode, None for
    transient-only mode.
    """

    def __init__(
        self,
        durable: DurableStore | None = None,
        transient: TransientTable | None = None,
    ) -> None:
        self._durable = durable
        self._transient = transient if transient is not None else TransientTable()

    @property
    def mode(self) -> str:
        return self._durable.name if self._durable is not None else "memory"

    @property
    def transient(self) -> TransientTable:
        return self._transient

    async def put(self, record: SynthesisRecord) -> str:
        """Persist record and return its id."""
        missing = [f for f in REQUIRED_FIELDS if not (getattr(record, f) or "").strip()]
        if not (record.url or "").strip():
            missing.append("url")
        if missing:
            raise ValidationError("Missing required fields", required=list(REQUIRED_FIELDS), missing=missing)

        if self._durable is not None:
            result = await self._durable.insert(record)
            if result.ok and result.record is not None and result.record.id:
                logger.info("Saved to %s with ID: %s", self._durable.name, result.record.id)
                return result.record.id
            logger.warning(
                "Failed to save to %s, falling back to in-memory storage: %s",
                self._durable.name,
                result.reason or "no id returned",
            )

        stored = self._transient.insert(record)
        logger.info("Saved to in-memory storage with ID: %s", stored.id)
        return stored.id

    async def get(self, record_id: str) -> SynthesisRecord | None:
        """Return the record or None if neither store has it."""
        if self._durable is not None:
            result = await self._durable.find(record_id)
            if result.ok and result.record is not None:
                logger.info("Found %s in %s", record_id, self._durable.name)
                return result.record.with_id(record_id)
            if not result.ok:
                logger.warning(
                    "%s lookup failed, falling back to in-memory: %s",
                    self._durable.name,
                    result.reason,
                )

        record = self._transient.get(record_id)
        if record is not None:
            logger.info("Found %s in in-memory storage", record_id)
        return record

    def close(self) -> None:
        if self._durable is not None:
            self._durable.close()
