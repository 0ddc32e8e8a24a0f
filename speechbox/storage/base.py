"""
DurableStore: abstract interface for the persistent backend of the record store.

Implementations must not raise for connectivity or driver errors; they return
DurableResult.unavailable(reason) so the caller can pick the transient table.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from speechbox.models import DurableResult, SynthesisRecord


class DurableStore(ABC):
    """Abstract durable store. Ids are assigned by the store."""

    @abstractmethod
    async def insert(self, record: SynthesisRecord) -> DurableResult:
        """
        Persist record. On success, result.record is the record with its new id.
        """
        ...

    @abstractmethod
    async def find(self, record_id: str) -> DurableResult:
        """
        Look up by id. ok with record=None is a miss (including ids this store
        could never have issued).
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Short backend name for logs and /health, e.g. 'mongodb'."""
        ...

    def close(self) -> None:
        """Release connections. Default: nothing to release."""
