"""
Transient table: in-process dict of records keyed by a timestamp-based id.
Lost on restart. No locking; request handling is effectively serialized.
"""
from __future__ import annotations

import time
from typing import Callable

from speechbox.models import SynthesisRecord


def _now_ms() -> int:
    return int(time.time() * 1000)


class TransientTable:
    """Keyed map of SynthesisRecord. Ids are epoch-millisecond strings."""

    def __init__(self, clock_ms: Callable[[], int] = _now_ms) -> None:
        self._records: dict[str, SynthesisRecord] = {}
        self._clock_ms = clock_ms

    def _next_id(self) -> str:
        candidate = self._clock_ms()
        # two inserts within the same millisecond: bump until free
        while str(candidate) in self._records:
            candidate += 1
        return str(candidate)

    def insert(self, record: SynthesisRecord) -> SynthesisRecord:
        """Store record under a fresh id and return it with the id set."""
        stored = record.with_id(self._next_id())
        self._records[stored.id] = stored
        return stored

    def get(self, record_id: str) -> SynthesisRecord | None:
        return self._records.get(record_id)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records
