import asyncio
from dataclasses import replace

import pytest

from speechbox.errors import ValidationError
from speechbox.storage.memory import TransientTable
from speechbox.storage.record_store import RecordStore
from tests.conftest import InMemoryDurableStore, UnavailableDurableStore


def test_transient_only_put_and_get(sample_record):
    store = RecordStore()
    record_id = asyncio.run(store.put(sample_record))

    assert store.mode == "memory"
    assert record_id.isdigit()
    found = asyncio.run(store.get(record_id))
    assert found.url == sample_record.url
    assert found.id == record_id


def test_transient_ids_unique_within_same_millisecond(sample_record):
    table = TransientTable(clock_ms=lambda: 1000)
    a = table.insert(sample_record)
    b = table.insert(sample_record)
    c = table.insert(sample_record)
    assert [a.id, b.id, c.id] == ["1000", "1001", "1002"]
    assert len(table) == 3


def test_durable_store_used_when_available(sample_record):
    durable = InMemoryDurableStore()
    store = RecordStore(durable=durable)

    record_id = asyncio.run(store.put(sample_record))

    assert record_id == "durable-1"
    assert len(store.transient) == 0
    assert asyncio.run(store.get(record_id)).voice == "voiceA"


def test_put_falls_back_when_durable_unavailable(sample_record):
    durable = UnavailableDurableStore()
    store = RecordStore(durable=durable)

    record_id = asyncio.run(store.put(sample_record))

    assert durable.insert_calls == 1
    assert record_id in store.transient
    found = asyncio.run(store.get(record_id))
    assert durable.find_calls == 1
    assert found.language == "english"


def test_get_checks_transient_after_durable_miss(sample_record):
    durable = InMemoryDurableStore()
    transient = TransientTable()
    stored = transient.insert(sample_record)
    store = RecordStore(durable=durable, transient=transient)

    assert asyncio.run(store.get(stored.id)).url == sample_record.url


def test_get_unknown_returns_none():
    store = RecordStore(durable=UnavailableDurableStore())
    assert asyncio.run(store.get("nope")) is None


@pytest.mark.parametrize("field", ["text", "language", "voice", "url"])
def test_put_rejects_empty_fields_before_storage(sample_record, field):
    durable = InMemoryDurableStore()
    store = RecordStore(durable=durable)

    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(store.put(replace(sample_record, **{field: "  "})))

    assert field in exc_info.value.missing
    assert durable.docs == {}
    assert len(store.transient) == 0


def test_close_releases_durable():
    durable = InMemoryDurableStore()
    RecordStore(durable=durable).close()
    assert durable.closed
