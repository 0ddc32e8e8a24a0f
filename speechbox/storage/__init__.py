"""Record storage: durable backend (MongoDB) with in-memory fallback."""
from .base import DurableStore
from .memory import TransientTable
from .mongo import MongoDurableStore
from .record_store import RecordStore

__all__ = [
    "DurableStore",
    "TransientTable",
    "MongoDurableStore",
    "RecordStore",
]
