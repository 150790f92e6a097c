"""Services package."""

from bill_splitter.services.storage import (
    CorruptValueError,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    ParticipantRepository,
    StorageError,
    StorageWriteError,
)

__all__ = [
    "CorruptValueError",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "ParticipantRepository",
    "StorageError",
    "StorageWriteError",
]
