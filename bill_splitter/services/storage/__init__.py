"""
Storage Services Package

Provides the key-value store interface, its JSON-file and in-memory
implementations, and the participant repository built on top of them.
"""

from bill_splitter.services.storage.interface import (
    CorruptValueError,
    KeyValueStore,
    StorageError,
    StorageWriteError,
)
from bill_splitter.services.storage.json_file import JsonFileKeyValueStore
from bill_splitter.services.storage.memory import InMemoryKeyValueStore
from bill_splitter.services.storage.participants import (
    ParticipantRepository,
    decode_participants,
    encode_participants,
)

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "CorruptValueError",
    "StorageError",
    "StorageWriteError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    # Participants
    "ParticipantRepository",
    "decode_participants",
    "encode_participants",
]
