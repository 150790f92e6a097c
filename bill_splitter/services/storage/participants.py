"""
Participant Repository

Persists the participant list under one fixed key of a KeyValueStore,
encoded as a JSON array of {"id", "name"} objects.

Failure policy:
- Absent key -> empty list
- Unreadable store or malformed value -> empty list, warning logged
- Failed write -> error logged, nothing raised (fire-and-forget)

The app must always start, and adding a participant must never fail
because the cache could not be written.
"""

from typing import Optional

from pydantic import TypeAdapter, ValidationError

from bill_splitter.config import get_settings
from bill_splitter.events import EventLogger
from bill_splitter.models.events import LedgerEventBuilder
from bill_splitter.models.ledger import Participant
from bill_splitter.services.storage.interface import (
    CorruptValueError,
    KeyValueStore,
    StorageError,
)

_PARTICIPANT_LIST = TypeAdapter(list[Participant])


def encode_participants(participants: list[Participant]) -> str:
    """Serialize participants to the stored JSON format."""
    return _PARTICIPANT_LIST.dump_json(participants).decode("utf-8")


def decode_participants(raw: str, key: str = "participants") -> list[Participant]:
    """
    Parse the stored JSON format.

    Raises:
        CorruptValueError: If the value is not a list of participants
    """
    try:
        return _PARTICIPANT_LIST.validate_json(raw)
    except ValidationError as e:
        raise CorruptValueError(key, f"{e.error_count()} validation errors")


class ParticipantRepository:
    """Loads and saves the participant list."""

    def __init__(
        self,
        store: KeyValueStore,
        key: Optional[str] = None,
        event_logger: Optional[EventLogger] = None,
    ):
        """
        Args:
            store: Backing key-value store.
            key: Storage key; defaults to the configured participants key.
            event_logger: Where load/save outcomes are logged.
        """
        self._store = store
        self._key = key or get_settings().storage.participants_key
        self._event_logger = event_logger

    @property
    def key(self) -> str:
        return self._key

    def _log(self, event) -> None:
        if self._event_logger:
            self._event_logger.log(event)

    def load(self) -> list[Participant]:
        """Read the stored list, falling back to an empty list."""
        try:
            raw = self._store.get(self._key)
            if raw is None:
                return []
            participants = decode_participants(raw, self._key)
        except StorageError as e:
            self._log(LedgerEventBuilder.storage_error("load", self._key, str(e)))
            return []

        self._log(LedgerEventBuilder.participants_loaded(len(participants), self._key))
        return participants

    def save(self, participants: list[Participant]) -> bool:
        """
        Write the full list.

        Returns:
            True if the write succeeded. Failures are logged, not raised.
        """
        try:
            self._store.set(self._key, encode_participants(participants))
        except StorageError as e:
            self._log(LedgerEventBuilder.storage_error("save", self._key, str(e)))
            return False

        self._log(LedgerEventBuilder.participants_saved(len(participants), self._key))
        return True
