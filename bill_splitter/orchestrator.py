"""
Application Wiring for Bill Splitter

Builds a ready-to-use LedgerStateManager with its storage and logging.
The Streamlit page creates one per browser session and keeps it in
session state.
"""

from pathlib import Path
from typing import Optional, Union

from bill_splitter.config import get_settings
from bill_splitter.events import EventLogger
from bill_splitter.ledger import IdGenerator, LedgerStateManager
from bill_splitter.models.events import LedgerEventBuilder
from bill_splitter.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    ParticipantRepository,
)


def create_ledger(
    use_storage: bool = True,
    storage_path: Optional[Union[str, Path]] = None,
    event_logger: Optional[EventLogger] = None,
    id_generator: Optional[IdGenerator] = None,
) -> LedgerStateManager:
    """
    Factory function to create the ledger and its collaborators.

    Args:
        use_storage: Whether to cache participants in the local JSON store.
                     Set to False for an in-memory store (nothing survives
                     a restart).
        storage_path: Override for the JSON store location.
        event_logger: Override for the event logger.
        id_generator: Override for id generation (tests).

    Returns:
        A LedgerStateManager whose participants were loaded from storage.
    """
    event_logger = event_logger or EventLogger()

    store: KeyValueStore
    key = "participants"
    if use_storage:
        try:
            settings = get_settings().storage
            key = settings.participants_key
            store = JsonFileKeyValueStore(storage_path or settings.path)
        except Exception as e:
            # Misconfigured storage - continue without persistence
            event_logger.log(LedgerEventBuilder.storage_error("configure", key, str(e)))
            store = InMemoryKeyValueStore()
    else:
        store = InMemoryKeyValueStore()

    repository = ParticipantRepository(store, key=key, event_logger=event_logger)

    return LedgerStateManager(
        repository=repository,
        event_logger=event_logger,
        id_generator=id_generator,
    )
