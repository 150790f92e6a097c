"""Shared fixtures for Bill Splitter tests."""

import pytest

from bill_splitter.events import EventLogger
from bill_splitter.ledger import IdGenerator, LedgerStateManager
from bill_splitter.models.ledger import Participant
from bill_splitter.services.storage import InMemoryKeyValueStore, ParticipantRepository


class RecordingLogger:
    """Stands in for a structlog logger and keeps every call."""

    def __init__(self):
        self.records: list[tuple[str, str, dict]] = []

    def _record(self, level: str, event: str, **kwargs):
        self.records.append((level, event, kwargs))

    def debug(self, event, **kwargs):
        self._record("debug", event, **kwargs)

    def info(self, event, **kwargs):
        self._record("info", event, **kwargs)

    def warning(self, event, **kwargs):
        self._record("warning", event, **kwargs)

    def error(self, event, **kwargs):
        self._record("error", event, **kwargs)

    def event_types(self) -> list[str]:
        return [kwargs["event_type"] for _, _, kwargs in self.records]


class FixedClock:
    """Always returns the same millisecond, forcing the generator to bump."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def event_logger(recording_logger) -> EventLogger:
    return EventLogger(logger=recording_logger)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def id_generator(clock) -> IdGenerator:
    return IdGenerator(clock=clock)


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(memory_store, event_logger) -> ParticipantRepository:
    return ParticipantRepository(memory_store, key="participants", event_logger=event_logger)


@pytest.fixture
def ledger(repository, event_logger, id_generator) -> LedgerStateManager:
    """Empty ledger backed by an in-memory store."""
    return LedgerStateManager(
        repository=repository,
        event_logger=event_logger,
        id_generator=id_generator,
    )


@pytest.fixture
def alice_bob() -> list[Participant]:
    return [Participant(id="a", name="Alice"), Participant(id="b", name="Bob")]
