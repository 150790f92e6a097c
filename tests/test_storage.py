"""Tests for the key-value stores and the participant repository."""

import json

import pytest

from bill_splitter.ledger import LedgerStateManager
from bill_splitter.models.ledger import Participant
from bill_splitter.services.storage import (
    CorruptValueError,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    ParticipantRepository,
    StorageWriteError,
    decode_participants,
    encode_participants,
)


class FailingStore(InMemoryKeyValueStore):
    """Store whose writes always fail."""

    def set(self, key, value):
        raise StorageWriteError("quota exceeded")


class TestInMemoryStore:
    """Tests for InMemoryKeyValueStore."""

    def test_get_set(self):
        """Test the basic key-value contract."""
        store = InMemoryKeyValueStore()
        assert store.get("k") is None
        store.set("k", "v")
        assert store.get("k") == "v"
        store.set("k", "w")
        assert store.get("k") == "w"

    def test_initial_values_are_copied(self):
        """Test that the initial mapping is not shared."""
        initial = {"k": "v"}
        store = InMemoryKeyValueStore(initial)
        store.set("k", "changed")
        assert initial == {"k": "v"}


class TestJsonFileStore:
    """Tests for JsonFileKeyValueStore."""

    def test_missing_file_is_empty(self, tmp_path):
        """Test that a store with no file yet reads as empty."""
        store = JsonFileKeyValueStore(tmp_path / "store.json")
        assert store.get("participants") is None

    def test_set_creates_file(self, tmp_path):
        """Test that the first write creates the directory and file."""
        path = tmp_path / "nested" / "store.json"
        store = JsonFileKeyValueStore(path)
        store.set("participants", "[]")

        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == {"participants": "[]"}

    def test_values_survive_new_instance(self, tmp_path):
        """Test that values are read back by a fresh store on the same file."""
        path = tmp_path / "store.json"
        JsonFileKeyValueStore(path).set("a", "1")
        JsonFileKeyValueStore(path).set("b", "2")

        store = JsonFileKeyValueStore(path)
        assert store.get("a") == "1"
        assert store.get("b") == "2"

    def test_set_replaces_only_its_key(self, tmp_path):
        """Test that overwriting one key leaves the others alone."""
        store = JsonFileKeyValueStore(tmp_path / "store.json")
        store.set("a", "1")
        store.set("b", "2")
        store.set("a", "3")
        assert store.get("a") == "3"
        assert store.get("b") == "2"

    def test_corrupt_file_raises_on_read(self, tmp_path):
        """Test that invalid JSON is reported as a corrupt value."""
        path = tmp_path / "store.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(CorruptValueError):
            JsonFileKeyValueStore(path).get("participants")

    def test_non_object_file_raises_on_read(self, tmp_path):
        """Test that a JSON array at the top level is rejected."""
        path = tmp_path / "store.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(CorruptValueError):
            JsonFileKeyValueStore(path).get("participants")

    def test_write_replaces_corrupt_file(self, tmp_path):
        """Test that a write succeeds over an unreadable file."""
        path = tmp_path / "store.json"
        path.write_text("{oops", encoding="utf-8")
        store = JsonFileKeyValueStore(path)
        store.set("participants", "[]")
        assert store.get("participants") == "[]"

    def test_non_string_values_ignored(self, tmp_path):
        """Test that values not written as strings are skipped."""
        path = tmp_path / "store.json"
        path.write_text('{"a": 1, "b": "two"}', encoding="utf-8")
        store = JsonFileKeyValueStore(path)
        assert store.get("a") is None
        assert store.get("b") == "two"

    def test_write_failure_raises(self, tmp_path):
        """Test that an unwritable location raises StorageWriteError."""
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        store = JsonFileKeyValueStore(blocker / "store.json")
        with pytest.raises(StorageWriteError):
            store.set("participants", "[]")


class TestParticipantCodec:
    """Tests for the stored participant format."""

    def test_encode_format(self):
        """Test that participants are stored as an array of id/name objects."""
        encoded = encode_participants([Participant(id="1", name="Alice")])
        assert json.loads(encoded) == [{"id": "1", "name": "Alice"}]

    def test_decode_preserves_order(self):
        """Test that decoding keeps ids, names and order."""
        raw = '[{"id": "2", "name": "Bob"}, {"id": "1", "name": "Alice"}]'
        assert [(p.id, p.name) for p in decode_participants(raw)] == [
            ("2", "Bob"),
            ("1", "Alice"),
        ]

    def test_decode_keeps_values_exactly(self):
        """Test that ids and names are not altered on the way back."""
        raw = '[{"id": " 1", "name": " Bob "}]'
        participant = decode_participants(raw)[0]
        assert (participant.id, participant.name) == (" 1", " Bob ")
        assert decode_participants(encode_participants([participant])) == [participant]

    @pytest.mark.parametrize("raw", [
        "not json",
        '{"id": "1", "name": "Alice"}',
        '[{"id": "1"}]',
        '[{"id": "1", "name": ""}]',
        '[{"id": "1", "name": "   "}]',
    ])
    def test_decode_rejects_malformed(self, raw):
        """Test that malformed values raise CorruptValueError."""
        with pytest.raises(CorruptValueError) as exc_info:
            decode_participants(raw, "people")
        assert exc_info.value.key == "people"


class TestParticipantRepository:
    """Tests for ParticipantRepository."""

    def test_round_trip(self, repository):
        """Test that a saved list loads back identically."""
        participants = [Participant(id="1", name="Alice"), Participant(id="2", name="Bob")]
        assert repository.save(participants) is True
        assert repository.load() == participants

    def test_missing_key_is_empty(self, repository, recording_logger):
        """Test that a fresh store yields no participants and no warning."""
        assert repository.load() == []
        assert "storage_error" not in recording_logger.event_types()

    def test_malformed_value_is_empty(self, memory_store, repository, recording_logger):
        """Test that a malformed value loads as empty and logs a warning."""
        memory_store.set("participants", '[{"nope": true}]')
        assert repository.load() == []

        level, _, details = recording_logger.records[-1]
        assert level == "warning"
        assert details["event_type"] == "storage_error"
        assert details["details"]["operation"] == "load"

    def test_failed_save_is_logged(self, event_logger, recording_logger):
        """Test that a failing write returns False and logs an error."""
        repository = ParticipantRepository(FailingStore(), key="participants", event_logger=event_logger)
        assert repository.save([Participant(id="1", name="Alice")]) is False

        level, _, details = recording_logger.records[-1]
        assert level == "error"
        assert details["event_type"] == "storage_error"
        assert "quota exceeded" in details["error_message"]

    def test_ledger_survives_failed_save(self, event_logger):
        """Test that adding a participant still works when saving fails."""
        repository = ParticipantRepository(FailingStore(), key="participants", event_logger=event_logger)
        ledger = LedgerStateManager(repository=repository, event_logger=event_logger)
        ledger.add_participant("Alice")
        assert [p.name for p in ledger.participants] == ["Alice"]

    def test_json_file_round_trip(self, tmp_path, event_logger):
        """Test the repository against a real file."""
        path = tmp_path / "store.json"
        participants = [Participant(id="10", name="Alice")]
        ParticipantRepository(JsonFileKeyValueStore(path), key="people").save(participants)

        loaded = ParticipantRepository(
            JsonFileKeyValueStore(path), key="people", event_logger=event_logger
        ).load()
        assert loaded == participants
