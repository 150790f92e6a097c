"""
Event Models for Bill Splitter

Every state change of the ledger is described by an event and written to
the local structured log. This provides:
1. Debugging information when balances look wrong
2. A readable trace of what the user did in a session

Events are only logged, never stored: the ledger keeps no history.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LedgerEventType(str, Enum):
    """Types of events emitted by the ledger."""
    # Participants
    PARTICIPANT_ADDED = "participant_added"
    PARTICIPANT_REJECTED = "participant_rejected"
    PARTICIPANT_REMOVED = "participant_removed"

    # Draft
    SPLIT_TOGGLED = "split_toggled"

    # Transactions
    TRANSACTION_CREATED = "transaction_created"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_DELETED = "transaction_deleted"
    EDIT_STARTED = "edit_started"
    EDIT_CANCELLED = "edit_cancelled"
    EDIT_TARGET_MISSING = "edit_target_missing"

    # Persistence
    PARTICIPANTS_LOADED = "participants_loaded"
    PARTICIPANTS_SAVED = "participants_saved"
    STORAGE_ERROR = "storage_error"

    # Configuration
    SETTINGS_INVALID = "settings_invalid"


class LedgerEventSeverity(str, Enum):
    """Severity level for ledger events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LedgerEvent(BaseModel):
    """A single ledger event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )
    event_type: LedgerEventType
    severity: LedgerEventSeverity = LedgerEventSeverity.INFO

    # What the event is about
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'participant', 'transaction')"
    )
    entity_id: Optional[str] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class LedgerEventBuilder:
    """
    Helper class to build ledger events with common patterns.

    Usage:
        event = LedgerEventBuilder.participant_added(participant_id, name)
        event = LedgerEventBuilder.transaction_deleted(transaction_id, was_editing)
    """

    @staticmethod
    def participant_added(participant_id: str, name: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.PARTICIPANT_ADDED,
            entity_type="participant",
            entity_id=participant_id,
            description=f"Participant added: {name}",
            details={"name": name},
        )

    @staticmethod
    def participant_rejected(raw_name: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.PARTICIPANT_REJECTED,
            severity=LedgerEventSeverity.DEBUG,
            entity_type="participant",
            description="Ignored participant with blank name",
            details={"raw_length": len(raw_name)},
        )

    @staticmethod
    def participant_removed(
        participant_id: str,
        remaining: int,
        payer_cleared: bool,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.PARTICIPANT_REMOVED,
            entity_type="participant",
            entity_id=participant_id,
            description=f"Participant removed, {remaining} remaining",
            details={
                "remaining": remaining,
                "draft_payer_cleared": payer_cleared,
            },
        )

    @staticmethod
    def split_toggled(enabled: bool, participant_count: int) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.SPLIT_TOGGLED,
            severity=LedgerEventSeverity.DEBUG,
            entity_type="draft",
            description=f"Equal split {'enabled' if enabled else 'disabled'}",
            details={
                "enabled": enabled,
                "participant_count": participant_count,
            },
        )

    @staticmethod
    def transaction_created(transaction_id: str, amount: str, payer: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.TRANSACTION_CREATED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Transaction created: {amount or '0'}",
            details={"amount": amount, "payer": payer},
        )

    @staticmethod
    def transaction_updated(transaction_id: str, amount: str, payer: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.TRANSACTION_UPDATED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Transaction updated: {amount or '0'}",
            details={"amount": amount, "payer": payer},
        )

    @staticmethod
    def transaction_deleted(transaction_id: str, was_editing: bool) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            description="Transaction deleted",
            details={"edit_mode_cleared": was_editing},
        )

    @staticmethod
    def edit_started(transaction_id: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.EDIT_STARTED,
            entity_type="transaction",
            entity_id=transaction_id,
            description="Transaction loaded into the form for editing",
        )

    @staticmethod
    def edit_cancelled(transaction_id: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.EDIT_CANCELLED,
            entity_type="transaction",
            entity_id=transaction_id,
            description="Editing cancelled",
        )

    @staticmethod
    def edit_target_missing(transaction_id: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.EDIT_TARGET_MISSING,
            severity=LedgerEventSeverity.WARNING,
            entity_type="transaction",
            entity_id=transaction_id,
            description="Cannot edit a transaction that does not exist",
        )

    @staticmethod
    def participants_loaded(count: int, key: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.PARTICIPANTS_LOADED,
            entity_type="storage",
            description=f"Loaded {count} participants",
            details={"count": count, "key": key},
        )

    @staticmethod
    def participants_saved(count: int, key: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.PARTICIPANTS_SAVED,
            severity=LedgerEventSeverity.DEBUG,
            entity_type="storage",
            description=f"Saved {count} participants",
            details={"count": count, "key": key},
        )

    @staticmethod
    def storage_error(operation: str, key: str, error_message: str) -> LedgerEvent:
        severity = (
            LedgerEventSeverity.WARNING
            if operation == "load"
            else LedgerEventSeverity.ERROR
        )
        return LedgerEvent(
            event_type=LedgerEventType.STORAGE_ERROR,
            severity=severity,
            entity_type="storage",
            description=f"Storage {operation} failed for key '{key}'",
            details={"operation": operation, "key": key},
            error_message=error_message,
        )

    @staticmethod
    def settings_invalid(section: str, error_message: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.SETTINGS_INVALID,
            severity=LedgerEventSeverity.WARNING,
            entity_type="settings",
            entity_id=section,
            description=f"Invalid {section} settings, using defaults",
            details={"section": section},
            error_message=error_message,
        )
