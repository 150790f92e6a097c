"""
Data Models Package

This package contains all Pydantic models used by Bill Splitter.
"""

from bill_splitter.models.ledger import (
    BalanceRow,
    ContributionCheck,
    ContributionStatus,
    DraftField,
    Participant,
    Transaction,
    TransactionRow,
)
from bill_splitter.models.events import (
    LedgerEvent,
    LedgerEventBuilder,
    LedgerEventSeverity,
    LedgerEventType,
)

__all__ = [
    # Ledger models
    "BalanceRow",
    "ContributionCheck",
    "ContributionStatus",
    "DraftField",
    "Participant",
    "Transaction",
    "TransactionRow",
    # Event models
    "LedgerEvent",
    "LedgerEventBuilder",
    "LedgerEventSeverity",
    "LedgerEventType",
]
