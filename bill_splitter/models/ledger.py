"""
Core Data Models for Bill Splitter

These models define the schemas for all data flowing through the ledger.
They are designed to:
1. Keep user-entered numbers exactly as typed (decimal literals as text)
2. Be serializable for local storage and logging
3. Carry derived values to the presentation layer without recomputation there

DESIGN DECISION: Amounts and contributions are stored as strings.
The form fields hold whatever the user typed; parsing happens in one place
(bill_splitter.ledger.parsing) and degrades to zero instead of rejecting input.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class DraftField(str, Enum):
    """
    Draft fields that can be set through update_field.

    Contributions and the split flag have their own operations.
    """
    TITLE = "title"
    AMOUNT = "amount"
    PAYER = "payer"


class ContributionStatus(str, Enum):
    """Outcome of comparing contributions against the transaction amount."""
    BALANCED = "balanced"
    EXCEEDS_AMOUNT = "exceeds_amount"
    LESS_THAN_AMOUNT = "less_than_amount"


# =============================================================================
# CORE LEDGER MODELS
# =============================================================================

class Participant(BaseModel):
    """
    A person taking part in the shared bills.

    The id is assigned once at creation and never changes; the list
    order is the display order. Names are stored exactly as given; the
    ledger trims user input before creating a participant.
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Stable unique identifier"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Display name"
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        """Reject whitespace-only names without altering valid ones."""
        if not v.strip():
            raise ValueError("Participant name must not be blank")
        return v


class Transaction(BaseModel):
    """
    A single shared bill.

    The same shape is used for the draft being edited; the draft's id
    stays empty until it is submitted.

    The sum of contributions is expected to equal the amount, but this
    is advisory: a mismatch is reported as a warning, never rejected.
    """

    id: str = Field(
        default="",
        description="Identifier, empty while the transaction is a draft"
    )
    title: str = Field(
        default="",
        description="Free-text title"
    )
    amount: str = Field(
        default="",
        description="Total amount as entered (decimal literal)"
    )
    payer: str = Field(
        default="",
        description="Participant id of who paid, empty when not selected"
    )
    contributions: dict[str, str] = Field(
        default_factory=dict,
        description="Participant id -> owed share as entered (decimal literal)"
    )
    is_split_bill: bool = Field(
        default=False,
        description="Whether the amount is divided equally among participants"
    )

    @classmethod
    def empty_draft(cls, participants: list[Participant]) -> "Transaction":
        """Blank draft with one empty contribution per participant."""
        return cls(contributions={p.id: "" for p in participants})


# =============================================================================
# DERIVED MODELS
# =============================================================================

class ContributionCheck(BaseModel):
    """
    Result of checking a transaction's contributions against its amount.

    Comparison is exact float equality, so an equal split that loses a
    cent to rounding is reported as unbalanced.
    """

    total_amount: float = Field(
        ...,
        description="Parsed transaction amount"
    )
    total_contributions: float = Field(
        ...,
        description="Sum of parsed contributions"
    )
    status: ContributionStatus
    message: str = Field(
        default="",
        description="User-facing warning, empty when balanced"
    )

    @property
    def is_balanced(self) -> bool:
        return self.status == ContributionStatus.BALANCED

    @property
    def difference(self) -> float:
        """Contributions minus amount (positive means over-assigned)."""
        return self.total_contributions - self.total_amount


class BalanceRow(BaseModel):
    """One line of the balance summary, ready to render."""

    participant_id: str
    name: str
    balance: float
    formatted: str

    @property
    def is_positive(self) -> bool:
        """Zero counts as positive (nothing owed)."""
        return self.balance >= 0


class TransactionRow(BaseModel):
    """One line of the transaction list, ready to render."""

    transaction_id: str
    title: str
    formatted_amount: str
    payer_name: str
    split_label: str
