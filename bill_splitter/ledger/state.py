"""
Ledger State Manager

The single owner of all application state:
1. Participants (cached in local storage)
2. Transactions (kept for the session only)
3. The draft transaction being composed or edited
4. The id of the transaction being edited, if any

DESIGN DECISION: All mutation goes through LedgerStateManager methods.
Derived values (equal split, validation, balances) come from pure
functions and are recomputed on every read, never cached.

Two behaviors are deliberate and covered by tests:
- Removing the participant selected as the draft's payer clears the payer.
- Deleting the transaction being edited leaves edit mode, so the next
  submit creates a new transaction instead of updating a missing one.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field

from bill_splitter.config import CurrencySettings
from bill_splitter.events import EventLogger
from bill_splitter.ledger.balances import summarize
from bill_splitter.ledger.errors import TransactionNotFoundError
from bill_splitter.ledger.ids import IdGenerator
from bill_splitter.ledger.presentation import balance_rows, transaction_rows
from bill_splitter.ledger.split import recalculate_split_bill
from bill_splitter.ledger.validation import ContributionValidator
from bill_splitter.models.events import LedgerEvent, LedgerEventBuilder
from bill_splitter.models.ledger import (
    BalanceRow,
    ContributionCheck,
    DraftField,
    Participant,
    Transaction,
    TransactionRow,
)
from bill_splitter.services.storage import ParticipantRepository

SUBMIT_LABEL = "Submit"
UPDATE_LABEL = "Update"


class LedgerState(BaseModel):
    """Everything the ledger knows, in one value."""

    participants: list[Participant] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)
    draft: Transaction = Field(default_factory=Transaction)
    editing_transaction_id: Optional[str] = None


class LedgerStateManager:
    """
    Owns the ledger state and applies user intents to it.

    Every method runs to completion synchronously; the presentation layer
    calls one method per user action and then re-reads the state.
    """

    def __init__(
        self,
        repository: Optional[ParticipantRepository] = None,
        event_logger: Optional[EventLogger] = None,
        id_generator: Optional[IdGenerator] = None,
        participants: Optional[list[Participant]] = None,
    ):
        """
        Initialize the ledger.

        Args:
            repository: Participant persistence. When given, the initial
                        participant list is loaded from it and every change
                        is written back. When None, nothing is persisted.
            event_logger: Where ledger events are logged.
            id_generator: Source of participant and transaction ids.
            participants: Initial participants when no repository is used.
        """
        self._repository = repository
        self._event_logger = event_logger
        self._ids = id_generator or IdGenerator()
        self._validator = ContributionValidator()

        if repository is not None:
            initial = repository.load()
        else:
            initial = [p.model_copy() for p in participants or []]

        for participant in initial:
            self._ids.observe(participant.id)

        self._state = LedgerState(
            participants=initial,
            draft=Transaction.empty_draft(initial),
        )

    # =========================================================================
    # READ ACCESS
    # =========================================================================

    @property
    def participants(self) -> list[Participant]:
        return [p.model_copy() for p in self._state.participants]

    @property
    def transactions(self) -> list[Transaction]:
        return [t.model_copy(deep=True) for t in self._state.transactions]

    @property
    def draft(self) -> Transaction:
        return self._state.draft.model_copy(deep=True)

    @property
    def editing_transaction_id(self) -> Optional[str]:
        return self._state.editing_transaction_id

    @property
    def is_editing(self) -> bool:
        return self._state.editing_transaction_id is not None

    @property
    def submit_label(self) -> str:
        """Label of the submit button: "Update" while editing."""
        return UPDATE_LABEL if self.is_editing else SUBMIT_LABEL

    def snapshot(self) -> LedgerState:
        """Deep copy of the whole state."""
        return self._state.model_copy(deep=True)

    # =========================================================================
    # PARTICIPANT REGISTRY
    # =========================================================================

    def add_participant(self, name: str) -> Optional[Participant]:
        """
        Register a participant.

        A blank or whitespace-only name is silently ignored.

        Returns:
            The new participant, or None if the name was blank.
        """
        trimmed = name.strip()
        if not trimmed:
            self._log(LedgerEventBuilder.participant_rejected(name))
            return None

        participant = Participant(id=self._ids.next_id(), name=trimmed)
        self._state.participants.append(participant)

        draft = self._state.draft
        if draft.is_split_bill:
            draft.contributions = recalculate_split_bill(
                draft.amount, self._state.participants
            )
        else:
            draft.contributions[participant.id] = ""

        self._persist_participants()
        self._log(LedgerEventBuilder.participant_added(participant.id, participant.name))
        return participant.model_copy()

    def remove_participant(self, participant_id: str) -> bool:
        """
        Remove a participant.

        Past transactions keep any contribution recorded for this
        participant; the balance summary ignores it.

        Returns:
            False if no participant has this id.
        """
        remaining = [p for p in self._state.participants if p.id != participant_id]
        if len(remaining) == len(self._state.participants):
            return False
        self._state.participants = remaining

        draft = self._state.draft
        draft.contributions.pop(participant_id, None)
        if draft.is_split_bill:
            draft.contributions = recalculate_split_bill(draft.amount, remaining)

        payer_cleared = draft.payer == participant_id
        if payer_cleared:
            draft.payer = ""

        self._persist_participants()
        self._log(LedgerEventBuilder.participant_removed(
            participant_id, len(remaining), payer_cleared
        ))
        return True

    # =========================================================================
    # DRAFT EDITOR
    # =========================================================================

    def update_field(self, field: Union[DraftField, str], value: str) -> None:
        """
        Set title, amount or payer on the draft.

        Changing the amount in equal-split mode recomputes every share.

        Raises:
            ValueError: If field is not one of the DraftField values.
        """
        field = DraftField(field)
        draft = self._state.draft
        setattr(draft, field.value, value)

        if field == DraftField.AMOUNT and draft.is_split_bill:
            draft.contributions = recalculate_split_bill(
                value, self._state.participants
            )

    def update_contribution(self, participant_id: str, value: str) -> None:
        """
        Set one participant's share on the draft.

        Accepted in equal-split mode too; the form disables these inputs
        while the split is active.
        """
        self._state.draft.contributions[participant_id] = value

    def toggle_split_bill(self) -> bool:
        """
        Flip equal-split mode.

        Switching on recomputes the shares; switching off keeps the last
        computed shares as editable values.

        Returns:
            The new value of the flag.
        """
        draft = self._state.draft
        draft.is_split_bill = not draft.is_split_bill
        if draft.is_split_bill:
            draft.contributions = recalculate_split_bill(
                draft.amount, self._state.participants
            )

        self._log(LedgerEventBuilder.split_toggled(
            draft.is_split_bill, len(self._state.participants)
        ))
        return draft.is_split_bill

    def check_contributions(self) -> ContributionCheck:
        """Validate the draft's contributions against its amount."""
        return self._validator.check(self._state.draft)

    def validation_message(self) -> str:
        """Warning for the draft, or "" when it balances."""
        return self.check_contributions().message

    def validation_summary(self) -> str:
        """
        Warning plus the size of the gap, for the form.

        Starts with the same text as validation_message; "" when the
        draft balances.
        """
        return self._validator.get_user_friendly_summary(self.check_contributions())

    # =========================================================================
    # TRANSACTION LEDGER
    # =========================================================================

    def submit(self) -> Transaction:
        """
        Commit the draft.

        In edit mode the edited transaction is replaced in place (same id,
        same position). Otherwise the draft is appended with a new id.
        Either way the draft is reset to an empty template afterwards.

        Returns:
            The stored transaction.
        """
        transaction = self._state.draft.model_copy(deep=True)
        editing_id = self._state.editing_transaction_id
        index = self._index_of(editing_id) if editing_id is not None else None

        if index is not None:
            transaction.id = editing_id
            self._state.transactions[index] = transaction
            event = LedgerEventBuilder.transaction_updated(
                transaction.id, transaction.amount, transaction.payer
            )
        else:
            transaction.id = self._new_transaction_id()
            self._state.transactions.append(transaction)
            event = LedgerEventBuilder.transaction_created(
                transaction.id, transaction.amount, transaction.payer
            )

        self._state.editing_transaction_id = None
        self._reset_draft()
        self._log(event)
        return transaction.model_copy(deep=True)

    def edit(self, transaction_id: str) -> Transaction:
        """
        Load a transaction into the draft for editing.

        Nothing in the ledger changes until submit. A payer who has since
        been removed is cleared from the draft, so the form shows the
        transaction without a payer instead of silently keeping the old id.

        Raises:
            TransactionNotFoundError: If no transaction has this id. The
                draft and edit state are left untouched.
        """
        index = self._index_of(transaction_id)
        if index is None:
            self._log(LedgerEventBuilder.edit_target_missing(transaction_id))
            raise TransactionNotFoundError(transaction_id)

        draft = self._state.transactions[index].model_copy(deep=True)
        if draft.payer not in {p.id for p in self._state.participants}:
            draft.payer = ""
        self._state.draft = draft
        self._state.editing_transaction_id = transaction_id
        self._log(LedgerEventBuilder.edit_started(transaction_id))
        return self.draft

    def cancel_edit(self) -> None:
        """Leave edit mode and discard the draft."""
        editing_id = self._state.editing_transaction_id
        self._state.editing_transaction_id = None
        self._reset_draft()
        if editing_id is not None:
            self._log(LedgerEventBuilder.edit_cancelled(editing_id))

    def delete(self, transaction_id: str) -> bool:
        """
        Remove a transaction.

        Deleting the transaction being edited leaves edit mode; the draft
        keeps its contents and a later submit creates a new transaction.

        Returns:
            False if no transaction has this id.
        """
        index = self._index_of(transaction_id)
        if index is None:
            return False

        del self._state.transactions[index]

        was_editing = self._state.editing_transaction_id == transaction_id
        if was_editing:
            self._state.editing_transaction_id = None

        self._log(LedgerEventBuilder.transaction_deleted(transaction_id, was_editing))
        return True

    # =========================================================================
    # DERIVED VIEWS
    # =========================================================================

    def summary(self) -> dict[str, float]:
        """Signed balance per current participant."""
        return summarize(self._state.participants, self._state.transactions)

    def balance_rows(self, currency: Optional[CurrencySettings] = None) -> list[BalanceRow]:
        return balance_rows(self._state.participants, self._state.transactions, currency)

    def transaction_rows(
        self,
        currency: Optional[CurrencySettings] = None,
    ) -> list[TransactionRow]:
        return transaction_rows(self._state.participants, self._state.transactions, currency)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _index_of(self, transaction_id: str) -> Optional[int]:
        for index, transaction in enumerate(self._state.transactions):
            if transaction.id == transaction_id:
                return index
        return None

    def _new_transaction_id(self) -> str:
        existing = {t.id for t in self._state.transactions}
        new_id = self._ids.next_id()
        while new_id in existing:
            new_id = self._ids.next_id()
        return new_id

    def _reset_draft(self) -> None:
        self._state.draft = Transaction.empty_draft(self._state.participants)

    def _persist_participants(self) -> None:
        if self._repository is not None:
            self._repository.save(self._state.participants)

    def _log(self, event: LedgerEvent) -> None:
        if self._event_logger:
            self._event_logger.log(event)
