"""
Presentation Helpers

Turns ledger state into rows the Streamlit page can render directly, so
the page itself holds no arithmetic or lookup logic.
"""

from typing import Optional

from bill_splitter.config import CurrencySettings
from bill_splitter.formatting import format_idr, resolve_currency
from bill_splitter.ledger.balances import summarize
from bill_splitter.ledger.parsing import parse_decimal
from bill_splitter.models.ledger import (
    BalanceRow,
    Participant,
    Transaction,
    TransactionRow,
)

UNTITLED = "Untitled"
PAYER_NOT_SPECIFIED = "Not specified"
SPLIT_EQUALLY = "Split equally"
CUSTOM_SPLIT = "Custom split"


def participant_names(participants: list[Participant]) -> dict[str, str]:
    return {p.id: p.name for p in participants}


def balance_rows(
    participants: list[Participant],
    transactions: list[Transaction],
    currency: Optional[CurrencySettings] = None,
) -> list[BalanceRow]:
    """
    Balance summary paired with participant names.

    Entries whose id no longer resolves to a participant are skipped.
    """
    currency = resolve_currency(currency)
    names = participant_names(participants)
    rows = []
    for participant_id, balance in summarize(participants, transactions).items():
        name = names.get(participant_id)
        if name is None:
            continue
        rows.append(BalanceRow(
            participant_id=participant_id,
            name=name,
            balance=balance,
            formatted=format_idr(balance, currency),
        ))
    return rows


def transaction_rows(
    participants: list[Participant],
    transactions: list[Transaction],
    currency: Optional[CurrencySettings] = None,
) -> list[TransactionRow]:
    """One display row per transaction, in ledger order."""
    currency = resolve_currency(currency)
    names = participant_names(participants)
    return [
        TransactionRow(
            transaction_id=t.id,
            title=t.title or UNTITLED,
            formatted_amount=format_idr(parse_decimal(t.amount), currency),
            payer_name=names.get(t.payer) or PAYER_NOT_SPECIFIED,
            split_label=SPLIT_EQUALLY if t.is_split_bill else CUSTOM_SPLIT,
        )
        for t in transactions
    ]
