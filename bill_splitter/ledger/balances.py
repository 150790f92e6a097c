"""
Balance Aggregation

A participant's balance is what they paid minus what they owe, over all
transactions. Positive means the group owes them money.

DESIGN DECISION: The summary is recomputed from scratch on every read.
There is no cache to invalidate, so it can never go stale after an edit
or delete.
"""

from bill_splitter.ledger.parsing import parse_decimal
from bill_splitter.models.ledger import Participant, Transaction


def summarize(
    participants: list[Participant],
    transactions: list[Transaction],
) -> dict[str, float]:
    """
    Compute the signed balance of every current participant.

    Only current participants get an entry. Amounts paid by, or
    contributions owed by, a removed participant are dropped from the
    summary (the transactions themselves keep them).

    Args:
        participants: Current participant list (sets the key order).
        transactions: All recorded transactions.

    Returns:
        participant_id -> balance
    """
    summary = {participant.id: 0.0 for participant in participants}

    for transaction in transactions:
        if transaction.payer and transaction.payer in summary:
            summary[transaction.payer] += parse_decimal(transaction.amount)

        for participant_id, value in transaction.contributions.items():
            if participant_id in summary:
                summary[participant_id] -= parse_decimal(value)

    return summary
