"""
Equal Split Calculator

Divides a transaction amount evenly across every current participant.

Rounding is half-up to two decimal places and the remainder is NOT
redistributed: 100 split three ways gives 33.33 each, and the missing
cent shows up as a validation warning rather than being assigned to
anyone.
"""

from decimal import ROUND_HALF_UP, Context, Decimal

from bill_splitter.ledger.parsing import parse_decimal
from bill_splitter.models.ledger import Participant

_CENT = Decimal("0.01")

# Wide enough for every finite float quantized to cents
_CONTEXT = Context(prec=400)


def round_to_cents(value: float) -> Decimal:
    """Round a float to 2 decimal places, half-up."""
    if value == 0:
        value = 0.0  # no "-0.00"
    return Decimal(repr(value)).quantize(_CENT, rounding=ROUND_HALF_UP, context=_CONTEXT)


def recalculate_split_bill(
    amount: str,
    participants: list[Participant],
) -> dict[str, str]:
    """
    Compute equal contributions for every participant.

    Args:
        amount: Transaction amount as entered; non-numeric counts as 0.
        participants: Current participant list.

    Returns:
        participant_id -> share rendered with two decimals, identical for
        everyone. Empty when there are no participants.
    """
    if not participants:
        return {}

    share = parse_decimal(amount) / len(participants)
    share_text = f"{round_to_cents(share):f}"
    return {participant.id: share_text for participant in participants}
