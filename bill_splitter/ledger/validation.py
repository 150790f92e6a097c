"""
Contribution Validation

Checks whether the contributions of a transaction add up to its amount.

IMPORTANT: Validation NEVER blocks a submit and NEVER fixes anything.
It produces a message for the form; the user decides what to do.

The comparison is exact floating-point equality with no tolerance. An
equal split of 100 between three people (3 x 33.33) is therefore reported
as "less than the amount"; that cent is a real discrepancy the user
should see.
"""

from bill_splitter.ledger.parsing import parse_decimal
from bill_splitter.models.ledger import (
    ContributionCheck,
    ContributionStatus,
    Transaction,
)

EXCEEDS_AMOUNT_MESSAGE = "Total contributions exceed the transaction amount."
LESS_THAN_AMOUNT_MESSAGE = "Total contributions are less than the transaction amount."


class ContributionValidator:
    """Compares the parsed contribution total with the parsed amount."""

    MESSAGES = {
        ContributionStatus.BALANCED: "",
        ContributionStatus.EXCEEDS_AMOUNT: EXCEEDS_AMOUNT_MESSAGE,
        ContributionStatus.LESS_THAN_AMOUNT: LESS_THAN_AMOUNT_MESSAGE,
    }

    def check(self, transaction: Transaction) -> ContributionCheck:
        """
        Run the check and keep the totals that led to the outcome.

        Unparsable amount or contribution values count as zero.
        """
        total_amount = parse_decimal(transaction.amount)
        total_contributions = sum(
            (parse_decimal(value) for value in transaction.contributions.values()),
            0.0,
        )

        if total_contributions > total_amount:
            status = ContributionStatus.EXCEEDS_AMOUNT
        elif total_contributions < total_amount:
            status = ContributionStatus.LESS_THAN_AMOUNT
        else:
            status = ContributionStatus.BALANCED

        return ContributionCheck(
            total_amount=total_amount,
            total_contributions=total_contributions,
            status=status,
            message=self.MESSAGES[status],
        )

    def get_user_friendly_summary(self, check: ContributionCheck) -> str:
        """
        Longer explanation for the form, including the size of the gap.

        Amounts are shown as plain numbers; currency formatting is the
        presentation layer's job.
        """
        if check.is_balanced:
            return ""
        gap = abs(check.difference)
        if check.status == ContributionStatus.EXCEEDS_AMOUNT:
            return f"{check.message} Remove {gap:,.2f} from the contributions."
        return f"{check.message} {gap:,.2f} is still unassigned."


_default_validator = ContributionValidator()


def check_contributions(transaction: Transaction) -> ContributionCheck:
    """Module-level shortcut for ContributionValidator().check."""
    return _default_validator.check(transaction)


def validate_contributions(transaction: Transaction) -> str:
    """
    Return the validation message for a transaction.

    Returns:
        One of the two warning messages, or "" when the contributions
        add up exactly to the amount.
    """
    return check_contributions(transaction).message
