"""
Ledger Package

The state manager plus the pure functions it derives everything from.
"""

from bill_splitter.ledger.balances import summarize
from bill_splitter.ledger.errors import LedgerError, TransactionNotFoundError
from bill_splitter.ledger.ids import IdGenerator
from bill_splitter.ledger.parsing import parse_decimal
from bill_splitter.ledger.presentation import balance_rows, transaction_rows
from bill_splitter.ledger.split import recalculate_split_bill
from bill_splitter.ledger.state import LedgerState, LedgerStateManager
from bill_splitter.ledger.validation import (
    ContributionValidator,
    check_contributions,
    validate_contributions,
)

__all__ = [
    "ContributionValidator",
    "IdGenerator",
    "LedgerError",
    "LedgerState",
    "LedgerStateManager",
    "TransactionNotFoundError",
    "balance_rows",
    "check_contributions",
    "parse_decimal",
    "recalculate_split_bill",
    "summarize",
    "transaction_rows",
    "validate_contributions",
]
