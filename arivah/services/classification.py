# ARIVAH/backend/arivah/services/classification.py : sign & classification of transaction types

from collections import namedtuple
from arivah.services.errors import UnknownTransactionTypeError

Classification = namedtuple(
    "Classification",
    ["revenue_side", "expense_side", "tracked_as", "cash_sign"]
)

# revenue_side / expense_side: counted in total_revenue / total_expenses
# tracked_as: extra bucket reported on its own (transferred_out, received_in)
RULES = {
    "revenue":           Classification(True,  False, None,              1),
    "capital_injection": Classification(True,  False, None,              1),
    "transfer_in":       Classification(True,  False, "received_in",     1),
    "expense":           Classification(False, True,  None,             -1),
    "tax":               Classification(False, True,  None,             -1),
    "partner_payout":    Classification(False, True,  None,             -1),
    "transfer_out":      Classification(False, True,  "transferred_out", -1),
    "other":             Classification(False, False, None,             -1),
}


def classify(transaction_type: str) -> Classification:
    """Classification of a transaction type; unknown types raise."""
    try:
        return RULES[transaction_type]
    except KeyError:
        raise UnknownTransactionTypeError(transaction_type) from None


def cash_sign(transaction_type: str) -> int:
    return classify(transaction_type).cash_sign


def is_revenue(transaction_type: str) -> bool:
    return classify(transaction_type).revenue_side


def is_expense(transaction_type: str) -> bool:
    return classify(transaction_type).expense_side


def signed_total(transactions) -> float:
    """Sum of amount x cash sign over the given transactions"""
    return sum(t.amount * cash_sign(t.type) for t in transactions)
