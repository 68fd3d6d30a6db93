# ARIVAH/backend/tests/test_classification.py

import pytest
from collections import namedtuple
from arivah.constants import TRANSACTION_TYPES
from arivah.services.classification import (
    RULES,
    classify,
    cash_sign,
    is_revenue,
    is_expense,
    signed_total
)
from arivah.services.errors import UnknownTransactionTypeError

Row = namedtuple("Row", ["type", "amount"])

class TestClassification:
    def test_every_known_type_has_a_rule(self):
        assert set(RULES) == set(TRANSACTION_TYPES)

    @pytest.mark.parametrize("transaction_type", ["revenue", "capital_injection", "transfer_in"])
    def test_inflows(self, transaction_type):
        assert cash_sign(transaction_type) == 1
        assert is_revenue(transaction_type)
        assert not is_expense(transaction_type)

    @pytest.mark.parametrize("transaction_type", ["expense", "tax", "partner_payout", "transfer_out"])
    def test_outflows(self, transaction_type):
        assert cash_sign(transaction_type) == -1
        assert is_expense(transaction_type)
        assert not is_revenue(transaction_type)

    def test_other_moves_cash_but_not_profit(self):
        assert cash_sign("other") == -1
        assert not is_revenue("other")
        assert not is_expense("other")

    def test_transfers_are_tracked_separately(self):
        assert classify("transfer_out").tracked_as == "transferred_out"
        assert classify("transfer_in").tracked_as == "received_in"
        assert classify("revenue").tracked_as is None

    def test_unknown_type_fails_loudly(self):
        with pytest.raises(UnknownTransactionTypeError):
            classify("refund")
        with pytest.raises(UnknownTransactionTypeError):
            signed_total([Row("revenue", 10), Row("refund", 5)])

    def test_signed_total(self):
        rows = [Row("revenue", 1000), Row("expense", 300), Row("transfer_in", 50), Row("other", 20)]
        assert signed_total(rows) == 730
        assert signed_total([]) == 0
