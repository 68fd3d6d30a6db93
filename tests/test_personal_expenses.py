# ARIVAH/backend/tests/test_personal_expenses.py

import pytest
from datetime import date
from arivah.models import models
from arivah.services import records
from arivah.services.personal_expenses_service import get_personal_expense_stats, mark_reimbursed
from arivah.services.errors import ValidationFailure

class TestPersonalExpenseStats:
    @pytest.fixture(autouse=True)
    def seed(self, db_session, user):
        self.user = user
        for day, category, amount, reimbursable, reimbursed in [
            (date(2024, 6, 3), "Travel", 1200, True, False),
            (date(2024, 6, 9), "Meals", 300, False, False),
            (date(2024, 5, 20), "Travel", 800, True, True),
            (date(2024, 1, 15), "Office", 500, False, False),
        ]:
            db_session.add(models.PersonalExpense(
                user_id=user.id, date=day, category=category, amount=amount,
                is_reimbursable=reimbursable, is_reimbursed=reimbursed
            ))
        db_session.commit()

    def test_totals_and_categories(self, db_session):
        stats = get_personal_expense_stats(db_session, today=date(2024, 6, 15))

        assert stats["total_expenses"] == 2800
        assert stats["category_breakdown"][0] == {"category": "Travel", "amount": 2000, "count": 2}
        assert [row["category"] for row in stats["category_breakdown"]] == ["Travel", "Office", "Meals"]
        assert stats["reimbursable_pending"] == 1200
        assert stats["reimbursed_total"] == 800

    def test_trend_covers_six_months(self, db_session):
        stats = get_personal_expense_stats(db_session, today=date(2024, 6, 15))

        assert stats["monthly_trend"] == [
            {"month": "Jan 2024", "amount": 500},
            {"month": "Feb 2024", "amount": 0},
            {"month": "Mar 2024", "amount": 0},
            {"month": "Apr 2024", "amount": 0},
            {"month": "May 2024", "amount": 800},
            {"month": "Jun 2024", "amount": 1500},
        ]

    def test_trend_crosses_year(self, db_session):
        stats = get_personal_expense_stats(db_session, today=date(2024, 2, 1))
        months = [row["month"] for row in stats["monthly_trend"]]
        assert months[0] == "Sep 2023"
        assert months[-1] == "Feb 2024"

    def test_window_filter(self, db_session):
        stats = get_personal_expense_stats(
            db_session, user_id=self.user.id, start_date=date(2024, 6, 1), end_date=date(2024, 6, 30),
            today=date(2024, 6, 15)
        )
        assert stats["total_expenses"] == 1500

    def test_no_expenses(self, db_session):
        stats = get_personal_expense_stats(db_session, user_id=999, today=date(2024, 6, 15))
        assert stats["total_expenses"] == 0
        assert stats["category_breakdown"] == []
        assert len(stats["monthly_trend"]) == 6


class TestReimbursement:
    def test_mark_reimbursed(self, db_session, user):
        expense = records.create_personal_expense(db_session, {
            "date": date(2024, 6, 3), "category": "Travel", "amount": 1200, "is_reimbursable": True
        }, user)

        reimbursed = mark_reimbursed(db_session, expense.id, user, on=date(2024, 6, 20))

        assert reimbursed.is_reimbursed
        assert reimbursed.reimbursed_date == date(2024, 6, 20)
        with pytest.raises(ValidationFailure):
            mark_reimbursed(db_session, expense.id, user)

    def test_not_reimbursable(self, db_session, user):
        expense = records.create_personal_expense(db_session, {
            "date": date(2024, 6, 3), "category": "Meals", "amount": 300
        }, user)
        with pytest.raises(ValidationFailure):
            mark_reimbursed(db_session, expense.id, user)
