# ARIVAH/backend/arivah/services/personal_expenses_service.py : personal expense stats and reimbursement

from sqlalchemy.orm import Session
from datetime import date
from typing import Dict, List, Optional
from arivah.models import models
from arivah.constants import MONTHLY_TREND_MONTHS
from arivah.database import atomic
from arivah.services import records
from arivah.services.activity import log_activity
from arivah.services.errors import ValidationFailure


def _trailing_months(today: date, count: int) -> List[date]:
    """First day of each of the last `count` calendar months, oldest first"""
    months = []
    year, month = today.year, today.month
    for _ in range(count):
        months.append(date(year, month, 1))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(months))


def _month_key(day: date) -> str:
    return day.strftime("%b %Y")


def get_personal_expense_stats(
    db: Session,
    user_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    today: Optional[date] = None
) -> Dict:
    """Totals, category breakdown and 6-month trend over the filtered expenses"""
    expenses = records.get_personal_expenses(db, user_id=user_id, start_date=start_date, end_date=end_date)

    categories = {}
    for expense in expenses:
        bucket = categories.setdefault(expense.category, {"amount": 0.0, "count": 0})
        bucket["amount"] += expense.amount
        bucket["count"] += 1
    category_breakdown = sorted(
        ({"category": category, **values} for category, values in categories.items()),
        key=lambda row: row["amount"],
        reverse=True
    )

    # Months with no expenses still show up, at zero
    trend = {_month_key(month): 0.0 for month in _trailing_months(today or date.today(), MONTHLY_TREND_MONTHS)}
    for expense in expenses:
        key = _month_key(expense.date)
        if key in trend:
            trend[key] += expense.amount

    return {
        "total_expenses": sum(e.amount for e in expenses),
        "category_breakdown": category_breakdown,
        "monthly_trend": [{"month": month, "amount": amount} for month, amount in trend.items()],
        "reimbursable_pending": sum(e.amount for e in expenses if e.is_reimbursable and not e.is_reimbursed),
        "reimbursed_total": sum(e.amount for e in expenses if e.is_reimbursed)
    }


def mark_reimbursed(db: Session, expense_id: int, user: models.User, on: Optional[date] = None) -> models.PersonalExpense:
    expense = records.get_personal_expense(db, expense_id)
    if not expense.is_reimbursable:
        raise ValidationFailure("This expense is not reimbursable")
    if expense.is_reimbursed:
        raise ValidationFailure("This expense is already reimbursed")
    with atomic(db):
        expense.is_reimbursed = True
        expense.reimbursed_date = on or date.today()
        log_activity(db, user, "reimbursed_expense", "personal_expense", expense.id, {
            "amount": expense.amount,
            "reimbursed_date": expense.reimbursed_date
        })
    db.refresh(expense)
    return expense
