# ARIVAH/backend/arivah/services/metrics_service.py : business metrics and consolidated dashboard

from sqlalchemy.orm import Session
from datetime import date
from typing import List, Dict, Optional
from arivah.config import get_dashboard_business_names
from arivah.constants import MONTHLY_BREAKDOWN_MONTHS, TOP_EXPENSE_CATEGORIES
from arivah.services import records
from arivah.services.classification import classify, signed_total
from arivah.services.errors import ValidationFailure
import logging

logger = logging.getLogger(__name__)


class MetricsService:
    """Aggregations over a business's transactions, personal expenses and investments"""

    def __init__(self, db: Session):
        self.db = db

    def compute_business_metrics(
        self,
        business_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> Dict[str, float]:
        """
        Windowed revenue/expense/profit plus the all-time cash balance.

        Revenue and expenses follow the classification rules over the
        transactions dated in [start_date, end_date], with personal expenses
        charged to the business folded into expenses. The cash balance always
        covers the whole history, so changing the window never changes it.
        """
        records.get_business(self.db, business_id)

        transactions = records.get_transactions(
            self.db, business_id=business_id, start_date=start_date, end_date=end_date
        )
        personal_expenses = records.get_personal_expenses(
            self.db, business_id=business_id, start_date=start_date, end_date=end_date
        )
        investments = records.get_investments(
            self.db, business_id=business_id, start_date=start_date, end_date=end_date
        )

        totals = {"total_revenue": 0.0, "total_expenses": 0.0, "transferred_out": 0.0, "received_in": 0.0}
        for txn in transactions:
            rule = classify(txn.type)
            if rule.revenue_side:
                totals["total_revenue"] += txn.amount
            if rule.expense_side:
                totals["total_expenses"] += txn.amount
            if rule.tracked_as:
                totals[rule.tracked_as] += txn.amount

        personal_total = sum(e.amount for e in personal_expenses)
        totals["total_expenses"] += personal_total

        return {
            "total_revenue": totals["total_revenue"],
            "total_expenses": totals["total_expenses"],
            "net_profit": totals["total_revenue"] - totals["total_expenses"],
            "transferred_out": totals["transferred_out"],
            "received_in": totals["received_in"],
            "cash_balance": self.compute_cash_balance(business_id),
            "personal_expenses": personal_total,
            "total_investments": sum(i.amount for i in investments),
            "settled_investments": sum(i.amount for i in investments if i.is_settled),
        }

    def compute_cash_balance(self, business_id: int) -> float:
        """All-time signed transaction total minus all-time personal expenses"""
        all_transactions = records.get_transactions(self.db, business_id=business_id)
        all_personal = records.get_personal_expenses(self.db, business_id=business_id)
        return signed_total(all_transactions) - sum(e.amount for e in all_personal)

    def get_monthly_breakdown(
        self,
        business_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[Dict]:
        """Revenue, expense and profit per YYYY-MM, last months with data only"""
        records.get_business(self.db, business_id)
        transactions = records.get_transactions(
            self.db, business_id=business_id, start_date=start_date, end_date=end_date
        )

        by_month = {}
        for txn in transactions:
            rule = classify(txn.type)
            month = txn.date.strftime("%Y-%m")
            bucket = by_month.setdefault(month, {"revenue": 0.0, "expense": 0.0})
            if rule.revenue_side:
                bucket["revenue"] += txn.amount
            elif rule.expense_side:
                bucket["expense"] += txn.amount

        months = sorted(by_month)[-MONTHLY_BREAKDOWN_MONTHS:]
        return [
            {
                "month": month,
                "revenue": by_month[month]["revenue"],
                "expense": by_month[month]["expense"],
                "profit": by_month[month]["revenue"] - by_month[month]["expense"]
            }
            for month in months
        ]

    def get_expense_categories(
        self,
        business_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = TOP_EXPENSE_CATEGORIES
    ) -> List[Dict]:
        """Expense and tax amounts per category, largest first"""
        records.get_business(self.db, business_id)
        transactions = records.get_transactions(
            self.db, business_id=business_id, start_date=start_date, end_date=end_date
        )

        by_category = {}
        for txn in transactions:
            if txn.type in ("expense", "tax"):
                by_category[txn.category] = by_category.get(txn.category, 0.0) + txn.amount

        ranked = sorted(by_category.items(), key=lambda item: item[1], reverse=True)
        return [{"category": category, "amount": amount} for category, amount in ranked[:limit]]

    def consolidate(
        self,
        business_ids: List[int],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> Dict:
        """
        Combine the metrics of several businesses.

        Transfers are counted from each listed business to every business
        listed after it, so for [A, B] total_transfers is the A to B flow.
        """
        if not business_ids:
            raise ValidationFailure("At least one business is required")
        if len(set(business_ids)) != len(business_ids):
            raise ValidationFailure("Each business can only appear once in a consolidated view")

        businesses = [records.get_business(self.db, business_id) for business_id in business_ids]
        per_business = [
            {
                "business": business,
                "metrics": self.compute_business_metrics(business.id, start_date, end_date)
            }
            for business in businesses
        ]

        total_transfers = 0.0
        for index, source in enumerate(businesses):
            for destination in businesses[index + 1:]:
                transfers = records.get_transfers_between(
                    self.db, source.id, destination.id, start_date, end_date
                )
                total_transfers += sum(t.amount for t in transfers)

        return {
            "businesses": per_business,
            "consolidated": {
                "total_revenue": sum(b["metrics"]["total_revenue"] for b in per_business),
                "total_expenses": sum(b["metrics"]["total_expenses"] for b in per_business),
                "net_profit": sum(b["metrics"]["net_profit"] for b in per_business),
                "total_transfers": total_transfers
            }
        }

    def get_dashboard_data(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> Dict:
        """The configured dashboard view (Arivah Web Dev then Arivah Jewels by default)"""
        names = get_dashboard_business_names()
        business_ids = [records.get_business_by_name(self.db, name).id for name in names]
        logger.info(f"📊 Dashboard for {', '.join(names)} ({start_date} → {end_date})")
        return self.consolidate(business_ids, start_date, end_date)
