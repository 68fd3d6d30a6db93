# ARIVAH/backend/tests/test_metrics.py

import pytest
from datetime import date
from sqlalchemy.exc import OperationalError
from arivah.models import models
from arivah.services.metrics_service import MetricsService
from arivah.services import records
from arivah.services.errors import NotFoundError, ValidationFailure, UnknownTransactionTypeError, StoreFailure

class TestBusinessMetrics:
    @pytest.fixture(autouse=True)
    def alpha(self, make_business, add_transaction):
        self.alpha = make_business("Alpha")
        add_transaction(self.alpha, "revenue", 1000, date(2024, 1, 5))
        add_transaction(self.alpha, "expense", 300, date(2024, 1, 10))

    def test_month_window(self, db_session, jan_2024):
        metrics = MetricsService(db_session).compute_business_metrics(self.alpha.id, *jan_2024)

        assert metrics["total_revenue"] == 1000
        assert metrics["total_expenses"] == 300
        assert metrics["net_profit"] == 700
        assert metrics["cash_balance"] == 700

    def test_cash_balance_ignores_window(self, db_session, add_transaction):
        add_transaction(self.alpha, "revenue", 200, date(2024, 3, 1))
        service = MetricsService(db_session)

        january = service.compute_business_metrics(self.alpha.id, date(2024, 1, 1), date(2024, 1, 31))
        march = service.compute_business_metrics(self.alpha.id, date(2024, 3, 1), date(2024, 3, 31))
        everything = service.compute_business_metrics(self.alpha.id)

        assert january["cash_balance"] == march["cash_balance"] == everything["cash_balance"] == 900
        assert january["net_profit"] == 700
        assert march["net_profit"] == 200

    def test_net_profit_is_revenue_minus_expenses(self, db_session, add_transaction):
        add_transaction(self.alpha, "tax", 50, date(2024, 1, 15))
        add_transaction(self.alpha, "partner_payout", 100, date(2024, 1, 20))
        add_transaction(self.alpha, "capital_injection", 400, date(2024, 1, 21))
        add_transaction(self.alpha, "other", 25, date(2024, 1, 22))

        metrics = MetricsService(db_session).compute_business_metrics(self.alpha.id)

        assert metrics["total_revenue"] == 1400
        assert metrics["total_expenses"] == 450
        assert metrics["net_profit"] == metrics["total_revenue"] - metrics["total_expenses"]
        # "other" only shows up in the cash balance
        assert metrics["cash_balance"] == 1000 + 400 - 300 - 50 - 100 - 25

    def test_personal_expenses_count_as_expenses(self, db_session, user):
        db_session.add(models.PersonalExpense(
            user_id=user.id, business_id=self.alpha.id, date=date(2024, 1, 12),
            category="Travel", amount=80
        ))
        db_session.commit()

        metrics = MetricsService(db_session).compute_business_metrics(self.alpha.id)

        assert metrics["personal_expenses"] == 80
        assert metrics["total_expenses"] == 380
        assert metrics["net_profit"] == 620
        assert metrics["cash_balance"] == 620

    def test_investments_are_informational(self, db_session, user):
        db_session.add_all([
            models.Investment(user_id=user.id, business_id=self.alpha.id, amount=500,
                              investment_date=date(2024, 1, 3), is_settled=True),
            models.Investment(user_id=user.id, business_id=self.alpha.id, amount=250,
                              investment_date=date(2024, 1, 4), is_settled=False)
        ])
        db_session.commit()

        metrics = MetricsService(db_session).compute_business_metrics(self.alpha.id)

        assert metrics["total_investments"] == 750
        assert metrics["settled_investments"] == 500
        assert metrics["total_revenue"] == 1000
        assert metrics["cash_balance"] == 700

    def test_empty_window(self, db_session):
        metrics = MetricsService(db_session).compute_business_metrics(
            self.alpha.id, date(2023, 1, 1), date(2023, 1, 31)
        )
        assert metrics["total_revenue"] == 0
        assert metrics["net_profit"] == 0
        assert metrics["cash_balance"] == 700

    def test_unknown_type_raises(self, db_session, add_transaction):
        add_transaction(self.alpha, "refund", 10, date(2024, 1, 7))
        with pytest.raises(UnknownTransactionTypeError):
            MetricsService(db_session).compute_business_metrics(self.alpha.id)

    def test_missing_business(self, db_session):
        with pytest.raises(NotFoundError):
            MetricsService(db_session).compute_business_metrics(999)

    def test_reversed_window(self, db_session):
        with pytest.raises(ValidationFailure):
            MetricsService(db_session).compute_business_metrics(
                self.alpha.id, date(2024, 2, 1), date(2024, 1, 1)
            )


class TestCharts:
    def test_monthly_breakdown(self, db_session, make_business, add_transaction):
        business = make_business("Alpha")
        add_transaction(business, "revenue", 1000, date(2024, 1, 5))
        add_transaction(business, "expense", 300, date(2024, 1, 10))
        add_transaction(business, "revenue", 500, date(2024, 2, 2))
        add_transaction(business, "other", 40, date(2024, 2, 3))

        months = MetricsService(db_session).get_monthly_breakdown(business.id)

        assert months == [
            {"month": "2024-01", "revenue": 1000, "expense": 300, "profit": 700},
            {"month": "2024-02", "revenue": 500, "expense": 0, "profit": 500},
        ]

    def test_expense_categories(self, db_session, make_business, add_transaction):
        business = make_business("Alpha")
        add_transaction(business, "expense", 300, date(2024, 1, 10), category="Rent")
        add_transaction(business, "expense", 100, date(2024, 1, 11), category="Supplies")
        add_transaction(business, "tax", 250, date(2024, 1, 12), category="Rent")
        add_transaction(business, "revenue", 900, date(2024, 1, 13), category="Sales")

        categories = MetricsService(db_session).get_expense_categories(business.id, limit=1)

        assert categories == [{"category": "Rent", "amount": 550}]


class TestConsolidation:
    @pytest.fixture(autouse=True)
    def businesses(self, db_session, make_business, add_transaction, user):
        self.web_dev = make_business("Arivah Web Dev")
        self.jewels = make_business("Arivah Jewels", type="ecommerce")
        add_transaction(self.web_dev, "revenue", 1000, date(2024, 1, 5))
        add_transaction(self.web_dev, "expense", 200, date(2024, 1, 6))
        add_transaction(self.jewels, "revenue", 600, date(2024, 1, 7))
        add_transaction(self.jewels, "expense", 100, date(2024, 1, 8))
        db_session.add_all([
            models.InterBusinessTransfer(from_business_id=self.web_dev.id, to_business_id=self.jewels.id,
                                         amount=300, date=date(2024, 1, 9), purpose="Stock", created_by=user.id),
            models.InterBusinessTransfer(from_business_id=self.jewels.id, to_business_id=self.web_dev.id,
                                         amount=40, date=date(2024, 1, 10), purpose="Refund", created_by=user.id)
        ])
        db_session.commit()

    def test_dashboard_totals(self, db_session, jan_2024):
        view = MetricsService(db_session).get_dashboard_data(*jan_2024)

        assert [entry["business"].name for entry in view["businesses"]] == ["Arivah Web Dev", "Arivah Jewels"]
        assert view["consolidated"] == {
            "total_revenue": 1600,
            "total_expenses": 300,
            "net_profit": 1300,
            "total_transfers": 300
        }

    def test_transfer_direction_follows_order(self, db_session):
        view = MetricsService(db_session).consolidate([self.jewels.id, self.web_dev.id])
        assert view["consolidated"]["total_transfers"] == 40

    def test_single_business(self, db_session):
        view = MetricsService(db_session).consolidate([self.jewels.id])
        assert view["consolidated"]["net_profit"] == 500
        assert view["consolidated"]["total_transfers"] == 0

    def test_invalid_lists(self, db_session):
        service = MetricsService(db_session)
        with pytest.raises(ValidationFailure):
            service.consolidate([])
        with pytest.raises(ValidationFailure):
            service.consolidate([self.jewels.id, self.jewels.id])
        with pytest.raises(NotFoundError):
            service.consolidate([self.jewels.id, 999])

    def test_dashboard_needs_configured_businesses(self, db_session):
        self.jewels.name = "Something else"
        db_session.commit()
        with pytest.raises(NotFoundError):
            MetricsService(db_session).get_dashboard_data()


class TestStoreErrors:
    def test_failed_read_surfaces_as_store_failure(self, db_session, make_business, monkeypatch):
        business = make_business("Alpha")

        def broken_query(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("db down"))

        monkeypatch.setattr(db_session, "query", broken_query)
        with pytest.raises(StoreFailure):
            MetricsService(db_session).compute_business_metrics(business.id)
        with pytest.raises(StoreFailure):
            records.get_transactions(db_session, business_id=business.id)

    def test_store_failure_is_a_500(self, client, headers, db_session, make_business, monkeypatch):
        business = make_business("Alpha")

        def broken_query(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("db down"))

        monkeypatch.setattr(db_session, "query", broken_query)
        response = client.get(f"/businesses/{business.id}/metrics", headers=headers)

        assert response.status_code == 500
        assert response.json()["success"] is False
