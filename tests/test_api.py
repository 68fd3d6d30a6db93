# ARIVAH/backend/tests/test_api.py

import pytest

class TestAuth:
    def test_missing_header(self, client):
        response = client.get("/businesses/")
        assert response.status_code == 401

    def test_unknown_user(self, client):
        response = client.get("/businesses/", headers={"X-User-Id": "999"})
        assert response.status_code == 401

    def test_register_and_me(self, client):
        response = client.post("/users/", json={"name": "Ravi", "email": "ravi@arivah.in"})
        assert response.status_code == 200
        user_id = response.json()["id"]

        me = client.get("/users/me", headers={"X-User-Id": str(user_id)})
        assert me.json()["email"] == "ravi@arivah.in"

        duplicate = client.post("/users/", json={"name": "Ravi 2", "email": "ravi@arivah.in"})
        assert duplicate.status_code == 400


class TestBookkeepingFlow:
    def _business(self, client, headers, name, type="service"):
        response = client.post("/businesses/", json={"name": name, "type": type}, headers=headers)
        assert response.status_code == 200
        return response.json()

    def _transaction(self, client, headers, business_id, type, amount, day, category="General"):
        response = client.post("/transactions/", json={
            "business_id": business_id,
            "date": day,
            "type": type,
            "category": category,
            "amount": amount
        }, headers=headers)
        assert response.status_code == 200
        return response.json()

    def test_business_crud(self, client, headers):
        business = self._business(client, headers, "Arivah Web Dev")
        assert business["currency"] == "INR"

        duplicate = client.post("/businesses/", json={"name": "Arivah Web Dev", "type": "service"}, headers=headers)
        assert duplicate.status_code == 400

        renamed = client.put(f"/businesses/{business['id']}", json={"currency": "USD"}, headers=headers)
        assert renamed.json()["currency"] == "USD"

        assert client.get("/businesses/by-name/Arivah Web Dev", headers=headers).status_code == 200
        assert client.get("/businesses/999", headers=headers).status_code == 404

    def test_metrics_endpoint(self, client, headers, user):
        alpha = self._business(client, headers, "Alpha")
        created = self._transaction(client, headers, alpha["id"], "revenue", 1000, "2024-01-05", "Sales")
        self._transaction(client, headers, alpha["id"], "expense", 300, "2024-01-10", "Rent")
        assert created["created_by"] == user.id

        response = client.get(
            f"/businesses/{alpha['id']}/metrics",
            params={"start_date": "2024-01-01", "end_date": "2024-01-31"},
            headers=headers
        )
        assert response.status_code == 200
        metrics = response.json()
        assert metrics["total_revenue"] == 1000
        assert metrics["total_expenses"] == 300
        assert metrics["net_profit"] == 700
        assert metrics["cash_balance"] == 700

        reversed_window = client.get(
            f"/businesses/{alpha['id']}/metrics",
            params={"start_date": "2024-02-01", "end_date": "2024-01-01"},
            headers=headers
        )
        assert reversed_window.status_code == 400

        categories = client.get("/transactions/categories", headers=headers).json()
        assert categories == ["Rent", "Sales"]

    def test_unknown_type_rejected(self, client, headers):
        alpha = self._business(client, headers, "Alpha")
        response = client.post("/transactions/", json={
            "business_id": alpha["id"], "date": "2024-01-05", "type": "refund",
            "category": "Sales", "amount": 10
        }, headers=headers)
        assert response.status_code == 422

    def test_transfer_and_dashboard(self, client, headers):
        web_dev = self._business(client, headers, "Arivah Web Dev")
        jewels = self._business(client, headers, "Arivah Jewels", "ecommerce")
        self._transaction(client, headers, web_dev["id"], "revenue", 2000, "2024-01-05")

        response = client.post("/transfers/", json={
            "from_business_id": web_dev["id"],
            "to_business_id": jewels["id"],
            "amount": 500,
            "date": "2024-02-01",
            "purpose": "Gold stock"
        }, headers=headers)
        assert response.status_code == 200
        transfer = response.json()
        assert sorted(leg["type"] for leg in transfer["legs"]) == ["transfer_in", "transfer_out"]

        leg = next(leg for leg in transfer["legs"] if leg["type"] == "transfer_out")
        assert client.delete(f"/transactions/{leg['id']}", headers=headers).status_code == 400

        dashboard = client.get("/dashboard/", headers=headers).json()
        assert [b["business"]["name"] for b in dashboard["businesses"]] == ["Arivah Web Dev", "Arivah Jewels"]
        assert dashboard["businesses"][0]["metrics"]["cash_balance"] == 1500
        assert dashboard["businesses"][1]["metrics"]["cash_balance"] == 500
        assert dashboard["consolidated"]["total_transfers"] == 500

        reverse = client.get(
            "/dashboard/consolidated",
            params={"business_ids": [jewels["id"], web_dev["id"]]},
            headers=headers
        ).json()
        assert reverse["consolidated"]["total_transfers"] == 0

        assert client.delete(f"/transfers/{transfer['id']}", headers=headers).status_code == 200
        assert client.get("/transactions/", params={"business_id": jewels["id"]}, headers=headers).json() == []

    def test_transfer_types_need_a_transfer(self, client, headers):
        alpha = self._business(client, headers, "Alpha")
        response = client.post("/transactions/", json={
            "business_id": alpha["id"], "date": "2024-02-01", "type": "transfer_in",
            "category": "Sales", "amount": 500
        }, headers=headers)
        assert response.status_code == 400
        assert client.get("/transactions/", headers=headers).json() == []

    def test_self_transfer_rejected(self, client, headers):
        alpha = self._business(client, headers, "Alpha")
        response = client.post("/transfers/", json={
            "from_business_id": alpha["id"], "to_business_id": alpha["id"],
            "amount": 10, "date": "2024-02-01", "purpose": "Loop"
        }, headers=headers)
        assert response.status_code == 400


class TestPartnersAndSettlements:
    @pytest.fixture(autouse=True)
    def seed(self, client, headers):
        self.client = client
        self.headers = headers
        self.business = client.post("/businesses/", json={"name": "Alpha", "type": "service"}, headers=headers).json()
        self.p1 = client.post("/partners/", json={"name": "P1"}, headers=headers).json()
        self.p2 = client.post("/partners/", json={"name": "P2"}, headers=headers).json()

    def _link(self, partner, equity):
        return self.client.put(
            f"/businesses/{self.business['id']}/partners",
            json={"partner_id": partner["id"], "equity_percentage": equity},
            headers=self.headers
        )

    def test_equity_and_shares(self):
        assert self._link(self.p1, 40).status_code == 200
        assert self._link(self.p2, 70).status_code == 400
        assert self._link(self.p2, 60).status_code == 200

        self.client.post("/transactions/", json={
            "business_id": self.business["id"], "date": "2024-01-05", "type": "revenue",
            "category": "Sales", "amount": 1000
        }, headers=self.headers)

        response = self.client.get("/partners/shares", params={
            "business_id": self.business["id"], "start_date": "2024-01-01", "end_date": "2024-01-31"
        }, headers=self.headers)
        assert response.status_code == 200
        shares = {s["partner"]["name"]: s["share_amount"] for s in response.json()["shares"]}
        assert shares == {"P1": 400, "P2": 600}

        linked = self.client.get(f"/businesses/{self.business['id']}/partners", headers=self.headers).json()
        assert [row["equity_percentage"] for row in linked] == [40, 60]

    def test_investment_settlement(self):
        investment = self.client.post("/investments/", json={
            "business_id": self.business["id"], "amount": 900, "investment_date": "2024-01-02"
        }, headers=self.headers).json()
        assert investment["is_settled"] is False

        rejected = self.client.post(f"/investments/{investment['id']}/settle", json={
            "shares": [{"partner_id": self.p1["id"], "amount": 600}, {"partner_id": self.p2["id"], "amount": 250}],
            "settlement_date": "2024-02-01"
        }, headers=self.headers)
        assert rejected.status_code == 400

        accepted = self.client.post(f"/investments/{investment['id']}/settle", json={
            "shares": [{"partner_id": self.p1["id"], "amount": 600}, {"partner_id": self.p2["id"], "amount": 300}],
            "settlement_date": "2024-02-01"
        }, headers=self.headers)
        assert accepted.status_code == 200

        detail = self.client.get(f"/investments/{investment['id']}", headers=self.headers).json()
        assert detail["is_settled"] is True
        assert sum(s["amount"] for s in detail["settlements"]) == 900

        unsettled = self.client.get("/investments/unsettled", headers=self.headers).json()
        assert unsettled == {"total": 0, "count": 0}

    def test_profit_sharing_log(self):
        response = self.client.post("/profit-sharing/", json={
            "business_id": self.business["id"],
            "period_start_date": "2024-01-01",
            "period_end_date": "2024-01-31",
            "total_profit": 1000,
            "entries": [
                {"partner_id": self.p1["id"], "partner_share_amount": 400,
                 "reinvested_to_other_business_amount": 100, "cash_payout_amount": 300}
            ],
            "is_settled": False
        }, headers=self.headers)
        assert response.status_code == 200
        log = response.json()[0]

        settled = self.client.post(f"/profit-sharing/{log['id']}/settle", headers=self.headers)
        assert settled.json()["is_settled"] is True

        listed = self.client.get("/profit-sharing/", params={"business_id": self.business["id"]}, headers=self.headers)
        assert len(listed.json()) == 1

    def test_profit_sharing_note_cleared_and_negative_share(self):
        response = self.client.post("/profit-sharing/", json={
            "business_id": self.business["id"],
            "period_start_date": "2024-01-01",
            "period_end_date": "2024-01-31",
            "total_profit": 400,
            "entries": [{"partner_id": self.p1["id"], "partner_share_amount": 400, "cash_payout_amount": 400}],
            "note": "January"
        }, headers=self.headers)
        log = response.json()[0]

        cleared = self.client.put(f"/profit-sharing/{log['id']}", json={"note": None}, headers=self.headers)
        assert cleared.status_code == 200
        assert cleared.json()["note"] is None

        loss = self.client.post("/profit-sharing/", json={
            "business_id": self.business["id"],
            "period_start_date": "2024-02-01",
            "period_end_date": "2024-02-29",
            "total_profit": -300,
            "entries": [{"partner_id": self.p1["id"], "partner_share_amount": -300}]
        }, headers=self.headers)
        assert loss.status_code == 422

    def test_activity_is_recorded(self, user):
        activity = self.client.get("/activity/", headers=self.headers).json()
        actions = {row["action"] for row in activity}
        assert {"created_business", "created_partner"} <= actions

        stats = self.client.get("/users/stats", headers=self.headers).json()
        assert stats[0]["id"] == user.id
        assert stats[0]["recent_activity"]


class TestPersonalExpensesAndTasksApi:
    def test_reimbursement_flow(self, client, headers):
        expense = client.post("/personal-expenses/", json={
            "date": "2024-06-03", "category": "Travel", "amount": 1200, "is_reimbursable": True
        }, headers=headers).json()

        response = client.post(
            f"/personal-expenses/{expense['id']}/reimburse",
            params={"reimbursed_date": "2024-06-20"},
            headers=headers
        )
        assert response.status_code == 200
        assert response.json()["reimbursed_date"] == "2024-06-20"

        stats = client.get("/personal-expenses/stats", headers=headers).json()
        assert stats["reimbursed_total"] == 1200
        assert stats["reimbursable_pending"] == 0

    def test_task_lifecycle(self, client, headers):
        task = client.post("/tasks/", json={"title": "Photograph new rings"}, headers=headers).json()
        done = client.put(f"/tasks/{task['id']}", json={"status": "completed"}, headers=headers).json()
        assert done["completed_at"] is not None

        assert client.delete(f"/tasks/{task['id']}", headers=headers).status_code == 200
        assert client.get(f"/tasks/{task['id']}", headers=headers).status_code == 404
