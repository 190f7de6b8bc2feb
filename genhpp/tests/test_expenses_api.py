"""
Expense API integration tests.

Run: python -m pytest genhpp/tests/test_expenses_api.py -v
"""

from datetime import date

import pytest
from sqlalchemy import insert

from genhpp.db.models import Expense


EXPENSE_PAYLOAD = {
    "name": "Sewa ruko",
    "amount": 1500000,
    "category": "Sewa Tempat",
    "date": "2026-03-05",
}


def _create_expense(client, **overrides):
    resp = client.post("/api/expenses/", json={**EXPENSE_PAYLOAD, **overrides})
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestExpenseCrud:
    def test_create(self, client):
        data = _create_expense(client)
        assert data["name"] == "Sewa ruko"
        assert data["category"] == "Sewa Tempat"
        assert data["amount"] == pytest.approx(1500000)
        assert data["date"] == "2026-03-05"

    def test_unknown_category_rejected(self, client):
        resp = client.post("/api/expenses/", json={**EXPENSE_PAYLOAD, "category": "Hiburan"})
        assert resp.status_code == 422

    def test_zero_amount_rejected(self, client):
        resp = client.post("/api/expenses/", json={**EXPENSE_PAYLOAD, "amount": 0})
        assert resp.status_code == 422

    def test_missing_date_rejected(self, client):
        payload = {k: v for k, v in EXPENSE_PAYLOAD.items() if k != "date"}
        assert client.post("/api/expenses/", json=payload).status_code == 422

    def test_update(self, client):
        created = _create_expense(client)
        resp = client.put(f"/api/expenses/{created['id']}", json={"amount": 1750000})
        assert resp.status_code == 200
        data = resp.json()
        assert data["amount"] == pytest.approx(1750000)
        assert data["category"] == "Sewa Tempat"

    def test_delete(self, client):
        created = _create_expense(client)
        assert client.delete(f"/api/expenses/{created['id']}").status_code == 204
        assert client.get(f"/api/expenses/{created['id']}").status_code == 404

    def test_other_users_expense_forbidden(self, client, token_auth):
        owner = token_auth("owner-sub", email="owner@example.com")
        other = token_auth("other-sub", email="other@example.com")
        created = client.post("/api/expenses/", json=EXPENSE_PAYLOAD, headers=owner).json()

        assert client.get(f"/api/expenses/{created['id']}", headers=other).status_code == 403
        assert client.put(
            f"/api/expenses/{created['id']}", json={"amount": 5}, headers=other
        ).status_code == 403


class TestExpenseMonths:
    def test_month_filter(self, client):
        _create_expense(client, name="Maret", date="2026-03-31")
        _create_expense(client, name="April", date="2026-04-01")

        resp = client.get("/api/expenses/", params={"month": "2026-03"})
        assert resp.status_code == 200
        assert [e["name"] for e in resp.json()] == ["Maret"]

    def test_list_newest_date_first(self, client):
        _create_expense(client, name="Awal", date="2026-03-01")
        _create_expense(client, name="Akhir", date="2026-03-20")
        names = [e["name"] for e in client.get("/api/expenses/").json()]
        assert names == ["Akhir", "Awal"]

    def test_bad_month_returns_400(self, client):
        assert client.get("/api/expenses/", params={"month": "2026-13"}).status_code == 400
        assert client.get("/api/expenses/", params={"month": "maret"}).status_code == 400

    def test_monthly_summary(self, client):
        _create_expense(client, amount=100000, date="2026-03-02")
        _create_expense(client, amount=250000, category="Pemasaran", date="2026-03-15")
        _create_expense(client, amount=999999, date="2026-02-28")

        resp = client.get("/api/expenses/summary/monthly", params={"month": "2026-03"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["month"] == "2026-03"
        assert data["total"] == pytest.approx(350000)
        assert data["count"] == 2

    def test_monthly_summary_empty(self, client):
        data = client.get("/api/expenses/summary/monthly", params={"month": "2020-01"}).json()
        assert data["total"] == 0
        assert data["count"] == 0

    def test_monthly_summary_counts_every_row(self, client, db):
        """Test the summary is aggregated over the whole month, not a page of rows."""
        rows = [
            {"user_id": 1, "name": f"Kemasan {i}", "amount": 100, "category": "Biaya Pengemasan", "date": date(2026, 4, 1 + i % 28)}
            for i in range(10_050)
        ]
        db.execute(insert(Expense), rows)
        db.commit()

        data = client.get("/api/expenses/summary/monthly", params={"month": "2026-04"}).json()
        assert data["count"] == 10_050
        assert data["total"] == pytest.approx(1_005_000)
