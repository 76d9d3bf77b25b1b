"""Tests for the v1 HTTP API."""

from decimal import Decimal

from tax_estimator.api.v1.deps import get_tax_year_config
from tax_estimator.domain.models.tax_bracket_config import InvalidBracketConfigError
from tax_estimator.main import app


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


class TestTaxEndpoints:

    def test_summary(self, client):
        resp = client.post("/api/v1/tax/summary", json={
            "net_income": 115705, "personal_amount": 15705, "other_credits": 0,
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        data = body["data"]
        assert Decimal(data["taxable_income"]) == Decimal("100000")
        assert Decimal(data["per_schedule_tax"]["federal"]) == Decimal("17427.315")
        assert Decimal(data["total_tax"]) == Decimal("24468.029")
        assert data["marginal_rates"]["federal"] == "0.205"
        assert data["tax_year"] == 2024

    def test_summary_uses_default_personal_amount(self, client):
        resp = client.post("/api/v1/tax/summary", json={"net_income": 115705})
        assert Decimal(resp.json()["data"]["taxable_income"]) == Decimal("100000")

    def test_summary_rejects_bad_input(self, client):
        resp = client.post("/api/v1/tax/summary", json={"net_income": "lots"})
        assert resp.status_code == 422
        resp = client.post("/api/v1/tax/summary", json={"net_income": 1000, "personal_amount": -5})
        assert resp.status_code == 422

    def test_brackets(self, client):
        resp = client.get("/api/v1/tax/brackets")
        data = resp.json()["data"]
        assert data["tax_year"] == 2024
        assert set(data["schedules"]) == {"federal", "ontario"}

    def test_projection(self, client):
        resp = client.post("/api/v1/tax/projection", json={
            "income_ytd": 40000, "expenses_ytd": 5000, "personal_amount": 15705,
            "as_of": "2024-04-30",
        })
        data = resp.json()["data"]
        assert Decimal(data["net_income"]) == Decimal("105000")
        assert data["as_of"] == "2024-04-30"
        assert Decimal(data["quarterly_estimate"]) == Decimal(data["total_tax"]) / 4

    def test_projection_defaults_to_today(self, client):
        resp = client.post("/api/v1/tax/projection", json={"income_ytd": 70000})
        assert resp.json()["data"]["as_of"] == "2024-07-01"

    def test_bad_bracket_config(self, client):
        def _broken():
            raise InvalidBracketConfigError("federal: bracket list is empty")

        app.dependency_overrides[get_tax_year_config] = _broken
        resp = client.post("/api/v1/tax/summary", json={"net_income": 1000})
        assert resp.status_code == 500
        assert resp.json()["status"] == "error"
        assert "bracket list is empty" in resp.json()["message"]


class TestInstalmentEndpoints:

    def test_plan(self, client):
        resp = client.post("/api/v1/instalments", json={
            "method": "safe_harbour", "prior_year_tax": 4000,
        })
        data = resp.json()["data"]
        assert data["is_eligible"] is True
        assert Decimal(data["quarterly_amount"]) == Decimal("1000")
        assert data["next_due_date"] == "2024-09-15"
        assert [i["label"] for i in data["next_instalments"]] == ["3rd Quarter", "4th Quarter"]
        assert [i["quarter"] for i in data["overdue_instalments"]] == ["Q1", "Q2"]
        assert len(data["instalments"]) == 4
        assert data["next_instalments"][0]["days_until_due"] == 76

    def test_plan_after_last_quarter(self, client):
        resp = client.post("/api/v1/instalments", json={
            "method": "safe_harbour", "prior_year_tax": 4000, "as_of": "2024-12-20T10:00:00",
        })
        data = resp.json()["data"]
        assert data["next_due_date"] is None
        assert data["next_instalments"] == []

    def test_plan_not_eligible(self, client):
        resp = client.post("/api/v1/instalments", json={"method": "estimate", "prior_year_tax": 4000})
        data = resp.json()["data"]
        assert data["is_eligible"] is False
        assert data["next_instalments"] == []
        assert data["overdue_instalments"] == []
        assert data["next_due_date"] is None

    def test_detect(self, client):
        resp = client.post("/api/v1/instalments/detect", json={"transactions": [
            {"user_id": "u1", "amount": "2500", "date": "2024-03-14",
             "direction": "debit", "description": "CRA TAX INSTALMENT"},
            {"user_id": "u1", "amount": "40", "date": "2024-05-01",
             "direction": "debit", "description": "Coffee"},
        ]})
        data = resp.json()["data"]
        assert len(data["keyword_matches"]) == 1
        assert data["keyword_matches"][0]["date"] == "2024-03-14"
        assert len(data["cra_matches"]) == 1
        assert data["cra_matches"][0]["method"] == "auto"
