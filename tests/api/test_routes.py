"""Tests for the HTTP API."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from amortizer.api.app import app
from amortizer.api.deps import get_suggestion_client
from amortizer.data.suggestions import MISSING_INPUT_MESSAGE
from amortizer.models.suggestion import SuggestionResult

LOAN = {
    "principal": 3_000_000,
    "annual_rate_percent": 7.0,
    "term_years": 20,
}


@pytest.fixture
async def client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


class TestHealth:
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestScheduleRoute:
    async def test_fixed_schedule(self, client):
        resp = await client.post("/api/v1/schedule", json=LOAN)
        assert resp.status_code == 200
        data = resp.json()
        assert len(data["schedule"]) == 240
        assert data["summary"]["number_of_payments"] == 240
        assert data["summary"]["payment_per_period"] == pytest.approx(23258.97, abs=0.01)
        assert data["schedule"][-1]["remaining_balance"] == 0.0
        assert len(data["yearly"]) == 20

    async def test_floating_schedule(self, client):
        resp = await client.post("/api/v1/schedule", json={
            **LOAN,
            "rate_type": "floating",
            "floating_rate_change_percent": 0.5,
            "floating_rate_change_after_years": 5,
        })
        assert resp.status_code == 200
        schedule = resp.json()["schedule"]
        assert schedule[60]["payment_amount"] > schedule[59]["payment_amount"]
        assert schedule[-1]["remaining_balance"] == 0.0

    async def test_yearly_frequency(self, client):
        resp = await client.post("/api/v1/schedule", json={**LOAN, "payment_frequency": "yearly"})
        assert resp.status_code == 200
        assert len(resp.json()["schedule"]) == 20

    async def test_invalid_parameters(self, client):
        resp = await client.post("/api/v1/schedule", json={**LOAN, "principal": 0})
        assert resp.status_code == 422
        assert "principal" in resp.json()["detail"]

    async def test_fractional_periods_rejected(self, client):
        resp = await client.post("/api/v1/schedule", json={**LOAN, "payment_frequency": "3years"})
        assert resp.status_code == 422
        assert "whole number" in resp.json()["detail"]

    async def test_unknown_frequency(self, client):
        resp = await client.post("/api/v1/schedule", json={**LOAN, "payment_frequency": "weekly"})
        assert resp.status_code == 422

    async def test_unknown_rate_type(self, client):
        resp = await client.post("/api/v1/schedule", json={**LOAN, "rate_type": "variable"})
        assert resp.status_code == 422

    async def test_term_upper_bound(self, client):
        resp = await client.post("/api/v1/schedule", json={**LOAN, "term_years": 10_000_000})
        assert resp.status_code == 422

    async def test_overflowing_rate(self, client):
        resp = await client.post("/api/v1/schedule", json={**LOAN, "annual_rate_percent": 1e308})
        assert resp.status_code == 422
        assert "not finite" in resp.json()["detail"]


class TestCsvRoute:
    async def test_csv_download(self, client):
        resp = await client.post("/api/v1/schedule/csv", json=LOAN)
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        assert "home-loan-amortization-schedule.csv" in resp.headers["content-disposition"]
        lines = resp.text.splitlines()
        assert lines[0].startswith("Payment #,Beginning Balance")
        assert len(lines) == 241

    async def test_csv_invalid(self, client):
        resp = await client.post("/api/v1/schedule/csv", json={**LOAN, "term_years": 0})
        assert resp.status_code == 422


class TestSuggestionsRoute:
    async def test_success(self, client):
        fake = MagicMock()
        fake.get_suggestions = AsyncMock(return_value=SuggestionResult.success("- Prepay yearly"))
        app.dependency_overrides[get_suggestion_client] = lambda: fake

        resp = await client.post("/api/v1/suggestions", json={
            **LOAN,
            "annual_salary": 1_200_000,
            "additional_affordability": 5000,
        })
        assert resp.status_code == 200
        assert resp.json() == {"status": "success", "text": "- Prepay yearly", "error": None}

        params, salary, extra = fake.get_suggestions.call_args.args
        assert params.principal == 3_000_000
        assert (salary, extra) == (1_200_000, 5000)

    async def test_missing_inputs_is_failure_not_http_error(self, client):
        resp = await client.post("/api/v1/suggestions", json=LOAN)
        assert resp.status_code == 200
        assert resp.json()["status"] == "failure"
        assert resp.json()["error"] == MISSING_INPUT_MESSAGE

    async def test_invalid_loan(self, client):
        resp = await client.post("/api/v1/suggestions", json={
            **LOAN,
            "annual_rate_percent": -2,
            "annual_salary": 1_200_000,
            "additional_affordability": 5000,
        })
        assert resp.status_code == 422
