"""
API tests for quote endpoints.

Tests cover:
- Single quote lookup through the cache
- Batch lookup with partial failure
- Error responses (400, 503)
"""

from decimal import Decimal

from fastapi.testclient import TestClient


class TestQuotesAPI:
    """Tests for GET /quotes and /quotes/{symbol}."""

    def test_single_quote(self, client: TestClient, api_provider):
        response = client.get("/quotes/aapl")

        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "AAPL"
        assert Decimal(data["price"]) == Decimal("185.50")
        assert data["as_of"]

    def test_single_quote_is_cached(self, client: TestClient, api_provider):
        client.get("/quotes/AAPL")
        client.get("/quotes/AAPL")

        assert api_provider.calls_for("AAPL") == 1

    def test_unknown_symbol(self, client: TestClient):
        response = client.get("/quotes/ZZZZ")

        assert response.status_code == 503
        assert response.json()["error"] == "QUOTE_UNAVAILABLE"

    def test_invalid_symbol(self, client: TestClient):
        response = client.get("/quotes/not!valid")

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_SYMBOL"

    def test_batch_partial_failure(self, client: TestClient, api_provider):
        """
        GIVEN one reachable symbol, one unknown and one failing upstream
        WHEN I GET /quotes for all three
        THEN the reachable quote is returned and the others are listed as failed
        """
        api_provider.failing.add("TSLA")

        response = client.get("/quotes", params={"symbols": "AAPL,ZZZZ,TSLA"})

        assert response.status_code == 200
        data = response.json()
        assert [q["symbol"] for q in data["quotes"]] == ["AAPL"]
        assert sorted(data["failed"]) == ["TSLA", "ZZZZ"]

    def test_batch_requires_symbols(self, client: TestClient):
        assert client.get("/quotes").status_code == 422
