"""Tests for the HTTP API endpoints."""

import random

import pytest
from fastapi.testclient import TestClient

from conftest import FakeAdapter, make_offer
from pricecompare.dependencies import get_comparison_service
from pricecompare.main import app
from pricecompare.services.comparison_service import DEMO_NOTE, LIVE_NOTE, PriceComparisonService
from pricecompare.services.demo_generator import DemoOfferGenerator


class ExplodingService(PriceComparisonService):
    """Service whose compare() fails outside any adapter."""

    async def compare(self, query, region=None):
        raise RuntimeError("unexpected failure")


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def use_service(*adapters, service_class=PriceComparisonService):
    service = service_class(adapters=list(adapters), generator=DemoOfferGenerator(rng=random.Random(1)))
    app.dependency_overrides[get_comparison_service] = lambda: service
    return service


# ============================================================================
# COMPARE
# ============================================================================

class TestCompareEndpoint:
    """Test POST and GET /api/v1/compare."""

    def test_post_live_offers(self, client):
        adapter = FakeAdapter(
            "flipkart",
            offers=[
                make_offer("Flipkart", 50000),
                make_offer("Flipkart", 48000, original_price=60000, rating=4.5),
            ],
        )
        use_service(adapter)

        response = client.post("/api/v1/compare", json={"query": "iPhone 15"})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"

        data = body["data"]
        assert data["query"] == "iPhone 15"
        assert data["isDemo"] is False
        assert data["note"] == LIVE_NOTE
        assert data["sources"] == {"flipkart": 2}
        assert [r["price"] for r in data["results"]] == [50000, 48000]

        second = data["results"][1]
        assert second["originalPrice"] == 60000
        assert second["isDemo"] is False
        assert second["discountPercent"] == 20
        assert second["rating"] == 4.5
        assert data["results"][0]["originalPrice"] is None

        assert data["summary"]["lowestPrice"] == 48000
        assert data["summary"]["bestSite"] == "Flipkart"
        assert data["summary"]["offerCount"] == 2

        assert body["meta"]["adaptersQueried"] == 1
        assert body["meta"]["searchTimeMs"] >= 0

    def test_post_region_is_passed_through(self, client):
        adapter = FakeAdapter("product_search", offers=[make_offer()])
        use_service(adapter)

        response = client.post("/api/v1/compare", json={"query": "tv", "region": "400001"})

        assert response.status_code == 200
        assert adapter.calls == [("tv", "400001")]

    @pytest.mark.parametrize("region", [560001, ["560001"], "   "])
    def test_post_non_string_region_is_dropped(self, client, region):
        """Test an unusable region is ignored rather than failing validation."""
        adapter = FakeAdapter("product_search", offers=[make_offer()])
        use_service(adapter)

        response = client.post("/api/v1/compare", json={"query": "tv", "region": region})

        assert response.status_code == 200
        assert adapter.calls == [("tv", None)]

    def test_post_without_adapters_returns_demo(self, client):
        use_service()

        response = client.post("/api/v1/compare", json={"query": "iPhone 15"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["isDemo"] is True
        assert data["note"] == DEMO_NOTE
        assert len(data["results"]) == 3
        assert all(r["isDemo"] for r in data["results"])

    @pytest.mark.parametrize(
        "body",
        [
            {"query": ""},
            {"query": "   "},
            {"query": 123},
            {"query": None},
            {},
        ],
    )
    def test_post_invalid_query_is_400(self, client, body):
        adapter = FakeAdapter("amazon", offers=[make_offer()])
        use_service(adapter)

        response = client.post("/api/v1/compare", json=body)

        assert response.status_code == 400
        error = response.json()
        assert error["status"] == "error"
        assert error["error"]["code"] == "invalid_query"
        assert error["error"]["field"] == "query"
        assert adapter.calls == []

    def test_get_compare(self, client):
        adapter = FakeAdapter("amazon", offers=[make_offer("Amazon.in", 999)])
        use_service(adapter)

        response = client.get("/api/v1/compare", params={"q": "earbuds", "region": "560001"})

        assert response.status_code == 200
        assert response.json()["data"]["results"][0]["price"] == 999
        assert adapter.calls == [("earbuds", "560001")]

    def test_get_missing_query_is_400(self, client):
        use_service()

        response = client.get("/api/v1/compare")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "invalid_query"

    def test_unexpected_error_is_500_without_data(self):
        use_service(service_class=ExplodingService)
        try:
            with TestClient(app, raise_server_exceptions=False) as test_client:
                response = test_client.post("/api/v1/compare", json={"query": "tv"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        body = response.json()
        assert body["status"] == "error"
        assert body["error"]["code"] == "internal_error"
        assert "data" not in body


# ============================================================================
# HEALTH & INFO
# ============================================================================

class TestHealthEndpoint:
    """Test health and info endpoints."""

    def test_health_lists_adapters(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        slugs = [a["slug"] for a in body["adapters"]]
        assert slugs == ["amazon", "flipkart", "product_search", "flipkart_html"]
        assert body["live_data_available"] == any(a["configured"] for a in body["adapters"])

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["compare"] == "/api/v1/compare"
