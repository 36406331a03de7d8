"""
==============================================================================
API Integration Tests
==============================================================================

Tests for REST API endpoints.

==============================================================================
"""

import asyncio
import csv

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.services.catalog_service import CatalogService, get_catalog_service
from app.services.notifier import KommoNotifier
from app.main import app


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client: TestClient):
        """Test health check reports the workbook."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["components"]["workbook"] == "healthy"

    def test_readiness_probe(self, client: TestClient):
        """Test readiness probe."""
        response = client.get("/api/v1/health/ready")
        assert response.status_code == 200
        assert response.json()["ready"] is True

    def test_liveness_probe(self, client: TestClient):
        """Test liveness probe."""
        response = client.get("/api/v1/health/live")
        assert response.status_code == 200
        assert response.json()["alive"] is True


class TestCatalogEndpoints:
    """Tests for the catalog endpoint."""

    def test_default_market(self, client: TestClient):
        """Test catalog defaults to AO."""
        response = client.get("/api/v1/catalog")
        assert response.status_code == 200
        data = response.json()
        assert data["market"] == "AO"
        assert data["colorMods"] == {"gold": 0.1, "black": 0, "default": 0.04}
        assert [p["model"] for p in data["products"]] == [
            "iPhone 13", "iPhone 12", "MacBook Air M2", "iPad Air"
        ]
        assert data["variants"]["iPhone 13|usado|128|AO"] == {"price": 450000, "currency": "AOA"}

    def test_product_payload(self, client: TestClient):
        """Test product fields."""
        data = client.get("/api/v1/catalog", params={"market": "ao"}).json()
        iphone = data["products"][0]
        assert iphone["id"] == "iphone-13"
        assert iphone["type"] == "iphone"
        assert iphone["rating"] == 4.6
        assert iphone["reviews"] == 132
        assert iphone["colors"] == ["#000000", "#ffffff"]
        assert iphone["image"] == "/public/products/iphone-13.png"
        assert iphone["storages"] == {"usado": [128], "novo": [256]}

    def test_other_market(self, client: TestClient):
        """Test US market only lists US products."""
        data = client.get("/api/v1/catalog", params={"market": "us"}).json()
        assert data["market"] == "US"
        assert [p["model"] for p in data["products"]] == ["iPhone 14 Pro"]

    def test_invalid_market(self, client: TestClient):
        """Test malformed market codes are rejected."""
        response = client.get("/api/v1/catalog", params={"market": "ANGOLA"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_MARKET"

    def test_color_modifier(self, client: TestClient):
        """Test color modifier lookup."""
        response = client.get("/api/v1/catalog/color-modifier", params={"color": "#d4af37"})
        assert response.status_code == 200
        assert response.json() == {"color": "#d4af37", "key": "gold", "modifier": 0.1}

    def test_color_modifier_defaults_file(self, client: TestClient, tmp_path):
        """Test built-in modifiers when the file is missing."""
        settings = Settings(data_file=str(tmp_path / "catalog.xlsx"),
                            color_modifiers_file=str(tmp_path / "none.json"))
        app.dependency_overrides[get_catalog_service] = lambda: CatalogService(settings)
        response = client.get("/api/v1/catalog/color-modifier", params={"color": "#000"})
        assert response.json()["modifier"] == 0


class TestFeaturedEndpoints:
    """Tests for the featured endpoint."""

    def test_featured_default(self, client: TestClient):
        """Test preferred ordering, city filter and absolute images."""
        response = client.get("/api/v1/featured")
        assert response.status_code == 200
        data = response.json()
        assert data["market"] == "AO"
        assert data["count"] == 8
        assert [item["model"] for item in data["items"]] == ["MacBook Air M2", "iPhone 13"]

        iphone = data["items"][1]
        assert iphone["min_price"] == 450000
        assert iphone["currency"] == "AOA"
        assert iphone["image"] == "http://testserver/public/products/iphone-13.png"

    def test_featured_city(self, client: TestClient):
        """Test a different city."""
        data = client.get("/api/v1/featured", params={"city": "Benguela"}).json()
        assert [item["model"] for item in data["items"]] == ["iPhone 13", "iPad Air"]

    def test_featured_unknown_city(self, client: TestClient):
        """Test a city without stock."""
        data = client.get("/api/v1/featured", params={"city": "Lubango"}).json()
        assert data["items"] == []

    @pytest.mark.parametrize("count,expected", [("1", 1), ("0", 8), ("x", 8), ("99", 20)])
    def test_featured_count(self, client: TestClient, count, expected):
        """Test count clamping."""
        data = client.get("/api/v1/featured", params={"count": count}).json()
        assert data["count"] == expected
        assert len(data["items"]) <= expected


class TestSourceUnavailable:
    """Tests for a missing workbook."""

    @pytest.fixture
    def missing_client(self, client: TestClient, tmp_path):
        settings = Settings(data_file=str(tmp_path / "missing.xlsx"))
        app.dependency_overrides[get_catalog_service] = lambda: CatalogService(settings)
        return client

    def test_catalog(self, missing_client: TestClient):
        response = missing_client.get("/api/v1/catalog")
        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "SOURCE_UNAVAILABLE"

    def test_featured(self, missing_client: TestClient):
        response = missing_client.get("/api/v1/featured")
        assert response.status_code == 500
        assert response.json()["error"]["code"] == "SOURCE_UNAVAILABLE"

    def test_health_degraded(self, missing_client: TestClient):
        data = missing_client.get("/api/v1/health").json()
        assert data["status"] == "degraded"
        assert data["components"]["workbook"] == "unavailable"


class TestBuildFailures:
    """Tests for unexpected errors during a build."""

    def test_catalog_build_failed(self, client: TestClient, catalog_service: CatalogService, monkeypatch):
        def explode(sheets, market):
            raise RuntimeError("corrupt sheet")

        monkeypatch.setattr(catalog_service._builder, "build", explode)
        response = client.get("/api/v1/catalog")
        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "CATALOG_BUILD_FAILED"
        assert error["details"]["details"] == "corrupt sheet"

    def test_featured_build_failed(self, client: TestClient, catalog_service: CatalogService, monkeypatch):
        def explode(*args, **kwargs):
            raise ValueError("bad availability")

        monkeypatch.setattr(catalog_service._selector, "select", explode)
        response = client.get("/api/v1/featured")
        assert response.status_code == 500
        assert response.json()["error"]["code"] == "FEATURED_BUILD_FAILED"


class TestSubscriptionEndpoints:
    """Tests for newsletter subscriptions."""

    def test_subscribe(self, client: TestClient, settings: Settings):
        """Test a subscription is appended to the CSV."""
        response = client.post(
            "/api/v1/subscribe",
            json={"name": " Ana ", "email": "Ana@Example.COM", "phone": "+244 900 000 000"},
            headers={"User-Agent": "pytest"}
        )
        assert response.status_code == 200
        assert response.json() == {"ok": True}

        with settings.subscribers_path.open(encoding="utf-8", newline="") as f:
            rows = list(csv.reader(f))
        assert rows[0] == ["timestamp", "name", "email", "phone", "user_agent"]
        assert rows[1][1:] == ["Ana", "ana@example.com", "+244 900 000 000", "pytest"]

    def test_header_written_once(self, client: TestClient, settings: Settings):
        """Test repeated subscriptions share one header."""
        for email in ("a@b.co", "c@d.co"):
            client.post("/api/v1/subscribe", json={"email": email})
        with settings.subscribers_path.open(encoding="utf-8", newline="") as f:
            rows = list(csv.reader(f))
        assert len(rows) == 3

    @pytest.mark.parametrize("email", ["", "not-an-email", "a b@c.co", "a@b"])
    def test_invalid_email(self, client: TestClient, settings: Settings, email):
        """Test invalid emails are rejected before writing."""
        response = client.post("/api/v1/subscribe", json={"name": "Ana", "email": email})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_EMAIL"
        assert not settings.subscribers_path.exists()


class TestKommoNotifier:
    """Tests for the outbound webhook."""

    def test_disabled_without_url(self, settings: Settings):
        result = asyncio.run(KommoNotifier(settings).post({"email": "a@b.co"}))
        assert result == {"ok": False, "reason": "no_webhook"}

    def test_posts_payload(self, settings: Settings):
        received = {}

        def handler(request: httpx.Request) -> httpx.Response:
            received["url"] = str(request.url)
            received["body"] = request.content
            return httpx.Response(202)

        configured = settings.model_copy(update={"kommo_webhook_url": "https://hooks.example.com/lead"})
        notifier = KommoNotifier(configured, transport=httpx.MockTransport(handler))
        result = asyncio.run(notifier.post({"email": "a@b.co"}))

        assert result == {"ok": True, "status": 202}
        assert received["url"] == "https://hooks.example.com/lead"
        assert b"a@b.co" in received["body"]

    def test_transport_error(self, settings: Settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        configured = settings.model_copy(update={"kommo_webhook_url": "https://hooks.example.com/lead"})
        notifier = KommoNotifier(configured, transport=httpx.MockTransport(handler))
        result = asyncio.run(notifier.post({"email": "a@b.co"}))

        assert result["ok"] is False
        assert "refused" in result["reason"]

    def test_error_status(self, settings: Settings):
        configured = settings.model_copy(update={"kommo_webhook_url": "https://hooks.example.com/lead"})
        notifier = KommoNotifier(configured, transport=httpx.MockTransport(lambda r: httpx.Response(500)))
        assert asyncio.run(notifier.post({})) == {"ok": False, "status": 500}
