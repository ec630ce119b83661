"""
API tests for the URL shortener endpoints.

Each test gets a fresh application, so in-memory state does not leak
between tests.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from shortener.core.setting import Settings
from shortener.main import create_app
from shortener.services.code_generator import CodeGenerator

BASE_URL = "http://sho.rt"


@pytest.fixture
def app():
    return create_app(Settings(BASE_URL=f"{BASE_URL}/"))


@pytest.fixture
def client(app):
    return TestClient(app)


def shorten(client, url):
    return client.post("/shorten", json={"url": url})


class TestHealth:
    """Test health endpoints."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"

    def test_process_time_header(self, client):
        response = client.get("/health")
        assert "X-Process-Time" in response.headers


class TestShortenEndpoint:
    """Test POST /shorten."""

    def test_creates_short_url(self, client):
        response = shorten(client, "https://example.com/a")
        assert response.status_code == 201
        data = response.json()
        assert len(data["short_code"]) == 6
        assert data["short_url"] == f"{BASE_URL}/{data['short_code']}"
        assert data["original_url"] == "https://example.com/a"

    def test_repeat_returns_existing_code(self, client):
        first = shorten(client, "https://example.com/a")
        second = shorten(client, "https://example.com/a")
        assert second.status_code == 200
        assert second.json()["short_code"] == first.json()["short_code"]

    def test_url_is_not_normalized(self, client):
        data = shorten(client, "https://example.com/a").json()
        assert data["original_url"] == "https://example.com/a"
        other = shorten(client, "https://example.com/a/").json()
        assert other["short_code"] != data["short_code"]

    def test_missing_url(self, client):
        response = client.post("/shorten", json={})
        assert response.status_code == 400
        assert response.json()["detail"] == "URL is required"

    def test_empty_url(self, client):
        assert shorten(client, "").status_code == 400

    def test_invalid_scheme(self, client):
        response = shorten(client, "ftp://x")
        assert response.status_code == 400
        assert "http://" in response.json()["detail"]

    def test_malformed_body(self, client):
        response = client.post("/shorten", json={"url": 42})
        assert response.status_code == 422

    def test_exhausted_codes(self):
        settings = Settings(
            SHORT_CODE_ALPHABET="A",
            SHORT_CODE_LENGTH=1,
            SHORT_CODE_MAX_ATTEMPTS=3,
        )
        client = TestClient(create_app(settings))
        assert shorten(client, "https://example.com/1").status_code == 201
        response = shorten(client, "https://example.com/2")
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to shorten URL"


class TestResolveEndpoint:
    """Test GET /{short_code} and GET /api/stats/{short_code}."""

    def test_scenario(self, client):
        """Redirect counts a visit, stats request counts another."""
        k1 = shorten(client, "https://example.com/a").json()["short_code"]
        assert shorten(client, "https://example.com/a").json()["short_code"] == k1

        redirect = client.get(f"/{k1}", follow_redirects=False)
        assert redirect.status_code == 302
        assert redirect.headers["location"] == "https://example.com/a"

        stats = client.get(f"/{k1}", params={"stats": "true"})
        assert stats.status_code == 200
        data = stats.json()
        assert data["original_url"] == "https://example.com/a"
        assert data["visit_count"] == 2
        assert data["short_code"] == k1

    @pytest.mark.parametrize("flag", ["false", "1", "foo", "TRUE"])
    def test_only_exact_true_flag_returns_stats(self, client, flag):
        """Any stats value other than the exact string true redirects and counts the visit."""
        code = shorten(client, "https://example.com/a").json()["short_code"]
        response = client.get(f"/{code}", params={"stats": flag}, follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/a"
        assert client.get(f"/api/stats/{code}").json()["visit_count"] == 1

    def test_accept_json_returns_stats(self, client):
        code = shorten(client, "https://example.com/a").json()["short_code"]
        response = client.get(f"/{code}", headers={"Accept": "application/json"})
        assert response.status_code == 200
        assert response.json()["visit_count"] == 1

    def test_stats_endpoint_does_not_count(self, client):
        code = shorten(client, "https://example.com/a").json()["short_code"]
        client.get(f"/{code}", follow_redirects=False)
        for _ in range(3):
            response = client.get(f"/api/stats/{code}")
            assert response.status_code == 200
            assert response.json()["visit_count"] == 1

    def test_unknown_code(self, client):
        assert client.get("/nope12", follow_redirects=False).status_code == 404
        assert client.get("/nope12", params={"stats": "true"}).status_code == 404
        assert client.get("/api/stats/nope12").status_code == 404

    def test_apps_do_not_share_state(self, client):
        code = shorten(client, "https://example.com/a").json()["short_code"]
        other = TestClient(create_app(Settings()))
        assert other.get(f"/api/stats/{code}").status_code == 404


@pytest.mark.asyncio
async def test_async_round_trip(app):
    """Drive the app through httpx's ASGI transport."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        created = await client.post("/shorten", json={"url": "https://example.com/async"})
        assert created.status_code == 201
        code = created.json()["short_code"]

        redirect = await client.get(f"/{code}")
        assert redirect.status_code == 302
        assert redirect.headers["location"] == "https://example.com/async"

        stats = await client.get(f"/api/stats/{code}")
        assert stats.json()["visit_count"] == 1


class TestReservedPaths:
    """Codes that collide with fixed routes would never resolve."""

    def test_fixed_routes_are_reserved(self, app):
        reserved = app.state.url_service.reserved_codes
        assert {"health", "docs", "redoc"} <= reserved

    def test_health_is_never_issued(self, app, client, sequence_rng):
        app.state.url_service.generator = CodeGenerator(rng=sequence_rng("health" + "abcdef"))
        data = shorten(client, "https://example.com/a").json()
        assert data["short_code"] == "abcdef"

        assert client.get("/health").json()["status"] == "healthy"
        redirect = client.get("/abcdef", follow_redirects=False)
        assert redirect.status_code == 302
