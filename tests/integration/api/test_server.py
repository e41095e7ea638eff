"""HTTP tests for service endpoints and the middleware chain."""

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from stormforge.config import Settings
from stormforge.main import create_app


def _client_for(settings: Settings) -> Generator[TestClient, None, None]:
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def limited_client(settings: Settings) -> Generator[TestClient, None, None]:
    """Client whose rate limit allows two requests per window."""
    yield from _client_for(settings.model_copy(update={"rate_limit_max": 2}))


@pytest.fixture
def prefixed_client(tmp_path: Path) -> Generator[TestClient, None, None]:
    settings = Settings(
        environment="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'prefixed.db'}",
        db_create_all=True,
        api_prefix="v2/people/",
    )
    yield from _client_for(settings)


class TestHealth:
    """Liveness and readiness."""

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "OK"
        assert data["timestamp"]
        assert data["uptime"] >= 0

    def test_ready(self, client: TestClient):
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json() == {"ready": True, "checks": {"database": True}}


class TestDocs:
    """API documentation."""

    def test_openapi_document(self, client: TestClient):
        response = client.get("/docs/json")

        assert response.status_code == 200
        doc = response.json()
        assert doc["info"]["title"] == "StormForge API"
        assert doc["info"]["version"] == "1.0.0"
        assert doc["info"]["description"] == "Production-ready REST API framework"
        assert "/api/users" in doc["paths"]
        assert "/api/users/{user_id}" in doc["paths"]

    def test_swagger_ui(self, client: TestClient):
        response = client.get("/docs")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]

    def test_openapi_is_compressed(self, client: TestClient):
        response = client.get("/docs/json", headers={"Accept-Encoding": "gzip"})

        assert response.headers.get("content-encoding") == "gzip"


class TestMetrics:
    def test_prometheus_exposition(self, client: TestClient):
        client.get("/health")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "http_requests_total" in response.text
        assert "user_operations_total" in response.text


class TestMiddleware:
    """Headers applied to every response."""

    def test_security_headers(self, client: TestClient):
        response = client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
        assert "Strict-Transport-Security" in response.headers

    def test_security_headers_on_errors(self, client: TestClient):
        response = client.get("/does-not-exist")

        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_cors_allows_any_origin(self, client: TestClient):
        response = client.get("/health", headers={"Origin": "https://app.example.com"})

        assert response.headers["access-control-allow-origin"] in (
            "*",
            "https://app.example.com",
        )

    def test_cors_preflight(self, client: TestClient):
        response = client.options(
            "/api/users",
            headers={
                "Origin": "https://app.example.com",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers

    def test_request_id_is_echoed(self, client: TestClient):
        response = client.get("/health", headers={"X-Request-ID": "req-abc"})

        assert response.headers["X-Request-ID"] == "req-abc"

    def test_request_id_is_generated(self, client: TestClient):
        response = client.get("/health")

        assert response.headers["X-Request-ID"]

    def test_rate_limit_headers(self, client: TestClient):
        response = client.get("/health")

        assert response.headers["X-RateLimit-Limit"] == "1000"
        assert response.headers["X-RateLimit-Remaining"] == "999"


class TestRateLimit:
    def test_exceeding_limit_returns_429(self, limited_client: TestClient):
        assert limited_client.get("/health").status_code == 200
        assert limited_client.get("/health").status_code == 200

        response = limited_client.get("/health")

        assert response.status_code == 429
        data = response.json()
        assert data["error"] == "TOO_MANY_REQUESTS"
        assert data["message"].startswith("Rate limit exceeded")
        assert int(response.headers["Retry-After"]) >= 1
        assert response.headers["X-RateLimit-Remaining"] == "0"


class TestErrors:
    def test_unknown_route(self, client: TestClient):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {
            "error": "NOT_FOUND",
            "message": "Route GET:/nope not found",
        }

    def test_method_not_allowed(self, client: TestClient):
        response = client.put("/health")

        assert response.status_code == 405
        assert response.json()["error"] == "METHOD_NOT_ALLOWED"

    def test_malformed_json(self, client: TestClient):
        response = client.post(
            "/api/users",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"


class TestPrefix:
    def test_users_mounted_under_configured_prefix(self, prefixed_client: TestClient):
        created = prefixed_client.post("/v2/people", json={"email": "p@example.com"})

        assert created.status_code == 201
        assert prefixed_client.get("/v2/people").json()["users"][0]["email"] == "p@example.com"
        assert prefixed_client.get("/api/users").status_code == 404
