"""Health endpoint tests."""

from fastapi.testclient import TestClient

from typelytics.app import create_app
from typelytics.catalog import EventCatalog
from typelytics.client import PostHog
from typelytics.config import PostHogSettings, Settings


def test_liveness_returns_200(client: TestClient) -> None:
    """Liveness endpoint returns 200 OK."""
    response = client.get("/api/v1/health/live")
    assert response.status_code == 200


def test_liveness_returns_status(client: TestClient) -> None:
    """Liveness endpoint returns alive status."""
    response = client.get("/api/v1/health/live")
    data = response.json()
    assert "status" in data
    assert data["status"] == "alive"


def test_readiness_ok_when_configured(client: TestClient) -> None:
    """Readiness passes with credentials and a non-empty catalog."""
    response = client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


def test_readiness_fails_without_client(settings: Settings, monkeypatch) -> None:
    """Readiness reports 503 when PostHog credentials are missing."""
    monkeypatch.delenv("POSTHOG_API_KEY", raising=False)
    monkeypatch.delenv("POSTHOG_PROJECT_ID", raising=False)
    monkeypatch.chdir("/")
    app = create_app(settings)
    response = TestClient(app).get("/api/v1/health/ready")
    assert response.status_code == 503
    checks = {c["name"]: c["status"] for c in response.json()["checks"]}
    assert checks["posthog"] == "failed"


def test_readiness_fails_with_empty_catalog(settings: Settings) -> None:
    """An empty catalog makes the service not ready."""
    posthog = PostHog(
        events=EventCatalog(),
        settings=PostHogSettings(_env_file=None, api_key="k", project_id="1"),
    )
    response = TestClient(create_app(settings, posthog=posthog)).get(
        "/api/v1/health/ready"
    )
    assert response.status_code == 503


def test_request_id_is_echoed(client: TestClient) -> None:
    """Responses carry the caller's request id."""
    response = client.get("/api/v1/events", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
