"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from typing import Any

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import httpx
import pytest
from fastapi.testclient import TestClient

from typelytics.app import create_app
from typelytics.catalog import EventCatalog
from typelytics.client import PostHog
from typelytics.config import PostHogSettings, Settings

EVENTS: dict[str, Any] = {
    "$pageview": {
        "properties": [
            {"name": "$current_url", "type": "String"},
            {"name": "$browser", "type": "String"},
        ]
    },
    "purchase": {
        "properties": [
            {"name": "amount", "type": "Numeric"},
            {"name": "currency", "type": "String"},
        ]
    },
}


class FakeUpstream:
    """Stands in for the PostHog API and records every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.payload: Any = {"type": "Trends", "is_cached": False, "result": []}
        self.text: str | None = None

    def respond(self, payload: Any, status_code: int = 200) -> None:
        self.payload = payload
        self.text = None
        self.status_code = status_code

    def respond_text(self, text: str, status_code: int = 200) -> None:
        """Answer with a raw, non-JSON body."""
        self.text = text
        self.status_code = status_code

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def catalog() -> EventCatalog:
    """Event catalog shared by the query tests."""
    return EventCatalog.from_mapping(EVENTS)


@pytest.fixture
def posthog_settings() -> PostHogSettings:
    """PostHog settings that ignore any local .env file."""
    return PostHogSettings(_env_file=None, api_key="phx_test", project_id="42")


@pytest.fixture
def upstream() -> FakeUpstream:
    """Fake trend endpoint."""
    return FakeUpstream()


@pytest.fixture
def posthog(
    catalog: EventCatalog,
    posthog_settings: PostHogSettings,
    upstream: FakeUpstream,
) -> PostHog:
    """Client wired to the fake trend endpoint."""
    return PostHog(
        events=catalog,
        settings=posthog_settings,
        transport=upstream.transport,
    )


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        _env_file=None,
        host="127.0.0.1",
        port=8000,
        debug=True,
    )


@pytest.fixture
def client(settings: Settings, posthog: PostHog) -> TestClient:
    """Create test client with configured app."""
    app = create_app(settings, posthog=posthog)
    return TestClient(app)
