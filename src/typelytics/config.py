"""Configuration loaded from environment variables."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from typelytics.catalog import EventCatalog
from typelytics.errors import ConfigurationError

DEFAULT_HOST = "https://app.posthog.com"


class PostHogSettings(BaseSettings):
    """PostHog credentials loaded from environment variables.

    Attributes:
        api_key: Personal API key sent as a bearer token.
        project_id: Numeric project identifier.
        url: Project API base URL; derived from ``project_id`` when empty.
    """

    model_config = SettingsConfigDict(
        env_prefix="POSTHOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = ""
    project_id: str = ""
    url: str = ""


class Settings(BaseSettings):
    """Service configuration loaded from environment variables.

    Attributes:
        host: Bind address for the API server.
        port: Port number for the API server.
        debug: Enable debug mode and API documentation.
        log_json: Emit JSON log lines instead of console output.
        key: API key for authenticating requests.
        events_file: YAML or JSON file holding the event catalog.
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_json: bool = True
    key: str = ""
    events_file: Path | None = None


class PostHogConfig(BaseModel):
    """Resolved, read-only client configuration.

    Attributes:
        api_key: Personal API key.
        project_id: Project identifier.
        url: Project API base URL without trailing slash.
        events: Event catalog bounding every query built by the client.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str
    project_id: str
    url: str
    events: EventCatalog

    @property
    def trend_url(self) -> str:
        """Endpoint of the trend insight."""
        return f"{self.url}/insights/trend/"

    def __repr__(self) -> str:
        return (
            f"PostHogConfig(project_id={self.project_id!r}, url={self.url!r}, "
            f"events={len(self.events)})"
        )


def resolve_config(
    events: EventCatalog,
    api_key: str | None = None,
    project_id: str | None = None,
    url: str | None = None,
    settings: PostHogSettings | None = None,
) -> PostHogConfig:
    """Resolve client configuration from arguments, then the environment.

    Args:
        events: Event catalog.
        api_key: Explicit API key; falls back to ``POSTHOG_API_KEY``.
        project_id: Explicit project id; falls back to ``POSTHOG_PROJECT_ID``.
        url: Explicit base URL; falls back to ``POSTHOG_URL``, then to the
            project endpoint on app.posthog.com.
        settings: Environment settings. Loaded when None.

    Returns:
        Frozen client configuration.

    Raises:
        ConfigurationError: If no API key or project id can be resolved.
    """
    if settings is None:
        settings = PostHogSettings()

    key = api_key or settings.api_key
    if not key:
        raise ConfigurationError("PostHog API key is required", "api_key")

    project = project_id or settings.project_id
    if not project:
        raise ConfigurationError("PostHog project id is required", "project_id")

    base = url or settings.url or f"{DEFAULT_HOST}/api/projects/{project}"

    return PostHogConfig(
        api_key=key,
        project_id=str(project),
        url=base.rstrip("/"),
        events=events,
    )
