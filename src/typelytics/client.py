"""PostHog client: configuration and the single outbound trend request."""

import json
from collections.abc import Mapping
from typing import Any

import httpx
import structlog

from typelytics.catalog import EventCatalog
from typelytics.config import PostHogConfig, PostHogSettings, resolve_config
from typelytics.errors import TrendRequestError
from typelytics.params import to_query_string
from typelytics.query import TrendQuery
from typelytics.schemas import TrendResponse

logger = structlog.get_logger()


def _error_body(response: httpx.Response) -> object:
    """Parse an error body as JSON, falling back to its text."""
    try:
        return response.json()
    except ValueError:
        return response.text or None


class PostHog:
    """Entry point for building trend queries against one PostHog project.

    Configuration is resolved once and never changes afterwards, so the
    client and every query it hands out can be shared across tasks.

    Example:
        posthog = PostHog(events={"$pageview": {"properties": []}})
        chart = await (
            posthog.query()
            .add_series("$pageview", sampling="total")
            .execute(type="bar", date_from="Last 7 days")
        )
    """

    def __init__(
        self,
        events: EventCatalog | Mapping[str, Any],
        api_key: str | None = None,
        project_id: str | None = None,
        url: str | None = None,
        settings: PostHogSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            events: Event catalog, or a mapping it can be built from.
            api_key: API key; falls back to ``POSTHOG_API_KEY``.
            project_id: Project id; falls back to ``POSTHOG_PROJECT_ID``.
            url: Project API base URL; falls back to ``POSTHOG_URL``.
            settings: Environment settings, loaded when None.
            transport: HTTP transport override, mainly for tests.

        Raises:
            ConfigurationError: If the API key or project id is missing.
        """
        catalog = (
            events
            if isinstance(events, EventCatalog)
            else EventCatalog.from_mapping(events)
        )
        self._config = resolve_config(
            catalog,
            api_key=api_key,
            project_id=project_id,
            url=url,
            settings=settings,
        )
        self._transport = transport

    @property
    def config(self) -> PostHogConfig:
        return self._config

    @property
    def events(self) -> EventCatalog:
        return self._config.events

    def query(self) -> TrendQuery:
        """Start an empty query bound to this client."""
        return TrendQuery(self)

    async def fetch_trend(
        self,
        params: Mapping[str, Any],
        explode_arrays: bool = False,
    ) -> TrendResponse:
        """Send one trend request and parse the response.

        The request is neither retried nor given a timeout beyond the
        transport's default.

        Args:
            params: Assembled request parameters.
            explode_arrays: Repeat array parameters once per element.

        Returns:
            Parsed trend response.

        Raises:
            TrendRequestError: If the server answers with a non-2xx status.
        """
        url = f"{self._config.trend_url}?{to_query_string(params, explode_arrays)}"
        headers = {"Authorization": f"Bearer {self._config.api_key}"}

        logger.info(
            "trend_query_dispatched",
            project_id=self._config.project_id,
            display=params.get("display"),
            series=len(params.get("events") or []),
        )

        async with httpx.AsyncClient(transport=self._transport) as http:
            response = await http.get(url, headers=headers)

        if not response.is_success:
            body = _error_body(response)
            logger.warning(
                "trend_query_failed",
                status=response.status_code,
                reason=response.reason_phrase,
            )
            raise TrendRequestError(
                f"Failed to fetch data: {response.reason_phrase} "
                f"{json.dumps(body)}",
                status_code=response.status_code,
                status_text=response.reason_phrase,
                body=body,
            )

        try:
            return TrendResponse.model_validate(response.json())
        except ValueError as e:
            raise TrendRequestError(
                f"Failed to parse trend response: {e}",
                status_code=response.status_code,
                status_text=response.reason_phrase,
                body=response.text,
            ) from e
