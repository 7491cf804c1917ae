"""Trend insight endpoint returning chart-ready data."""

import structlog
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from typelytics.charts import ChartData
from typelytics.client import PostHog
from typelytics.errors import QueryValidationError, TrendRequestError
from typelytics.filters import FilterGroup
from typelytics.options import ExecutionOptions
from typelytics.query import TrendQuery
from typelytics.series import Series

logger = structlog.get_logger()

router = APIRouter(prefix="/insights", tags=["insights"])


class TrendRequest(BaseModel):
    """Declarative description of one chart query.

    Attributes:
        series: Series in display order.
        filter_groups: Groups applied to every series.
        options: Chart type, date window and the other execution options.
    """

    series: list[Series] = Field(min_length=1)
    filter_groups: list[FilterGroup] = Field(default_factory=list)
    options: ExecutionOptions


def build_query(posthog: PostHog, body: TrendRequest) -> TrendQuery:
    """Replay a request body through the query builder."""
    query = posthog.query()
    for series in body.series:
        query = query.add_series(
            series.name,
            sampling=series.sampling,
            label=series.label,
            where=series.where,
            math_property=series.math_property,
        )
    for group in body.filter_groups:
        query = query.add_filter_group(group)
    return query


@router.post(
    "/trend",
    response_model=ChartData,
    summary="Run a trend query",
    description=(
        "Builds a PostHog trend query from the request and returns the result "
        "reshaped for the requested chart type."
    ),
)
async def run_trend(request: Request, body: TrendRequest) -> ChartData:
    """Execute a trend query on behalf of a dashboard.

    Args:
        request: FastAPI request (provides access to app state).
        body: Query description.

    Returns:
        Chart data tagged with the requested chart type.

    Raises:
        HTTPException: 422 for invalid queries, 502 when PostHog rejects
            the request, 503 when the client is not configured.
    """
    posthog: PostHog | None = request.app.state.posthog
    if posthog is None:
        raise HTTPException(status_code=503, detail="PostHog is not configured")

    try:
        query = build_query(posthog, body)
        return await query.execute(body.options)
    except QueryValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except TrendRequestError as e:
        logger.warning(
            "trend_upstream_error",
            status=e.status_code,
            reason=e.status_text,
        )
        raise HTTPException(
            status_code=502,
            detail={"message": str(e), "upstream_status": e.status_code},
        ) from e
