"""Pydantic schemas for the PostHog trend API response."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class TrendAction(BaseModel):
    """Identifies the event that produced a result row."""

    model_config = ConfigDict(extra="allow")

    id: str


class PersonsUrl(BaseModel):
    url: str


class TrendResult(BaseModel):
    """One result row of a trend query.

    Rows come back in request order, so a row's position identifies the
    series that produced it. In comparison mode the current period comes
    first and the previous period second.

    Attributes:
        count: Total number of matched occurrences.
        data: Values aligned with ``days``.
        days: ISO dates for each bucket.
        action: Echo of the requested event.
        label: API-generated label for the row.
        labels: Human-readable bucket labels.
        breakdown_value: Breakdown property value, when breaking down.
        aggregated_value: Single aggregate for non-time-series displays.
        compare_label: "current" or "previous" in comparison mode.
    """

    model_config = ConfigDict(extra="allow")

    count: int | float = 0
    data: list[int | float] = Field(default_factory=list)
    days: list[str] = Field(default_factory=list)
    action: TrendAction | None = None
    dates: list[str] | None = None
    label: str = ""
    labels: list[str] = Field(default_factory=list)
    breakdown_value: str | int | float | None = None
    aggregated_value: int | float | None = None
    status: str | None = None
    compare: bool | None = None
    compare_label: str | None = None
    persons_urls: list[PersonsUrl] | None = None


class TrendResponse(BaseModel):
    """Envelope returned by ``GET /insights/trend/``."""

    model_config = ConfigDict(extra="allow")

    type: Literal["Trends"] = "Trends"
    is_cached: bool = False
    last_refresh: str | None = None
    timezone: str | None = None
    next: str | None = None
    result: list[TrendResult] = Field(default_factory=list)
