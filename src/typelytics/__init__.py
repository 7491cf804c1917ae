"""Typed trend queries against PostHog, reshaped into chart-ready data."""

from typelytics.catalog import EventCatalog, EventDescriptor, EventProperty
from typelytics.charts import (
    BarTotalChart,
    ChartData,
    ChartType,
    NumberChart,
    PieChart,
    TableChart,
    TimeSeriesChart,
)
from typelytics.client import PostHog
from typelytics.dates import DATE_RANGES, DateWindow
from typelytics.errors import (
    ConfigurationError,
    QueryValidationError,
    TrendRequestError,
    TypelyticsError,
    UnknownEventError,
    UnknownPropertyError,
)
from typelytics.filters import FilterGroup, PropertyFilter
from typelytics.options import ExecutionOptions
from typelytics.query import TrendQuery
from typelytics.series import Series

__all__ = [
    "DATE_RANGES",
    "BarTotalChart",
    "ChartData",
    "ChartType",
    "ConfigurationError",
    "DateWindow",
    "EventCatalog",
    "EventDescriptor",
    "EventProperty",
    "ExecutionOptions",
    "FilterGroup",
    "NumberChart",
    "PieChart",
    "PostHog",
    "PropertyFilter",
    "QueryValidationError",
    "Series",
    "TableChart",
    "TimeSeriesChart",
    "TrendQuery",
    "TrendRequestError",
    "TypelyticsError",
    "UnknownEventError",
    "UnknownPropertyError",
]
