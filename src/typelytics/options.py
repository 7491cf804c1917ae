"""Per-call execution options for trend queries."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from typelytics.charts import ChartType
from typelytics.dates import IntervalType
from typelytics.filters import FilterLogicalOperator


class ExecutionOptions(BaseModel):
    """Options supplied when a query is executed.

    Attributes:
        type: Chart shape to produce.
        data_key: Override for the output key of the chart shape.
        filter_compare: Operator joining the query's filter groups.
        date_from: Named range, literal date string, or date.
        date_to: Named range, literal date string, or date.
        interval: Bucket granularity; defaults from a named ``date_from``.
        breakdown: Property to break results down by.
        breakdown_normalize_url: Normalize URL-valued breakdowns.
        breakdown_hide_other_aggregation: Hide the "other" breakdown bucket.
        compare: Also return the previous period.
        formula: Formula combining series (e.g. "A / B").
        smoothing_intervals: Moving-average window, in intervals.
        filter_test_accounts: Exclude internal and test accounts.
        sampling_factor: Fraction of events sampled upstream.
        explicit_date: Treat the date window as exact boundaries.
    """

    model_config = ConfigDict(frozen=True)

    type: ChartType
    data_key: str | None = None
    filter_compare: FilterLogicalOperator = "AND"
    date_from: dt.date | str | None = None
    date_to: dt.date | str | None = None
    interval: IntervalType | None = None
    breakdown: str | None = None
    breakdown_normalize_url: bool | None = None
    breakdown_hide_other_aggregation: bool | None = None
    compare: bool | None = None
    formula: str | None = None
    smoothing_intervals: int | None = Field(default=None, ge=1)
    filter_test_accounts: bool = False
    sampling_factor: float | None = Field(default=None, gt=0, le=1)
    explicit_date: bool | str | None = None
