"""Chart-ready data shapes returned to consumers."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

ChartType = Literal[
    "line",
    "bar",
    "area",
    "cumulative-line",
    "bar-total",
    "pie",
    "number",
    "table",
]

TimeSeriesType = Literal["line", "bar", "area", "cumulative-line"]

TIME_SERIES_TYPES: frozenset[str] = frozenset(
    {"line", "bar", "area", "cumulative-line"}
)

PostHogDisplayType = Literal[
    "BoldNumber",
    "ActionsLineGraph",
    "ActionsTable",
    "ActionsPie",
    "ActionsBar",
    "ActionsBarValue",
    "ActionsLineGraphCumulative",
    "ActionsAreaGraph",
]

DISPLAY_TYPES: dict[str, PostHogDisplayType] = {
    "bar-total": "ActionsBarValue",
    "cumulative-line": "ActionsLineGraphCumulative",
    "line": "ActionsLineGraph",
    "bar": "ActionsBar",
    "area": "ActionsAreaGraph",
    "number": "BoldNumber",
    "pie": "ActionsPie",
    "table": "ActionsTable",
}

DEFAULT_DATA_KEYS: dict[str, str] = {
    "line": "date",
    "bar": "date",
    "area": "date",
    "cumulative-line": "date",
    "bar-total": "name",
    "pie": "label",
    "number": "value",
    "table": "label",
}

Number = int | float
Cell = str | int | float


class TimeSeriesChart(BaseModel):
    """One row per date; one numeric column per series label.

    Attributes:
        type: Requested chart type.
        data_key: Column holding the date of each row.
        data: Rows such as ``{"date": "2024-01-01", "Pageviews": 12}``.
    """

    type: TimeSeriesType
    data_key: str = "date"
    data: list[dict[str, Cell]] = Field(default_factory=list)


class PieSlice(BaseModel):
    """A labeled slice of a pie chart."""

    label: str
    value: Number


class PieChart(BaseModel):
    """One slice per series result."""

    type: Literal["pie"] = "pie"
    data_key: str = "label"
    data: list[PieSlice] = Field(default_factory=list)


class BarTotal(BaseModel):
    """A named bar holding a series' aggregated value."""

    name: str
    value: Number


class BarTotalChart(BaseModel):
    """One bar per series result."""

    type: Literal["bar-total"] = "bar-total"
    data: list[BarTotal] = Field(default_factory=list)


class NumberChart(BaseModel):
    """Single aggregate, or a previous/current pair in comparison mode.

    Attributes:
        type: Always "number".
        data_key: The label the aggregate is reported under.
        data: Mapping of display label to aggregated value.
    """

    type: Literal["number"] = "number"
    data_key: str = "value"
    data: dict[str, Number] = Field(default_factory=dict)


class TableChart(BaseModel):
    """One row per result with an optional breakdown column.

    Attributes:
        type: Always "table".
        data_key: Column identifying each row.
        breakdown: Name of the breakdown column, when one was requested.
        data: Rows of ``label``, optional breakdown column, and ``value``.
    """

    type: Literal["table"] = "table"
    data_key: str = "label"
    breakdown: str | None = None
    data: list[dict[str, Cell | None]] = Field(default_factory=list)


ChartData = Annotated[
    TimeSeriesChart | PieChart | BarTotalChart | NumberChart | TableChart,
    Field(discriminator="type"),
]
