"""Reshape trend API responses into chart-ready data."""

from collections.abc import Sequence

from typelytics.charts import (
    DEFAULT_DATA_KEYS,
    TIME_SERIES_TYPES,
    BarTotal,
    BarTotalChart,
    Cell,
    ChartData,
    ChartType,
    NumberChart,
    PieChart,
    PieSlice,
    TableChart,
    TimeSeriesChart,
)
from typelytics.schemas import TrendResponse, TrendResult
from typelytics.series import Series

TABLE_COLUMNS = frozenset({"label", "value"})


def apply_compare_label(label: str, compare_label: str | None) -> str:
    """Prefix a label with its comparison period.

    >>> apply_compare_label("Visits", "previous")
    'Previous - Visits'
    """
    if not compare_label:
        return label
    return f"{compare_label[:1].upper()}{compare_label[1:]} - {label}"


def series_label(series: Sequence[Series], index: int, result: TrendResult) -> str:
    """Label for the result at ``index``: the series label, else the API label."""
    if index < len(series) and series[index].label is not None:
        return series[index].label  # type: ignore[return-value]
    return result.label


def _aggregate(result: TrendResult | None) -> int | float:
    if result is None or result.aggregated_value is None:
        return 0
    return result.aggregated_value


def to_time_series(
    response: TrendResponse,
    series: Sequence[Series],
    chart_type: str,
    data_key: str = "date",
) -> TimeSeriesChart:
    """Merge every result into one row per date position.

    Rows are keyed by position in the ``days`` array, so a comparison
    period's values land beside the current period's on the same row.
    Positions without a date contribute nothing. The date column always wins
    over a series whose label equals ``data_key``.

    Args:
        response: Parsed trend response.
        series: Series in request order.
        chart_type: One of the time-series chart types.
        data_key: Column holding each row's date.

    Returns:
        Time-series chart with numeric value columns.
    """
    rows: dict[int, dict[str, Cell]] = {}
    for index, result in enumerate(response.result):
        label = apply_compare_label(
            series_label(series, index, result), result.compare_label
        )
        for position, value in enumerate(result.data):
            date = result.days[position] if position < len(result.days) else None
            if not date:
                continue
            row = rows.setdefault(position, {data_key: date})
            if label != data_key:
                row[label] = value

    return TimeSeriesChart(
        type=chart_type,  # type: ignore[arg-type]
        data_key=data_key,
        data=[rows[position] for position in sorted(rows)],
    )


def to_bar_total(response: TrendResponse, series: Sequence[Series]) -> BarTotalChart:
    return BarTotalChart(
        data=[
            BarTotal(
                name=apply_compare_label(
                    series_label(series, index, result), result.compare_label
                ),
                value=_aggregate(result),
            )
            for index, result in enumerate(response.result)
        ]
    )


def to_pie(
    response: TrendResponse,
    series: Sequence[Series],
    data_key: str = "label",
) -> PieChart:
    return PieChart(
        data_key=data_key,
        data=[
            PieSlice(
                label=apply_compare_label(
                    series_label(series, index, result), result.compare_label
                ),
                value=_aggregate(result),
            )
            for index, result in enumerate(response.result)
        ],
    )


def to_number(
    response: TrendResponse,
    series: Sequence[Series],
    compare: bool = False,
    default_label: str = "value",
) -> NumberChart:
    """Reduce the response to a single aggregate.

    In comparison mode the first row is the current period and the second the
    previous one; a missing aggregate counts as zero.

    Args:
        response: Parsed trend response.
        series: Series in request order.
        compare: Whether the query ran in comparison mode.
        default_label: Label used when neither series nor API provide one.

    Returns:
        Number chart keyed by display label.
    """
    results = response.result
    current = results[0] if results else None
    previous = results[1] if len(results) > 1 else None

    if series and series[0].label is not None:
        label = series[0].label
    elif current is not None and current.label:
        label = current.label
    else:
        label = default_label

    if compare:
        data = {
            f"Previous - {label}": _aggregate(previous),
            f"Current - {label}": _aggregate(current),
        }
    else:
        data = {label: _aggregate(current)}

    return NumberChart(data_key=label, data=data)


def to_table(
    response: TrendResponse,
    breakdown: str | None = None,
    data_key: str = "label",
) -> TableChart:
    """One row per result, labeled by the event that produced it.

    With a breakdown, the API label ("<event> - <value>") is reduced to the
    breakdown value and stored under the breakdown property's name, or under
    ``breakdown_<name>`` when that name is ``label`` or ``value``. The chart's
    ``breakdown`` field names the column actually used.

    Args:
        response: Parsed trend response.
        breakdown: Breakdown property requested for the query, if any.
        data_key: Column identifying each row.

    Returns:
        Table chart.
    """
    column = breakdown
    if column in TABLE_COLUMNS:
        column = f"breakdown_{column}"

    rows: list[dict[str, Cell | None]] = []
    for result in response.result:
        # Formula rows carry no action.
        action_id = result.action.id if result.action else result.label
        row: dict[str, Cell | None] = {
            "label": apply_compare_label(action_id, result.compare_label),
        }
        if column:
            row[column] = result.label.replace(f"{action_id} - ", "", 1)
        row["value"] = result.aggregated_value
        rows.append(row)
    return TableChart(data_key=data_key, breakdown=column, data=rows)


def normalize(
    response: TrendResponse,
    series: Sequence[Series],
    chart_type: ChartType,
    data_key: str | None = None,
    breakdown: str | None = None,
    compare: bool = False,
) -> ChartData:
    """Dispatch a response to the normalizer for the requested chart type.

    Args:
        response: Parsed trend response.
        series: Series in request order.
        chart_type: Requested chart type; becomes the output's tag.
        data_key: Output key override.
        breakdown: Breakdown property, used by tables.
        compare: Comparison mode, used by single aggregates.

    Returns:
        Chart data tagged with ``chart_type``.

    Raises:
        ValueError: If the chart type is unknown.
    """
    key = data_key or DEFAULT_DATA_KEYS.get(chart_type)

    if chart_type in TIME_SERIES_TYPES:
        return to_time_series(response, series, chart_type, data_key=key or "date")
    if chart_type == "bar-total":
        return to_bar_total(response, series)
    if chart_type == "pie":
        return to_pie(response, series, data_key=key or "label")
    if chart_type == "number":
        return to_number(
            response, series, compare=compare, default_label=key or "value"
        )
    if chart_type == "table":
        return to_table(response, breakdown=breakdown, data_key=key or "label")
    raise ValueError(f"Unsupported chart type: {chart_type}")
