"""Immutable trend query builder and executor.

A query accumulates series and filter groups; every ``add_*`` call returns a
new query and leaves the original untouched. ``execute`` assembles the request
parameters, performs the single HTTP call, and reshapes the response into the
chart shape requested.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

import structlog

from typelytics.charts import DISPLAY_TYPES, ChartData
from typelytics.dates import resolve_window
from typelytics.errors import QueryValidationError, UnknownPropertyError
from typelytics.filters import FilterGroup, build_property_tree
from typelytics.normalize import normalize
from typelytics.options import ExecutionOptions
from typelytics.series import Sampling, Series, is_property_math

if TYPE_CHECKING:
    from typelytics.client import PostHog

logger = structlog.get_logger()


class TrendQuery:
    """Builder for one trend insight query.

    Attributes:
        series: Series in the order they were added.
        filter_groups: Filter groups in the order they were added.
    """

    def __init__(
        self,
        client: PostHog,
        series: tuple[Series, ...] = (),
        filter_groups: tuple[FilterGroup, ...] = (),
    ) -> None:
        self._client = client
        self._series = series
        self._filter_groups = filter_groups

    @property
    def series(self) -> tuple[Series, ...]:
        return self._series

    @property
    def filter_groups(self) -> tuple[FilterGroup, ...]:
        return self._filter_groups

    def __repr__(self) -> str:
        names = ", ".join(s.name for s in self._series)
        return f"TrendQuery(series=[{names}], filter_groups={len(self._filter_groups)})"

    def add_series(
        self,
        name: str,
        *,
        sampling: Sampling = "total",
        label: str | None = None,
        where: FilterGroup | Mapping[str, Any] | Sequence[Any] | None = None,
        math_property: str | None = None,
    ) -> TrendQuery:
        """Return a new query with one more series appended.

        The companion property of statistical sampling is checked when the
        query executes, not here.

        Args:
            name: Event name; must exist in the event catalog.
            sampling: Aggregation applied to the event.
            label: Display label for the series.
            where: Filter group(s) applied to this series only.
            math_property: Numeric property for statistical sampling.

        Returns:
            New query; this one is unchanged.

        Raises:
            UnknownEventError: If the event is not in the catalog.
            UnknownPropertyError: If a referenced property is not declared
                by the event.
        """
        descriptor = self._client.events.get(name)
        series = Series(
            name=name,
            label=label,
            where=where,
            sampling=sampling,
            math_property=math_property,
        )

        undeclared = sorted(series.property_names() - descriptor.property_names())
        if undeclared:
            raise UnknownPropertyError(
                f"Property '{undeclared[0]}' is not declared by event '{name}'",
                prop=undeclared[0],
                event=name,
            )

        return TrendQuery(self._client, (*self._series, series), self._filter_groups)

    def add_filter_group(self, group: FilterGroup | Mapping[str, Any]) -> TrendQuery:
        """Return a new query with one more filter group appended.

        Args:
            group: Filter group, or a mapping it can be validated from.

        Returns:
            New query; this one is unchanged.

        Raises:
            UnknownPropertyError: If a filter references a property no
                catalog event declares.
        """
        if not isinstance(group, FilterGroup):
            group = FilterGroup.model_validate(group)

        known = self._client.events.all_property_names()
        undeclared = sorted(group.property_names() - known)
        if undeclared:
            raise UnknownPropertyError(
                f"Property '{undeclared[0]}' is not declared by any event in the catalog",
                prop=undeclared[0],
            )

        return TrendQuery(self._client, self._series, (*self._filter_groups, group))

    def _event_entries(self) -> list[dict[str, Any]]:
        entries = []
        for order, series in enumerate(self._series):
            if is_property_math(series.sampling) and not series.math_property:
                raise QueryValidationError(
                    f"math_property is required for {series.sampling}",
                    event=series.name,
                    sampling=series.sampling,
                )
            entries.append(series.to_wire(order))
        return entries

    def _check_breakdown(self, breakdown: str | None) -> None:
        if not breakdown:
            return
        events = self._client.events
        if any(events.get(s.name).has_property(breakdown) for s in self._series):
            return
        raise UnknownPropertyError(
            f"Breakdown property '{breakdown}' is not declared by any queried event",
            prop=breakdown,
        )

    def build_params(self, options: ExecutionOptions) -> dict[str, Any]:
        """Assemble the request parameters without performing any I/O.

        Args:
            options: Execution options.

        Returns:
            Parameters in the order they are encoded into the query string.

        Raises:
            QueryValidationError: If a statistical series lacks its property.
            UnknownPropertyError: If the breakdown property is undeclared.
        """
        events = self._event_entries()
        self._check_breakdown(options.breakdown)
        date_from, date_to, interval = resolve_window(
            options.date_from, options.date_to, options.interval
        )

        return {
            "insight": "TRENDS",
            "refresh": False,
            "filter_test_accounts": options.filter_test_accounts,
            "entity_type": "events",
            "events": events,
            "properties": build_property_tree(
                self._filter_groups, options.filter_compare
            ),
            "breakdown_type": "event",
            "breakdown": options.breakdown,
            "display": DISPLAY_TYPES[options.type],
            "breakdown_hide_other_aggregation": options.breakdown_hide_other_aggregation,
            "breakdown_normalize_url": options.breakdown_normalize_url,
            "date_from": date_from,
            "date_to": date_to,
            "explicit_date": options.explicit_date,
            "interval": interval,
            "sampling_factor": options.sampling_factor,
            "compare": options.compare,
            "formula": options.formula,
            "smoothing_intervals": options.smoothing_intervals,
        }

    async def execute(
        self,
        options: ExecutionOptions | None = None,
        /,
        *,
        explode_arrays: bool = False,
        **fields: Any,
    ) -> ChartData:
        """Run the query and reshape the response for the requested chart.

        Options are passed either as an ``ExecutionOptions`` instance or as
        keyword arguments, e.g. ``execute(type="line", date_from="Today")``.
        With ``explode_arrays``, list parameters such as ``events`` are sent
        as one repeated key per element instead of a single JSON array.

        Returns:
            Chart data whose ``type`` equals the requested chart type.

        Raises:
            QueryValidationError: If the query is invalid; raised before any
                network call.
            TrendRequestError: If the API answers with a non-2xx status.
        """
        if options is None:
            options = ExecutionOptions(**fields)
        elif fields:
            options = ExecutionOptions.model_validate({**options.model_dump(), **fields})

        params = self.build_params(options)
        response = await self._client.fetch_trend(
            params, explode_arrays=explode_arrays
        )

        chart = normalize(
            response,
            self._series,
            options.type,
            data_key=options.data_key,
            breakdown=options.breakdown,
            compare=bool(options.compare),
        )
        logger.info(
            "trend_query_normalized",
            chart_type=chart.type,
            results=len(response.result),
            cached=response.is_cached,
        )
        return chart
