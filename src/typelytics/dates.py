"""Named date ranges and their translation to PostHog relative-date tokens."""

import datetime as dt
from typing import Literal, NamedTuple

IntervalType = Literal["hour", "day", "week", "month"]

DateRangeName = Literal[
    "Today",
    "Yesterday",
    "Last 24 hours",
    "Last 48 hours",
    "Last 7 days",
    "Last 14 days",
    "Last 30 days",
    "Last 90 days",
    "Last 180 days",
    "This month",
    "Previous month",
    "Year to date",
    "All time",
]

DateInput = str | dt.date | None


class DateWindow(NamedTuple):
    """Relative-date tokens for a named range and its default interval.

    Attributes:
        values: One token, or a start and an end token.
        default_interval: Granularity adopted when none is requested.
    """

    values: tuple[str, ...]
    default_interval: IntervalType

    @property
    def start(self) -> str:
        return self.values[0]

    @property
    def end(self) -> str | None:
        return self.values[1] if len(self.values) > 1 else None


DATE_RANGES: dict[str, DateWindow] = {
    "Today": DateWindow(("dStart",), "hour"),
    "Yesterday": DateWindow(("-1dStart", "-1dEnd"), "hour"),
    "Last 24 hours": DateWindow(("-24h",), "hour"),
    "Last 48 hours": DateWindow(("-48h",), "hour"),
    "Last 7 days": DateWindow(("-7d",), "day"),
    "Last 14 days": DateWindow(("-14d",), "day"),
    "Last 30 days": DateWindow(("-30d",), "day"),
    "Last 90 days": DateWindow(("-90d",), "day"),
    "Last 180 days": DateWindow(("-180d",), "month"),
    "This month": DateWindow(("mStart",), "day"),
    "Previous month": DateWindow(("-1mStart", "-1mEnd"), "day"),
    "Year to date": DateWindow(("yStart",), "month"),
    "All time": DateWindow(("all",), "month"),
}


def lookup_range(value: DateInput) -> DateWindow | None:
    """Return the window for a named range, or None for anything else."""
    if isinstance(value, str):
        return DATE_RANGES.get(value)
    return None


def resolve_date(value: DateInput) -> str | None:
    """Translate one end of a date window into the value sent upstream.

    Named ranges become their first relative-date token. Dates are sent as
    ISO ``YYYY-MM-DD``. Any other string, and None, pass through unchanged.

    Args:
        value: Named range, literal date string, date, or None.

    Returns:
        Value for the ``date_from``/``date_to`` parameter.
    """
    window = lookup_range(value)
    if window is not None:
        return window.start
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()
    return value


def resolve_window(
    date_from: DateInput,
    date_to: DateInput,
    interval: IntervalType | None = None,
) -> tuple[str | None, str | None, IntervalType | None]:
    """Resolve both ends of a date window and the effective interval.

    When ``date_from`` names a range with a distinct end token (such as
    "Yesterday") and ``date_to`` is not given, the end token closes the window.

    Args:
        date_from: Start of the window.
        date_to: End of the window.
        interval: Explicit interval, which always wins.

    Returns:
        Tuple of (date_from, date_to, interval) ready for the request.
    """
    window = lookup_range(date_from)
    resolved_to = resolve_date(date_to)
    if resolved_to is None and window is not None and window.end is not None:
        resolved_to = window.end

    if interval is None and window is not None:
        interval = window.default_interval

    return resolve_date(date_from), resolved_to, interval
