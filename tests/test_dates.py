"""Named date range resolution tests."""

import datetime as dt

import pytest

from typelytics.dates import DATE_RANGES, resolve_date, resolve_window


def test_last_7_days_resolves_with_day_interval() -> None:
    """A named range becomes its token and sets the default interval."""
    assert resolve_window("Last 7 days", None) == ("-7d", None, "day")


def test_explicit_interval_wins() -> None:
    """An explicit interval is never replaced by the range default."""
    assert resolve_window("Last 7 days", None, "hour") == ("-7d", None, "hour")


def test_literal_dates_pass_through() -> None:
    """Literal values bypass the table and leave the interval unset."""
    assert resolve_window("2024-01-01", "2024-01-31") == (
        "2024-01-01",
        "2024-01-31",
        None,
    )


def test_named_date_to_uses_first_token() -> None:
    """A named range on the closing end still resolves to its first token."""
    assert resolve_window("2024-01-01", "Previous month") == (
        "2024-01-01",
        "-1mStart",
        None,
    )


def test_two_token_range_closes_open_window() -> None:
    """A bare "Yesterday" spans from its start token to its end token."""
    assert resolve_window("Yesterday", None) == ("-1dStart", "-1dEnd", "hour")


def test_two_token_range_keeps_explicit_end() -> None:
    """An explicit date_to is never replaced by the end token."""
    assert resolve_window("Yesterday", "dStart") == ("-1dStart", "dStart", "hour")


def test_interval_only_defaults_from_date_from() -> None:
    """A named date_to alone does not pick an interval."""
    assert resolve_window(None, "Today")[2] is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        ("-3d", "-3d"),
        (dt.date(2024, 2, 29), "2024-02-29"),
        (dt.datetime(2024, 2, 29, 13, 30), "2024-02-29"),
        ("All time", "all"),
    ],
)
def test_resolve_date(value: object, expected: str | None) -> None:
    assert resolve_date(value) == expected  # type: ignore[arg-type]


def test_every_range_has_tokens() -> None:
    """Each named range defines one or two tokens."""
    for window in DATE_RANGES.values():
        assert 1 <= len(window.values) <= 2
