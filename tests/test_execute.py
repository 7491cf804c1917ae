"""End-to-end query execution tests against a fake trend endpoint."""

import asyncio
import json

import pytest

from typelytics.client import PostHog
from typelytics.errors import QueryValidationError, TrendRequestError
from typelytics.options import ExecutionOptions

from conftest import FakeUpstream

TWO_DAYS = {
    "type": "Trends",
    "is_cached": True,
    "last_refresh": "2024-01-03T00:00:00Z",
    "timezone": "UTC",
    "next": None,
    "result": [
        {
            "action": {"id": "$pageview"},
            "label": "$pageview",
            "labels": ["1-Jan-2024", "2-Jan-2024"],
            "data": [3, 4],
            "days": ["2024-01-01", "2024-01-02"],
            "count": 7,
            "aggregated_value": 7,
        }
    ],
}


def test_execute_sends_signed_get(posthog: PostHog, upstream: FakeUpstream) -> None:
    """The request is a bearer-authenticated GET to the project trend endpoint."""
    upstream.respond(TWO_DAYS)
    asyncio.run(posthog.query().add_series("$pageview").execute(type="line"))

    request = upstream.last_request
    assert request.method == "GET"
    assert request.headers["Authorization"] == "Bearer phx_test"
    assert request.url.path == "/api/projects/42/insights/trend/"
    assert request.url.host == "app.posthog.com"


def test_execute_encodes_parameters(posthog: PostHog, upstream: FakeUpstream) -> None:
    upstream.respond(TWO_DAYS)
    asyncio.run(
        posthog.query()
        .add_series("$pageview", label="Views")
        .execute(type="bar", date_from="Last 7 days", formula="A")
    )

    params = upstream.last_request.url.params
    assert params["date_from"] == "-7d"
    assert params["interval"] == "day"
    assert params["display"] == "ActionsBar"
    assert params["refresh"] == "false"
    assert params["formula"] == "A"
    assert "date_to" not in params
    assert "breakdown" not in params
    assert json.loads(params["events"])[0]["order"] == 0


def test_execute_returns_time_series(posthog: PostHog, upstream: FakeUpstream) -> None:
    upstream.respond(TWO_DAYS)
    chart = asyncio.run(
        posthog.query().add_series("$pageview", label="Views").execute(type="line")
    )

    assert chart.type == "line"
    assert chart.data == [
        {"date": "2024-01-01", "Views": 3},
        {"date": "2024-01-02", "Views": 4},
    ]


@pytest.mark.parametrize(
    "chart_type",
    ["line", "bar", "area", "cumulative-line", "bar-total", "pie", "number", "table"],
)
def test_output_carries_requested_type(
    posthog: PostHog, upstream: FakeUpstream, chart_type: str
) -> None:
    upstream.respond(TWO_DAYS)
    options = ExecutionOptions(type=chart_type)  # type: ignore[arg-type]
    chart = asyncio.run(posthog.query().add_series("$pageview").execute(options))
    assert chart.type == chart_type


def test_validation_error_precedes_network_call(
    posthog: PostHog, upstream: FakeUpstream
) -> None:
    """A statistical series without its property never reaches the API."""
    query = posthog.query().add_series("purchase", sampling="median")

    with pytest.raises(QueryValidationError):
        asyncio.run(query.execute(type="number"))

    assert upstream.requests == []


def test_non_success_status_raises(posthog: PostHog, upstream: FakeUpstream) -> None:
    upstream.respond({"detail": "Invalid personal API key."}, status_code=401)

    with pytest.raises(TrendRequestError) as exc:
        asyncio.run(posthog.query().add_series("$pageview").execute(type="pie"))

    assert exc.value.status_code == 401
    assert exc.value.status_text == "Unauthorized"
    assert exc.value.body == {"detail": "Invalid personal API key."}
    assert "Unauthorized" in str(exc.value)
    assert "Invalid personal API key." in str(exc.value)


def test_keyword_overrides_on_options(posthog: PostHog, upstream: FakeUpstream) -> None:
    """Keyword arguments override fields of an options instance."""
    upstream.respond(TWO_DAYS)
    options = ExecutionOptions(type="line")
    chart = asyncio.run(
        posthog.query().add_series("$pageview").execute(options, type="number")
    )
    assert chart.type == "number"
    assert chart.data == {"$pageview": 7}


def test_comparison_number(posthog: PostHog, upstream: FakeUpstream) -> None:
    upstream.respond(
        {
            "type": "Trends",
            "result": [
                {"action": {"id": "$pageview"}, "label": "$pageview", "aggregated_value": 10,
                 "compare": True, "compare_label": "current"},
                {"action": {"id": "$pageview"}, "label": "$pageview", "aggregated_value": 4,
                 "compare": True, "compare_label": "previous"},
            ],
        }
    )
    chart = asyncio.run(
        posthog.query()
        .add_series("$pageview", label="Visits")
        .execute(type="number", compare=True, date_from="Last 30 days")
    )

    assert chart.data == {"Previous - Visits": 4, "Current - Visits": 10}
    assert upstream.last_request.url.params["compare"] == "true"


def test_non_json_error_body_is_kept_as_text(
    posthog: PostHog, upstream: FakeUpstream
) -> None:
    upstream.respond_text("<html>bad</html>", status_code=502)

    with pytest.raises(TrendRequestError) as exc:
        asyncio.run(posthog.query().add_series("$pageview").execute(type="line"))

    assert exc.value.status_code == 502
    assert exc.value.body == "<html>bad</html>"
    assert "Bad Gateway" in str(exc.value)


def test_success_body_that_is_not_a_trend_payload(
    posthog: PostHog, upstream: FakeUpstream
) -> None:
    upstream.respond({"result": "nope"})

    with pytest.raises(TrendRequestError) as exc:
        asyncio.run(posthog.query().add_series("$pageview").execute(type="line"))

    assert exc.value.status_code == 200


def test_success_body_that_is_not_json(posthog: PostHog, upstream: FakeUpstream) -> None:
    upstream.respond_text("not json")

    with pytest.raises(TrendRequestError):
        asyncio.run(posthog.query().add_series("$pageview").execute(type="line"))


def test_explode_arrays_repeats_list_parameters(
    posthog: PostHog, upstream: FakeUpstream
) -> None:
    """Each series is sent as its own ``events`` parameter."""
    upstream.respond(TWO_DAYS)
    asyncio.run(
        posthog.query()
        .add_series("$pageview")
        .add_series("purchase")
        .execute(type="line", explode_arrays=True)
    )

    events = upstream.last_request.url.params.get_list("events")
    assert [json.loads(e)["id"] for e in events] == ["$pageview", "purchase"]


def test_arrays_are_json_encoded_by_default(
    posthog: PostHog, upstream: FakeUpstream
) -> None:
    upstream.respond(TWO_DAYS)
    asyncio.run(
        posthog.query().add_series("$pageview").add_series("purchase").execute(type="line")
    )

    events = upstream.last_request.url.params.get_list("events")
    assert len(events) == 1
    assert [e["id"] for e in json.loads(events[0])] == ["$pageview", "purchase"]
