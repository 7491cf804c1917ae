"""Event catalog endpoint."""

from fastapi import APIRouter, HTTPException, Request

from typelytics.catalog import EventDescriptor
from typelytics.client import PostHog

router = APIRouter(tags=["events"])


@router.get(
    "/events",
    response_model=list[EventDescriptor],
    summary="List queryable events",
    description="Returns the event catalog: every event a chart query may reference.",
)
async def list_events(request: Request) -> list[EventDescriptor]:
    posthog: PostHog | None = request.app.state.posthog
    if posthog is None:
        raise HTTPException(status_code=503, detail="PostHog is not configured")
    return list(posthog.events.events.values())
