"""Notable event log endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from api.dependencies import SimulationEngineDep
from api.models import NotableEventResponse
from api.utils import to_event_response
from models.event import Severity

router = APIRouter(
    prefix="/events",
    tags=["events"],
)


class EventListResponse(BaseModel):
    """Response model for listing recent notable events.

    Attributes:
        events: Matching events, newest first.
        total: Number of events returned.
        total_logged: Number of events ever logged this session.
    """

    events: list[NotableEventResponse]
    total: int
    total_logged: int


@router.get("", response_model=EventListResponse)
async def list_events(
    engine: SimulationEngineDep,
    severity: Optional[str] = None,
    limit: Optional[int] = Query(default=None, ge=1),
):
    """List recently logged notable events.

    Only the most recent events are retained; older ones are discarded.

    Args:
        engine: The SimulationEngine instance (injected by FastAPI).
        severity: Filter by severity (info, warning, danger).
        limit: Maximum number of events to return.

    Returns:
        Matching events, newest first.
    """
    event_severity = None
    if severity:
        try:
            event_severity = Severity(severity)
        except ValueError:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid severity: {severity}. Must be one of: info, warning, danger",
            )

    events = engine.get_recent_events(limit=limit, severity=event_severity)
    return EventListResponse(
        events=[to_event_response(event) for event in events],
        total=len(events),
        total_logged=engine.event_log.total_logged,
    )
