"""Notable events sub-client.

Wraps the /events endpoint. This is an internal module; import from
`client` instead.
"""

from typing import Literal

from pydantic import BaseModel

from client._base import BaseClient
from client.models import NotableEventResponse

SeverityName = Literal["info", "warning", "danger"]


class EventListResponse(BaseModel):
    """Recent notable events, newest first."""

    events: list[NotableEventResponse]
    total: int
    total_logged: int


class EventsClient(BaseClient):
    """Sub-client for the notable event log."""

    def list(
        self, severity: SeverityName | None = None, limit: int | None = None
    ) -> EventListResponse:
        """List recent notable events.

        Args:
            severity: Only return events of this severity.
            limit: Maximum number of events to return.

        Returns:
            Matching events, newest first.
        """
        return self._get_model(
            EventListResponse, "/events", params={"severity": severity, "limit": limit}
        )
