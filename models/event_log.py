"""Bounded log of recent notable events."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from models.event import NotableEvent, Severity


class EventLog(BaseModel):
    """Most recent notable events, newest last.

    The log only keeps what presentation adapters show in their event
    ticker. Anything older than max_size entries is discarded.

    Args:
        events: Retained events, oldest first.
        max_size: Maximum number of events kept.
        total_logged: Number of events ever appended, including discarded ones.
    """

    events: list[NotableEvent] = Field(default_factory=list)
    max_size: int = Field(default=5)
    total_logged: int = Field(default=0, ge=0)

    @field_validator("max_size")
    @classmethod
    def validate_max_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("max_size must be positive")
        return v

    def append(self, event: NotableEvent) -> None:
        """Add an event, discarding the oldest beyond max_size."""
        self.events.append(event)
        self.total_logged += 1
        if len(self.events) > self.max_size:
            del self.events[: len(self.events) - self.max_size]

    def extend(self, events: list[NotableEvent]) -> None:
        for event in events:
            self.append(event)

    def recent(
        self, limit: Optional[int] = None, severity: Optional[Severity] = None
    ) -> list[NotableEvent]:
        """Return retained events, newest first.

        Args:
            limit: Maximum number of events to return.
            severity: Only return events of this severity.

        Returns:
            Matching events, newest first.
        """
        matches = [
            event
            for event in reversed(self.events)
            if severity is None or event.severity == severity
        ]
        if limit is not None:
            matches = matches[:limit]
        return matches

    def clear(self) -> None:
        self.events.clear()
        self.total_logged = 0
