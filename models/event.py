"""Notable event model.

Notable events are the engine's outward-facing signal that something worth
showing happened: a scripted historic event, an alarm, a rejected command,
a chapter change. Presentation adapters turn them into alerts, log lines
and sound cues; nothing in the engine reads them back.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from models.state import SimulationState


class Severity(str, Enum):
    """Severity of a notable event."""

    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


class SoundCue(str, Enum):
    """Sound cue a presentation adapter should play for an event."""

    ALARM = "alarm"
    CLICK = "click"
    BUY = "buy"
    REPAIR = "repair"
    CASH = "cash"
    SHRED = "shred"
    ERROR = "error"
    BUILD = "build"


def default_cue_for(severity: Severity) -> SoundCue:
    """Map a severity to its default cue.

    Danger maps to the alarm; everything else gets the softer notification
    chime.
    """
    if severity == Severity.DANGER:
        return SoundCue.ALARM
    return SoundCue.REPAIR


class NotableEvent(BaseModel):
    """Something that happened during a tick or a command.

    Args:
        event_id: Unique identifier for this event.
        title: Short headline (e.g., "SPE COLLAPSE").
        message: Human-readable detail line.
        severity: info, warning or danger.
        cue: Sound cue to play for this event.
        tick: Simulation tick on which the event was emitted.
        calendar_date: In-game calendar label when the event was emitted.
        created_at: Wall-clock time the event was created.
    """

    event_id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="Unique identifier for this event",
    )
    title: str = Field(description="Short headline")
    message: str = Field(default="", description="Detail line")
    severity: Severity = Field(default=Severity.INFO, description="Event severity")
    cue: SoundCue = Field(default=SoundCue.REPAIR, description="Sound cue to play")
    tick: int = Field(default=0, ge=0, description="Tick the event was emitted on")
    calendar_date: str = Field(default="", description="In-game calendar label")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Wall-clock creation time",
    )

    @classmethod
    def create(
        cls,
        title: str,
        message: str,
        severity: Severity = Severity.INFO,
        cue: Optional[SoundCue] = None,
        tick: int = 0,
        calendar_date: str = "",
    ) -> "NotableEvent":
        """Build an event, picking the severity's default cue if none is given."""
        return cls(
            title=title,
            message=message,
            severity=severity,
            cue=cue if cue is not None else default_cue_for(severity),
            tick=tick,
            calendar_date=calendar_date,
        )

    @classmethod
    def for_state(
        cls,
        state: "SimulationState",
        title: str,
        message: str,
        severity: Severity = Severity.INFO,
        cue: Optional[SoundCue] = None,
    ) -> "NotableEvent":
        """Build an event stamped with the state's current tick and date."""
        return cls.create(
            title=title,
            message=message,
            severity=severity,
            cue=cue,
            tick=state.tick_count,
            calendar_date=state.calendar_date,
        )

    def get_summary(self) -> str:
        """Return a one-line summary for log lists.

        Format: "[{calendar_date}] {title}: {message}"

        Example: "[Mar 2001] ROLLING BLACKOUTS: California goes dark."
        """
        if self.message:
            return f"[{self.calendar_date}] {self.title}: {self.message}"
        return f"[{self.calendar_date}] {self.title}"

    def to_dict(self) -> dict:
        """Export the event as a JSON-friendly dictionary."""
        return {
            "event_id": self.event_id,
            "title": self.title,
            "message": self.message,
            "severity": self.severity.value,
            "cue": self.cue.value,
            "tick": self.tick,
            "calendar_date": self.calendar_date,
            "created_at": self.created_at.isoformat(),
        }

