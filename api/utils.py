"""Utility functions for API route handlers.

This module contains helpers for converting engine results into response
models, shared by the control and finance routes.
"""

from api.models import CommandResponse, NotableEventResponse
from models.commands import CommandResult
from models.event import NotableEvent
from models.simulation import SimulationEngine


def to_event_response(event: NotableEvent) -> NotableEventResponse:
    """Convert a NotableEvent into its API representation.

    Args:
        event: The event to convert.

    Returns:
        The response model.
    """
    return NotableEventResponse(
        event_id=event.event_id,
        title=event.title,
        message=event.message,
        severity=event.severity.value,
        cue=event.cue.value,
        tick=event.tick,
        calendar_date=event.calendar_date,
        created_at=event.created_at,
    )


def to_command_response(engine: SimulationEngine, result: CommandResult) -> CommandResponse:
    """Convert a CommandResult into the command response envelope.

    Args:
        engine: The engine the command ran against.
        result: The command outcome.

    Returns:
        The response model, stamped with the current tick.
    """
    return CommandResponse(
        command=result.command,
        accepted=result.accepted,
        message=result.message,
        event=to_event_response(result.event) if result.event else None,
        tick_count=engine.get_state().tick_count,
    )
