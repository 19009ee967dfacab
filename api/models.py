"""Shared request and response models for API endpoints.

This module contains models used by more than one route module: the
command result envelope returned by every control and finance action,
and the notable event representation.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class NotableEventResponse(BaseModel):
    """Notable event as returned by the API.

    Attributes:
        event_id: Unique identifier of the event.
        title: Short headline.
        message: Detail line.
        severity: info, warning or danger.
        cue: Sound cue to play.
        tick: Simulation tick the event was emitted on.
        calendar_date: In-game calendar label at emission.
        created_at: Wall-clock creation time.
    """

    event_id: str
    title: str
    message: str
    severity: str
    cue: str
    tick: int
    calendar_date: str
    created_at: datetime


class CommandResponse(BaseModel):
    """Result envelope for every player command.

    Rejected commands still return 200; the rejection is part of the game,
    not an API error.

    Attributes:
        command: Name of the command that ran.
        accepted: Whether the command's effect was applied.
        message: Human-readable outcome.
        event: Notable event raised by the command, if any.
        tick_count: Tick the command was applied on.
    """

    command: str
    accepted: bool
    message: str
    event: Optional[NotableEventResponse] = None
    tick_count: int


class PercentRequest(BaseModel):
    """Request model for commands taking a 0-100 setting."""

    percent: float = Field(ge=0.0, le=100.0, description="Target setting, 0-100")


class AmountRequest(BaseModel):
    """Request model for commands moving money."""

    amount: float = Field(gt=0.0, description="Dollar amount, must be positive")


class ErrorResponse(BaseModel):
    """Shape of error bodies produced by the exception handlers."""

    error: str
    detail: str
    type: Optional[str] = None
