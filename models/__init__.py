"""Meltdown Manager data models package.

This package contains the game-state record, the static scenario content,
the per-tick update steps, the command processor and the simulation
engine that ties them together.
"""

from models.event import NotableEvent, Severity, SoundCue
from models.event_log import EventLog
from models.history import ScoreHistory, ScorePoint
from models.time import TickClock, TimeMode
from models.randomness import RandomSource
from models.scenario import Scenario, load_default_scenario
from models.state import (
    FailureReason,
    ReactorStatus,
    SessionStatus,
    SimulationState,
    SpecialPurposeEntity,
    SpeStatus,
)
from models.commands import CommandProcessor, CommandResult, Component
from models.simulation import SimulationEngine, SimulationLoop

__all__ = [
    "NotableEvent",
    "Severity",
    "SoundCue",
    "EventLog",
    "ScoreHistory",
    "ScorePoint",
    "TickClock",
    "TimeMode",
    "RandomSource",
    "Scenario",
    "load_default_scenario",
    "SimulationState",
    "SpecialPurposeEntity",
    "SpeStatus",
    "ReactorStatus",
    "SessionStatus",
    "FailureReason",
    "CommandProcessor",
    "CommandResult",
    "Component",
    "SimulationEngine",
    "SimulationLoop",
]
