"""Tick clock for the simulation loop."""

from enum import Enum

from pydantic import BaseModel, Field


class TimeMode(str, Enum):
    """How ticks are currently being driven."""

    PAUSED = "paused"
    MANUAL = "manual"
    AUTO_ADVANCE = "auto_advance"


class TickClock(BaseModel):
    """Wall-clock pacing state for the simulation.

    In-game time (hour of day, week, calendar month) lives on the
    SimulationState and advances inside the tick. This class only tracks
    how ticks are being driven: how often the loop fires, whether it is
    paused, and how many ticks the engine has executed.

    Args:
        tick_interval: Wall-clock seconds between automatic ticks (must be > 0).
        is_paused: Whether automatic ticking is currently frozen.
        auto_advance: Whether a background loop is driving ticks.
        ticks_executed: Ticks the engine has run since the session started.
    """

    tick_interval: float = Field(
        default=0.05,
        description="Wall-clock seconds between automatic ticks",
        gt=0.0,
    )
    is_paused: bool = Field(
        default=False, description="Whether automatic ticking is frozen"
    )
    auto_advance: bool = Field(
        default=False, description="Whether a background loop drives ticks"
    )
    ticks_executed: int = Field(
        default=0, ge=0, description="Ticks executed since session start"
    )

    @property
    def mode(self) -> TimeMode:
        """Determine the current mode from the pause and auto-advance flags."""
        if self.is_paused:
            return TimeMode.PAUSED
        if not self.auto_advance:
            return TimeMode.MANUAL
        return TimeMode.AUTO_ADVANCE

    @property
    def ticks_per_second(self) -> float:
        return 1.0 / self.tick_interval

    def pause(self) -> None:
        self.is_paused = True

    def resume(self) -> None:
        self.is_paused = False

    def record_tick(self) -> None:
        self.ticks_executed += 1

    def reset(self) -> None:
        """Return to the initial manual, unpaused state."""
        self.is_paused = False
        self.auto_advance = False
        self.ticks_executed = 0

    def to_dict(self) -> dict:
        """Export clock state as a dictionary."""
        return {
            "tick_interval": self.tick_interval,
            "is_paused": self.is_paused,
            "auto_advance": self.auto_advance,
            "mode": self.mode.value,
            "ticks_executed": self.ticks_executed,
            "ticks_per_second": self.ticks_per_second,
        }
