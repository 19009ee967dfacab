"""The single mutable game-state record.

SimulationState is owned by the SimulationEngine. It is mutated in place by
the per-tick update steps and by commands, and handed outward only as deep
copies or JSON snapshots.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from models.scenario import WeatherType

if TYPE_CHECKING:
    from models.scenario import PhysicsConstants, Scenario


class SpeStatus(str, Enum):
    """Lifecycle of a special purpose entity."""

    ACTIVE = "active"
    COLLAPSED = "collapsed"


class ReactorStatus(str, Enum):
    """Lifecycle of the reactor core."""

    RUNNING = "running"
    MELTING = "melting"
    DESTROYED = "destroyed"


class SessionStatus(str, Enum):
    """Lifecycle of the game session."""

    RUNNING = "running"
    FAILED = "failed"
    ESCAPED = "escaped"


class FailureReason(str, Enum):
    """Why a session ended in failure."""

    CRITICAL_MASS = "CRITICAL MASS"
    CORE_BREACH = "CORE BREACH"
    VESSEL_RUPTURE = "PRESSURE VESSEL RUPTURE"
    FRAUD_EXPOSED = "FEDERAL RAID - FRAUD EXPOSED"
    BANKRUPTCY = "BANKRUPTCY"

    @property
    def is_reactor_failure(self) -> bool:
        return self in (
            FailureReason.CRITICAL_MASS,
            FailureReason.CORE_BREACH,
            FailureReason.VESSEL_RUPTURE,
        )


class SpecialPurposeEntity(BaseModel):
    """Off-book partnership hiding debt from the balance sheet.

    An SPE stays ACTIVE until the stock score drops below its trigger price,
    at which point it collapses and its hidden debt lands on the books.
    Collapse happens at most once.

    Args:
        id: Unique identifier.
        name: Display name ("LJM-1", "LJM-2", ...).
        hidden_debt_amount: Debt parked in the entity.
        trigger_stock_price: Score below which the entity collapses.
        status: ACTIVE or COLLAPSED.
        created_tick: Tick the entity was created on.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    hidden_debt_amount: float = Field(ge=0.0)
    trigger_stock_price: float = Field(ge=0.0)
    status: SpeStatus = SpeStatus.ACTIVE
    created_tick: int = 0

    @property
    def is_active(self) -> bool:
        return self.status == SpeStatus.ACTIVE

    def collapse(self) -> None:
        """Move the entity to COLLAPSED.

        Raises:
            RuntimeError: If the entity has already collapsed.
        """
        if not self.is_active:
            raise RuntimeError(f"SPE {self.name} has already collapsed")
        self.status = SpeStatus.COLLAPSED


# (min, max) for fields with fixed bounds. None means unbounded on that side.
_BOUNDS: dict[str, tuple[Optional[float], Optional[float]]] = {
    "control_rod_insertion": (0.0, 100.0),
    "steam_valve_opening": (0.0, 100.0),
    "pump_health": (0.0, 100.0),
    "turbine_health": (0.0, 100.0),
    "condenser_health": (0.0, 100.0),
    "xenon_poison_level": (0.0, 100.0),
    "meltdown_progress": (0.0, 100.0),
    "fuel_remaining": (0.0, 100.0),
    "credit_score": (0.0, 100.0),
    "audit_risk_percent": (0.0, 100.0),
    "political_capital": (0.0, 100.0),
    "net_reactivity": (-1.0, 1.0),
    "coolant_flow_rate": (0.0, None),
    "grid_demand": (0.0, None),
    "grid_frequency_hz": (0.0, None),
    "stock_score": (0.0, None),
    "outstanding_loan": (0.0, None),
    "offshore_holdings": (0.0, None),
    "total_hidden_debt": (0.0, None),
    "lobbying_shield_ticks_remaining": (0, None),
    "difficulty_level": (1, 4),
}


class SimulationState(BaseModel):
    """Complete reactor, grid, finance and timeline state for one session."""

    # Reactor
    core_temperature: float = 300.0
    pressure: float = 0.0
    radiation_level: float = 0.0
    control_rod_insertion: float = 100.0
    steam_valve_opening: float = 0.0
    coolant_pump_on: bool = True
    pump_health: float = 100.0
    turbine_health: float = 100.0
    condenser_health: float = 100.0
    xenon_poison_level: float = 0.0
    coolant_flow_rate: float = 100.0
    net_reactivity: float = 0.0
    meltdown_progress: float = 0.0
    fuel_remaining: float = 100.0
    pump_level: int = 1
    has_auto_scram: bool = False

    # Grid
    electrical_power_output: float = 0.0
    grid_demand: float = 600.0
    grid_frequency_hz: float = 60.0
    brownout_active: bool = False

    # Finance
    stock_score: float = 40.0
    operating_cash: float = 5000.0
    outstanding_loan: float = 0.0
    credit_score: float = 50.0
    offshore_holdings: float = 0.0
    audit_risk_percent: float = 0.0
    political_capital: float = 10.0
    lobbying_shield_ticks_remaining: int = 0
    ticks_insolvent: int = 0

    # Fraud vehicles
    special_purpose_entities: list[SpecialPurposeEntity] = Field(default_factory=list)
    total_hidden_debt: float = 0.0

    # Timeline
    simulated_hour_of_day: float = 8.0
    day_count: int = 0
    calendar_date: str = "Jan 2000"
    current_weather: WeatherType = WeatherType.SUNNY
    weather_name: Optional[str] = None
    weather_demand_modifier: float = 1.0
    weather_temperature_modifier: float = 1.0
    triggered_events: list[str] = Field(default_factory=list)

    # Meta
    session_status: SessionStatus = SessionStatus.RUNNING
    failure_reason: Optional[FailureReason] = None
    reactor_status: ReactorStatus = ReactorStatus.RUNNING
    difficulty_level: int = 1
    current_chapter_index: int = 0
    tick_count: int = 0

    @property
    def is_game_over(self) -> bool:
        return self.session_status != SessionStatus.RUNNING

    @property
    def active_spe_count(self) -> int:
        return sum(1 for spe in self.special_purpose_entities if spe.is_active)

    @property
    def spe_count(self) -> int:
        return len(self.special_purpose_entities)

    @property
    def is_lobbying_shield_active(self) -> bool:
        return self.lobbying_shield_ticks_remaining > 0

    def clamp_bounds(self, physics: Optional["PhysicsConstants"] = None) -> None:
        """Clamp every bounded field into its legal range.

        Args:
            physics: Constants supplying the physical ceilings. Without them
                only the fixed bounds are enforced.
        """
        bounds = dict(_BOUNDS)
        if physics is not None:
            bounds.update(
                {
                    "core_temperature": (physics.min_temperature, physics.max_temperature),
                    "pressure": (0.0, physics.max_pressure),
                    "radiation_level": (0.0, physics.max_radiation),
                    "electrical_power_output": (0.0, physics.max_power_output),
                    "pump_level": (1, physics.max_pump_level),
                }
            )

        for name, (low, high) in bounds.items():
            value = getattr(self, name)
            if low is not None and value < low:
                setattr(self, name, low)
            elif high is not None and value > high:
                setattr(self, name, high)

    def get_snapshot(self) -> dict[str, Any]:
        """Export the state plus derived fields as a JSON-friendly dict."""
        snapshot = self.model_dump(mode="json")
        snapshot["is_game_over"] = self.is_game_over
        snapshot["active_spe_count"] = self.active_spe_count
        snapshot["spe_count"] = self.spe_count
        snapshot["is_lobbying_shield_active"] = self.is_lobbying_shield_active
        return snapshot

    @classmethod
    def create_initial(cls, scenario: "Scenario", difficulty: int = 1) -> "SimulationState":
        """Build the starting state for a difficulty level.

        Args:
            scenario: Scenario supplying the difficulty profile and start date.
            difficulty: Difficulty level (1-4).

        Returns:
            A fresh state record.

        Raises:
            ValueError: If the scenario has no profile for the difficulty.
        """
        profile = scenario.difficulty(difficulty)
        start = scenario.start_date
        state = cls(
            stock_score=profile.starting_score,
            operating_cash=profile.starting_cash,
            difficulty_level=int(profile.level),
            calendar_date=start.strftime("%b %Y"),
        )

        pattern = scenario.find_weather(start.month, start.year)
        if pattern is not None:
            state.current_weather = pattern.weather
            state.weather_name = pattern.name
            state.weather_demand_modifier = pattern.demand_modifier
            state.weather_temperature_modifier = pattern.temperature_modifier
        return state
