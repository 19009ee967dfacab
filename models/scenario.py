"""Static scenario data for a game session.

Everything the engine treats as "content" rather than state lives here:
scripted historic events, weather patterns, the chapter ladder, the price
list, difficulty profiles and the tunable physics and economy constants.
All models are frozen; a session loads one Scenario at start and never
mutates it.
"""

from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from models.event import Severity

if TYPE_CHECKING:
    from models.state import SimulationState

SCENARIO_VERSION = "1.0.0"


class WeatherType(str, Enum):
    """Weather conditions a pattern can impose."""

    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    SNOWY = "snowy"
    THUNDERSTORM = "thunderstorm"


class Difficulty(int, Enum):
    """Difficulty levels, named after the executive running the show."""

    ETHICAL = 1
    AGGRESSIVE = 2
    SKILLING = 3
    FASTOW = 4


class StateEffect(BaseModel):
    """Declarative mutation applied to one numeric state field.

    Args:
        target: Name of the SimulationState field to mutate.
        operation: add, multiply, set, floor (raise to at least value) or
            cap (lower to at most value).
        value: Operand for the operation.
    """

    target: str
    operation: Literal["add", "multiply", "set", "floor", "cap"]
    value: float

    class Config:
        frozen = True

    def apply(self, state: "SimulationState") -> None:
        """Apply the effect to the state in place.

        Integer fields stay integers. Bounds are not enforced here; the
        engine clamps the whole record once the tick finishes.

        Args:
            state: The state to mutate.

        Raises:
            AttributeError: If the target field does not exist.
        """
        current = getattr(state, self.target)
        if self.operation == "add":
            updated = current + self.value
        elif self.operation == "multiply":
            updated = current * self.value
        elif self.operation == "set":
            updated = self.value
        elif self.operation == "cap":
            updated = min(current, self.value)
        else:
            updated = max(current, self.value)

        if isinstance(current, int) and not isinstance(current, bool):
            updated = int(round(updated))
        setattr(state, self.target, updated)


class Threshold(BaseModel):
    """A single comparison against a state metric."""

    metric: str
    comparison: Literal["gt", "ge", "lt", "le"]
    value: float

    class Config:
        frozen = True

    def is_met(self, state: "SimulationState") -> bool:
        actual = getattr(state, self.metric)
        if self.comparison == "gt":
            return actual > self.value
        if self.comparison == "ge":
            return actual >= self.value
        if self.comparison == "lt":
            return actual < self.value
        return actual <= self.value


class Chapter(BaseModel):
    """One stage of the campaign.

    Args:
        chapter_id: Stable identifier.
        title: Display title.
        year: Year the chapter is set in.
        description: Briefing text.
        win_conditions: Thresholds that must all hold to complete the chapter.
        demand_scale: Multiplier applied to grid demand while active.
        revenue_rate: Cash earned per MW sold per tick.
        brownout_premium: Cash earned per tick while the grid is browned out.
    """

    chapter_id: str
    title: str
    year: int
    description: str
    win_conditions: list[Threshold]
    demand_scale: float = Field(default=1.0, gt=0.0)
    revenue_rate: float = Field(default=0.02, ge=0.0)
    brownout_premium: float = Field(default=0.0, ge=0.0)

    class Config:
        frozen = True

    def is_won(self, state: "SimulationState") -> bool:
        """Check whether every win condition holds for the state."""
        return all(threshold.is_met(state) for threshold in self.win_conditions)


class HistoricEvent(BaseModel):
    """Scripted calendar event fired once when its month arrives.

    Args:
        month: Calendar month (1-12).
        year: Calendar year.
        title: Headline shown to the player.
        description: Detail text.
        severity: Severity before any mitigation.
        effects: Declarative state mutations.
        mitigable: Whether an active lobbying shield suppresses the effects.
    """

    month: int = Field(ge=1, le=12)
    year: int
    title: str
    description: str
    severity: Severity = Severity.INFO
    effects: list[StateEffect] = Field(default_factory=list)
    mitigable: bool = False

    class Config:
        frozen = True

    @property
    def key(self) -> str:
        """Identifier used to remember the event already fired."""
        return f"{self.year}-{self.month:02d}:{self.title}"


class WeatherPattern(BaseModel):
    """Weather imposed on a given month."""

    month: int = Field(ge=1, le=12)
    year: int
    weather: WeatherType
    name: str
    temperature_modifier: float = Field(default=1.0, gt=0.0)
    demand_modifier: float = Field(default=1.0, gt=0.0)

    class Config:
        frozen = True


class PriceTable(BaseModel):
    """Costs of every paid command."""

    shred: float = 3000.0
    lobby: float = 2000.0
    refuel: float = 1500.0
    repair_pump: float = 800.0
    repair_turbine: float = 1200.0
    repair_condenser: float = 1000.0
    pump_upgrade: float = 800.0
    auto_scram: float = 2500.0
    create_spe: float = 1000.0

    class Config:
        frozen = True

    def repair_cost(self, component: str) -> float:
        """Look up the repair price for a component name.

        Raises:
            ValueError: If the component has no repair price.
        """
        price = getattr(self, f"repair_{component}", None)
        if price is None:
            raise ValueError(f"No repair price for component: {component}")
        return price


class DifficultyProfile(BaseModel):
    """Starting resources and audit pressure for a difficulty level."""

    level: Difficulty
    label: str
    starting_cash: float
    starting_score: float
    audit_creep_multiplier: float = Field(gt=0.0)

    class Config:
        frozen = True


class PhysicsConstants(BaseModel):
    """Tunable coefficients of the reactor and grid model."""

    # Clock
    hour_increment: float = 0.05
    hours_per_week_step: float = 24.0

    # Neutronics
    reference_temperature: float = 300.0
    xenon_reactivity_coefficient: float = 0.005
    temperature_reactivity_coefficient: float = 0.0001
    fuel_factor_divisor: float = 10.0
    xenon_production_rate: float = 0.001
    xenon_burn_rate: float = 0.00002
    xenon_decay_rate: float = 0.001

    # Thermal/hydraulic
    flow_inertia: float = 0.95
    heat_coefficient: float = 60.0
    residual_heat_fraction: float = 0.005
    ambient_temperature: float = 20.0
    ambient_loss_coefficient: float = 0.005
    coolant_inlet_temperature: float = 80.0
    convection_coefficient: float = 0.4
    min_temperature: float = 20.0
    noise_amplitude: float = 1.0
    pressure_build_threshold: float = 100.0
    pressure_build_coefficient: float = 0.7
    pressure_release_coefficient: float = 0.2
    fuel_burn_rate: float = 0.00001
    auto_scram_temperature: float = 2400.0
    pump_capacity_step: float = 0.25
    max_pump_level: int = 3

    # Turbine and grid
    turbine_torque: float = 10.0
    power_inertia: float = 0.9
    nominal_frequency: float = 60.0
    frequency_inertia: float = 0.95
    brownout_frequency: float = 59.0
    overspeed_frequency: float = 61.0
    overspeed_wear: float = 0.1
    overspeed_warning_chance: float = 0.05
    brownout_political_penalty: float = 1.0
    high_output_threshold: float = 1000.0
    high_output_wear: float = 0.01
    high_temperature_threshold: float = 2000.0
    high_temperature_condenser_wear: float = 0.05

    # Meltdown and radiation
    meltdown_temperature: float = 2600.0
    meltdown_pressure: float = 1800.0
    meltdown_rate: float = 0.5
    meltdown_recovery: float = 0.25
    radiation_threshold_temperature: float = 1500.0
    radiation_temperature_factor: float = 0.5
    radiation_meltdown_factor: float = 5.0
    radiation_inertia: float = 0.9

    # Ceilings
    max_temperature: float = 3000.0
    max_pressure: float = 2000.0
    max_power_output: float = 1500.0
    max_radiation: float = 1000.0

    class Config:
        frozen = True


class EconomyConstants(BaseModel):
    """Tunable coefficients of the corporate-fraud economy."""

    base_audit_creep: float = 0.005
    audit_creep_per_spe: float = 0.03
    revenue_score_weight: float = 0.001
    stability_score_weight: float = 0.05
    audit_score_weight: float = 0.004

    spe_min_debt: float = 15000.0
    spe_max_debt: float = 25000.0
    spe_boost_divisor: float = 200.0
    spe_trigger_ratio: float = 0.7
    spe_audit_risk: float = 7.0
    spe_collapse_divisor: float = 50.0
    spe_credit_penalty: float = 10.0

    lobby_audit_relief: float = 15.0
    lobby_shield_ticks: int = 600
    lobby_political_gain: float = 1.0
    lobby_decay_interval: int = 10
    lobby_decay_relief: float = 0.5

    cook_books_score: float = 2000.0
    cook_books_audit_risk: float = 15.0
    shred_audit_relief: float = 30.0

    credit_limit_multiplier: float = 200.0
    bankruptcy_grace_ticks: int = 1200

    class Config:
        frozen = True


class Scenario(BaseModel):
    """Complete, versioned content set for a game session."""

    version: str = SCENARIO_VERSION
    start_date: date = date(2000, 1, 1)
    events: list[HistoricEvent] = Field(default_factory=list)
    weather: list[WeatherPattern] = Field(default_factory=list)
    chapters: list[Chapter]
    prices: PriceTable = Field(default_factory=PriceTable)
    difficulties: list[DifficultyProfile]
    physics: PhysicsConstants = Field(default_factory=PhysicsConstants)
    economy: EconomyConstants = Field(default_factory=EconomyConstants)

    class Config:
        frozen = True

    @field_validator("chapters")
    @classmethod
    def validate_chapters(cls, v: list[Chapter]) -> list[Chapter]:
        """Ensure the campaign has at least one chapter."""
        if not v:
            raise ValueError("Scenario requires at least one chapter")
        return v

    def find_event(
        self, month: int, year: int, exclude: Optional[set[str]] = None
    ) -> Optional[HistoricEvent]:
        """Find the first event for a month that has not fired yet.

        Args:
            month: Calendar month.
            year: Calendar year.
            exclude: Keys of events that already fired.

        Returns:
            The matching event, or None.
        """
        exclude = exclude or set()
        for event in self.events:
            if event.month == month and event.year == year and event.key not in exclude:
                return event
        return None

    def find_weather(self, month: int, year: int) -> Optional[WeatherPattern]:
        """Find the weather pattern for a month, if any."""
        for pattern in self.weather:
            if pattern.month == month and pattern.year == year:
                return pattern
        return None

    def chapter(self, index: int) -> Chapter:
        """Return the chapter at an index.

        Raises:
            IndexError: If the index is outside the campaign.
        """
        if index < 0 or index >= len(self.chapters):
            raise IndexError(f"Chapter index out of range: {index}")
        return self.chapters[index]

    def is_final_chapter(self, index: int) -> bool:
        return index >= len(self.chapters) - 1

    def difficulty(self, level: int) -> DifficultyProfile:
        """Return the profile for a difficulty level.

        Raises:
            ValueError: If no profile exists for the level.
        """
        for profile in self.difficulties:
            if profile.level == level:
                return profile
        raise ValueError(f"Unknown difficulty level: {level}")

    def summary(self) -> dict[str, Any]:
        """Return a compact description of the scenario contents."""
        return {
            "version": self.version,
            "start_date": self.start_date.isoformat(),
            "event_count": len(self.events),
            "weather_pattern_count": len(self.weather),
            "chapter_count": len(self.chapters),
            "difficulty_levels": [int(p.level) for p in self.difficulties],
        }


def _effect(target: str, operation: str, value: float) -> StateEffect:
    return StateEffect(target=target, operation=operation, value=value)


def _above(metric: str, value: float) -> Threshold:
    return Threshold(metric=metric, comparison="gt", value=value)


def load_default_scenario() -> Scenario:
    """Build the stock 2000-2001 campaign."""
    events = [
        HistoricEvent(
            month=5,
            year=2000,
            title="CALIFORNIA ENERGY CRISIS BEGINS",
            description="Deregulation meets a heatwave. Demand spikes across the grid.",
            severity=Severity.WARNING,
            effects=[_effect("grid_demand", "add", 200)],
        ),
        HistoricEvent(
            month=8,
            year=2000,
            title="STOCK HITS $90 PEAK",
            description="Wall Street loves you. The analysts have never been happier.",
            severity=Severity.INFO,
            effects=[_effect("stock_score", "floor", 90)],
        ),
        HistoricEvent(
            month=11,
            year=2000,
            title="ELECTION CHAOS",
            description="Florida is counting chads. Nobody is watching the energy markets.",
            severity=Severity.WARNING,
        ),
        HistoricEvent(
            month=1,
            year=2001,
            title="JEFF SKILLING TAKES OVER",
            description="The new CEO wants results. Audit tolerance is for the weak.",
            severity=Severity.INFO,
            effects=[
                _effect("difficulty_level", "add", 1),
                _effect("difficulty_level", "cap", int(Difficulty.FASTOW)),
            ],
            mitigable=True,
        ),
        HistoricEvent(
            month=3,
            year=2001,
            title="ROLLING BLACKOUTS",
            description="California goes dark. Regulators start asking questions.",
            severity=Severity.DANGER,
            effects=[_effect("audit_risk_percent", "add", 10)],
        ),
        HistoricEvent(
            month=8,
            year=2001,
            title="SKILLING RESIGNS",
            description="The CEO quits for 'personal reasons'. Investors panic.",
            severity=Severity.DANGER,
            effects=[
                _effect("stock_score", "multiply", 0.7),
                _effect("audit_risk_percent", "add", 20),
            ],
            mitigable=True,
        ),
        HistoricEvent(
            month=9,
            year=2001,
            title="SEPTEMBER 11 ATTACKS",
            description="Markets close. Regulators have other priorities.",
            severity=Severity.DANGER,
            effects=[
                _effect("audit_risk_percent", "set", 0),
                _effect("grid_demand", "multiply", 0.5),
                _effect("stock_score", "multiply", 0.8),
            ],
        ),
        HistoricEvent(
            month=10,
            year=2001,
            title="SEC INQUIRY OPENED",
            description="The SEC has requested documents. Lots of documents.",
            severity=Severity.DANGER,
            effects=[_effect("audit_risk_percent", "set", 90)],
            mitigable=True,
        ),
        HistoricEvent(
            month=11,
            year=2001,
            title="DYNEGY MERGER FAILS",
            description="The lifeline snaps. The stock is worth less than the paper it's printed on.",
            severity=Severity.DANGER,
            effects=[_effect("stock_score", "set", 1)],
        ),
    ]

    weather = [
        WeatherPattern(
            month=5, year=2000, weather=WeatherType.SUNNY, name="CALIFORNIA HEATWAVE",
            temperature_modifier=1.3, demand_modifier=1.4,
        ),
        WeatherPattern(
            month=6, year=2000, weather=WeatherType.SUNNY, name="SF BAY AREA HEAT SPIKE",
            temperature_modifier=1.4, demand_modifier=1.5,
        ),
        WeatherPattern(
            month=11, year=2000, weather=WeatherType.SNOWY, name="EARLY WINTER CHILL",
            temperature_modifier=0.6, demand_modifier=1.3,
        ),
        WeatherPattern(
            month=1, year=2001, weather=WeatherType.SNOWY, name="ROLLING BLACKOUT WINTER",
            temperature_modifier=0.5, demand_modifier=1.4,
        ),
        WeatherPattern(
            month=3, year=2001, weather=WeatherType.RAINY, name="SPRING STORMS",
            temperature_modifier=1.0, demand_modifier=1.1,
        ),
        WeatherPattern(
            month=8, year=2001, weather=WeatherType.THUNDERSTORM, name="LATE SUMMER STORM",
            temperature_modifier=1.2, demand_modifier=1.3,
        ),
    ]

    chapters = [
        Chapter(
            chapter_id="vision",
            title="The Vision",
            year=2000,
            description="Keep the lights on and make the numbers look good.",
            win_conditions=[_above("stock_score", 60), _above("operating_cash", 8000)],
            demand_scale=1.0,
            revenue_rate=0.02,
        ),
        Chapter(
            chapter_id="california",
            title="The California Crisis",
            year=2000,
            description="Scarcity is profitable. Brownouts pay a premium.",
            win_conditions=[_above("stock_score", 100), _above("offshore_holdings", 5000)],
            demand_scale=1.5,
            revenue_rate=0.05,
            brownout_premium=50.0,
        ),
        Chapter(
            chapter_id="accounting",
            title="Creative Accounting",
            year=2001,
            description="Move the debt off the books. Three partnerships should do it.",
            win_conditions=[
                _above("stock_score", 150),
                Threshold(metric="spe_count", comparison="ge", value=3),
            ],
            demand_scale=0.8,
            revenue_rate=0.02,
        ),
        Chapter(
            chapter_id="collapse",
            title="The Collapse",
            year=2001,
            description="It's over. Get the money out before the feds arrive.",
            win_conditions=[_above("offshore_holdings", 50000)],
            demand_scale=0.5,
            revenue_rate=0.02,
        ),
    ]

    difficulties = [
        DifficultyProfile(
            level=Difficulty.ETHICAL, label="Ethical", starting_cash=5000,
            starting_score=40, audit_creep_multiplier=1.0,
        ),
        DifficultyProfile(
            level=Difficulty.AGGRESSIVE, label="Aggressive", starting_cash=4000,
            starting_score=35, audit_creep_multiplier=1.5,
        ),
        DifficultyProfile(
            level=Difficulty.SKILLING, label="Skilling", starting_cash=3000,
            starting_score=30, audit_creep_multiplier=2.0,
        ),
        DifficultyProfile(
            level=Difficulty.FASTOW, label="Fastow", starting_cash=2000,
            starting_score=25, audit_creep_multiplier=3.0,
        ),
    ]

    return Scenario(
        events=events,
        weather=weather,
        chapters=chapters,
        difficulties=difficulties,
    )
